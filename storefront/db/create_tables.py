"""Create the database schema for the configured DATABASE_URL."""
from __future__ import annotations

from sqlalchemy.exc import SQLAlchemyError

from storefront.core.logging import configure_logging, get_logger

from .session import Base, get_engine
from . import models  # noqa: F401  # ensure models are imported for metadata

logger = get_logger(__name__)


def create_all() -> None:
    engine = get_engine()
    Base.metadata.create_all(bind=engine)
    logger.info("Schema ready: %s", ", ".join(sorted(Base.metadata.tables)))


def drop_all() -> None:
    Base.metadata.drop_all(bind=get_engine())


if __name__ == "__main__":
    configure_logging()
    try:
        create_all()
    except SQLAlchemyError as exc:
        raise SystemExit(f"Failed to create tables: {exc}") from exc
