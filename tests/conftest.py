from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Make the storefront package importable when running tests from a checkout
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from storefront.core import config as core_config  # noqa: E402
from storefront.core import security  # noqa: E402
from storefront.db import models  # noqa: E402
from storefront.db import session as db_session  # noqa: E402
from storefront.repositories.sql_repository import SQLRepository  # noqa: E402
from storefront.core.security import hash_password  # noqa: E402
from storefront.domain.context import RequestContext  # noqa: E402


def _clear_caches() -> None:
    core_config.get_settings.cache_clear()
    security._hasher.cache_clear()
    db_session.get_engine.cache_clear()
    db_session._get_sessionmaker.cache_clear()  # type: ignore[attr-defined]


@pytest.fixture()
def temp_db(tmp_path, monkeypatch):
    """Point the app at a throwaway SQLite file and tear it down completely afterwards."""
    db_file = tmp_path / "test.db"
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{db_file}")
    monkeypatch.setenv("APP_SECRET", "test-secret")
    monkeypatch.setenv("PASSWORD_HASH_TIME_COST", "1")
    monkeypatch.setenv("FRONTEND_URL", "http://shop.test")
    monkeypatch.setenv("MAIL_FROM", "shop@example.com")
    for name in ("SMTP_HOST", "SMTP_USER", "SMTP_PASSWORD", "STRIPE_SECRET_KEY"):
        monkeypatch.delenv(name, raising=False)
    _clear_caches()

    engine = db_session.get_engine()
    models.Base.metadata.drop_all(bind=engine)
    models.Base.metadata.create_all(bind=engine)

    yield db_file

    try:
        models.Base.metadata.drop_all(bind=engine)
    except Exception:
        pass
    try:
        engine.dispose()
    except Exception:
        pass
    _clear_caches()


@pytest.fixture()
def repo(temp_db):
    return SQLRepository()


@pytest.fixture()
def make_user(repo):
    def _make(email: str = "alice@example.com", password: str = "secret", permissions=("USER",), name: str = ""):
        return repo.create_user(email, password_hash=hash_password(password), name=name, permissions=list(permissions))

    return _make


@pytest.fixture()
def make_item(repo):
    def _make(title: str = "Shoes", price: int = 1000, owner=None, **extra):
        return repo.create_item(
            title=title,
            description=extra.get("description", f"{title} description"),
            price=price,
            image=extra.get("image", f"https://img.test/{title}.jpg"),
            large_image=extra.get("large_image", f"https://img.test/{title}-large.jpg"),
            user_id=owner.id if owner else None,
        )

    return _make


@pytest.fixture()
def ctx_for():
    def _ctx(user):
        return RequestContext(current_user_id=user.id, current_user=user)

    return _ctx
