"""High-level data access helpers backed by SQLAlchemy."""
from __future__ import annotations

from contextlib import contextmanager
from typing import Iterable, Iterator, Optional

from sqlalchemy import select, update, delete
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from storefront.core.logging import get_logger
from storefront.db.models import CartItem, Item, Order, OrderItem, User
from storefront.db.session import get_session
from storefront.domain.errors import StoreError, ValidationError
from storefront.domain.results import OrderLine

logger = get_logger(__name__)

_ITEM_FIELDS = ("title", "description", "price", "image", "large_image")


class SQLRepository:
    """CRUD helpers wrapping the SQLAlchemy session."""

    @contextmanager
    def _session(self) -> Iterator[Session]:
        try:
            with get_session() as session:
                yield session
        except SQLAlchemyError as exc:
            logger.error("Store failure: %s", exc)
            raise StoreError("The data store is unavailable") from exc

    # -------------------------- users --------------------------
    def get_user(self, user_id: str) -> Optional[User]:
        if not user_id:
            return None
        with self._session() as session:
            return session.get(User, user_id)

    def get_user_by_email(self, email: str) -> Optional[User]:
        with self._session() as session:
            stmt = select(User).where(User.email == email)
            return session.execute(stmt).scalar_one_or_none()

    def create_user(self, email: str, password_hash: str, name: str = "", permissions: Iterable[str] = ("USER",)) -> User:
        entity = User(email=email, name=name or "", password_hash=password_hash, permissions=list(permissions))
        with self._session() as session:
            session.add(entity)
            try:
                session.commit()
            except IntegrityError:
                session.rollback()
                raise ValidationError(f"A user with email {email} already exists") from None
            session.refresh(entity)
            return entity

    def set_reset_token(self, user_id: str, token: str, expiry_ms: int) -> None:
        with self._session() as session:
            stmt = update(User).where(User.id == user_id).values(reset_token=token, reset_token_expiry=expiry_ms)
            session.execute(stmt)
            session.commit()

    def find_user_by_reset_token(self, token: str, min_expiry_ms: int) -> Optional[User]:
        with self._session() as session:
            stmt = (
                select(User)
                .where(User.reset_token == token, User.reset_token_expiry >= min_expiry_ms)
                .limit(1)
            )
            return session.execute(stmt).scalars().first()

    def replace_password(self, user_id: str, password_hash: str, reset_token: str) -> Optional[User]:
        """Store a new hash and drop the reset token and its expiry in one UPDATE.

        Returns None when the token was already consumed by another request.
        """
        with self._session() as session:
            stmt = (
                update(User)
                .where(User.id == user_id, User.reset_token == reset_token)
                .values(password_hash=password_hash, reset_token=None, reset_token_expiry=None)
            )
            result = session.execute(stmt)
            session.commit()
            if not result.rowcount:
                return None
            return session.get(User, user_id)

    def set_permissions(self, user_id: str, permissions: list[str]) -> Optional[User]:
        with self._session() as session:
            user = session.get(User, user_id)
            if not user:
                return None
            user.permissions = list(permissions)
            session.commit()
            session.refresh(user)
            return user

    # -------------------------- items --------------------------
    def get_item(self, item_id: str) -> Optional[Item]:
        if not item_id:
            return None
        with self._session() as session:
            return session.get(Item, item_id)

    def create_item(self, *, title: str, description: str, price: int, image: str | None, large_image: str | None, user_id: str) -> Item:
        entity = Item(
            title=title,
            description=description or "",
            price=price,
            image=image,
            large_image=large_image,
            user_id=user_id,
        )
        with self._session() as session:
            session.add(entity)
            session.commit()
            session.refresh(entity)
            return entity

    def update_item(self, item_id: str, values: dict) -> Optional[Item]:
        clean = {k: v for k, v in values.items() if k in _ITEM_FIELDS}
        with self._session() as session:
            item = session.get(Item, item_id)
            if not item:
                return None
            for key, value in clean.items():
                setattr(item, key, value)
            session.commit()
            session.refresh(item)
            return item

    def delete_item(self, item_id: str) -> None:
        with self._session() as session:
            session.execute(delete(CartItem).where(CartItem.item_id == item_id))
            session.execute(delete(Item).where(Item.id == item_id))
            session.commit()

    # -------------------------- cart --------------------------
    def get_cart_item(self, cart_item_id: str) -> Optional[CartItem]:
        if not cart_item_id:
            return None
        with self._session() as session:
            return session.get(CartItem, cart_item_id)

    def find_cart_item(self, user_id: str, item_id: str) -> Optional[CartItem]:
        with self._session() as session:
            stmt = select(CartItem).where(CartItem.user_id == user_id, CartItem.item_id == item_id)
            return session.execute(stmt).scalar_one_or_none()

    def create_cart_item(self, user_id: str, item_id: str) -> Optional[CartItem]:
        """Insert a quantity-1 line. Returns None when the (user, item) row already exists."""
        entity = CartItem(user_id=user_id, item_id=item_id, quantity=1)
        with self._session() as session:
            session.add(entity)
            try:
                session.commit()
            except IntegrityError:
                session.rollback()
                return None
            session.refresh(entity)
            return entity

    def increment_cart_item(self, cart_item_id: str, by: int = 1) -> Optional[CartItem]:
        with self._session() as session:
            stmt = (
                update(CartItem)
                .where(CartItem.id == cart_item_id)
                .values(quantity=CartItem.quantity + by)
            )
            session.execute(stmt)
            session.commit()
            return session.get(CartItem, cart_item_id)

    def delete_cart_item(self, cart_item_id: str) -> None:
        with self._session() as session:
            session.execute(delete(CartItem).where(CartItem.id == cart_item_id))
            session.commit()

    def get_cart(self, user_id: str) -> list[CartItem]:
        with self._session() as session:
            stmt = (
                select(CartItem)
                .where(CartItem.user_id == user_id)
                .options(selectinload(CartItem.item))
                .order_by(CartItem.created_at, CartItem.id)
            )
            return list(session.execute(stmt).scalars().all())

    def delete_cart_items(self, cart_item_ids: Iterable[str]) -> int:
        ids = list(cart_item_ids)
        if not ids:
            return 0
        with self._session() as session:
            result = session.execute(delete(CartItem).where(CartItem.id.in_(ids)))
            session.commit()
            return result.rowcount or 0

    # -------------------------- orders --------------------------
    def create_order(self, user_id: str, total: int, charge: str, lines: Iterable[OrderLine]) -> Order:
        """Persist the order and all of its snapshot lines in a single transaction.

        The commit is the last store call; the returned order is the committed
        object with its lines attached.
        """
        order = Order(user_id=user_id, total=total, charge=charge)
        for position, line in enumerate(lines):
            order.items.append(
                OrderItem(
                    user_id=user_id,
                    position=position,
                    title=line.title,
                    description=line.description or "",
                    image=line.image,
                    large_image=line.large_image,
                    price=line.price,
                    quantity=line.quantity,
                )
            )
        with self._session() as session:
            session.add(order)
            session.commit()
        return order

    def get_order(self, order_id: str) -> Optional[Order]:
        with self._session() as session:
            stmt = select(Order).where(Order.id == order_id).options(selectinload(Order.items))
            return session.execute(stmt).scalar_one_or_none()

