"""SQLAlchemy models for accounts, catalog, carts and orders."""
from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    BigInteger,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    JSON,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import relationship

from .session import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _new_id() -> str:
    return uuid.uuid4().hex


class User(Base):
    __tablename__ = "users"

    id = Column(String(32), primary_key=True, default=_new_id)
    email = Column(String(255), unique=True, nullable=False, index=True)
    name = Column(String(255), nullable=False, default="")
    password_hash = Column(Text, nullable=False)
    permissions = Column(JSON, nullable=False, default=lambda: ["USER"])
    reset_token = Column(String(128), nullable=True, index=True)
    # epoch milliseconds
    reset_token_expiry = Column(BigInteger, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    cart = relationship("CartItem", back_populates="user", cascade="all,delete-orphan")


class Item(Base):
    __tablename__ = "items"

    id = Column(String(32), primary_key=True, default=_new_id)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False, default="")
    image = Column(String(1024), nullable=True)
    large_image = Column(String(1024), nullable=True)
    price = Column(Integer, nullable=False)
    user_id = Column(String(32), ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)


class CartItem(Base):
    __tablename__ = "cart_items"
    __table_args__ = (UniqueConstraint("user_id", "item_id", name="uq_cart_user_item"),)

    id = Column(String(32), primary_key=True, default=_new_id)
    user_id = Column(String(32), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    item_id = Column(String(32), ForeignKey("items.id", ondelete="CASCADE"), nullable=False)
    quantity = Column(Integer, nullable=False, default=1)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    user = relationship("User", back_populates="cart")
    item = relationship("Item")


class Order(Base):
    __tablename__ = "orders"

    id = Column(String(32), primary_key=True, default=_new_id)
    user_id = Column(String(32), ForeignKey("users.id"), nullable=False, index=True)
    total = Column(Integer, nullable=False)
    charge = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), default=_utcnow, server_default=func.now(), nullable=False)

    items = relationship(
        "OrderItem",
        back_populates="order",
        cascade="all,delete-orphan",
        order_by="OrderItem.position",
    )


class OrderItem(Base):
    """Value copy of an Item at purchase time; holds no reference to items."""

    __tablename__ = "order_items"

    id = Column(String(32), primary_key=True, default=_new_id)
    order_id = Column(String(32), ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(String(32), ForeignKey("users.id"), nullable=False)
    position = Column(Integer, nullable=False, default=0)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False, default="")
    image = Column(String(1024), nullable=True)
    large_image = Column(String(1024), nullable=True)
    price = Column(Integer, nullable=False)
    quantity = Column(Integer, nullable=False, default=1)

    order = relationship("Order", back_populates="items")
