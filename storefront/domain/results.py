"""Values returned by service operations."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from storefront.domain.context import SessionCookie


@dataclass(frozen=True)
class PublicUser:
    id: str
    email: str
    name: str
    permissions: list[str]

    @classmethod
    def from_entity(cls, entity) -> "PublicUser":
        return cls(
            id=entity.id,
            email=entity.email,
            name=entity.name or "",
            permissions=list(entity.permissions or []),
        )


@dataclass(frozen=True)
class AuthResult:
    user: PublicUser
    cookie: SessionCookie


@dataclass(frozen=True)
class MessageResult:
    message: str
    cookie: Optional[SessionCookie] = None


@dataclass(frozen=True)
class DeletedResult:
    id: str


@dataclass(frozen=True)
class CartLine:
    id: str
    user_id: str
    item_id: str
    quantity: int

    @classmethod
    def from_entity(cls, entity) -> "CartLine":
        return cls(id=entity.id, user_id=entity.user_id, item_id=entity.item_id, quantity=entity.quantity)


@dataclass(frozen=True)
class ItemView:
    id: str
    title: str
    description: str
    price: int
    image: Optional[str]
    large_image: Optional[str]
    user_id: Optional[str]

    @classmethod
    def from_entity(cls, entity) -> "ItemView":
        return cls(
            id=entity.id,
            title=entity.title,
            description=entity.description or "",
            price=entity.price,
            image=entity.image,
            large_image=entity.large_image,
            user_id=entity.user_id,
        )


@dataclass(frozen=True)
class OrderLine:
    """Snapshot of a purchased item; carries no reference to the catalog row."""

    title: str
    description: str
    price: int
    quantity: int
    image: Optional[str] = None
    large_image: Optional[str] = None
    id: Optional[str] = None


@dataclass(frozen=True)
class OrderResult:
    id: str
    user_id: str
    total: int
    charge: str
    created_at: Optional[datetime]
    items: list[OrderLine] = field(default_factory=list)

    @classmethod
    def from_entity(cls, entity) -> "OrderResult":
        return cls(
            id=entity.id,
            user_id=entity.user_id,
            total=entity.total,
            charge=entity.charge,
            created_at=entity.created_at,
            items=[
                OrderLine(
                    id=line.id,
                    title=line.title,
                    description=line.description or "",
                    price=line.price,
                    quantity=line.quantity,
                    image=line.image,
                    large_image=line.large_image,
                )
                for line in entity.items
            ],
        )
