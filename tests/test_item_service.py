from __future__ import annotations

import pytest

from storefront.domain.context import RequestContext
from storefront.domain.errors import AuthenticationError, ForbiddenError, NotFoundError, ValidationError
from storefront.services.item_service import ItemService


def test_create_item_belongs_to_caller(temp_db, make_user, ctx_for):
    user = make_user()
    item = ItemService().create_item(ctx_for(user), title=" Lamp ", price=4200, description="bright")

    assert item.title == "Lamp"
    assert item.price == 4200
    assert item.user_id == user.id


def test_create_item_requires_login_and_valid_fields(temp_db, make_user, ctx_for):
    svc = ItemService()
    with pytest.raises(AuthenticationError):
        svc.create_item(RequestContext(), title="Lamp", price=1)
    with pytest.raises(ValidationError):
        svc.create_item(ctx_for(make_user()), title="  ", price=1)
    with pytest.raises(ValidationError):
        svc.create_item(ctx_for(make_user("b@example.com")), title="Lamp", price=-1)


def test_update_item_by_owner(temp_db, make_user, make_item, ctx_for):
    owner = make_user()
    item = make_item(owner=owner)

    updated = ItemService().update_item(ctx_for(owner), item.id, price=1500, title=None)

    assert updated.price == 1500
    assert updated.title == item.title


def test_update_item_by_stranger_is_forbidden(temp_db, repo, make_user, make_item, ctx_for):
    owner = make_user("owner@example.com")
    stranger = make_user("stranger@example.com")
    item = make_item(owner=owner)

    with pytest.raises(ForbiddenError):
        ItemService().update_item(ctx_for(stranger), item.id, price=1)
    assert repo.get_item(item.id).price == item.price


def test_delete_item_by_item_deleter(temp_db, repo, make_user, make_item, ctx_for):
    owner = make_user("owner@example.com")
    moderator = make_user("mod@example.com", permissions=["USER", "ITEMDELETE"])
    item = make_item(owner=owner)
    repo.create_cart_item(owner.id, item.id)

    result = ItemService().delete_item(ctx_for(moderator), item.id)

    assert result.id == item.id
    assert repo.get_item(item.id) is None
    assert repo.get_cart(owner.id) == []


def test_delete_missing_item(temp_db, make_user, ctx_for):
    with pytest.raises(NotFoundError):
        ItemService().delete_item(ctx_for(make_user()), "missing")
