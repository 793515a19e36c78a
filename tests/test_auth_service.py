from __future__ import annotations

import pytest

from storefront.core.security import verify_password
from storefront.core.tokens import read_session_token
from storefront.domain.errors import InvalidCredentialsError, NotFoundError, ValidationError
from storefront.services.auth_service import AuthService


def test_signup_normalizes_email_and_grants_user_permission(temp_db, repo):
    svc = AuthService()
    result = svc.signup("  Alice@Example.COM ", "s3cret", "Alice")

    assert result.user.email == "alice@example.com"
    assert result.user.permissions == ["USER"]
    assert not hasattr(result.user, "password_hash")

    stored = repo.get_user_by_email("alice@example.com")
    assert stored.password_hash != "s3cret"
    assert verify_password("s3cret", stored.password_hash)


def test_signup_issues_one_year_http_only_session(temp_db):
    result = AuthService().signup("bob@example.com", "pw")

    assert result.cookie.name == "token"
    assert result.cookie.httponly is True
    assert result.cookie.max_age == 60 * 60 * 24 * 365
    assert read_session_token(result.cookie.value) == result.user.id


@pytest.mark.parametrize("email", ["", "   ", "no-at-sign", "a@b"])
def test_signup_rejects_malformed_email(temp_db, email):
    with pytest.raises(ValidationError):
        AuthService().signup(email, "pw")


def test_signup_rejects_taken_email(temp_db):
    svc = AuthService()
    svc.signup("carol@example.com", "pw")
    with pytest.raises(ValidationError):
        svc.signup("CAROL@example.com", "pw")


def test_signin_unknown_email(temp_db):
    with pytest.raises(NotFoundError) as exc:
        AuthService().signin("ghost@example.com", "pw")
    assert exc.value.message == "No such user found for email ghost@example.com"


def test_signin_wrong_password_issues_no_token(temp_db, make_user):
    make_user("dave@example.com", "right")
    with pytest.raises(InvalidCredentialsError) as exc:
        AuthService().signin("dave@example.com", "wrong")
    assert exc.value.message == "Invalid Password!"


def test_signin_accepts_any_email_case(temp_db, make_user):
    user = make_user("erin@example.com", "right")
    result = AuthService().signin("Erin@Example.com", "right")

    assert result.user.id == user.id
    assert read_session_token(result.cookie.value) == user.id


def test_signout_clears_cookie(temp_db):
    result = AuthService().signout()
    assert result.message == "Goodbye!"
    assert result.cookie.name == "token"
    assert result.cookie.clears
