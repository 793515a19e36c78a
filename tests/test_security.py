from __future__ import annotations

import jwt

from storefront.core.security import hash_password, verify_password
from storefront.core.tokens import read_session_token, sign_session_token


def test_hash_is_salted_and_verifies(temp_db):
    first = hash_password("hunter2")
    second = hash_password("hunter2")

    assert first != "hunter2"
    assert first != second
    assert verify_password("hunter2", first)
    assert not verify_password("hunter3", first)


def test_verify_rejects_garbage_hashes(temp_db):
    assert verify_password("x", None) is False
    assert verify_password("x", "not-a-hash") is False


def test_session_token_round_trip(temp_db):
    token = sign_session_token("user-1")
    assert read_session_token(token) == "user-1"


def test_session_token_signed_with_other_secret_is_rejected(temp_db):
    forged = jwt.encode({"userId": "user-1"}, "someone-else", algorithm="HS256")
    assert read_session_token(forged) is None


def test_session_token_must_carry_only_the_user_id(temp_db):
    padded = jwt.encode({"userId": "user-1", "admin": True}, "test-secret", algorithm="HS256")
    assert read_session_token(padded) is None
    assert read_session_token("") is None
    assert read_session_token("not.a.token") is None
