import pytest

from devconnector_api.app.core.db import serialize, to_object_id
from devconnector_api.app.core.exceptions import NotFoundError, ValidationFailed, require_fields
from devconnector_api.app.core.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)
from devconnector_api.app.services.profile_service import normalize_skills


def test_token_round_trip():
    token = create_access_token({"sub": "abc"})
    payload = decode_access_token(token)
    assert payload["sub"] == "abc"
    assert payload["exp"] > 0


def test_tampered_token_is_rejected():
    token = create_access_token({"sub": "abc"})
    header, payload, signature = token.split(".")
    forged = create_access_token({"sub": "someone-else"}).split(".")[1]
    assert decode_access_token(f"{header}.{forged}.{signature}") is None


def test_expired_token_is_rejected():
    token = create_access_token({"sub": "abc"}, expires_delta=-10)
    assert decode_access_token(token) is None


@pytest.mark.parametrize("token", ["", "a.b", "a.b.c", "!!!.???.***"])
def test_garbage_token_is_rejected(token):
    assert decode_access_token(token) is None


def test_password_hashing():
    stored = hash_password("secret123")
    assert stored.startswith("pbkdf2_sha256$100000$")
    assert verify_password("secret123", stored)
    assert verify_password("secret123", hash_password("secret123", iterations=1000))
    assert not verify_password("wrong", stored)
    assert not verify_password("secret123", "not-a-hash")


def test_normalize_skills():
    assert normalize_skills("HTML,CSS , JS") == [" HTML", " CSS", " JS"]
    assert normalize_skills(["HTML", "CSS"]) == ["HTML", "CSS"]


def test_require_fields_reports_all_missing():
    with pytest.raises(ValidationFailed) as exc_info:
        require_fields({"a": "", "b": [], "c": "ok"}, {"a": "A is required", "b": "B is required", "c": "C"})
    assert [e["param"] for e in exc_info.value.errors] == ["a", "b"]


def test_to_object_id_maps_malformed_ids_to_not_found():
    with pytest.raises(NotFoundError, match="Post not found"):
        to_object_id("xyz", "Post not found")
    oid = to_object_id("5f1d7f0c2b3c4d5e6f708192", "Post not found")
    assert serialize({"_id": oid, "items": [{"user": oid}]}) == {
        "_id": "5f1d7f0c2b3c4d5e6f708192",
        "items": [{"user": "5f1d7f0c2b3c4d5e6f708192"}],
    }
