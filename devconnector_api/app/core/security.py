"""
Tokens, password hashes and the authentication dependency.

Access tokens are compact HS256 JWTs (``header.payload.signature``,
each segment base64url without padding) whose ``sub`` claim is the
user's ObjectId as a hex string.  Passwords are stored as
``pbkdf2_sha256$<iterations>$<salt hex>$<hash hex>`` so the work factor
can be raised later without invalidating existing hashes.

``get_current_user`` guards every private route.  The web client sends
its token in ``x-auth-token``; ``Authorization: Bearer`` is accepted as
well.
"""

import base64
import hashlib
import hmac
import json
import os
import time
from typing import Any, Dict, Optional

from fastapi import Depends, Header, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from .config import settings

PBKDF2_ITERATIONS = 100_000
_HASH_SCHEME = "pbkdf2_sha256"


def _encode_segment(raw: bytes) -> str:
    return base64.urlsafe_b64encode(raw).rstrip(b"=").decode("ascii")


def _decode_segment(segment: str) -> bytes:
    return base64.urlsafe_b64decode(segment + "=" * (-len(segment) % 4))


def _json_segment(obj: Dict[str, Any]) -> str:
    return _encode_segment(json.dumps(obj, separators=(",", ":")).encode("utf-8"))


def _signature(signing_input: str) -> bytes:
    return hmac.new(settings.secret_key.encode("utf-8"), signing_input.encode("ascii"), hashlib.sha256).digest()


def create_access_token(data: Dict[str, Any], expires_delta: Optional[int] = None) -> str:
    """Sign ``data`` into a token that expires after ``expires_delta`` seconds.

    Without ``expires_delta`` the lifetime is
    ``settings.access_token_expire_minutes``.
    """
    lifetime = expires_delta or settings.access_token_expire_minutes * 60
    claims = {**data, "exp": int(time.time()) + lifetime}
    signing_input = ".".join((_json_segment({"alg": settings.algorithm, "typ": "JWT"}), _json_segment(claims)))
    return f"{signing_input}.{_encode_segment(_signature(signing_input))}"


def decode_access_token(token: str) -> Optional[Dict[str, Any]]:
    """Return the claims of a genuine, unexpired token, else ``None``."""
    try:
        header_seg, claims_seg, signature_seg = token.split(".")
    except ValueError:
        return None
    try:
        if not hmac.compare_digest(_signature(f"{header_seg}.{claims_seg}"), _decode_segment(signature_seg)):
            return None
        claims = json.loads(_decode_segment(claims_seg))
        if not isinstance(claims, dict) or int(claims.get("exp", 0)) < time.time():
            return None
    except (TypeError, ValueError, UnicodeError):
        return None
    return claims


_bearer = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer),
    x_auth_token: Optional[str] = Header(None),
) -> Dict[str, Any]:
    """Resolve the caller's identity from the request's token.

    Returns the token claims with ``user_id`` added.  The user record is
    not loaded: after an account is deleted its token still resolves,
    and the routes it reaches report the missing profile or user.
    """
    token = credentials.credentials if credentials is not None else x_auth_token
    if not token:
        raise _unauthorized("No token, authorization denied")
    claims = decode_access_token(token)
    if not claims or not claims.get("sub"):
        raise _unauthorized("Token is not valid")
    claims["user_id"] = str(claims["sub"])
    return claims


def hash_password(password: str, iterations: int = PBKDF2_ITERATIONS) -> str:
    salt = os.urandom(16)
    digest = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, iterations)
    return f"{_HASH_SCHEME}${iterations}${salt.hex()}${digest.hex()}"


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Check ``plain_password`` against a value made by :func:`hash_password`."""
    try:
        scheme, iterations, salt_hex, digest_hex = hashed_password.split("$")
        if scheme != _HASH_SCHEME:
            return False
        salt, expected = bytes.fromhex(salt_hex), bytes.fromhex(digest_hex)
        rounds = int(iterations)
    except (AttributeError, ValueError):
        return False
    digest = hashlib.pbkdf2_hmac("sha256", plain_password.encode("utf-8"), salt, rounds)
    return hmac.compare_digest(digest, expected)
