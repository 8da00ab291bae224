"""
JWT issuance and verification.

Access and refresh tokens are HS256-signed with separate secrets. Each token
carries a random ``jti`` so tokens minted in the same second still differ,
which keeps revocation per token.

Dependencies: PyJWT, brainforge.configs
System role: Stateless authentication tokens
"""

import hashlib
import secrets
import uuid
from datetime import datetime, timedelta, timezone
from typing import Literal

import jwt
from pydantic import BaseModel

from brainforge.configs import get_settings

ALGORITHM = "HS256"


class TokenPayload(BaseModel):
    """Decoded token claims."""

    user_id: uuid.UUID
    email: str
    type: Literal["access", "refresh"]
    exp: datetime
    jti: str


def _encode(user_id: uuid.UUID, email: str, token_type: str, secret: str, ttl: timedelta) -> str:
    now = datetime.now(timezone.utc)
    claims = {
        "user_id": str(user_id),
        "email": email,
        "type": token_type,
        "iat": now,
        "exp": now + ttl,
        "jti": secrets.token_hex(8),
    }
    return jwt.encode(claims, secret, algorithm=ALGORITHM)


def _decode(token: str, secret: str, expected_type: str) -> TokenPayload:
    claims = jwt.decode(token, secret, algorithms=[ALGORITHM])
    payload = TokenPayload(**claims)
    if payload.type != expected_type:
        raise jwt.InvalidTokenError(f"Expected {expected_type} token")
    return payload


def generate_access_token(user_id: uuid.UUID, email: str) -> str:
    """Issue a short-lived access token."""
    config = get_settings().security
    return _encode(
        user_id, email, "access", config.jwt_secret,
        timedelta(minutes=config.access_token_ttl_minutes),
    )


def generate_refresh_token(user_id: uuid.UUID, email: str) -> str:
    """Issue a long-lived refresh token."""
    config = get_settings().security
    return _encode(
        user_id, email, "refresh", config.jwt_refresh_secret,
        timedelta(days=config.refresh_token_ttl_days),
    )


def generate_token_pair(user_id: uuid.UUID, email: str) -> dict[str, str]:
    """Issue ``{access_token, refresh_token}`` for a user."""
    return {
        "access_token": generate_access_token(user_id, email),
        "refresh_token": generate_refresh_token(user_id, email),
    }


def verify_access_token(token: str) -> TokenPayload:
    """
    Verify an access token.

    Raises:
        jwt.InvalidTokenError: Bad signature, expired, or wrong token type
    """
    return _decode(token, get_settings().security.jwt_secret, "access")


def verify_refresh_token(token: str) -> TokenPayload:
    """
    Verify a refresh token.

    Raises:
        jwt.InvalidTokenError: Bad signature, expired, or wrong token type
    """
    return _decode(token, get_settings().security.jwt_refresh_secret, "refresh")


def hash_token(token: str) -> str:
    """SHA-256 digest used to store revoked tokens without keeping them verbatim."""
    return hashlib.sha256(token.encode("utf-8")).hexdigest()
