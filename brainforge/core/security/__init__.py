"""
Security helpers.

Exports:
  - encrypt, decrypt: AES-256-GCM for stored provider API keys
  - hash_password, verify_password: bcrypt password hashing
  - generate_token_pair, verify_access_token, verify_refresh_token: JWT handling
"""

from brainforge.core.security.encryption import decrypt, encrypt
from brainforge.core.security.passwords import (
    hash_password,
    validate_password_strength,
    verify_password,
)
from brainforge.core.security.tokens import (
    TokenPayload,
    generate_access_token,
    generate_refresh_token,
    generate_token_pair,
    hash_token,
    verify_access_token,
    verify_refresh_token,
)

__all__ = [
    "encrypt",
    "decrypt",
    "hash_password",
    "verify_password",
    "validate_password_strength",
    "TokenPayload",
    "generate_access_token",
    "generate_refresh_token",
    "generate_token_pair",
    "hash_token",
    "verify_access_token",
    "verify_refresh_token",
]
