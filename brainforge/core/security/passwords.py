"""
Password hashing and strength rules.

Dependencies: bcrypt, brainforge.configs
System role: Credential storage
"""

import re

import bcrypt

from brainforge.configs import get_settings
from brainforge.core.exceptions import ValidationError

MIN_PASSWORD_LENGTH = 8


def hash_password(password: str, rounds: int | None = None) -> str:
    """Hash a password with bcrypt using the configured cost factor."""
    rounds = rounds or get_settings().security.bcrypt_rounds
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(password: str, password_hash: str | None) -> bool:
    """Return True when ``password`` matches ``password_hash``."""
    if not password_hash:
        return False
    return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))


def validate_password_strength(password: str) -> None:
    """
    Enforce the account password policy.

    Raises:
        ValidationError: Shorter than 8 chars, or missing an uppercase letter or a digit
    """
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError("Password must be at least 8 characters", field="password")
    if not re.search(r"[A-Z]", password):
        raise ValidationError("Password must contain an uppercase letter", field="password")
    if not re.search(r"[0-9]", password):
        raise ValidationError("Password must contain a number", field="password")
