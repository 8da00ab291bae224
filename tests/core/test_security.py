"""
Tests for token issuing, password rules and key encryption.

System role: Verification of the security primitives
"""

import uuid

import jwt
import pytest

from brainforge.core.exceptions import ValidationError
from brainforge.core.security import (
    decrypt,
    encrypt,
    generate_token_pair,
    hash_password,
    hash_token,
    validate_password_strength,
    verify_access_token,
    verify_password,
    verify_refresh_token,
)

KEY = "ab" * 32


class TestTokens:
    """Test suite for JWT issuing and verification."""

    def test_pair_round_trip(self):
        user_id = uuid.uuid4()

        tokens = generate_token_pair(user_id, "ada@example.com")

        access = verify_access_token(tokens["access_token"])
        refresh = verify_refresh_token(tokens["refresh_token"])
        assert access.user_id == refresh.user_id == user_id
        assert access.type == "access"
        assert refresh.type == "refresh"

    def test_token_types_are_not_interchangeable(self):
        tokens = generate_token_pair(uuid.uuid4(), "ada@example.com")

        with pytest.raises(jwt.InvalidTokenError):
            verify_access_token(tokens["refresh_token"])
        with pytest.raises(jwt.InvalidTokenError):
            verify_refresh_token(tokens["access_token"])

    def test_tokens_minted_together_differ(self):
        user_id = uuid.uuid4()

        first = generate_token_pair(user_id, "ada@example.com")
        second = generate_token_pair(user_id, "ada@example.com")

        assert first["refresh_token"] != second["refresh_token"]

    def test_garbage_is_rejected(self):
        with pytest.raises(jwt.InvalidTokenError):
            verify_access_token("not.a.token")

    def test_hash_token_is_sha256_hex(self):
        digest = hash_token("abc")

        assert digest == "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"


class TestPasswords:
    """Test suite for password hashing and strength rules."""

    def test_hash_and_verify(self):
        hashed = hash_password("Password1", rounds=4)

        assert hashed != "Password1"
        assert verify_password("Password1", hashed)
        assert not verify_password("Password2", hashed)

    def test_verify_without_hash(self):
        assert verify_password("Password1", None) is False

    @pytest.mark.parametrize(
        "password, message",
        [
            ("Pass1", "at least 8 characters"),
            ("password1", "uppercase letter"),
            ("Password", "number"),
        ],
    )
    def test_weak_passwords(self, password, message):
        with pytest.raises(ValidationError, match=message):
            validate_password_strength(password)

    def test_strong_password(self):
        validate_password_strength("Password1")


class TestEncryption:
    """Test suite for AES-GCM key encryption."""

    def test_round_trip(self):
        sealed = encrypt("sk-secret", key_hex=KEY)

        assert sealed.count(":") == 2
        assert "sk-secret" not in sealed
        assert decrypt(sealed, key_hex=KEY) == "sk-secret"

    def test_fresh_iv_per_call(self):
        assert encrypt("sk-secret", key_hex=KEY) != encrypt("sk-secret", key_hex=KEY)

    def test_tampered_ciphertext(self):
        iv, tag, cipher = encrypt("sk-secret", key_hex=KEY).split(":")
        flipped = format(int(cipher[:2], 16) ^ 0xFF, "02x") + cipher[2:]

        with pytest.raises(ValueError, match="failed authentication"):
            decrypt(f"{iv}:{tag}:{flipped}", key_hex=KEY)

    def test_wrong_key(self):
        sealed = encrypt("sk-secret", key_hex=KEY)

        with pytest.raises(ValueError):
            decrypt(sealed, key_hex="cd" * 32)

    def test_bad_format(self):
        with pytest.raises(ValueError, match="Invalid encrypted data format"):
            decrypt("nocolons", key_hex=KEY)

    def test_bad_key_length(self):
        with pytest.raises(ValueError, match="64-char hex"):
            encrypt("sk-secret", key_hex="abcd")
