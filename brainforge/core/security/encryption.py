"""
API key encryption at rest.

AES-256-GCM with a random 16-byte IV. The stored format is
``iv_hex:tag_hex:ciphertext_hex``.

Dependencies: cryptography, brainforge.configs
System role: Secret storage for user-provided AI provider keys
"""

import os

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from brainforge.configs import get_settings

IV_BYTES = 16
TAG_BYTES = 16


def _get_key(key_hex: str | None = None) -> bytes:
    key_hex = key_hex if key_hex is not None else get_settings().security.encryption_key
    if not key_hex or len(key_hex) < 64:
        raise ValueError("ENCRYPTION_KEY must be a 64-char hex string (32 bytes)")
    return bytes.fromhex(key_hex[:64])


def encrypt(text: str, key_hex: str | None = None) -> str:
    """
    Encrypt a UTF-8 string.

    Args:
        text: Plain text secret
        key_hex: Optional key override (defaults to configured key)

    Returns:
        str: ``iv:tag:ciphertext`` in hex
    """
    iv = os.urandom(IV_BYTES)
    sealed = AESGCM(_get_key(key_hex)).encrypt(iv, text.encode("utf-8"), None)
    # cryptography appends the tag to the ciphertext
    ciphertext, tag = sealed[:-TAG_BYTES], sealed[-TAG_BYTES:]
    return f"{iv.hex()}:{tag.hex()}:{ciphertext.hex()}"


def decrypt(encrypted_data: str, key_hex: str | None = None) -> str:
    """
    Decrypt a value produced by :func:`encrypt`.

    Args:
        encrypted_data: ``iv:tag:ciphertext`` in hex
        key_hex: Optional key override (defaults to configured key)

    Returns:
        str: Plain text secret

    Raises:
        ValueError: If the format is wrong or authentication fails
    """
    parts = encrypted_data.split(":")
    if len(parts) != 3:
        raise ValueError("Invalid encrypted data format")
    iv_hex, tag_hex, cipher_hex = parts
    try:
        plain = AESGCM(_get_key(key_hex)).decrypt(
            bytes.fromhex(iv_hex),
            bytes.fromhex(cipher_hex) + bytes.fromhex(tag_hex),
            None,
        )
    except InvalidTag as e:
        raise ValueError("Encrypted data failed authentication") from e
    return plain.decode("utf-8")
