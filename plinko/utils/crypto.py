"""Digest helper shared by the commitment, seed and board hashes."""

import hashlib


def sha256_hex(text: str) -> str:
    """Return the lowercase hex SHA-256 digest of the UTF-8 bytes of ``text``."""
    return hashlib.sha256(text.encode("utf-8")).hexdigest()
