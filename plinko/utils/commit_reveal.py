"""Cryptographic commit-reveal mechanism for fair round outcomes."""

import secrets
from typing import Optional, Tuple

from plinko.config import settings
from plinko.utils.crypto import sha256_hex
from plinko.utils.errors import InvalidInput


def _require(name: str, value: object) -> str:
    if not isinstance(value, str) or not value:
        raise InvalidInput(f"{name} must be a non-empty string")
    return value


def derive_commitment(server_seed: str, nonce: str) -> str:
    """
    Create the public commitment for a round.

    Published before the client seed is known, so it must never depend on it.

    Args:
        server_seed: The secret server seed
        nonce: The round nonce

    Returns:
        SHA256 hex digest of ``server_seed:nonce``
    """
    _require("server_seed", server_seed)
    _require("nonce", nonce)
    return sha256_hex(f"{server_seed}:{nonce}")


def derive_combined_seed(server_seed: str, client_seed: str, nonce: str) -> str:
    """
    Combine all parties' inputs into the seed that drives the generator.

    Args:
        server_seed: The secret server seed
        client_seed: The player-supplied seed
        nonce: The round nonce

    Returns:
        SHA256 hex digest of ``server_seed:client_seed:nonce``
    """
    _require("server_seed", server_seed)
    _require("client_seed", client_seed)
    _require("nonce", nonce)
    return sha256_hex(f"{server_seed}:{client_seed}:{nonce}")


def generate_round_secret(
    seed_bytes: Optional[int] = None, nonce_bytes: Optional[int] = None
) -> Tuple[str, str]:
    """
    Generate fresh secret material for a new round.

    Args:
        seed_bytes: Random bytes in the server seed (defaults from settings)
        nonce_bytes: Random bytes in the nonce (defaults from settings)

    Returns:
        Tuple of (server_seed, nonce), both hex encoded
    """
    if seed_bytes is None:
        seed_bytes = settings.server_seed_bytes
    if nonce_bytes is None:
        nonce_bytes = settings.nonce_bytes
    return secrets.token_hex(seed_bytes), secrets.token_hex(nonce_bytes)
