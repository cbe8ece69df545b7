"""Xorshift32 generator seeded from a combined-seed digest.

Every draw advances the shared state, so the order in which the board
generator and the path resolver consume values is part of the outcome.
"""

import re

from plinko.utils.errors import InvalidSeedMaterial

MASK_32 = 0xFFFFFFFF
SEED_BYTES = 4

_HEX_PAIRS = re.compile(r"(?:[0-9a-fA-F]{2})*")


class Xorshift32:
    """Marsaglia xorshift32 with shifts 13, 17, 5."""

    __slots__ = ("state", "draws")

    def __init__(self, seed: int):
        # zero is absorbing for xorshift
        self.state = (seed & MASK_32) or 1
        self.draws = 0

    def next_u32(self) -> int:
        """Advance the state and return it as an unsigned 32-bit integer."""
        x = self.state
        x ^= (x << 13) & MASK_32
        x ^= x >> 17
        x ^= (x << 5) & MASK_32
        self.state = x
        self.draws += 1
        return x

    def rand(self) -> float:
        """Return the next value in [0, 1)."""
        return self.next_u32() / 0x100000000


def decode_seed_bytes(combined_seed_hex: str) -> bytes:
    """Decode the leading run of whole hex byte pairs of a digest."""
    if not isinstance(combined_seed_hex, str):
        raise InvalidSeedMaterial("combined seed must be a hex string")
    prefix = _HEX_PAIRS.match(combined_seed_hex).group(0)
    return bytes.fromhex(prefix)


def init_generator(combined_seed_hex: str) -> Xorshift32:
    """
    Seed a generator from the first 4 raw bytes of a combined-seed digest.

    Args:
        combined_seed_hex: Hex digest from ``derive_combined_seed``

    Returns:
        A fresh Xorshift32 owned by one simulation run

    Raises:
        InvalidSeedMaterial: If fewer than 4 bytes can be decoded
    """
    raw = decode_seed_bytes(combined_seed_hex)
    if len(raw) < SEED_BYTES:
        raise InvalidSeedMaterial(
            f"combined seed must decode to at least {SEED_BYTES} bytes, got {len(raw)}"
        )
    return Xorshift32(int.from_bytes(raw[:SEED_BYTES], "big"))
