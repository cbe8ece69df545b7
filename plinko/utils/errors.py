"""Typed failures raised by the fairness core.

All of them are detected before the first generator draw, so a caller never
sees a partial result.
"""


class FairnessError(ValueError):
    """Base class for every input error raised by the fairness core."""


class InvalidInput(FairnessError):
    """A server seed, nonce or client seed is missing or empty."""


class InvalidSeedMaterial(FairnessError):
    """The combined seed does not decode to at least 4 bytes."""


class OutOfRangeParameter(FairnessError):
    """The drop column lies outside 0..ROWS."""
