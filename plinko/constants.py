"""Constants and type definitions for the Plinko fairness backend."""

from typing import Literal

# Type definitions
PathDecision = Literal["L", "R"]
RoundStatus = Literal["CREATED", "STARTED", "REVEALED"]

# Board shape
ROWS = 12
CENTER_COLUMN = ROWS // 2

# Peg bias: 0.5 +/- 0.1
BASE_BIAS = 0.5
BIAS_SPREAD = 0.2
BIAS_DECIMALS = 6

# Per-column shift of every peg's left bias
DROP_COLUMN_STEP = 0.01

# Payout multiplier per bin, edges pay more
PAYOUT_MAP = [
    10,   # Bin 0
    5,    # Bin 1
    2,    # Bin 2
    1.5,  # Bin 3
    1,    # Bin 4
    0.5,  # Bin 5
    0.2,  # Bin 6 (center)
    0.5,  # Bin 7
    1,    # Bin 8
    1.5,  # Bin 9
    2,    # Bin 10
    5,    # Bin 11
    10,   # Bin 12
]
