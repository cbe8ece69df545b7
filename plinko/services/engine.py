"""Deterministic Plinko simulation.

This module turns a seeded generator into a verifiable round outcome:
- Board generation (peg biases) from the start of the stream
- Board hashing, strictly before any further draw
- Path resolution from the continuing stream

Both phases share one generator, so the draw order is part of the result.
"""

import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import List, Tuple

from plinko.constants import (
    BASE_BIAS,
    BIAS_DECIMALS,
    BIAS_SPREAD,
    CENTER_COLUMN,
    DROP_COLUMN_STEP,
    ROWS,
    PathDecision,
)
from plinko.models.board import Board, Peg, PegRow, SimulationResult
from plinko.utils.commit_reveal import derive_combined_seed
from plinko.utils.crypto import sha256_hex
from plinko.utils.errors import OutOfRangeParameter
from plinko.utils.prng import Xorshift32, init_generator

log = logging.getLogger(__name__)

_BIAS_QUANTUM = Decimal(1).scaleb(-BIAS_DECIMALS)


def round_bias(value: float) -> float:
    """Round half-up to 6 decimals on the exact binary value of ``value``."""
    return float(Decimal(value).quantize(_BIAS_QUANTUM, rounding=ROUND_HALF_UP))


def validate_drop_column(drop_column: int) -> int:
    if isinstance(drop_column, bool) or not isinstance(drop_column, int):
        raise OutOfRangeParameter(f"drop_column must be an integer, got {drop_column!r}")
    if not 0 <= drop_column <= ROWS:
        raise OutOfRangeParameter(f"drop_column must be within 0..{ROWS}, got {drop_column}")
    return drop_column


def generate_board(prng: Xorshift32) -> Board:
    """Draw one bias per peg, row by row, from the start of the stream."""
    rows = []
    for r in range(ROWS):
        pegs = []
        for _ in range(r + 1):
            left_bias = BASE_BIAS + (prng.rand() - 0.5) * BIAS_SPREAD
            pegs.append(Peg(left_bias=round_bias(left_bias)))
        rows.append(PegRow(index=r, pegs=tuple(pegs)))
    return Board(rows=tuple(rows))


def resolve_path(prng: Xorshift32, board: Board, drop_column: int) -> Tuple[int, List[PathDecision]]:
    """Drop the ball through ``board`` using the continuing stream.

    Returns:
        Tuple of (bin_index, path); bin_index is the number of "R" moves
    """
    adj = (drop_column - CENTER_COLUMN) * DROP_COLUMN_STEP
    pos = 0
    path: List[PathDecision] = []

    for r in range(ROWS):
        # the ball can only have drifted right as many times as rows passed
        peg = board[r][min(pos, r)]
        bias = max(0.0, min(1.0, peg.left_bias + adj))
        if prng.rand() < bias:
            path.append("L")
        else:
            path.append("R")
            pos += 1

    return pos, path


def simulate(prng: Xorshift32, drop_column: int) -> SimulationResult:
    """
    Run a full round on a freshly seeded generator.

    Args:
        prng: Generator from ``init_generator``, used by this run only
        drop_column: Player's drop column, 0..ROWS

    Returns:
        SimulationResult with the board, its hash, the bin and the path

    Raises:
        OutOfRangeParameter: If drop_column is not an integer in 0..ROWS
    """
    validate_drop_column(drop_column)

    board = generate_board(prng)
    peg_map_hash = sha256_hex(board.canonical_json())
    bin_index, path = resolve_path(prng, board, drop_column)

    log.debug("simulated drop_column=%s bin=%s draws=%s", drop_column, bin_index, prng.draws)
    return SimulationResult(board=board, peg_map_hash=peg_map_hash, bin_index=bin_index, path=tuple(path))


def play_round(server_seed: str, client_seed: str, nonce: str, drop_column: int) -> Tuple[str, SimulationResult]:
    """Run the whole pipeline from disclosed inputs.

    Returns:
        Tuple of (combined_seed, SimulationResult)
    """
    validate_drop_column(drop_column)
    combined_seed = derive_combined_seed(server_seed, client_seed, nonce)
    prng = init_generator(combined_seed)
    return combined_seed, simulate(prng, drop_column)
