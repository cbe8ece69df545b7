"""Round lifecycle service.

This module drives a round through the commit-reveal protocol:
- Commit: generate server secret material and publish its commitment
- Start: accept the client seed, run the simulation, store the outcome
- Reveal: disclose the server seed so anyone can recompute the round
- Verify: recompute everything from disclosed values, read-only
"""

import logging
import secrets
import time
from typing import Optional

from plinko.config import settings
from plinko.constants import PAYOUT_MAP
from plinko.models.round import Round, rounds, rounds_lock
from plinko.services import round_logger
from plinko.services.engine import play_round
from plinko.utils.commit_reveal import derive_commitment, generate_round_secret

log = logging.getLogger(__name__)


class RoundNotFound(LookupError):
    """No round with the requested id exists."""


class RoundStateError(RuntimeError):
    """The round is not in a state that allows the requested transition."""


def _persist(rnd: Round) -> bool:
    try:
        round_logger.round_log.save_round(rnd)
    except OSError as e:
        log.error("failed to persist round %s: %s", rnd.id, e)
        return False
    return True


def payout_for(bin_index: int) -> float:
    """Look up the payout multiplier for a bin."""
    if 0 <= bin_index < len(PAYOUT_MAP):
        return float(PAYOUT_MAP[bin_index])
    return 0.0


def evict_stale_rounds(now: float):
    """Drop expired and overflow rounds from memory; call under rounds_lock.

    Evicted rounds stay in the round log and are reloaded on demand.
    """
    cutoff = now - settings.round_ttl_secs
    for round_id in [rid for rid, r in rounds.items() if r.created_at < cutoff]:
        rounds.pop(round_id, None)

    # insertion order: oldest first
    overflow = len(rounds) - max(settings.max_active_rounds - 1, 0)
    if overflow > 0:
        for round_id in list(rounds)[:overflow]:
            rounds.pop(round_id, None)


async def create_round() -> Round:
    """Create a round and publish the commitment to its server seed."""
    server_seed, nonce = generate_round_secret()
    rnd = Round(
        id=secrets.token_hex(12),
        created_at=time.time(),
        nonce=nonce,
        commit_hex=derive_commitment(server_seed, nonce),
        server_seed=server_seed,
    )
    async with rounds_lock:
        evict_stale_rounds(rnd.created_at)
        rounds[rnd.id] = rnd
    _persist(rnd)
    log.info("round %s committed commit_hex=%s", rnd.id, rnd.commit_hex)
    return rnd


async def get_round(round_id: str) -> Round:
    async with rounds_lock:
        rnd = rounds.get(round_id)
    if rnd is None:
        rnd = round_logger.round_log.get_round(round_id)
        if rnd is None:
            raise RoundNotFound(f"Round {round_id} not found.")
        # revealed rounds are final; serve them from the log only
        if not rnd.is_revealed:
            async with rounds_lock:
                rnd = rounds.setdefault(round_id, rnd)
    return rnd


async def start_round(round_id: str, client_seed: str, drop_column: int, bet_cents: int = 0) -> Round:
    """
    Play a committed round.

    Args:
        round_id: Round to play
        client_seed: Player-supplied seed
        drop_column: Player's drop column, 0..ROWS
        bet_cents: Wager in cents

    Returns:
        The updated round, status STARTED

    Raises:
        RoundNotFound: If the round does not exist
        RoundStateError: If the round was already played
        FairnessError: If the inputs are invalid
    """
    rnd = await get_round(round_id)
    async with rounds_lock:
        rnd = rounds.get(rnd.id, rnd)
        if rnd.status != "CREATED":
            raise RoundStateError("Round already started or finished.")

        combined_seed, result = play_round(rnd.server_seed, client_seed, rnd.nonce, drop_column)

        rnd.client_seed = client_seed
        rnd.combined_seed = combined_seed
        rnd.drop_column = drop_column
        rnd.bet_cents = bet_cents
        rnd.peg_map_hash = result.peg_map_hash
        rnd.bin_index = result.bin_index
        rnd.path = list(result.path)
        rnd.payout_multiplier = payout_for(result.bin_index)
        rnd.status = "STARTED"

    _persist(rnd)
    log.info("round %s started drop_column=%s bin=%s", rnd.id, drop_column, rnd.bin_index)
    return rnd


async def reveal_round(round_id: str) -> Round:
    """Disclose the server seed of a played round."""
    rnd = await get_round(round_id)
    async with rounds_lock:
        rnd = rounds.get(rnd.id, rnd)
        if rnd.status != "STARTED":
            raise RoundStateError("Round is not in a state to be revealed.")
        rnd.status = "REVEALED"
        rnd.revealed_at = time.time()

    if _persist(rnd):
        async with rounds_lock:
            rounds.pop(rnd.id, None)
    log.info("round %s revealed", rnd.id)
    return rnd


def verify_round(
    server_seed: str,
    client_seed: str,
    nonce: str,
    drop_column: int,
    commit_hex: Optional[str] = None,
    peg_map_hash: Optional[str] = None,
    bin_index: Optional[int] = None,
) -> dict:
    """
    Recompute a round from its disclosed inputs.

    Any published values passed in are compared against the recomputation.

    Returns:
        Recomputed commitment, combined seed, board hash, bin, path and
        a ``matches`` map for each published value supplied
    """
    recomputed_commit = derive_commitment(server_seed, nonce)
    combined_seed, result = play_round(server_seed, client_seed, nonce, drop_column)

    matches = {}
    if commit_hex is not None:
        matches["commit_hex"] = commit_hex.lower() == recomputed_commit
    if peg_map_hash is not None:
        matches["peg_map_hash"] = peg_map_hash.lower() == result.peg_map_hash
    if bin_index is not None:
        matches["bin_index"] = bin_index == result.bin_index

    return {
        "commit_hex": recomputed_commit,
        "combined_seed": combined_seed,
        "peg_map_hash": result.peg_map_hash,
        "bin_index": result.bin_index,
        "path": list(result.path),
        "peg_map": result.board.to_list(),
        "matches": matches,
        "verified": all(matches.values()) if matches else None,
    }
