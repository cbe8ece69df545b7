"""Round lifecycle router: commit, start, reveal."""

from fastapi import APIRouter, HTTPException

from plinko.models.requests import StartRoundRequest
from plinko.models.responses import CommitResponse, RevealResponse, RoundResponse, StartRoundResponse
from plinko.services import round_service
from plinko.services.round_service import RoundNotFound, RoundStateError
from plinko.utils.errors import FairnessError

router = APIRouter(prefix="/api/rounds", tags=["rounds"])


@router.post("/commit", response_model=CommitResponse)
async def commit_round():
    """Create a round and return its public commitment.

    The server seed is generated here but stays secret until reveal.
    """
    rnd = await round_service.create_round()
    return {"round_id": rnd.id, "commit_hex": rnd.commit_hex, "nonce": rnd.nonce}


@router.post("/{round_id}/start", response_model=StartRoundResponse)
async def start_round(round_id: str, body: StartRoundRequest):
    """Play a committed round with the player's seed and drop column."""
    try:
        rnd = await round_service.start_round(
            round_id, body.client_seed, body.drop_column, body.bet_cents
        )
    except RoundNotFound:
        raise HTTPException(status_code=404, detail="Round not found.")
    except (RoundStateError, FairnessError) as e:
        raise HTTPException(status_code=400, detail=str(e))

    return {
        "round_id": rnd.id,
        "peg_map_hash": rnd.peg_map_hash,
        "rows": rnd.rows,
        "bin_index": rnd.bin_index,
        "path": rnd.path,
        "payout_multiplier": rnd.payout_multiplier,
    }


@router.post("/{round_id}/reveal", response_model=RevealResponse)
async def reveal_round(round_id: str):
    """Disclose the server seed of a played round."""
    try:
        rnd = await round_service.reveal_round(round_id)
    except RoundNotFound:
        raise HTTPException(status_code=404, detail="Round not found.")
    except RoundStateError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return {"server_seed": rnd.server_seed, "nonce": rnd.nonce}


@router.get("/{round_id}", response_model=RoundResponse)
async def get_round(round_id: str):
    """Public view of a round; secrets are withheld until reveal."""
    try:
        rnd = await round_service.get_round(round_id)
    except RoundNotFound:
        raise HTTPException(status_code=404, detail="Round not found.")
    return rnd.public_view()
