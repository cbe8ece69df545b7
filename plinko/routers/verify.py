"""Verification router: recompute a round from disclosed values."""

from typing import Optional

from fastapi import APIRouter, HTTPException, Query

from plinko.models.responses import VerifyResponse
from plinko.services.round_service import verify_round
from plinko.utils.errors import FairnessError

router = APIRouter(prefix="/api", tags=["verify"])


@router.get("/verify", response_model=VerifyResponse)
async def verify(
    server_seed: str = Query(...),
    client_seed: str = Query(...),
    nonce: str = Query(...),
    drop_column: int = Query(...),
    commit_hex: Optional[str] = Query(None),
    peg_map_hash: Optional[str] = Query(None),
    bin_index: Optional[int] = Query(None),
):
    """Re-run the full pipeline and compare against any published values.

    Read-only: nothing about stored rounds is touched.
    """
    try:
        return verify_round(
            server_seed,
            client_seed,
            nonce,
            drop_column,
            commit_hex=commit_hex,
            peg_map_hash=peg_map_hash,
            bin_index=bin_index,
        )
    except FairnessError as e:
        raise HTTPException(status_code=400, detail=str(e))
