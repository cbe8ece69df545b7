"""Admin router for the Plinko backend.

Provides admin authentication and round monitoring endpoints.
"""

from typing import Optional

from fastapi import APIRouter, HTTPException, Header

from plinko.models.requests import LoginRequest
from plinko.models.responses import LoginResponse
from plinko.models.round import rounds, rounds_lock
from plinko.services import round_logger
from plinko.services.admin_service import verify_admin_password, create_admin_token, verify_admin_token

router = APIRouter(prefix="/admin", tags=["admin"])


def get_current_admin(authorization: Optional[str] = Header(None)) -> dict:
    """Verify admin token from Authorization header.

    Args:
        authorization: Authorization header value

    Returns:
        Decoded token payload

    Raises:
        HTTPException: If token is invalid or missing
    """
    if not authorization:
        raise HTTPException(status_code=401, detail="Missing authorization header")

    # Extract token from "Bearer <token>"
    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        raise HTTPException(status_code=401, detail="Invalid authorization header format")

    payload = verify_admin_token(parts[1])

    if not payload:
        raise HTTPException(status_code=401, detail="Invalid or expired token")

    return payload


@router.post("/login", response_model=LoginResponse)
async def admin_login(request: LoginRequest):
    """Admin login endpoint.

    Raises:
        HTTPException: If credentials are invalid
    """
    if not verify_admin_password(request.username, request.password):
        raise HTTPException(status_code=401, detail="Invalid credentials")

    return LoginResponse(access_token=create_admin_token(request.username))


@router.get("/verify")
async def verify_token(authorization: Optional[str] = Header(None)):
    """Verify admin token is valid."""
    get_current_admin(authorization)
    return {"valid": True}


@router.get("/stats")
async def get_stats(authorization: Optional[str] = Header(None)):
    """Get live round statistics from the in-memory store.

    Requires admin authentication.
    """
    get_current_admin(authorization)

    async with rounds_lock:
        counts = {"CREATED": 0, "STARTED": 0, "REVEALED": 0}
        for rnd in rounds.values():
            counts[rnd.status] = counts.get(rnd.status, 0) + 1
        active = len(rounds)

    return {
        "active_rounds": active,
        "rounds_by_status": counts,
        "logged_rounds": round_logger.round_log.get_rounds_count(),
    }


@router.get("/rounds")
async def get_rounds(
    authorization: Optional[str] = Header(None),
    limit: int = 50,
    offset: int = 0
):
    """Get list of logged rounds.

    Requires admin authentication.

    Args:
        authorization: Authorization header
        limit: Maximum number of rounds to return
        offset: Number of rounds to skip
    """
    get_current_admin(authorization)

    round_log = round_logger.round_log
    return {
        "rounds": round_log.list_rounds(limit=limit, offset=offset),
        "total": round_log.get_rounds_count(),
        "limit": limit,
        "offset": offset
    }


@router.get("/rounds/analytics")
async def get_rounds_analytics(authorization: Optional[str] = Header(None)):
    """Get analytics from logged rounds.

    Requires admin authentication.
    """
    get_current_admin(authorization)

    return round_logger.round_log.analyze_rounds()


@router.get("/rounds/{round_id}")
async def get_logged_round(
    round_id: str,
    authorization: Optional[str] = Header(None)
):
    """Get full details of a logged round.

    Requires admin authentication. Unrevealed rounds keep their server seed
    hidden even here.
    """
    get_current_admin(authorization)

    rnd = round_logger.round_log.get_round(round_id)

    if not rnd:
        raise HTTPException(status_code=404, detail="Round not found")

    return rnd.public_view()
