"""Health check router for the Plinko backend."""

from fastapi import APIRouter

from plinko.config import settings
from plinko.models.responses import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health():
    """Health check endpoint."""
    return {"status": "ok", "env": settings.app_env, "version": settings.app_version}
