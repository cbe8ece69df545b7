"""Pydantic request models for the Plinko API."""

from pydantic import BaseModel, Field


class StartRoundRequest(BaseModel):
    """Request to play a committed round."""
    client_seed: str
    drop_column: int
    bet_cents: int = Field(default=0, ge=0)


class LoginRequest(BaseModel):
    """Admin login request."""
    username: str
    password: str
