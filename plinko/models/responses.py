"""Pydantic response models for the Plinko API."""

from typing import Dict, List, Optional

from pydantic import BaseModel


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    env: str
    version: str


class CommitResponse(BaseModel):
    """Public commitment for a new round."""
    round_id: str
    commit_hex: str
    nonce: str


class StartRoundResponse(BaseModel):
    """Outcome of a played round; the server seed stays hidden."""
    round_id: str
    peg_map_hash: str
    rows: int
    bin_index: int
    path: List[str]
    payout_multiplier: float


class RevealResponse(BaseModel):
    """Disclosed secret material of a played round."""
    server_seed: str
    nonce: str


class RoundResponse(BaseModel):
    """Public view of a round."""
    id: str
    created_at: float
    status: str
    nonce: str
    commit_hex: str
    server_seed: Optional[str] = None
    client_seed: str
    combined_seed: Optional[str] = None
    peg_map_hash: str
    rows: int
    drop_column: int
    bin_index: int
    payout_multiplier: float
    bet_cents: int
    path: List[str]
    revealed_at: Optional[float] = None


class VerifyResponse(BaseModel):
    """Values recomputed from disclosed round inputs."""
    commit_hex: str
    combined_seed: str
    peg_map_hash: str
    bin_index: int
    path: List[str]
    peg_map: List[List[Dict[str, float]]]
    matches: Dict[str, bool]
    verified: Optional[bool] = None


class LoginResponse(BaseModel):
    """Admin login response."""
    access_token: str
    token_type: str = "bearer"
