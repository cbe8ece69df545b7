"""Round records and the in-memory round store.

A round moves CREATED -> STARTED -> REVEALED. The server seed is part of the
record from creation but only leaves the server once the round is revealed.
"""

import asyncio
import json
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from plinko.constants import ROWS, RoundStatus


@dataclass
class Round:
    """A single provably-fair round."""
    id: str
    created_at: float
    nonce: str
    commit_hex: str
    server_seed: str
    status: RoundStatus = "CREATED"
    rows: int = ROWS

    # Filled when the round is played
    client_seed: str = ""
    combined_seed: str = ""
    peg_map_hash: str = ""
    drop_column: int = 0
    bin_index: int = 0
    payout_multiplier: float = 0.0
    bet_cents: int = 0
    path: List[str] = field(default_factory=list)

    revealed_at: Optional[float] = None

    @property
    def is_revealed(self) -> bool:
        return self.status == "REVEALED"

    def to_dict(self) -> dict:
        """Convert to dictionary for storage."""
        return {
            "id": self.id,
            "created_at": self.created_at,
            "status": self.status,
            "nonce": self.nonce,
            "commit_hex": self.commit_hex,
            "server_seed": self.server_seed,
            "client_seed": self.client_seed,
            "combined_seed": self.combined_seed,
            "peg_map_hash": self.peg_map_hash,
            "rows": self.rows,
            "drop_column": self.drop_column,
            "bin_index": self.bin_index,
            "payout_multiplier": self.payout_multiplier,
            "bet_cents": self.bet_cents,
            "path": list(self.path),
            "revealed_at": self.revealed_at,
        }

    def public_view(self) -> dict:
        """Round data safe to publish; secrets are withheld until reveal."""
        data = self.to_dict()
        if not self.is_revealed:
            data["server_seed"] = None
            data["combined_seed"] = None
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "Round":
        """Load from dictionary."""
        return cls(
            id=data["id"],
            created_at=data["created_at"],
            nonce=data["nonce"],
            commit_hex=data["commit_hex"],
            server_seed=data["server_seed"],
            status=data.get("status", "CREATED"),
            rows=data.get("rows", ROWS),
            client_seed=data.get("client_seed", ""),
            combined_seed=data.get("combined_seed", ""),
            peg_map_hash=data.get("peg_map_hash", ""),
            drop_column=data.get("drop_column", 0),
            bin_index=data.get("bin_index", 0),
            payout_multiplier=data.get("payout_multiplier", 0.0),
            bet_cents=data.get("bet_cents", 0),
            path=list(data.get("path", [])),
            revealed_at=data.get("revealed_at"),
        )

    def to_json(self) -> str:
        """Serialize to JSON."""
        return json.dumps(self.to_dict(), indent=2)

    @classmethod
    def from_json(cls, json_str: str) -> "Round":
        """Deserialize from JSON."""
        return cls.from_dict(json.loads(json_str))


# In-memory state store
rounds: Dict[str, Round] = {}
rounds_lock = asyncio.Lock()
