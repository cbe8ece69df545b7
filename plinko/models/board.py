"""Board records produced by the simulator.

The canonical JSON form of a board is what gets hashed into the public
``peg_map_hash``: rows in generation order, one ``{"leftBias": x}`` object per
peg, compact separators.
"""

import json
from dataclasses import dataclass, field
from typing import List, Tuple

from plinko.constants import PathDecision


@dataclass(frozen=True)
class Peg:
    """A single peg and its probability of deflecting the ball left."""
    left_bias: float

    def to_dict(self) -> dict:
        return {"leftBias": self.left_bias}


@dataclass(frozen=True)
class PegRow:
    """Row ``index`` of the board, holding exactly ``index + 1`` pegs."""
    index: int
    pegs: Tuple[Peg, ...]

    def __post_init__(self):
        if len(self.pegs) != self.index + 1:
            raise ValueError(f"row {self.index} must hold {self.index + 1} pegs, got {len(self.pegs)}")

    def __len__(self) -> int:
        return len(self.pegs)

    def __getitem__(self, position: int) -> Peg:
        return self.pegs[position]


@dataclass(frozen=True)
class Board:
    """The full peg map for one round."""
    rows: Tuple[PegRow, ...]

    def __len__(self) -> int:
        return len(self.rows)

    def __getitem__(self, index: int) -> PegRow:
        return self.rows[index]

    def to_list(self) -> List[List[dict]]:
        return [[peg.to_dict() for peg in row.pegs] for row in self.rows]

    def canonical_json(self) -> str:
        """Serialize the board exactly as it is hashed."""
        return json.dumps(self.to_list(), separators=(",", ":"))


@dataclass(frozen=True)
class SimulationResult:
    """Everything a single simulation run publishes."""
    board: Board
    peg_map_hash: str
    bin_index: int
    path: Tuple[PathDecision, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict:
        return {
            "peg_map": self.board.to_list(),
            "peg_map_hash": self.peg_map_hash,
            "bin_index": self.bin_index,
            "path": list(self.path),
        }
