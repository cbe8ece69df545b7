"""Round logging service.

Persists every round transition as one JSON file per round.
"""

import json
import logging
from pathlib import Path
from typing import List, Optional

from plinko.config import settings
from plinko.constants import PAYOUT_MAP
from plinko.models.round import Round

log = logging.getLogger(__name__)


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class RoundLogger:
    """Service for storing and retrieving round records."""

    def __init__(self, logs_dir: Optional[str] = None):
        self.logs_dir = Path(logs_dir or settings.rounds_log_dir)
        self.logs_dir.mkdir(parents=True, exist_ok=True)

    def _get_round_path(self, round_id: str) -> Path:
        """Get file path for a round."""
        return self.logs_dir / f"{round_id}.json"

    def save_round(self, rnd: Round):
        """Save a round to disk, replacing any earlier snapshot."""
        path = self._get_round_path(rnd.id)
        with open(path, "w", encoding="utf-8") as f:
            f.write(rnd.to_json())

    def get_round(self, round_id: str) -> Optional[Round]:
        """Retrieve a round by ID; unreadable records count as missing."""
        path = self._get_round_path(round_id)
        try:
            with open(path, "r", encoding="utf-8") as f:
                return Round.from_json(f.read())
        except FileNotFoundError:
            return None
        except (OSError, ValueError, KeyError, TypeError) as e:
            log.warning("unreadable round file %s: %s", path.name, e)
            return None

    def list_rounds(self, limit: int = 100, offset: int = 0) -> List[dict]:
        """List rounds with summary fields (newest first)."""
        entries = []
        for path in self.logs_dir.glob("*.json"):
            try:
                entries.append((path.stat().st_mtime, path))
            except OSError:
                # removed while listing
                continue

        summaries = []
        for _, path in sorted(entries, key=lambda e: e[0], reverse=True):
            try:
                with open(path, "r", encoding="utf-8") as f:
                    data = json.load(f)

                summaries.append({
                    "id": data["id"],
                    "created_at": data["created_at"],
                    "status": data.get("status", "CREATED"),
                    "commit_hex": data.get("commit_hex"),
                    "bin_index": data.get("bin_index"),
                    "bet_cents": data.get("bet_cents", 0),
                    "payout_multiplier": data.get("payout_multiplier", 0.0),
                    "revealed_at": data.get("revealed_at"),
                })
            except (OSError, ValueError, KeyError, TypeError, AttributeError) as e:
                log.warning("skipping unreadable round file %s: %s", path.name, e)
                continue

        return summaries[offset:offset + limit]

    def delete_round(self, round_id: str) -> bool:
        """Delete a round record."""
        path = self._get_round_path(round_id)
        if path.exists():
            path.unlink()
            return True
        return False

    def get_rounds_count(self) -> int:
        """Get total number of logged rounds."""
        return len(list(self.logs_dir.glob("*.json")))

    def analyze_rounds(self) -> dict:
        """Generate analytics from logged rounds; malformed records are skipped."""
        total = 0
        by_status = {"CREATED": 0, "STARTED": 0, "REVEALED": 0}
        bin_histogram = [0] * len(PAYOUT_MAP)
        total_bet_cents = 0
        played = 0
        multiplier_sum = 0.0

        for path in self.logs_dir.glob("*.json"):
            try:
                with open(path, "r", encoding="utf-8") as f:
                    data = json.load(f)
            except (OSError, ValueError):
                continue

            if not isinstance(data, dict):
                continue
            status = data.get("status", "CREATED")
            if not isinstance(status, str) or status not in by_status:
                continue

            if status != "CREATED":
                bin_index = data.get("bin_index", 0)
                bet_cents = data.get("bet_cents", 0)
                multiplier = data.get("payout_multiplier", 0.0)
                if not _is_int(bin_index) or not _is_int(bet_cents) or not _is_number(multiplier):
                    continue
                played += 1
                if 0 <= bin_index < len(bin_histogram):
                    bin_histogram[bin_index] += 1
                total_bet_cents += bet_cents
                multiplier_sum += multiplier

            total += 1
            by_status[status] += 1

        return {
            "total_rounds": total,
            "rounds_by_status": by_status,
            "played_rounds": played,
            "bin_histogram": bin_histogram,
            "total_bet_cents": total_bet_cents,
            "avg_payout_multiplier": multiplier_sum / played if played > 0 else 0,
        }


# Global round log instance
round_log = RoundLogger()
