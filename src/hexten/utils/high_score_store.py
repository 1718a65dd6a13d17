from __future__ import annotations

import json
import logging
from pathlib import Path

logger = logging.getLogger(__name__)


class HighScoreStore:
    """Best score persisted as a small JSON document."""

    def __init__(self, save_path: Path | str | None = None) -> None:
        self._save_path = Path(save_path) if save_path is not None else self._default_save_path()

    @staticmethod
    def _default_save_path() -> Path:
        return Path(__file__).resolve().parents[3] / "data" / "high_score.json"

    def load_high_score(self) -> int:
        try:
            with self._save_path.open("r", encoding="utf-8") as handle:
                data = json.load(handle)
        except FileNotFoundError:
            return 0
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning("Could not read high score from %s: %s", self._save_path, exc)
            return 0
        value = data.get("high_score", 0) if isinstance(data, dict) else 0
        try:
            score = int(value)
        except (TypeError, ValueError):
            logger.warning("Ignoring malformed high score %r in %s", value, self._save_path)
            return 0
        return max(0, score)

    def save_if_greater(self, score: int) -> bool:
        """Persist ``score`` when it beats the stored value; True if written."""
        if score <= self.load_high_score():
            return False
        self._save_path.parent.mkdir(parents=True, exist_ok=True)
        # The stored file is only ever replaced whole.
        tmp_path = self._save_path.with_name(self._save_path.name + ".tmp")
        try:
            with tmp_path.open("w", encoding="utf-8") as handle:
                json.dump({"high_score": int(score)}, handle, indent=2)
            tmp_path.replace(self._save_path)
        except OSError:
            tmp_path.unlink(missing_ok=True)
            raise
        return True
