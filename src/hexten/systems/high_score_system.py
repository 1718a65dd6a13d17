from __future__ import annotations

import logging

from esper import World

from hexten.events.bus import EventBus, EVENT_GAME_OVER, EVENT_HIGH_SCORE_CHANGED, EVENT_SCORE_CHANGED
from hexten.systems.state_utils import get_score_tracker
from hexten.utils.high_score_store import HighScoreStore

logger = logging.getLogger(__name__)


class HighScoreSystem:
    """Mirrors score increases into the high-score store.

    Storage failures are logged and never interrupt play.
    """

    def __init__(self, world: World, event_bus: EventBus, store: HighScoreStore | None = None):
        self.world = world
        self.event_bus = event_bus
        self.store = store if store is not None else HighScoreStore()
        self.event_bus.subscribe(EVENT_SCORE_CHANGED, self._on_score_changed)
        self.event_bus.subscribe(EVENT_GAME_OVER, self._on_game_over)
        tracker = get_score_tracker(self.world)
        tracker.high_score = max(tracker.high_score, self._load())

    def _on_score_changed(self, sender, **payload) -> None:
        if payload.get("delta", 0) <= 0:
            return
        tracker = get_score_tracker(self.world)
        score = payload.get("score", tracker.score)
        if score <= tracker.high_score:
            return
        tracker.high_score = score
        saved = self._save(score)
        self.event_bus.emit(EVENT_HIGH_SCORE_CHANGED, high_score=score, saved=saved)

    def _on_game_over(self, sender, **payload) -> None:
        tracker = get_score_tracker(self.world)
        self._save(max(tracker.high_score, payload.get("final_score", 0)))

    def _load(self) -> int:
        try:
            return int(self.store.load_high_score())
        except (OSError, ValueError, TypeError) as exc:
            logger.warning("High score unavailable: %s", exc)
            return 0

    def _save(self, score: int) -> bool:
        try:
            return bool(self.store.save_if_greater(score))
        except (OSError, ValueError, TypeError) as exc:
            logger.warning("Failed to save high score %d: %s", score, exc)
            return False
