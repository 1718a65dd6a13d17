from __future__ import annotations

import random
from typing import Dict, Optional, Tuple

from hexten.events.bus import EVENT_TICK, EventBus
from hexten.session import GameSession

Position = Tuple[int, int]


class MemoryHighScoreStore:
    """In-memory stand-in for the JSON high-score file."""

    def __init__(self, initial: int = 0) -> None:
        self.value = initial
        self.saves: list[int] = []

    def load_high_score(self) -> int:
        return self.value

    def save_if_greater(self, score: int) -> bool:
        if score <= self.value:
            return False
        self.value = score
        self.saves.append(score)
        return True


class FirstEmptyRandom(random.Random):
    """Seeded rng that leaves candidate cells in row-major order, so spawns fill the first empty cell."""

    def shuffle(self, x, *args, **kwargs):
        return None


def make_session(*, seed: int = 1234, instant: bool = False, store=None, rng=None, **kwargs) -> GameSession:
    """Build and start a session; ``instant`` commits pair decisions without delay."""
    if instant:
        kwargs.setdefault("burst_delay", 0.0)
        kwargs.setdefault("merge_delay", 0.0)
        kwargs.setdefault("reject_delay", 0.0)
    session = GameSession(
        rng=rng if rng is not None else random.Random(seed),
        store=store if store is not None else MemoryHighScoreStore(),
        **kwargs,
    )
    session.start()
    return session


def place_tiles(session: GameSession, values: Dict[Position, Optional[int]]) -> None:
    """Replace the seeded board with exactly ``values``; every other cell is empty."""
    session.board_system.load_values(values)


def occupied(session: GameSession) -> Dict[Position, int]:
    return {pos: value for pos, value in session.snapshot().tiles.items() if value is not None}


def drive_ticks(bus: EventBus, count: int = 15, dt: float = 0.05) -> None:
    for _ in range(count):
        bus.emit(EVENT_TICK, dt=dt)
