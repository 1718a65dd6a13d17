"""One playable session: the world, its event bus and every engine system."""
from __future__ import annotations

import random
from typing import Sequence

from hexten.constants import (
    BURST_SETTLE_DELAY,
    INITIAL_TILE_COUNT,
    MERGE_SETTLE_DELAY,
    REJECT_SETTLE_DELAY,
    ROW_COUNTS,
)
from hexten.events.bus import EventBus, EVENT_GAME_START_REQUEST, EVENT_TICK, EVENT_TILE_CLICK
from hexten.snapshot import GameSnapshot, build_snapshot
from hexten.systems.board import BoardSystem
from hexten.systems.game_flow_system import GameFlowSystem
from hexten.systems.game_over_system import GameOverSystem
from hexten.systems.high_score_system import HighScoreSystem
from hexten.systems.progression_system import ProgressionSystem
from hexten.systems.resolution import ResolutionSystem
from hexten.systems.selection import SelectionSystem
from hexten.systems.spawn_system import SpawnSystem
from hexten.systems.state_utils import get_game_state
from hexten.utils.high_score_store import HighScoreStore
from hexten.world import create_world


class GameSession:
    def __init__(
        self,
        *,
        event_bus: EventBus | None = None,
        rng: random.Random | None = None,
        row_counts: Sequence[int] = ROW_COUNTS,
        store: HighScoreStore | None = None,
        initial_tiles: int = INITIAL_TILE_COUNT,
        burst_delay: float = BURST_SETTLE_DELAY,
        merge_delay: float = MERGE_SETTLE_DELAY,
        reject_delay: float = REJECT_SETTLE_DELAY,
    ):
        self.event_bus = event_bus or EventBus()
        self.world = create_world(self.event_bus, rng=rng)
        self.board_system = BoardSystem(self.world, self.event_bus, row_counts)
        self.resolution_system = ResolutionSystem(self.world, self.event_bus)
        self.selection_system = SelectionSystem(
            self.world,
            self.event_bus,
            burst_delay=burst_delay,
            merge_delay=merge_delay,
            reject_delay=reject_delay,
        )
        self.spawn_system = SpawnSystem(self.world, self.event_bus)
        self.progression_system = ProgressionSystem(self.world, self.event_bus)
        self.game_over_system = GameOverSystem(self.world, self.event_bus)
        self.high_score_system = HighScoreSystem(self.world, self.event_bus, store)
        self.game_flow_system = GameFlowSystem(self.world, self.event_bus, initial_tiles=initial_tiles)

    def start(self) -> GameSnapshot:
        self.event_bus.emit(EVENT_GAME_START_REQUEST)
        return self.snapshot()

    def restart(self) -> GameSnapshot:
        return self.start()

    def tap(self, row: int, col: int) -> GameSnapshot:
        self.event_bus.emit(EVENT_TILE_CLICK, row=row, col=col)
        return self.snapshot()

    def advance(self, dt: float) -> GameSnapshot:
        """Advance the clock by ``dt`` seconds."""
        self.event_bus.emit(EVENT_TICK, dt=dt)
        return self.snapshot()

    def stop(self) -> None:
        self.spawn_system.stop()

    @property
    def is_over(self) -> bool:
        return get_game_state(self.world).over_reason is not None

    def snapshot(self) -> GameSnapshot:
        return build_snapshot(self.world)
