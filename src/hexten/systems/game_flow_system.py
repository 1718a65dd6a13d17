from __future__ import annotations

import logging

from esper import World

from hexten.components.game_state import GameMode
from hexten.components.status_message import MessageCategory
from hexten.constants import INITIAL_TILE_COUNT
from hexten.events.bus import EventBus, EVENT_GAME_START_REQUEST, EVENT_GAME_STARTED, EVENT_TILES_SPAWNED
from hexten.systems.board_ops import clear_board, spawn_random
from hexten.systems.resolution import clear_selection
from hexten.systems.state_utils import (
    get_action_queue,
    get_game_state,
    get_score_tracker,
    get_spawn_timer,
    show_message,
)
from hexten.utils.game_state import set_game_mode
from hexten.utils.progression import interval_for, speed_label_for

logger = logging.getLogger(__name__)


class GameFlowSystem:
    """Starts and restarts sessions by resetting every session resource in place."""

    def __init__(self, world: World, event_bus: EventBus, *, initial_tiles: int = INITIAL_TILE_COUNT):
        self.world = world
        self.event_bus = event_bus
        self.initial_tiles = initial_tiles
        self.event_bus.subscribe(EVENT_GAME_START_REQUEST, self._on_start_request)

    def _on_start_request(self, sender, **payload) -> None:
        self.start()

    def start(self) -> list[tuple[int, int]]:
        self._reset_session()
        seeded = spawn_random(self.world, self.initial_tiles)
        if seeded:
            self.event_bus.emit(EVENT_TILES_SPAWNED, positions=seeded, reason="seed")
        get_spawn_timer(self.world).running = True
        set_game_mode(self.world, self.event_bus, GameMode.PLAYING)
        show_message(self.world, self.event_bus, "Game started!", MessageCategory.NEUTRAL)
        logger.info("Session started with %d seeded tiles", len(seeded))
        self.event_bus.emit(EVENT_GAME_STARTED, seeded=seeded)
        return seeded

    def _reset_session(self) -> None:
        timer = get_spawn_timer(self.world)
        timer.running = False
        timer.progress = 0.0
        timer.interval_ms = interval_for(1)
        timer.speed_label = speed_label_for(1)
        get_action_queue(self.world).actions.clear()
        clear_selection(self.world, self.event_bus, reason="restart")
        clear_board(self.world)
        tracker = get_score_tracker(self.world)
        tracker.score = 0
        tracker.level = 1
        state = get_game_state(self.world)
        state.over_reason = None
        state.final_score = 0
