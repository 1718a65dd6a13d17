from __future__ import annotations

import logging

from esper import World

from hexten.components.game_state import GameMode, GameOverReason
from hexten.events.bus import EventBus, EVENT_BOARD_CHANGED, EVENT_BOARD_FULL, EVENT_GAME_OVER
from hexten.systems.board_ops import board_row_counts, clear_highlights, tile_value_map
from hexten.systems.resolution import clear_selection
from hexten.systems.state_utils import get_action_queue, get_game_state, get_score_tracker, get_spawn_timer
from hexten.utils.game_state import is_playing, set_game_mode
from hexten.utils.hex_grid import is_terminal

logger = logging.getLogger(__name__)


class GameOverSystem:
    """Ends the session when no pair can be formed or a spawn finds the board full."""

    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        self.event_bus.subscribe(EVENT_BOARD_CHANGED, self.on_board_changed)
        self.event_bus.subscribe(EVENT_BOARD_FULL, self.on_board_full)

    def on_board_changed(self, sender, **kwargs):
        if not is_playing(self.world):
            return
        if is_terminal(tile_value_map(self.world), board_row_counts(self.world)):
            self.end_game(GameOverReason.NO_ADJACENT_PAIR)

    def on_board_full(self, sender, **kwargs):
        if not is_playing(self.world):
            return
        self.end_game(GameOverReason.BOARD_FULL)

    def end_game(self, reason: GameOverReason) -> bool:
        if not is_playing(self.world):
            return False
        timer = get_spawn_timer(self.world)
        timer.running = False
        get_action_queue(self.world).actions.clear()
        clear_highlights(self.world)
        clear_selection(self.world, self.event_bus, reason="game_over")
        state = get_game_state(self.world)
        state.over_reason = reason
        state.final_score = get_score_tracker(self.world).score
        set_game_mode(self.world, self.event_bus, GameMode.GAME_OVER)
        logger.info("Game over (%s) with score %d", reason.name, state.final_score)
        self.event_bus.emit(EVENT_GAME_OVER, reason=reason, final_score=state.final_score)
        return True
