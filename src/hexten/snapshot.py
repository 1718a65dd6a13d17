"""Read-only view of the session handed to the presentation layer."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

from esper import World

from hexten.components.game_state import GameMode
from hexten.components.status_message import MessageCategory
from hexten.systems.board_ops import board_row_counts, highlight_map, tile_value_map
from hexten.systems.state_utils import (
    get_game_state,
    get_score_tracker,
    get_selection,
    get_spawn_timer,
    get_status_message,
)

Position = Tuple[int, int]


@dataclass(frozen=True)
class GameSnapshot:
    row_counts: Tuple[int, ...]
    tiles: Dict[Position, Optional[int]]
    selection: Tuple[Position, ...]
    running_sum: int
    score: int
    level: int
    high_score: int
    spawn_progress: float
    speed_label: str
    message: str
    message_category: MessageCategory
    mode: GameMode
    game_over: bool
    game_over_reason: str
    final_score: int
    input_locked: bool = False
    highlights: Dict[Position, str] = field(default_factory=dict)

    def value_at(self, row: int, col: int) -> Optional[int]:
        return self.tiles.get((row, col))

    @property
    def spawn_fraction(self) -> float:
        return self.spawn_progress / 100.0


def build_snapshot(world: World) -> GameSnapshot:
    state = get_game_state(world)
    tracker = get_score_tracker(world)
    timer = get_spawn_timer(world)
    selection = get_selection(world)
    message = get_status_message(world)
    game_over = state.mode == GameMode.GAME_OVER
    return GameSnapshot(
        row_counts=board_row_counts(world),
        tiles=tile_value_map(world),
        selection=tuple(selection.positions),
        running_sum=selection.running_sum,
        score=tracker.score,
        level=tracker.level,
        high_score=max(tracker.high_score, tracker.score),
        spawn_progress=timer.progress,
        speed_label=timer.speed_label,
        message=message.text,
        message_category=message.category,
        mode=state.mode,
        game_over=game_over,
        game_over_reason=state.over_reason.message if state.over_reason is not None else "",
        final_score=state.final_score,
        input_locked=selection.pending or state.mode != GameMode.PLAYING,
        highlights=highlight_map(world),
    )
