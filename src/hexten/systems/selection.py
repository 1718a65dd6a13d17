import logging
from typing import Tuple

from esper import World

from hexten.components.action_queue import ActionKind
from hexten.components.status_message import MessageCategory
from hexten.components.tile_highlight import HIGHLIGHT_PENALTY, HIGHLIGHT_REJECTED
from hexten.constants import BURST_SETTLE_DELAY, MERGE_SETTLE_DELAY, REJECT_SETTLE_DELAY, TARGET_SUM
from hexten.events.bus import (
    EventBus,
    EVENT_PAIR_REJECTED,
    EVENT_PAIR_RESOLVED,
    EVENT_TILE_CLICK,
    EVENT_TILE_DESELECTED,
    EVENT_TILE_SELECTED,
    EVENT_TILES_BURST,
    EVENT_TILES_SHAKEN,
)
from hexten.systems.board_ops import board_row_counts, set_highlight, tile_value_at
from hexten.systems.resolution import enqueue_action
from hexten.systems.state_utils import get_selection, show_message
from hexten.utils.game_state import is_playing
from hexten.utils.hex_grid import are_adjacent, is_valid_coord
from hexten.utils.pair_rules import PairOutcome, classify_pair

logger = logging.getLogger(__name__)

_OUTCOME_ACTIONS = {
    PairOutcome.BURST: ActionKind.BURST,
    PairOutcome.MERGE_UNDER: ActionKind.MERGE_UNDER,
    PairOutcome.MERGE_OVER: ActionKind.MERGE_OVER,
}


class SelectionSystem:
    """Turns tile taps into selections and pair decisions.

    A completed pair is decided on the spot; the board mutation it implies is
    queued behind a short settle delay and applied by ResolutionSystem.
    """

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        *,
        burst_delay: float = BURST_SETTLE_DELAY,
        merge_delay: float = MERGE_SETTLE_DELAY,
        reject_delay: float = REJECT_SETTLE_DELAY,
    ):
        self.world = world
        self.event_bus = event_bus
        self.burst_delay = burst_delay
        self.merge_delay = merge_delay
        self.reject_delay = reject_delay
        self.event_bus.subscribe(EVENT_TILE_CLICK, self.on_tile_click)

    def on_tile_click(self, sender, **kwargs):
        row = kwargs.get('row')
        col = kwargs.get('col')
        if row is None or col is None:
            return
        if not is_playing(self.world):
            return
        pos = (row, col)
        if not is_valid_coord(pos, board_row_counts(self.world)):
            return
        selection = get_selection(self.world)
        # Input stays locked until the pending pair commits.
        if selection.pending:
            return
        value = tile_value_at(self.world, row, col)
        if value is None:
            return
        if pos in selection.positions:
            self._deselect(pos)
            return
        if len(selection.positions) >= 2:
            return
        selection.positions.append(pos)
        selection.running_sum = self._selection_sum()
        self.event_bus.emit(EVENT_TILE_SELECTED, row=row, col=col, running_sum=selection.running_sum)
        if len(selection.positions) == 1:
            show_message(self.world, self.event_bus, "Select a neighboring tile.", MessageCategory.NEUTRAL)
            return
        src, dst = selection.positions
        selection.pending = True
        if not are_adjacent(src, dst, board_row_counts(self.world)):
            self._reject(src, dst)
            return
        self._resolve(src, dst)

    def _deselect(self, pos: Tuple[int, int]) -> None:
        selection = get_selection(self.world)
        selection.positions.remove(pos)
        selection.running_sum = self._selection_sum()
        self.event_bus.emit(EVENT_TILE_DESELECTED, row=pos[0], col=pos[1], running_sum=selection.running_sum)

    def _reject(self, src, dst) -> None:
        pair = [src, dst]
        logger.debug("Rejected non-adjacent pair %s -> %s", src, dst)
        show_message(self.world, self.event_bus, "Tiles must be adjacent!", MessageCategory.ERROR)
        set_highlight(self.world, pair, HIGHLIGHT_REJECTED)
        self.event_bus.emit(EVENT_TILES_SHAKEN, positions=pair, reason="rejected")
        self.event_bus.emit(EVENT_PAIR_REJECTED, src=src, dst=dst)
        enqueue_action(
            self.world,
            self.event_bus,
            ActionKind.REJECT,
            positions=pair,
            delay=self.reject_delay,
            reason="rejected",
        )

    def _resolve(self, src, dst) -> None:
        values = (tile_value_at(self.world, *src), tile_value_at(self.world, *dst))
        total = sum(values)
        outcome = classify_pair(total)
        pair = [src, dst]
        logger.debug("Pair %s -> %s sums to %d: %s", src, dst, total, outcome.value)
        if outcome is PairOutcome.BURST:
            show_message(self.world, self.event_bus, f"GREAT! You made {TARGET_SUM}!", MessageCategory.SUCCESS)
            self.event_bus.emit(EVENT_TILES_BURST, positions=pair)
            delay = self.burst_delay
        elif outcome is PairOutcome.MERGE_OVER:
            show_message(
                self.world,
                self.event_bus,
                f"{total} is over {TARGET_SUM}! Keeping the remainder ({total - TARGET_SUM}).",
                MessageCategory.MERGE_OVER,
            )
            set_highlight(self.world, pair, HIGHLIGHT_PENALTY)
            self.event_bus.emit(EVENT_TILES_SHAKEN, positions=pair, reason="penalty")
            delay = self.merge_delay
        else:
            show_message(
                self.world,
                self.event_bus,
                f"{total} is under {TARGET_SUM}. Merging tiles.",
                MessageCategory.MERGE_UNDER,
            )
            delay = self.merge_delay
        self.event_bus.emit(EVENT_PAIR_RESOLVED, src=src, dst=dst, outcome=outcome, total=total)
        enqueue_action(
            self.world,
            self.event_bus,
            _OUTCOME_ACTIONS[outcome],
            positions=pair,
            values=values,
            delay=delay,
            reason=outcome.value,
        )

    def _selection_sum(self) -> int:
        total = 0
        for row, col in get_selection(self.world).positions:
            total += tile_value_at(self.world, row, col) or 0
        return total
