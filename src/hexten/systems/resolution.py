from __future__ import annotations

import logging
from typing import Iterable, Tuple

from esper import World

from hexten.components.action_queue import ActionKind, PendingAction
from hexten.constants import BURST_POINTS, MERGE_SPAWN_COUNT
from hexten.events.bus import (
    EventBus,
    EVENT_ACTION_APPLIED,
    EVENT_ACTION_ENQUEUED,
    EVENT_BOARD_CHANGED,
    EVENT_BOARD_FULL,
    EVENT_SCORE_CHANGED,
    EVENT_SELECTION_CLEARED,
    EVENT_TICK,
    EVENT_TILE_PULSED,
    EVENT_TILES_SPAWNED,
)
from hexten.systems.board_ops import clear_highlights, clear_tiles, set_tile_value, spawn_random
from hexten.systems.state_utils import get_action_queue, get_score_tracker, get_selection
from hexten.utils.game_state import is_playing
from hexten.utils.pair_rules import merged_value

logger = logging.getLogger(__name__)

Position = Tuple[int, int]


def enqueue_action(
    world: World,
    event_bus: EventBus,
    kind: ActionKind,
    *,
    positions: Iterable[Position] = (),
    values: Iterable[int] = (),
    delay: float = 0.0,
    reason: str = "",
) -> PendingAction:
    """Append a board mutation to the shared queue and announce it."""
    queue = get_action_queue(world)
    action = PendingAction(
        kind=kind,
        sequence=queue.next_sequence,
        positions=tuple(tuple(pos) for pos in positions),
        values=tuple(values),
        delay=max(0.0, float(delay)),
        reason=reason,
    )
    queue.next_sequence += 1
    queue.actions.append(action)
    logger.debug("Queued %s #%d positions=%s delay=%.2f", kind.value, action.sequence, action.positions, action.delay)
    event_bus.emit(EVENT_ACTION_ENQUEUED, action=action)
    return action


def clear_selection(world: World, event_bus: EventBus, reason: str) -> None:
    selection = get_selection(world)
    previous = list(selection.positions)
    selection.positions.clear()
    selection.running_sum = 0
    selection.pending = False
    if previous:
        event_bus.emit(EVENT_SELECTION_CLEARED, positions=previous, reason=reason)


class ResolutionSystem:
    """Applies queued board mutations strictly in the order they were triggered.

    Every action counts down its own settle delay, but the queue head blocks:
    a spawn tick that fires while a pair is settling is applied after it.
    """

    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        self._draining = False
        self.event_bus.subscribe(EVENT_TICK, self.on_tick)
        self.event_bus.subscribe(EVENT_ACTION_ENQUEUED, self.on_action_enqueued)

    def on_tick(self, sender, **kwargs):
        dt = kwargs.get('dt') or 0.0
        queue = get_action_queue(self.world)
        if not queue.actions:
            return
        for action in queue.actions:
            action.elapsed += dt
        self.drain()

    def on_action_enqueued(self, sender, **kwargs):
        self.drain()

    def drain(self) -> int:
        """Apply ready actions from the head of the queue; returns how many ran."""
        if self._draining:
            return 0
        self._draining = True
        applied = 0
        try:
            queue = get_action_queue(self.world)
            while queue.actions and queue.actions[0].ready:
                action = queue.actions.popleft()
                if not is_playing(self.world):
                    logger.debug("Dropping %s #%d outside play", action.kind.value, action.sequence)
                    continue
                self._apply(action)
                applied += 1
                self.event_bus.emit(EVENT_ACTION_APPLIED, action=action)
        finally:
            self._draining = False
        return applied

    def _apply(self, action: PendingAction) -> None:
        kind = action.kind
        if kind is ActionKind.REJECT:
            self._apply_reject(action)
        elif kind is ActionKind.BURST:
            self._apply_burst(action)
        elif kind in (ActionKind.MERGE_UNDER, ActionKind.MERGE_OVER):
            self._apply_merge(action)
        elif kind is ActionKind.SPAWN:
            self._apply_spawn(action)

    def _apply_reject(self, action: PendingAction) -> None:
        clear_highlights(self.world, action.positions)
        clear_selection(self.world, self.event_bus, reason="rejected")

    def _apply_burst(self, action: PendingAction) -> None:
        positions = list(action.positions)
        clear_highlights(self.world, positions)
        cleared = clear_tiles(self.world, positions)
        clear_selection(self.world, self.event_bus, reason="burst")
        tracker = get_score_tracker(self.world)
        tracker.score += BURST_POINTS
        logger.debug("Burst %s, score now %d", cleared, tracker.score)
        self.event_bus.emit(EVENT_SCORE_CHANGED, score=tracker.score, delta=BURST_POINTS)
        # Bursting is never backfilled; only the timer refills the space.
        self.event_bus.emit(EVENT_BOARD_CHANGED, reason="burst", positions=cleared)

    def _apply_merge(self, action: PendingAction) -> None:
        src, dst = action.positions
        total = sum(action.values)
        value = merged_value(total)
        clear_highlights(self.world, action.positions)
        set_tile_value(self.world, src, None)
        set_tile_value(self.world, dst, value)
        clear_selection(self.world, self.event_bus, reason=action.kind.value)
        self.event_bus.emit(EVENT_TILE_PULSED, row=dst[0], col=dst[1], value=value)
        spawned = self._spawn(MERGE_SPAWN_COUNT, reason=action.kind.value)
        if not spawned:
            return
        self.event_bus.emit(EVENT_BOARD_CHANGED, reason=action.kind.value, positions=[src, dst] + spawned)

    def _apply_spawn(self, action: PendingAction) -> None:
        spawned = self._spawn(1, reason=action.reason or "timer")
        if spawned:
            self.event_bus.emit(EVENT_BOARD_CHANGED, reason="spawn", positions=spawned)

    def _spawn(self, count: int, *, reason: str) -> list[Position]:
        spawned = spawn_random(self.world, count)
        if not spawned:
            logger.info("No empty cell left for %s spawn", reason)
            self.event_bus.emit(EVENT_BOARD_FULL, reason=reason)
            return []
        self.event_bus.emit(EVENT_TILES_SPAWNED, positions=spawned, reason=reason)
        return spawned
