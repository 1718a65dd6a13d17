import logging

from esper import World

from hexten.components.action_queue import ActionKind
from hexten.events.bus import EventBus, EVENT_TICK
from hexten.systems.resolution import enqueue_action
from hexten.systems.state_utils import get_score_tracker, get_spawn_timer
from hexten.utils.game_state import is_playing
from hexten.utils.progression import interval_for, speed_label_for

logger = logging.getLogger(__name__)


class SpawnSystem:
    """Advances the spawn countdown on every tick and queues a spawn at 100%."""

    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        self.event_bus.subscribe(EVENT_TICK, self.on_tick)

    def on_tick(self, sender, **kwargs):
        dt = kwargs.get('dt') or 0.0
        if dt <= 0:
            return
        timer = get_spawn_timer(self.world)
        if not timer.running or not is_playing(self.world):
            return
        level = get_score_tracker(self.world).level
        timer.interval_ms = interval_for(level)
        timer.speed_label = speed_label_for(level)
        timer.progress += (dt * 1000.0 / timer.interval_ms) * 100.0
        if timer.progress < 100.0:
            return
        # Overshoot is discarded; the next cycle starts from zero.
        timer.progress = 0.0
        logger.debug("Spawn tick at level %d (interval %.0fms)", level, timer.interval_ms)
        enqueue_action(self.world, self.event_bus, ActionKind.SPAWN, reason="timer")

    def stop(self) -> None:
        get_spawn_timer(self.world).running = False
