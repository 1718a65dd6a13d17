import logging

from esper import World

from hexten.components.status_message import MessageCategory
from hexten.events.bus import EventBus, EVENT_LEVEL_UP, EVENT_SCORE_CHANGED
from hexten.systems.state_utils import get_score_tracker, get_spawn_timer, show_message
from hexten.utils.progression import interval_for, level_for, speed_label_for

logger = logging.getLogger(__name__)


class ProgressionSystem:
    """Keeps level, spawn interval and speed label in step with the score."""

    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        self.event_bus.subscribe(EVENT_SCORE_CHANGED, self.on_score_changed)

    def on_score_changed(self, sender, **kwargs):
        tracker = get_score_tracker(self.world)
        score = kwargs.get('score', tracker.score)
        new_level = level_for(score)
        previous_level = tracker.level
        if new_level == previous_level:
            return
        tracker.level = new_level
        timer = get_spawn_timer(self.world)
        timer.interval_ms = interval_for(new_level)
        timer.speed_label = speed_label_for(new_level)
        if new_level < previous_level:
            return
        logger.info("Level up: %d -> %d (spawn every %.0fms)", previous_level, new_level, timer.interval_ms)
        show_message(self.world, self.event_bus, "LEVEL UP! Spawns are getting faster!", MessageCategory.LEVEL_UP)
        self.event_bus.emit(
            EVENT_LEVEL_UP,
            previous_level=previous_level,
            level=new_level,
            interval_ms=timer.interval_ms,
            speed_label=timer.speed_label,
        )
