import random

from esper import World
from .events.bus import EventBus
from hexten.components.action_queue import ActionQueue
from hexten.components.game_state import GameMode, GameState
from hexten.components.score import ScoreTracker
from hexten.components.selection import Selection
from hexten.components.spawn_timer import SpawnTimer
from hexten.components.status_message import StatusMessage
from hexten.utils.progression import interval_for, speed_label_for


def create_world(
    event_bus: EventBus,
    initial_mode: GameMode = GameMode.READY,
    *,
    rng: random.Random | None = None,
    high_score: int = 0,
) -> World:
    """Create the session world with its singleton resources.

    The board itself is created by BoardSystem so tests can pick a layout.
    """
    world = World()
    setattr(world, "random", rng or random.Random())

    # Register the global session resources.
    world.create_entity(GameState(mode=initial_mode))
    world.create_entity(ScoreTracker(score=0, level=1, high_score=max(0, int(high_score))))
    world.create_entity(
        SpawnTimer(
            progress=0.0,
            running=False,
            interval_ms=interval_for(1),
            speed_label=speed_label_for(1),
        )
    )
    world.create_entity(Selection())
    world.create_entity(StatusMessage())
    world.create_entity(ActionQueue())
    return world
