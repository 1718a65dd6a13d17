from __future__ import annotations

import random
from typing import Type, TypeVar

from esper import World

from hexten.components.action_queue import ActionQueue
from hexten.components.game_state import GameState
from hexten.components.score import ScoreTracker
from hexten.components.selection import Selection
from hexten.components.spawn_timer import SpawnTimer
from hexten.components.status_message import MessageCategory, StatusMessage
from hexten.events.bus import EVENT_MESSAGE, EventBus

T = TypeVar("T")


def get_or_create(world: World, component_type: Type[T]) -> T:
    """Return the shared singleton component, creating it if absent."""
    existing = list(world.get_component(component_type))
    if existing:
        return existing[0][1]
    component = component_type()
    world.create_entity(component)
    return component


def get_game_state(world: World) -> GameState:
    return get_or_create(world, GameState)


def get_score_tracker(world: World) -> ScoreTracker:
    return get_or_create(world, ScoreTracker)


def get_spawn_timer(world: World) -> SpawnTimer:
    return get_or_create(world, SpawnTimer)


def get_selection(world: World) -> Selection:
    return get_or_create(world, Selection)


def get_action_queue(world: World) -> ActionQueue:
    return get_or_create(world, ActionQueue)


def get_status_message(world: World) -> StatusMessage:
    return get_or_create(world, StatusMessage)


def world_rng(world: World) -> random.Random:
    candidate = getattr(world, "random", None)
    if isinstance(candidate, random.Random):
        return candidate
    rng = random.Random()
    setattr(world, "random", rng)
    return rng


def show_message(world: World, event_bus: EventBus, text: str, category: MessageCategory) -> None:
    message = get_status_message(world)
    message.text = text
    message.category = category
    event_bus.emit(EVENT_MESSAGE, text=text, category=category)
