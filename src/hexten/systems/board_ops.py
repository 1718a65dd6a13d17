from __future__ import annotations

import random
from typing import Dict, Iterable, List, Optional, Tuple

from esper import World

from hexten.components.active_switch import ActiveSwitch
from hexten.components.board import Board
from hexten.components.board_position import BoardPosition
from hexten.components.tile import TileValue
from hexten.components.tile_highlight import TileHighlight
from hexten.constants import MAX_TILE_VALUE, MIN_TILE_VALUE
from hexten.systems.state_utils import world_rng

Position = Tuple[int, int]


def get_board(world: World) -> Board:
    for _, board in world.get_component(Board):
        return board
    raise RuntimeError("Board not found; create a BoardSystem first")


def board_row_counts(world: World) -> Tuple[int, ...]:
    return get_board(world).row_counts


def get_entity_at(world: World, row: int, col: int) -> int | None:
    for entity, position in world.get_component(BoardPosition):
        if position.row == row and position.col == col:
            return entity
    return None


def tile_value_at(world: World, row: int, col: int) -> Optional[int]:
    entity = get_entity_at(world, row, col)
    if entity is None:
        return None
    switch: ActiveSwitch = world.component_for_entity(entity, ActiveSwitch)
    if not switch.active:
        return None
    return world.component_for_entity(entity, TileValue).value


def tile_value_map(world: World) -> Dict[Position, Optional[int]]:
    """Return every board position mapped to its value, None for empty cells."""
    mapping: Dict[Position, Optional[int]] = {}
    for entity, (position, switch, tile) in world.get_components(BoardPosition, ActiveSwitch, TileValue):
        mapping[(position.row, position.col)] = tile.value if switch.active else None
    return mapping


def occupied_positions(world: World) -> List[Position]:
    return sorted(pos for pos, value in tile_value_map(world).items() if value is not None)


def empty_positions(world: World) -> List[Position]:
    return sorted(pos for pos, value in tile_value_map(world).items() if value is None)


def empty_count(world: World) -> int:
    return len(empty_positions(world))


def is_full(world: World) -> bool:
    return empty_count(world) == 0


def set_tile_value(world: World, position: Position, value: Optional[int]) -> bool:
    """Assign a value to a cell, or empty it with None. Returns False for unknown cells."""
    entity = get_entity_at(world, position[0], position[1])
    if entity is None:
        return False
    if value is not None and not MIN_TILE_VALUE <= value <= MAX_TILE_VALUE:
        raise ValueError(f"tile value {value} outside {MIN_TILE_VALUE}..{MAX_TILE_VALUE}")
    switch: ActiveSwitch = world.component_for_entity(entity, ActiveSwitch)
    tile: TileValue = world.component_for_entity(entity, TileValue)
    tile.value = value
    switch.active = value is not None
    return True


def clear_tiles(world: World, positions: Iterable[Position]) -> List[Position]:
    cleared: List[Position] = []
    for position in positions:
        if set_tile_value(world, position, None):
            cleared.append(tuple(position))
    return cleared


def clear_board(world: World) -> None:
    for _, (switch, tile) in world.get_components(ActiveSwitch, TileValue):
        switch.active = False
        tile.value = None
    clear_highlights(world)


def spawn_random(world: World, count: int, *, rng: random.Random | None = None) -> List[Position]:
    """Fill up to ``count`` random empty cells with random values.

    Empty positions are shuffled and a prefix taken, so the chosen cells are
    distinct. Returns the positions that received a tile (empty when full).
    """
    if count <= 0:
        return []
    rng = rng or world_rng(world)
    candidates = empty_positions(world)
    rng.shuffle(candidates)
    spawned: List[Position] = []
    for position in candidates[:count]:
        set_tile_value(world, position, rng.randint(MIN_TILE_VALUE, MAX_TILE_VALUE))
        spawned.append(position)
    return spawned


def set_highlight(world: World, positions: Iterable[Position], kind: str) -> None:
    for row, col in positions:
        entity = get_entity_at(world, row, col)
        if entity is None:
            continue
        if world.has_component(entity, TileHighlight):
            world.component_for_entity(entity, TileHighlight).kind = kind
        else:
            world.add_component(entity, TileHighlight(kind=kind))


def clear_highlights(world: World, positions: Iterable[Position] | None = None) -> None:
    targets = None if positions is None else {tuple(pos) for pos in positions}
    for entity, (position, _) in list(world.get_components(BoardPosition, TileHighlight)):
        if targets is not None and (position.row, position.col) not in targets:
            continue
        world.remove_component(entity, TileHighlight)


def highlight_map(world: World) -> Dict[Position, str]:
    return {
        (position.row, position.col): highlight.kind
        for _, (position, highlight) in world.get_components(BoardPosition, TileHighlight)
    }
