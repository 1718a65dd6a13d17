import random

import pytest

from hexten.components.active_switch import ActiveSwitch
from hexten.components.tile import TileValue
from hexten.events.bus import EventBus
from hexten.systems.board import BoardSystem
from hexten.systems.board_ops import (
    clear_tiles,
    empty_count,
    empty_positions,
    get_entity_at,
    is_full,
    occupied_positions,
    set_tile_value,
    spawn_random,
    tile_value_map,
)
from hexten.utils.hex_grid import all_coords
from hexten.world import create_world


def _board(rng_seed=7, row_counts=(5, 6, 5, 6, 5)):
    bus = EventBus()
    world = create_world(bus, rng=random.Random(rng_seed))
    board = BoardSystem(world, bus, row_counts)
    return world, board


def test_board_creates_one_empty_cell_per_coordinate():
    world, board = _board()
    values = tile_value_map(world)
    assert set(values) == set(all_coords((5, 6, 5, 6, 5)))
    assert all(value is None for value in values.values())
    assert empty_count(world) == 27
    assert not is_full(world)


def test_board_rejects_bad_layout():
    bus = EventBus()
    world = create_world(bus)
    with pytest.raises(ValueError):
        BoardSystem(world, bus, (5, 0, 5))


def test_set_tile_value_keeps_switch_in_step():
    world, board = _board()
    assert set_tile_value(world, (1, 2), 6)
    ent = get_entity_at(world, 1, 2)
    assert world.component_for_entity(ent, ActiveSwitch).active
    assert world.component_for_entity(ent, TileValue).value == 6
    assert set_tile_value(world, (1, 2), None)
    assert not world.component_for_entity(ent, ActiveSwitch).active
    assert world.component_for_entity(ent, TileValue).value is None


def test_set_tile_value_unknown_cell_and_bad_value():
    world, board = _board()
    assert not set_tile_value(world, (0, 5), 3)
    with pytest.raises(ValueError):
        set_tile_value(world, (0, 0), 10)
    with pytest.raises(ValueError):
        set_tile_value(world, (0, 0), 0)


def test_clear_tiles_empties_listed_cells():
    world, board = _board()
    board.load_values({(0, 0): 1, (0, 1): 2, (2, 2): 3})
    cleared = clear_tiles(world, [(0, 0), (2, 2), (9, 9)])
    assert cleared == [(0, 0), (2, 2)]
    assert occupied_positions(world) == [(0, 1)]


def test_spawn_random_fills_distinct_empty_cells_with_digits():
    world, board = _board()
    board.load_values({(0, 0): 5})
    spawned = spawn_random(world, 8)
    assert len(spawned) == 8
    assert len(set(spawned)) == 8
    assert (0, 0) not in spawned
    values = tile_value_map(world)
    assert values[(0, 0)] == 5
    for pos in spawned:
        assert 1 <= values[pos] <= 9
    assert empty_count(world) == 27 - 9


def test_spawn_random_is_capped_by_empty_cells():
    world, board = _board()
    board.load_values({pos: 1 for pos in all_coords((5, 6, 5, 6, 5)) if pos != (4, 4)})
    assert empty_positions(world) == [(4, 4)]
    assert spawn_random(world, 3) == [(4, 4)]
    assert is_full(world)
    assert spawn_random(world, 1) == []


def test_spawn_random_zero_count_is_noop():
    world, board = _board()
    assert spawn_random(world, 0) == []
    assert empty_count(world) == 27


def test_spawn_random_is_deterministic_for_seeded_rng():
    world_a, _ = _board(rng_seed=42)
    world_b, _ = _board(rng_seed=42)
    assert spawn_random(world_a, 5) == spawn_random(world_b, 5)
    assert tile_value_map(world_a) == tile_value_map(world_b)


def test_load_values_replaces_board():
    world, board = _board()
    spawn_random(world, 10)
    board.load_values({(3, 5): 2})
    assert occupied_positions(world) == [(3, 5)]
    assert board.values()[(3, 5)] == 2


@pytest.mark.parametrize("row_counts", [(4, 4), (5, 7, 5), (5, 6, 6, 5)])
def test_board_rejects_layout_that_does_not_alternate(row_counts):
    bus = EventBus()
    world = create_world(bus)
    with pytest.raises(ValueError):
        BoardSystem(world, bus, row_counts)
