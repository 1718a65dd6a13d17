from hexten.components.action_queue import ActionKind
from hexten.components.game_state import GameMode
from hexten.components.status_message import MessageCategory
from hexten.components.tile_highlight import HIGHLIGHT_PENALTY
from hexten.events.bus import (
    EVENT_ACTION_APPLIED,
    EVENT_PAIR_RESOLVED,
    EVENT_SCORE_CHANGED,
    EVENT_TILE_PULSED,
    EVENT_TILES_BURST,
    EVENT_TILES_SPAWNED,
)
from hexten.systems.state_utils import get_spawn_timer
from hexten.utils.hex_grid import all_coords, neighbors_of
from hexten.utils.pair_rules import PairOutcome
from tests.helpers import drive_ticks, make_session, occupied, place_tiles

ALL_PAIRS = sorted({tuple(sorted((a, b))) for a in all_coords() for b in neighbors_of(a)})


def _capture(session, event):
    seen = []
    session.event_bus.subscribe(event, lambda sender, **p: seen.append(p))
    return seen


def _without_spawned(tiles, spawned):
    positions = {pos for payload in spawned for pos in payload["positions"]}
    return {pos: value for pos, value in tiles.items() if pos not in positions}


def test_burst_end_to_end():
    session = make_session()
    place_tiles(session, {(0, 0): 4, (0, 1): 6})
    resolved = _capture(session, EVENT_PAIR_RESOLVED)
    bursts = _capture(session, EVENT_TILES_BURST)
    spawned = _capture(session, EVENT_TILES_SPAWNED)

    session.tap(0, 0)
    snap = session.tap(0, 1)

    # Decision is visible at once; the board changes after the settle delay.
    assert resolved == [{"src": (0, 0), "dst": (0, 1), "outcome": PairOutcome.BURST, "total": 10}]
    assert bursts == [{"positions": [(0, 0), (0, 1)]}]
    assert snap.message_category is MessageCategory.SUCCESS
    assert snap.selection == ((0, 0), (0, 1))
    assert snap.running_sum == 10
    assert occupied(session) == {(0, 0): 4, (0, 1): 6}

    drive_ticks(session.event_bus, count=15, dt=0.05)

    snap = session.snapshot()
    assert occupied(session) == {}
    assert snap.score == 20
    assert snap.level == 1
    assert snap.selection == ()
    assert snap.running_sum == 0
    assert spawned == []
    # An empty board is not a terminal position.
    assert snap.mode is GameMode.PLAYING


def test_merge_under_end_to_end():
    session = make_session()
    place_tiles(session, {(0, 0): 3, (0, 1): 4})
    pulses = _capture(session, EVENT_TILE_PULSED)
    spawned = _capture(session, EVENT_TILES_SPAWNED)

    session.tap(0, 0)
    snap = session.tap(0, 1)
    assert snap.message == "7 is under 10. Merging tiles."
    assert snap.message_category is MessageCategory.MERGE_UNDER

    drive_ticks(session.event_bus, count=15, dt=0.05)

    tiles = occupied(session)
    assert len(tiles) == 2
    assert len(spawned) == 1 and len(spawned[0]["positions"]) == 1
    assert _without_spawned(tiles, spawned) == {(0, 1): 7}
    assert pulses == [{"row": 0, "col": 1, "value": 7}]
    assert session.snapshot().score == 0


def test_merge_over_end_to_end():
    session = make_session()
    place_tiles(session, {(0, 0): 7, (0, 1): 8})
    spawned = _capture(session, EVENT_TILES_SPAWNED)

    session.tap(0, 0)
    snap = session.tap(0, 1)
    assert snap.message == "15 is over 10! Keeping the remainder (5)."
    assert snap.message_category is MessageCategory.MERGE_OVER
    assert snap.highlights == {(0, 0): HIGHLIGHT_PENALTY, (0, 1): HIGHLIGHT_PENALTY}

    drive_ticks(session.event_bus, count=15, dt=0.05)

    tiles = occupied(session)
    assert len(tiles) == 2
    assert _without_spawned(tiles, spawned) == {(0, 1): 5}
    assert session.snapshot().highlights == {}
    assert session.snapshot().score == 0


def test_destination_is_second_tap():
    session = make_session(instant=True)
    place_tiles(session, {(2, 2): 2, (3, 3): 5})
    spawned = _capture(session, EVENT_TILES_SPAWNED)
    session.tap(3, 3)
    session.tap(2, 2)
    assert _without_spawned(occupied(session), spawned) == {(2, 2): 7}


def test_every_adjacent_pair_summing_to_ten_bursts():
    for a, b in ALL_PAIRS:
        session = make_session(instant=True)
        place_tiles(session, {a: 3, b: 7})
        session.tap(*a)
        snap = session.tap(*b)
        assert snap.tiles[a] is None and snap.tiles[b] is None, (a, b)
        assert snap.score == 20
        assert occupied(session) == {}


def test_every_adjacent_pair_under_ten_merges_and_spawns_one():
    for a, b in ALL_PAIRS:
        session = make_session(instant=True)
        place_tiles(session, {a: 2, b: 6})
        session.tap(*a)
        snap = session.tap(*b)
        assert snap.tiles[b] == 8, (a, b)
        assert len(occupied(session)) == 2
        assert snap.score == 0


def test_every_adjacent_pair_over_ten_keeps_remainder():
    for a, b in ALL_PAIRS:
        session = make_session(instant=True)
        place_tiles(session, {a: 9, b: 4})
        session.tap(*a)
        snap = session.tap(*b)
        assert snap.tiles[b] == 3, (a, b)
        assert len(occupied(session)) == 2


def test_merge_on_full_board_refills_freed_cell():
    session = make_session(instant=True)
    values = {pos: 1 for pos in all_coords()}
    values[(0, 0)] = 2
    values[(0, 1)] = 3
    place_tiles(session, values)
    spawned = _capture(session, EVENT_TILES_SPAWNED)

    session.tap(0, 0)
    snap = session.tap(0, 1)

    assert snap.tiles[(0, 1)] == 5
    assert spawned == [{"positions": [(0, 0)], "reason": "merge_under"}]
    assert snap.tiles[(0, 0)] is not None
    assert not snap.game_over


def test_score_events_only_for_bursts():
    session = make_session(instant=True)
    place_tiles(session, {(0, 0): 4, (0, 1): 6, (2, 0): 1, (2, 1): 2})
    scores = _capture(session, EVENT_SCORE_CHANGED)
    session.tap(2, 0)
    session.tap(2, 1)
    session.tap(0, 0)
    session.tap(0, 1)
    assert scores == [{"score": 20, "delta": 20}]


def test_spawn_tick_waits_for_pending_pair():
    session = make_session()
    # The bottom pair keeps the board playable whatever the merge spawn does.
    place_tiles(session, {(0, 0): 3, (0, 1): 4, (4, 0): 1, (4, 1): 1})
    applied = []
    session.event_bus.subscribe(EVENT_ACTION_APPLIED, lambda sender, **p: applied.append(p["action"].kind))
    spawned = _capture(session, EVENT_TILES_SPAWNED)

    session.tap(0, 0)
    session.tap(0, 1)
    get_spawn_timer(session.world).progress = 99.5
    session.advance(0.1)

    # The spawn tick fired during the settle delay but is queued behind the pair.
    assert applied == []
    assert spawned == []
    assert occupied(session) == {(0, 0): 3, (0, 1): 4, (4, 0): 1, (4, 1): 1}

    drive_ticks(session.event_bus, count=15, dt=0.05)

    assert applied == [ActionKind.MERGE_UNDER, ActionKind.SPAWN]
    assert [payload["reason"] for payload in spawned] == ["merge_under", "timer"]
    tiles = occupied(session)
    assert len(tiles) == 5
    assert _without_spawned(tiles, spawned) == {(0, 1): 7, (4, 0): 1, (4, 1): 1}


def test_smaller_layout_bursts_diagonal_pair():
    session = make_session(instant=True, row_counts=(3, 4, 3))
    place_tiles(session, {(0, 0): 4, (1, 1): 6})
    session.tap(0, 0)
    snap = session.tap(1, 1)
    assert snap.score == 20
    assert occupied(session) == {}
