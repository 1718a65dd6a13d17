"""Topology of the staggered hex board.

Rows alternate between a short and a long length. A short row sits half a
cell to the right of the long rows around it, so the cell at ``col`` in a
short row touches columns ``col`` and ``col + 1`` above and below, while a
cell in a long row touches ``col - 1`` and ``col``.
"""
from __future__ import annotations

from typing import Dict, List, Mapping, Optional, Sequence, Set, Tuple

from hexten.constants import ROW_COUNTS

Position = Tuple[int, int]


def is_valid_coord(coord: Position, row_counts: Sequence[int] = ROW_COUNTS) -> bool:
    try:
        row, col = coord
    except (TypeError, ValueError):
        return False
    if not isinstance(row, int) or not isinstance(col, int):
        return False
    if row < 0 or row >= len(row_counts):
        return False
    return 0 <= col < row_counts[row]


def all_coords(row_counts: Sequence[int] = ROW_COUNTS) -> List[Position]:
    """Every valid coordinate in row-major order."""
    return [(row, col) for row, count in enumerate(row_counts) for col in range(count)]


def is_valid_layout(row_counts: Sequence[int]) -> bool:
    """True for a non-empty layout whose rows alternate between two lengths one apart."""
    if not row_counts or any(count <= 0 for count in row_counts):
        return False
    longest = max(row_counts)
    if any(count not in (longest, longest - 1) for count in row_counts):
        return False
    return all(a != b for a, b in zip(row_counts, row_counts[1:]))


def is_short_row(row: int, row_counts: Sequence[int] = ROW_COUNTS) -> bool:
    # Short is relative to the layout: one cell less than the longest row.
    return row_counts[row] < max(row_counts)


def neighbors_of(coord: Position, row_counts: Sequence[int] = ROW_COUNTS) -> Set[Position]:
    row, col = coord
    candidates: List[Position] = [(row, col - 1), (row, col + 1)]
    short = is_short_row(row, row_counts)
    for other in (row - 1, row + 1):
        if other < 0 or other >= len(row_counts):
            continue
        if short:
            candidates.append((other, col))
            candidates.append((other, col + 1))
        else:
            candidates.append((other, col - 1))
            candidates.append((other, col))
    return {pos for pos in candidates if is_valid_coord(pos, row_counts)}


def are_adjacent(a: Position, b: Position, row_counts: Sequence[int] = ROW_COUNTS) -> bool:
    if not is_valid_coord(a, row_counts):
        return False
    return tuple(b) in neighbors_of(a, row_counts)


def is_terminal(values: Mapping[Position, Optional[int]], row_counts: Sequence[int] = ROW_COUNTS) -> bool:
    """True when tiles remain but no two occupied cells touch.

    An empty board is not terminal; a full board is handled by the spawner.
    """
    occupied = [pos for pos, value in values.items() if value is not None]
    if not occupied:
        return False
    for pos in occupied:
        for neighbor in neighbors_of(pos, row_counts):
            if values.get(neighbor) is not None:
                return False
    return True


def adjacent_pairs(values: Mapping[Position, Optional[int]], row_counts: Sequence[int] = ROW_COUNTS) -> List[Tuple[Position, Position]]:
    """Occupied neighbouring pairs, each listed once with the smaller coordinate first."""
    pairs: List[Tuple[Position, Position]] = []
    for pos, value in sorted(values.items()):
        if value is None:
            continue
        for neighbor in sorted(neighbors_of(pos, row_counts)):
            if neighbor > pos and values.get(neighbor) is not None:
                pairs.append((pos, neighbor))
    return pairs


def neighbor_table(row_counts: Sequence[int] = ROW_COUNTS) -> Dict[Position, List[Position]]:
    return {pos: sorted(neighbors_of(pos, row_counts)) for pos in all_coords(row_counts)}
