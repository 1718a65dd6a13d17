from __future__ import annotations

from hexten.constants import (
    BASE_SPAWN_INTERVAL_MS,
    MIN_SPAWN_INTERVAL_MS,
    POINTS_PER_LEVEL,
    SPAWN_INTERVAL_FACTOR,
    SPAWN_INTERVAL_STEP_MS,
)


def level_for(score: int) -> int:
    return max(0, score) // POINTS_PER_LEVEL + 1


def interval_for(level: int) -> float:
    """Spawn interval in milliseconds; never increases with level, floored at 1300ms."""
    raw = (BASE_SPAWN_INTERVAL_MS - (level - 1) * SPAWN_INTERVAL_STEP_MS) * SPAWN_INTERVAL_FACTOR
    return max(MIN_SPAWN_INTERVAL_MS, raw)


def speed_label_for(level: int) -> str:
    if level < 3:
        return "Normal"
    if level < 6:
        return "Fast"
    if level < 9:
        return "Very Fast"
    return "Extreme"
