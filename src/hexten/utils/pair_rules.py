from __future__ import annotations

from enum import Enum

from hexten.constants import TARGET_SUM


class PairOutcome(Enum):
    BURST = "burst"
    MERGE_UNDER = "merge_under"
    MERGE_OVER = "merge_over"


def classify_pair(total: int) -> PairOutcome:
    if total == TARGET_SUM:
        return PairOutcome.BURST
    if total < TARGET_SUM:
        return PairOutcome.MERGE_UNDER
    return PairOutcome.MERGE_OVER


def merged_value(total: int) -> int | None:
    """Value left on the destination tile, or None when the pair bursts."""
    outcome = classify_pair(total)
    if outcome is PairOutcome.BURST:
        return None
    if outcome is PairOutcome.MERGE_OVER:
        return total - TARGET_SUM
    return total
