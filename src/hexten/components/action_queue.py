from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import Deque, Tuple


class ActionKind(Enum):
    REJECT = "reject"
    BURST = "burst"
    MERGE_UNDER = "merge_under"
    MERGE_OVER = "merge_over"
    SPAWN = "spawn"


@dataclass(slots=True)
class PendingAction:
    """A board mutation waiting for its settle delay.

    ``positions`` and ``values`` are captured when the action is triggered;
    pair actions store (source, destination) in tap order.
    """

    kind: ActionKind
    sequence: int
    positions: Tuple[Tuple[int, int], ...] = ()
    values: Tuple[int, ...] = ()
    delay: float = 0.0
    elapsed: float = 0.0
    reason: str = ""

    @property
    def ready(self) -> bool:
        return self.elapsed >= self.delay


@dataclass(slots=True)
class ActionQueue:
    """FIFO of pending board mutations, applied strictly in trigger order."""

    actions: Deque[PendingAction] = field(default_factory=deque)
    next_sequence: int = 0
