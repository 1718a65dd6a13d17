from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Tuple


@dataclass(slots=True)
class Selection:
    """Currently selected tiles in tap order (at most two).

    ``pending`` is set once a pair has been decided and stays set until the
    queued resolution commits; taps are ignored meanwhile.
    """

    positions: List[Tuple[int, int]] = field(default_factory=list)
    running_sum: int = 0
    pending: bool = False
