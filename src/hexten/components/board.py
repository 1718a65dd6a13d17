from dataclasses import dataclass
from typing import Tuple

@dataclass(slots=True)
class Board:
    """Board layout: one entry per row giving that row's cell count."""
    row_counts: Tuple[int, ...]

    @property
    def rows(self) -> int:
        return len(self.row_counts)
