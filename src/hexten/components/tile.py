from dataclasses import dataclass
from typing import Optional

@dataclass(slots=True)
class TileValue:
    """Number held by a cell (1-9), or None while the cell is empty.

    Occupancy is tracked by ActiveSwitch; board ops keep the two in step.
    """
    value: Optional[int] = None
