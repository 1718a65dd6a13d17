from dataclasses import dataclass

@dataclass(slots=True)
class ActiveSwitch:
    """Per-tile occupancy flag.

    active: True if the cell currently holds a number; False if cleared/empty.
    The number itself lives in a separate TileValue component.
    """
    active: bool = False
