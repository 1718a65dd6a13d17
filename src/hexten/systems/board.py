import logging
from typing import Dict, Optional, Sequence, Tuple

from esper import World

from hexten.components.active_switch import ActiveSwitch
from hexten.components.board import Board
from hexten.components.board_position import BoardPosition
from hexten.components.tile import TileValue
from hexten.constants import ROW_COUNTS
from hexten.events.bus import EventBus
from hexten.systems.board_ops import set_tile_value
from hexten.utils.hex_grid import all_coords, is_valid_layout

logger = logging.getLogger(__name__)


class BoardSystem:
    """Owns the board entity and one tile entity per valid hex coordinate."""

    def __init__(self, world: World, event_bus: EventBus, row_counts: Sequence[int] = ROW_COUNTS):
        self.world = world
        self.event_bus = event_bus
        self.row_counts: Tuple[int, ...] = tuple(int(count) for count in row_counts)
        if not is_valid_layout(self.row_counts):
            raise ValueError(f"invalid row layout {row_counts!r}")
        self._entities: Dict[Tuple[int, int], int] = {}
        self.board_entity = self.world.create_entity(Board(row_counts=self.row_counts))
        self._init_board()

    def _init_board(self):
        # Cells are created once; a restart only toggles their occupancy.
        for row, col in all_coords(self.row_counts):
            ent = self.world.create_entity(
                BoardPosition(row=row, col=col),
                ActiveSwitch(active=False),
                TileValue(value=None),
            )
            self._entities[(row, col)] = ent
        logger.debug("Created board with %d cells (rows=%s)", len(self._entities), self.row_counts)

    def load_values(self, values: Dict[Tuple[int, int], Optional[int]]) -> None:
        """Replace the whole board; cells missing from ``values`` become empty."""
        for pos in self._entities:
            set_tile_value(self.world, pos, values.get(pos))
