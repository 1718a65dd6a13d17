"""Game state resource describing the session mode and how it ended."""
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional


class GameMode(Enum):
    """High-level session modes that gate input and the spawn timer."""
    READY = auto()
    PLAYING = auto()
    GAME_OVER = auto()


class GameOverReason(Enum):
    NO_ADJACENT_PAIR = "No neighboring tiles can be connected!"
    BOARD_FULL = "The board is full!"

    @property
    def message(self) -> str:
        return self.value


@dataclass
class GameState:
    """Singleton component storing the session mode and end-of-game details."""
    mode: GameMode = GameMode.READY
    over_reason: Optional[GameOverReason] = None
    final_score: int = 0
