from dataclasses import dataclass
from enum import Enum


class MessageCategory(Enum):
    NEUTRAL = "neutral"
    ERROR = "error"
    MERGE_UNDER = "merge_under"
    MERGE_OVER = "merge_over"
    SUCCESS = "success"
    LEVEL_UP = "level_up"


@dataclass(slots=True)
class StatusMessage:
    """Last player-facing message and its category."""
    text: str = ""
    category: MessageCategory = MessageCategory.NEUTRAL
