from __future__ import annotations

from dataclasses import dataclass

HIGHLIGHT_REJECTED = "rejected"
HIGHLIGHT_PENALTY = "penalty"


@dataclass(slots=True)
class TileHighlight:
    """Transient visual flag on a tile while a pair decision settles."""

    kind: str
