from dataclasses import dataclass

@dataclass(slots=True)
class ScoreTracker:
    """Session score with its derived level and the best score seen so far."""
    score: int = 0
    level: int = 1
    high_score: int = 0
