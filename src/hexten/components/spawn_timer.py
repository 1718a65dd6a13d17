from dataclasses import dataclass

@dataclass(slots=True)
class SpawnTimer:
    """Repeating spawn countdown expressed as percent progress (0..100)."""
    progress: float = 0.0
    running: bool = False
    interval_ms: float = 4250.0
    speed_label: str = "Normal"
