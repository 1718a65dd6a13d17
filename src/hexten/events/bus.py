from blinker import Signal
from typing import Dict

class EventBus:
    """Simple event bus leveraging blinker Signal objects."""
    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn):
        sig = self._signals.setdefault(name, Signal(name))
        # Use weak=False to retain strong reference to bound methods so systems not kept in a variable still receive events.
        sig.connect(fn, weak=False)

    def unsubscribe(self, name: str, fn):
        sig = self._signals.get(name)
        if sig:
            sig.disconnect(fn)

    def emit(self, name: str, **payload):
        sig = self._signals.get(name)
        if sig:
            sig.send(self, **payload)


# ============================================================================
# SYSTEM & TIMING
# ============================================================================
EVENT_TICK = "tick"                                # payload: dt=float (seconds)


# ============================================================================
# INPUT & SELECTION
# ============================================================================
EVENT_TILE_CLICK = "tile_click"                    # payload: row, col
EVENT_TILE_SELECTED = "tile_selected"              # payload: row, col, running_sum=int
EVENT_TILE_DESELECTED = "tile_deselected"          # payload: row, col, running_sum=int
EVENT_SELECTION_CLEARED = "selection_cleared"      # payload: positions=[(r,c),...], reason=str
EVENT_PAIR_REJECTED = "pair_rejected"              # payload: src=(r,c), dst=(r,c)
EVENT_PAIR_RESOLVED = "pair_resolved"              # payload: src=(r,c), dst=(r,c), outcome=PairOutcome, total=int


# ============================================================================
# BOARD MUTATION
# ============================================================================
EVENT_ACTION_ENQUEUED = "action_enqueued"          # payload: action=PendingAction
EVENT_ACTION_APPLIED = "action_applied"            # payload: action=PendingAction
EVENT_BOARD_CHANGED = "board_changed"              # payload: reason=str, positions=list[(r,c)]
EVENT_BOARD_FULL = "board_full"                    # payload: reason=str


# ============================================================================
# VISUAL CUES (fire-and-forget, consumed by the host)
# ============================================================================
EVENT_TILES_SPAWNED = "tiles_spawned"              # payload: positions=[(r,c),...], reason=str
EVENT_TILE_PULSED = "tile_pulsed"                  # payload: row, col, value=int
EVENT_TILES_BURST = "tiles_burst"                  # payload: positions=[(r,c),...]
EVENT_TILES_SHAKEN = "tiles_shaken"                # payload: positions=[(r,c),...], reason=str


# ============================================================================
# SCORE & PROGRESSION
# ============================================================================
EVENT_SCORE_CHANGED = "score_changed"              # payload: score=int, delta=int
EVENT_LEVEL_UP = "level_up"                        # payload: previous_level=int, level=int, interval_ms=float, speed_label=str
EVENT_HIGH_SCORE_CHANGED = "high_score_changed"    # payload: high_score=int, saved=bool
EVENT_MESSAGE = "message"                          # payload: text=str, category=MessageCategory


# ============================================================================
# GAME FLOW & STATE
# ============================================================================
EVENT_GAME_START_REQUEST = "game_start_request"    # payload: None
EVENT_GAME_STARTED = "game_started"                # payload: seeded=[(r,c),...]
EVENT_GAME_OVER = "game_over"                      # payload: reason=GameOverReason, final_score=int
EVENT_GAME_MODE_CHANGED = "game_mode_changed"      # payload: previous_mode=GameMode|None, new_mode=GameMode
