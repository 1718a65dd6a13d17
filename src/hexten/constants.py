# ============================================================================
# BOARD LAYOUT
# ============================================================================
# Rows alternate between a long length and one less. Short rows sit half a
# cell to the right of their long neighbours.
ROW_COUNTS = (5, 6, 5, 6, 5)

MIN_TILE_VALUE = 1
MAX_TILE_VALUE = 9
INITIAL_TILE_COUNT = 8


# ============================================================================
# RULES & SCORING
# ============================================================================
TARGET_SUM = 10
BURST_POINTS = 20
POINTS_PER_LEVEL = 200
MERGE_SPAWN_COUNT = 1


# ============================================================================
# SPAWN TIMING (milliseconds)
# ============================================================================
BASE_SPAWN_INTERVAL_MS = 5000
SPAWN_INTERVAL_STEP_MS = 400
SPAWN_INTERVAL_FACTOR = 0.85
MIN_SPAWN_INTERVAL_MS = 1300


# ============================================================================
# SETTLE DELAYS (seconds)
# ============================================================================
# Time between a pair decision and the board mutation it commits.
BURST_SETTLE_DELAY = 0.5
MERGE_SETTLE_DELAY = 0.6
REJECT_SETTLE_DELAY = 0.6


# ============================================================================
# HOST WINDOW
# ============================================================================
TILE_RADIUS = 40
TILE_GAP = 6
BOTTOM_MARGIN = 20
HUD_HEIGHT = 120
BOARD_MAX_WIDTH_PCT = 0.9
BOARD_MAX_HEIGHT_PCT = 0.75
