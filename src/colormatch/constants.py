DEFAULT_GRID_SIZE = 3
MIN_GRID_SIZE = 2
MAX_GRID_SIZE = 7
LEVEL_GRID_STEP = 2

# Rules
BASE_MATCH_POINTS = 10
STARTING_LIVES = 3
TIME_ATTACK_SECONDS = 60
TIME_BONUS_PER_SECOND = 2
LIVES_BONUS_PER_LIFE = 10

# Transient visual state (seconds)
FEEDBACK_DURATION = 1.5
MATCH_DESELECT_DELAY = 0.3
WRONG_RESET_DELAY = 0.8

# Persistence
SCORE_STORE_KEY = "playerScores"
SCORE_STORE_CAPACITY = 50

# Window / layout
WINDOW_WIDTH = 800
WINDOW_HEIGHT = 600
HUD_HEIGHT = 90
BOTTOM_MARGIN = 20
TILE_GAP = 6
# Board maximum footprint relative to window (percentage of window width/height).
BOARD_MAX_WIDTH_PCT = 0.75
BOARD_MAX_HEIGHT_PCT = 0.85

# High score list
HIGH_SCORES_SHOWN = 10
