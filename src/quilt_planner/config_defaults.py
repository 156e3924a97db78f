"""Shared default values for user-facing configuration settings."""
from quilt_planner.type_defs import PackingStrategy

# Grid
DEFAULT_NUM_COLS = 4
DEFAULT_ROW_HEIGHT = 121
DEFAULT_MAX_COLS_PER_ITEM = 3
DEFAULT_MAX_ROWS_PER_ITEM = 3

# Packing
DEFAULT_STRATEGY: PackingStrategy = "skyline"
DEFAULT_LOOKAHEAD = 6
DEFAULT_RESPECT_EXPLICIT_SPANS = True
DEFAULT_ALLOW_REORDER = True
DEFAULT_SEED: int | None = None

# Hero
DEFAULT_HERO_RATIO = 0.25
DEFAULT_HERO_MIN_COLS = 2
DEFAULT_HERO_MAX_COLS = 3
DEFAULT_HERO_ROWS_MAX = 4
DEFAULT_HERO_COLS_MAX = 4
DEFAULT_HIGHLIGHT_PROB = 0.5
DEFAULT_MAX_HIGHLIGHTS_PER_ROW = 1
DEFAULT_MIN_TOTAL_HEROES = 0
DEFAULT_FORCE_HERO_ON_FIRST_ROW = False

# Orientation
DEFAULT_PORTRAIT_THRESHOLD = 1.2
DEFAULT_LANDSCAPE_THRESHOLD = 0.85
DEFAULT_BASE_ROWS_PORTRAIT = 3
DEFAULT_BASE_ROWS_LANDSCAPE = 2
DEFAULT_BASE_ROWS_SQUARE = 2
