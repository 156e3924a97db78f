"""
Constants used internally by the quilt planner.

These are implementation-level values that should not be overridden
via config files or CLI arguments.
"""

# Candidate scoring. Aspect error dominates; position only breaks ties.
SCORE_ASPECT_WEIGHT = 1e-3
SCORE_Y_WEIGHT = 1e-6
SCORE_X_WEIGHT = 1e-7
HERO_SCORE_BONUS = 0.01

# Portrait heroes taller than threshold * factor get one extra row
EXTREME_PORTRAIT_FACTOR = 1.6

# |aspect - 1| below this counts as square when upgrading placements
SQUARE_ASPECT_TOLERANCE = 0.1

# Side of the square hero tile used by upgrades and row-mode heroes
SQUARE_HERO_SIDE = 2

# Tallest normal (non-hero) tile proposed by the row strategy
ROW_NORMAL_MAX_ROWS = 2

# Ratios are clamped into [MIN_ASPECT, MAX_ASPECT] so span maths stays finite
MIN_ASPECT = 1e-6
MAX_ASPECT = 1e6

# Upper bound applied to the lookahead window
LOOKAHEAD_MAX = 12

# Gallery view export
SRC_URL_PARAMS = "fit=crop&auto=format"
SRCSET_DENSITY = 2

# Image file suffixes picked up when scanning a directory
IMAGE_SUFFIXES = (".jpg", ".jpeg", ".png", ".gif", ".webp", ".bmp", ".tif",
                  ".tiff")
