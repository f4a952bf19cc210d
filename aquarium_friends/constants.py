"""
Central configuration constants for the aquarium simulation.

Defines the default values used when no data pack is supplied, and the
thresholds shared by the behavior engine, food manager and clock.
"""

# ============================================================================
# Tank Geometry (normalized coordinate space)
# ============================================================================

AQUARIUM_WIDTH = 100.0
AQUARIUM_HEIGHT = 100.0

# Fish reflect when closer than these margins to an edge
EDGE_MARGIN_X = 5.0
EDGE_MARGIN_TOP = 5.0
EDGE_MARGIN_BOTTOM = 10.0


# ============================================================================
# Population Counts
# ============================================================================

FISH_COUNT = 8
BUBBLE_COUNT = 20
STARFISH_COUNT = 5
SHELL_COUNT = 7


# ============================================================================
# Fish Behavior
# ============================================================================

FISH_SPEED = 0.1           # Per-component velocity clamp while wandering
FISH_HUNGRY_SPEED = 0.25   # Velocity magnitude while chasing food
WANDER_JITTER = 0.01       # Max random acceleration per component per tick
HUNGER_INTERVAL = 10.0     # Seconds after eating before a fish is hungry again
HAPPY_DURATION = 3.0       # Seconds a fish stays happy after eating
EAT_DISTANCE = 2.0         # Food closer than this is eaten

FISH_X_RANGE = (10.0, 90.0)
FISH_Y_RANGE = (10.0, 90.0)
FISH_SIZE_RANGE = (40.0, 70.0)


# ============================================================================
# Food
# ============================================================================

FOOD_SINK_SPEED = 0.1
FOOD_FLOOR_Y = 98.0        # Food at or below this depth is lost to the floor
FEED_MAX_Y = 95.0          # Clicks below this are on the sand, not the water
FEED_RANDOM_X_RANGE = (10.0, 90.0)
FEED_RANDOM_Y = 5.0
MAX_FOOD = None            # Optional cap on live food (None = unbounded)


# ============================================================================
# Bubbles (y measured upward from the floor)
# ============================================================================

BUBBLE_X_RANGE = (0.0, 100.0)
BUBBLE_Y_RANGE = (-10.0, 90.0)
BUBBLE_SIZE_RANGE = (5.0, 25.0)
BUBBLE_SPEED_RANGE = (0.1, 0.3)
BUBBLE_RESET_Y = -10.0


# ============================================================================
# Decorations
# ============================================================================

STARFISH_X_RANGE = (5.0, 95.0)
STARFISH_Y_RANGE = (94.0, 97.0)
STARFISH_SIZE_RANGE = (20.0, 40.0)
STARFISH_ROTATION_RANGE = (-30.0, 30.0)

SHELL_X_RANGE = (5.0, 95.0)
SHELL_Y_RANGE = (95.0, 98.0)
SHELL_SIZE_RANGE = (15.0, 30.0)
SHELL_ROTATION_RANGE = (-45.0, 45.0)


# ============================================================================
# Color Palettes
# ============================================================================

FISH_COLORS = ['#ff5733', '#33ff57', '#3357ff', '#ff33a1', '#a133ff', '#33fff0', '#ffc733']
STARFISH_COLORS = ['#ff7f50', '#ff6347', '#ff4500']
SHELL_COLORS = ['#fff5ee', '#f5f5dc', '#ffe4e1']


# ============================================================================
# Spatial Indexing Configuration
# ============================================================================

# Use scipy.cKDTree for nearest-food queries
# Set to False to use the O(n) numpy scan for comparison
USE_CKDTREE = True
CKDTREE_LEAFSIZE = 16


# ============================================================================
# Clock Configuration
# ============================================================================

FRAME_INTERVAL = 1.0 / 60.0   # Seconds per display frame
MAX_STEP = 3.0                # Cap on frames integrated in a single tick


# ============================================================================
# Performance Configuration
# ============================================================================

# Tick timing window for rolling average
TICK_TIME_WINDOW = 100  # Number of ticks to average

# Default tick summary interval (print every N ticks)
TICK_SUMMARY_INTERVAL = 100
