"""
Data types mirroring the YAML tank configuration and the render snapshot.

Configuration dataclasses are populated by loader.py from YAML files; every
field defaults to the value in constants.py so a partial data pack works.
Snapshot views are frozen: the renderer reads them, never mutates them.
"""

from dataclasses import dataclass, field
from typing import List, Dict, Optional, Any, Tuple

from .constants import (
    AQUARIUM_WIDTH, AQUARIUM_HEIGHT,
    EDGE_MARGIN_X, EDGE_MARGIN_TOP, EDGE_MARGIN_BOTTOM,
    FISH_COUNT, BUBBLE_COUNT, STARFISH_COUNT, SHELL_COUNT,
    FISH_SPEED, FISH_HUNGRY_SPEED, WANDER_JITTER, HUNGER_INTERVAL, HAPPY_DURATION, EAT_DISTANCE,
    FISH_X_RANGE, FISH_Y_RANGE, FISH_SIZE_RANGE, FISH_COLORS,
    FOOD_SINK_SPEED, FOOD_FLOOR_Y, FEED_MAX_Y, FEED_RANDOM_X_RANGE, FEED_RANDOM_Y, MAX_FOOD,
    BUBBLE_X_RANGE, BUBBLE_Y_RANGE, BUBBLE_SIZE_RANGE, BUBBLE_SPEED_RANGE, BUBBLE_RESET_Y,
    STARFISH_X_RANGE, STARFISH_Y_RANGE, STARFISH_SIZE_RANGE, STARFISH_ROTATION_RANGE, STARFISH_COLORS,
    SHELL_X_RANGE, SHELL_Y_RANGE, SHELL_SIZE_RANGE, SHELL_ROTATION_RANGE, SHELL_COLORS,
    FRAME_INTERVAL, MAX_STEP,
)

Range = Tuple[float, float]  # (min, max), inclusive of min


# ============================================================================
# Tank Configuration
# ============================================================================

@dataclass
class TankBounds:
    """Normalized tank extent and the reflection margins fish turn at"""
    width: float = AQUARIUM_WIDTH
    height: float = AQUARIUM_HEIGHT
    margin_x: float = EDGE_MARGIN_X
    margin_top: float = EDGE_MARGIN_TOP
    margin_bottom: float = EDGE_MARGIN_BOTTOM


@dataclass
class FishConfig:
    """Fish population and behavior parameters"""
    count: int = FISH_COUNT
    speed: float = FISH_SPEED
    hungry_speed: float = FISH_HUNGRY_SPEED
    wander_jitter: float = WANDER_JITTER
    hunger_interval: float = HUNGER_INTERVAL  # seconds
    happy_duration: float = HAPPY_DURATION  # seconds
    eat_distance: float = EAT_DISTANCE
    x_range: Range = FISH_X_RANGE
    y_range: Range = FISH_Y_RANGE
    size_range: Range = FISH_SIZE_RANGE
    colors: List[str] = field(default_factory=lambda: list(FISH_COLORS))


@dataclass
class FoodConfig:
    """Food particle lifecycle and feed command parameters"""
    sink_speed: float = FOOD_SINK_SPEED
    floor_y: float = FOOD_FLOOR_Y
    feed_max_y: float = FEED_MAX_Y
    random_x_range: Range = FEED_RANDOM_X_RANGE
    random_y: float = FEED_RANDOM_Y
    max_food: Optional[int] = MAX_FOOD


@dataclass
class BubbleConfig:
    """Bubble population (y measured upward from the floor)"""
    count: int = BUBBLE_COUNT
    x_range: Range = BUBBLE_X_RANGE
    y_range: Range = BUBBLE_Y_RANGE
    size_range: Range = BUBBLE_SIZE_RANGE
    speed_range: Range = BUBBLE_SPEED_RANGE
    reset_y: float = BUBBLE_RESET_Y


@dataclass
class DecorationConfig:
    """Static decoration population (starfish, shells)"""
    kind: str
    count: int
    x_range: Range
    y_range: Range
    size_range: Range
    rotation_range: Range
    colors: List[str]


def default_starfish() -> DecorationConfig:
    return DecorationConfig(
        kind="starfish",
        count=STARFISH_COUNT,
        x_range=STARFISH_X_RANGE,
        y_range=STARFISH_Y_RANGE,
        size_range=STARFISH_SIZE_RANGE,
        rotation_range=STARFISH_ROTATION_RANGE,
        colors=list(STARFISH_COLORS)
    )


def default_shells() -> DecorationConfig:
    return DecorationConfig(
        kind="shell",
        count=SHELL_COUNT,
        x_range=SHELL_X_RANGE,
        y_range=SHELL_Y_RANGE,
        size_range=SHELL_SIZE_RANGE,
        rotation_range=SHELL_ROTATION_RANGE,
        colors=list(SHELL_COLORS)
    )


@dataclass
class ClockConfig:
    """Frame pacing for the simulation clock"""
    frame_interval: float = FRAME_INTERVAL  # seconds
    max_step: float = MAX_STEP  # frames


@dataclass
class TankConfig:
    """Complete tank configuration"""
    name: str = "Aquarium Friends"
    seed: Optional[int] = None
    bounds: TankBounds = field(default_factory=TankBounds)
    fish: FishConfig = field(default_factory=FishConfig)
    food: FoodConfig = field(default_factory=FoodConfig)
    bubbles: BubbleConfig = field(default_factory=BubbleConfig)
    starfish: DecorationConfig = field(default_factory=default_starfish)
    shells: DecorationConfig = field(default_factory=default_shells)
    clock: ClockConfig = field(default_factory=ClockConfig)
    description: Optional[str] = None


# ============================================================================
# Render Snapshot
# ============================================================================

@dataclass(frozen=True)
class FishView:
    """Read-only view of a fish for one frame"""
    fish_id: int
    x: float
    y: float
    vx: float
    vy: float
    size: float
    color: str
    is_hungry: bool
    is_happy: bool
    happy_until: float
    last_eaten: float
    is_flipped: bool
    active_behavior: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'fish_id': self.fish_id,
            'x': self.x,
            'y': self.y,
            'vx': self.vx,
            'vy': self.vy,
            'size': self.size,
            'color': self.color,
            'is_hungry': self.is_hungry,
            'is_happy': self.is_happy,
            'happy_until': self.happy_until,
            'last_eaten': self.last_eaten,
            'is_flipped': self.is_flipped,
            'active_behavior': self.active_behavior
        }


@dataclass(frozen=True)
class FoodView:
    """Read-only view of a food particle"""
    food_id: int
    x: float
    y: float
    sink_speed: float

    def to_dict(self) -> Dict[str, Any]:
        return {'food_id': self.food_id, 'x': self.x, 'y': self.y, 'sink_speed': self.sink_speed}


@dataclass(frozen=True)
class BubbleView:
    """Read-only view of a bubble (y measured upward from the floor)"""
    bubble_id: int
    x: float
    y: float
    size: float
    speed: float

    def to_dict(self) -> Dict[str, Any]:
        return {'bubble_id': self.bubble_id, 'x': self.x, 'y': self.y, 'size': self.size, 'speed': self.speed}


@dataclass(frozen=True)
class DecorationView:
    """Read-only view of a starfish or shell"""
    decoration_id: int
    kind: str
    x: float
    y: float
    size: float
    rotation: float
    color: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            'decoration_id': self.decoration_id,
            'kind': self.kind,
            'x': self.x,
            'y': self.y,
            'size': self.size,
            'rotation': self.rotation,
            'color': self.color
        }


@dataclass(frozen=True)
class TankSnapshot:
    """Complete, immutable state of the tank after a tick"""
    tick_count: int
    time: float
    fish: Tuple[FishView, ...]
    food: Tuple[FoodView, ...]
    bubbles: Tuple[BubbleView, ...]
    starfish: Tuple[DecorationView, ...]
    shells: Tuple[DecorationView, ...]

    def to_dict(self) -> Dict[str, Any]:
        """
        Serialize to a JSON-compatible dict.
        Tuples become lists; views serialize themselves.
        """
        return {
            'tick_count': self.tick_count,
            'time': float(self.time),
            'fish': [f.to_dict() for f in self.fish],
            'food': [f.to_dict() for f in self.food],
            'bubbles': [b.to_dict() for b in self.bubbles],
            'starfish': [s.to_dict() for s in self.starfish],
            'shells': [s.to_dict() for s in self.shells]
        }
