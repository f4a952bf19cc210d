"""
Entity runtime representation.

Entities are created by spawning.py (or by feed commands, for food) and are
owned by the simulation for their whole lifetime. Positions and velocities
are float64 numpy arrays in the normalized 0-100 tank plane.
"""

import numpy as np
from dataclasses import dataclass
from typing import Optional

from .data_types import FishView, FoodView, BubbleView, DecorationView


def _as_vec2(value) -> np.ndarray:
    if not isinstance(value, np.ndarray):
        return np.array(value, dtype=np.float64)
    return value.astype(np.float64, copy=False)


@dataclass
class Fish:
    """
    Runtime fish in the tank.

    Attributes:
        fish_id: Unique identifier, also the fixed update order
        position: [x, y], y grows downward from the water surface
        velocity: [vx, vy] in units per frame
        size: Display size
        color: Display color (hex string)
        is_hungry: Fish is looking for food
        is_happy: Fish ate recently
        happy_until: Time (seconds) when happiness wears off
        last_eaten: Time (seconds) of the last meal
        is_flipped: Facing left (vx < 0), presentation only
        active_behavior: "seek" or "wander", whichever set velocity last tick
    """
    fish_id: int
    position: np.ndarray
    velocity: np.ndarray
    size: float
    color: str
    is_hungry: bool = True
    is_happy: bool = False
    happy_until: float = 0.0
    last_eaten: float = 0.0
    is_flipped: bool = False
    active_behavior: Optional[str] = None

    def __post_init__(self):
        """Ensure position and velocity are float64 arrays"""
        self.position = _as_vec2(self.position)
        self.velocity = _as_vec2(self.velocity)

    def update_position(self, step: float = 1.0):
        """
        Update position using current velocity.

        Args:
            step: Elapsed time in frames
        """
        self.position += self.velocity * step

    def eat(self, now: float, happy_duration: float):
        """Record a meal: no longer hungry, happy until now + happy_duration."""
        self.is_hungry = False
        self.last_eaten = now
        self.is_happy = True
        self.happy_until = now + happy_duration

    def to_view(self) -> FishView:
        return FishView(
            fish_id=self.fish_id,
            x=float(self.position[0]),
            y=float(self.position[1]),
            vx=float(self.velocity[0]),
            vy=float(self.velocity[1]),
            size=float(self.size),
            color=self.color,
            is_hungry=self.is_hungry,
            is_happy=self.is_happy,
            happy_until=float(self.happy_until),
            last_eaten=float(self.last_eaten),
            is_flipped=self.is_flipped,
            active_behavior=self.active_behavior
        )

    def to_dict(self) -> dict:
        """
        Serialize fish to JSON-compatible dict.

        Returns:
            Dict with all fish fields
        """
        return self.to_view().to_dict()


@dataclass
class Food:
    """Sinking food particle. Position y grows downward."""
    food_id: int
    position: np.ndarray
    sink_speed: float

    def __post_init__(self):
        self.position = _as_vec2(self.position)

    def sink(self, step: float = 1.0):
        self.position[1] += self.sink_speed * step

    def to_view(self) -> FoodView:
        return FoodView(
            food_id=self.food_id,
            x=float(self.position[0]),
            y=float(self.position[1]),
            sink_speed=float(self.sink_speed)
        )

    def to_dict(self) -> dict:
        return self.to_view().to_dict()


@dataclass
class Bubble:
    """
    Decorative bubble.

    Unlike fish and food, y is the height above the floor: bubbles rise by
    increasing y and wrap back below the floor once past the surface.
    """
    bubble_id: int
    position: np.ndarray
    size: float
    speed: float

    def __post_init__(self):
        self.position = _as_vec2(self.position)

    def to_view(self) -> BubbleView:
        return BubbleView(
            bubble_id=self.bubble_id,
            x=float(self.position[0]),
            y=float(self.position[1]),
            size=float(self.size),
            speed=float(self.speed)
        )

    def to_dict(self) -> dict:
        return self.to_view().to_dict()


@dataclass(frozen=True)
class Decoration:
    """Static starfish or shell, never mutated after spawning"""
    decoration_id: int
    kind: str  # "starfish" or "shell"
    x: float
    y: float
    size: float
    rotation: float  # degrees
    color: str

    def to_view(self) -> DecorationView:
        return DecorationView(
            decoration_id=self.decoration_id,
            kind=self.kind,
            x=self.x,
            y=self.y,
            size=self.size,
            rotation=self.rotation,
            color=self.color
        )

    def to_dict(self) -> dict:
        return self.to_view().to_dict()
