"""
Spatial utility functions for the 2D tank plane.

Helper functions for distance, steering, velocity clamping and edge
reflection. All helpers operate on float64 numpy arrays [x, y].
"""

import numpy as np
from typing import Optional, Tuple

from .data_types import TankBounds


def distance_2d(pos_a: np.ndarray, pos_b: np.ndarray) -> float:
    """
    Calculate Euclidean distance between two points.

    Args:
        pos_a: Position [x, y]
        pos_b: Position [x, y]

    Returns:
        Distance in normalized tank units
    """
    diff = pos_a - pos_b
    return float(np.sqrt(np.dot(diff, diff)))


def normalize(vec: np.ndarray) -> Tuple[np.ndarray, float]:
    """
    Normalize vector to unit length.

    Args:
        vec: Vector to normalize [x, y]

    Returns:
        Tuple of (normalized vector, original length). A zero vector
        returns a zero direction and length 0.0 rather than NaN.
    """
    length = float(np.sqrt(np.dot(vec, vec)))

    if length < 1e-9:
        return np.zeros(2, dtype=np.float64), 0.0

    return vec / length, length


def steer_toward(source: np.ndarray, target: np.ndarray, speed: float) -> Tuple[Optional[np.ndarray], float]:
    """
    Velocity of the given magnitude pointing from source at target.

    Args:
        source: Current position [x, y]
        target: Target position [x, y]
        speed: Velocity magnitude

    Returns:
        Tuple of (velocity, distance to target). When source and target
        coincide the velocity is None: there is no bearing to steer along.
    """
    direction, distance = normalize(target - source)
    if distance == 0.0:
        return None, 0.0
    return direction * speed, distance


def clamp_components(velocity: np.ndarray, max_component: float) -> np.ndarray:
    """
    Clamp each velocity component to [-max_component, max_component].

    Args:
        velocity: Velocity vector [vx, vy]
        max_component: Per-axis speed limit

    Returns:
        Clamped velocity (new array)
    """
    return np.clip(velocity, -max_component, max_component)


def reflect_at_bounds(position: np.ndarray, velocity: np.ndarray, bounds: TankBounds) -> np.ndarray:
    """
    Invert velocity components when the position is inside an edge margin.

    There is no position clamp: a fish can overshoot the margin and turns
    back on the following ticks.

    Args:
        position: Position [x, y] after integration (y grows downward)
        velocity: Velocity [vx, vy]
        bounds: Tank extent and margins

    Returns:
        Reflected velocity (new array)
    """
    reflected = velocity.copy()
    x, y = position[0], position[1]

    if x < bounds.margin_x or x > bounds.width - bounds.margin_x:
        reflected[0] = -reflected[0]

    if y < bounds.margin_top or y > bounds.height - bounds.margin_bottom:
        reflected[1] = -reflected[1]

    return reflected
