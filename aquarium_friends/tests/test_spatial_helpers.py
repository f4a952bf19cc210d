"""
Test spatial helper functions (distance, steering, clamp, reflection).
"""

import numpy as np
import pytest

from aquarium_friends.spatial import (
    distance_2d, normalize, steer_toward, clamp_components, reflect_at_bounds
)
from aquarium_friends.data_types import TankBounds


def test_distance_2d():
    assert distance_2d(np.array([0.0, 0.0]), np.array([3.0, 4.0])) == pytest.approx(5.0)
    assert distance_2d(np.array([7.0, 7.0]), np.array([7.0, 7.0])) == 0.0


def test_normalize():
    direction, length = normalize(np.array([0.0, -2.0]))
    assert length == pytest.approx(2.0)
    assert np.allclose(direction, [0.0, -1.0])


def test_normalize_zero_vector():
    direction, length = normalize(np.zeros(2))
    assert length == 0.0
    assert np.all(np.isfinite(direction))
    assert np.allclose(direction, [0.0, 0.0])


def test_steer_toward():
    velocity, distance = steer_toward(np.array([0.0, 0.0]), np.array([3.0, 4.0]), 0.25)

    assert distance == pytest.approx(5.0)
    assert np.allclose(velocity, [0.15, 0.2])
    assert np.linalg.norm(velocity) == pytest.approx(0.25)


def test_steer_toward_same_point():
    velocity, distance = steer_toward(np.array([5.0, 5.0]), np.array([5.0, 5.0]), 0.25)

    assert velocity is None
    assert distance == 0.0


def test_clamp_components():
    clamped = clamp_components(np.array([0.2, -0.3]), 0.1)
    assert np.allclose(clamped, [0.1, -0.1])

    untouched = clamp_components(np.array([0.05, -0.02]), 0.1)
    assert np.allclose(untouched, [0.05, -0.02])


@pytest.mark.parametrize("position, velocity, expected", [
    ([50.0, 50.0], [0.1, 0.1], [0.1, 0.1]),      # open water
    ([4.9, 50.0], [-0.1, 0.1], [0.1, 0.1]),      # left margin
    ([95.1, 50.0], [0.1, 0.1], [-0.1, 0.1]),     # right margin
    ([50.0, 4.9], [0.1, -0.1], [0.1, 0.1]),      # top margin
    ([50.0, 90.1], [0.1, 0.1], [0.1, -0.1]),     # above the sand
    ([4.9, 90.1], [-0.1, 0.1], [0.1, -0.1]),     # corner
    ([5.0, 90.0], [-0.1, 0.1], [-0.1, 0.1]),     # exactly on the margins
])
def test_reflect_at_bounds(position, velocity, expected):
    reflected = reflect_at_bounds(np.array(position), np.array(velocity), TankBounds())
    assert np.allclose(reflected, expected)


def test_reflect_returns_new_array():
    velocity = np.array([-0.1, 0.0])
    reflected = reflect_at_bounds(np.array([1.0, 50.0]), velocity, TankBounds())

    assert reflected is not velocity
    assert velocity[0] == -0.1
