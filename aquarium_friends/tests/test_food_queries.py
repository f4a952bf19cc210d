"""
Test nearest-unclaimed-food queries on both index backends.
"""

import numpy as np
import pytest

from aquarium_friends.entity import Food
from aquarium_friends.spatial_queries import FoodIndex


def _food(points):
    return [Food(food_id=i, position=p, sink_speed=0.1) for i, p in enumerate(points)]


@pytest.fixture(params=[True, False], ids=["ckdtree", "linear"])
def use_ckdtree(request):
    return request.param


def test_empty_index(use_ckdtree):
    index = FoodIndex(use_ckdtree=use_ckdtree)
    index.build([])

    food, distance = index.nearest_unclaimed(np.array([50.0, 50.0]), set())

    assert len(index) == 0
    assert food is None
    assert distance == float('inf')


def test_nearest(use_ckdtree):
    index = FoodIndex(use_ckdtree=use_ckdtree)
    index.build(_food([[10.0, 10.0], [52.0, 50.0], [90.0, 90.0]]))

    food, distance = index.nearest_unclaimed(np.array([50.0, 50.0]), set())

    assert food.food_id == 1
    assert distance == pytest.approx(2.0)


def test_claimed_particles_are_skipped(use_ckdtree):
    index = FoodIndex(use_ckdtree=use_ckdtree)
    index.build(_food([[51.0, 50.0], [53.0, 50.0], [80.0, 50.0]]))

    food, distance = index.nearest_unclaimed(np.array([50.0, 50.0]), {0, 1})

    assert food.food_id == 2
    assert distance == pytest.approx(30.0)


def test_all_claimed(use_ckdtree):
    index = FoodIndex(use_ckdtree=use_ckdtree)
    index.build(_food([[51.0, 50.0], [53.0, 50.0]]))

    food, distance = index.nearest_unclaimed(np.array([50.0, 50.0]), {0, 1})

    assert food is None
    assert distance == float('inf')


def test_ring_tie_goes_to_first(use_ckdtree):
    """Four particles at the same distance: the first inserted wins"""
    ring = [[50.0, 53.0], [53.0, 50.0], [50.0, 47.0], [47.0, 50.0]]
    index = FoodIndex(use_ckdtree=use_ckdtree)
    index.build(_food(ring))

    food, _ = index.nearest_unclaimed(np.array([50.0, 50.0]), set())
    assert food.food_id == 0

    food, _ = index.nearest_unclaimed(np.array([50.0, 50.0]), {0})
    assert food.food_id == 1

    food, _ = index.nearest_unclaimed(np.array([50.0, 50.0]), {0, 1, 2})
    assert food.food_id == 3


def test_index_is_a_snapshot(use_ckdtree):
    particles = _food([[50.0, 55.0]])
    index = FoodIndex(use_ckdtree=use_ckdtree)
    index.build(particles)

    particles[0].position[1] = 90.0
    _, distance = index.nearest_unclaimed(np.array([50.0, 50.0]), set())

    assert distance == pytest.approx(5.0)


def test_backends_agree_on_random_food():
    """200 particles, 50 queries, growing claimed sets"""
    rng = np.random.default_rng(99)
    particles = _food(rng.uniform(0.0, 100.0, size=(200, 2)))

    tree = FoodIndex(use_ckdtree=True)
    scan = FoodIndex(use_ckdtree=False)
    tree.build(particles)
    scan.build(particles)

    claimed = set()
    for _ in range(50):
        query = rng.uniform(0.0, 100.0, size=2)

        food_a, dist_a = tree.nearest_unclaimed(query, claimed)
        food_b, dist_b = scan.nearest_unclaimed(query, claimed)

        assert food_a.food_id == food_b.food_id
        assert dist_a == pytest.approx(dist_b)
        claimed.add(food_a.food_id)


def test_build_time_recorded():
    index = FoodIndex(use_ckdtree=True)
    index.build(_food([[1.0, 1.0], [2.0, 2.0]]))

    assert len(index) == 2
    assert index.last_build_ms >= 0.0
