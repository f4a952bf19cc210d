"""
Food lifecycle manager.

Tracks sinking food particles from the moment they are dropped until they
are eaten or lost to the floor. The live collection keeps insertion order,
which is also the tie-break order for nearest-food queries.
"""

import numpy as np
from typing import Iterable, List

from .entity import Food
from .data_types import FoodConfig


class FoodManager:
    """Owns the live food particles of one tank."""

    def __init__(self, config: FoodConfig):
        self.config = config
        self.particles: List[Food] = []
        self._next_id: int = 0

        # Counters for tick summaries
        self.total_added: int = 0
        self.total_eaten: int = 0
        self.total_lost: int = 0

    def __len__(self) -> int:
        return len(self.particles)

    def __iter__(self):
        return iter(self.particles)

    def add_food(self, x: float, y: float) -> Food:
        """
        Drop a new particle at (x, y) with the configured sink speed.

        When max_food is set and reached, the oldest particle is evicted
        so the new one is always added.

        Returns:
            The new particle
        """
        food = Food(
            food_id=self._next_id,
            position=np.array([x, y], dtype=np.float64),
            sink_speed=self.config.sink_speed
        )
        self._next_id += 1

        max_food = self.config.max_food
        if max_food is not None and len(self.particles) >= max_food:
            evicted = len(self.particles) - max_food + 1
            self.particles = self.particles[evicted:]
            self.total_lost += evicted

        self.particles.append(food)
        self.total_added += 1
        return food

    def advance(self, step: float = 1.0) -> int:
        """
        Sink every particle and prune those that reached the floor.

        Args:
            step: Elapsed time in frames

        Returns:
            Number of particles lost to the floor
        """
        floor_y = self.config.floor_y
        kept = []

        for food in self.particles:
            food.sink(step)
            if food.position[1] < floor_y:
                kept.append(food)

        lost = len(self.particles) - len(kept)
        self.particles = kept
        self.total_lost += lost
        return lost

    def remove_eaten(self, food_ids: Iterable[int]) -> int:
        """
        Remove particles eaten this tick.

        Returns:
            Number of particles removed
        """
        eaten = set(food_ids)
        if not eaten:
            return 0

        before = len(self.particles)
        self.particles = [f for f in self.particles if f.food_id not in eaten]
        removed = before - len(self.particles)
        self.total_eaten += removed
        return removed
