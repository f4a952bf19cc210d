"""
Entity spawning system.

Builds the initial populations from the tank configuration. Every attribute
is an independent uniform draw within its configured range; colors cycle
through the palette. Each population draws from its own RNG stream so
changing one count does not reshuffle the others.
"""

import numpy as np
from typing import List

from .entity import Fish, Bubble, Decoration
from .data_types import FishConfig, BubbleConfig, DecorationConfig
from .rng import random_in_range


def spawn_fish(config: FishConfig, rng: np.random.Generator, now: float) -> List[Fish]:
    """
    Spawn the initial school.

    Fish start hungry with last_eaten back-dated by a random offset within
    one hunger interval, so they do not all get hungry in lockstep after
    their first meal.

    Args:
        config: Fish population and behavior parameters
        rng: Spawn RNG stream
        now: Current time (seconds)

    Returns:
        List of fish ordered by fish_id
    """
    school = []

    for i in range(config.count):
        position = [random_in_range(rng, config.x_range), random_in_range(rng, config.y_range)]
        velocity = [
            random_in_range(rng, (-config.speed, config.speed)),
            random_in_range(rng, (-config.speed, config.speed))
        ]

        fish = Fish(
            fish_id=i,
            position=position,
            velocity=velocity,
            size=random_in_range(rng, config.size_range),
            color=config.colors[i % len(config.colors)],
            is_hungry=True,
            is_happy=False,
            happy_until=0.0,
            last_eaten=now - random_in_range(rng, (0.0, config.hunger_interval)),
            is_flipped=False
        )

        school.append(fish)

    return school


def spawn_bubbles(config: BubbleConfig, rng: np.random.Generator) -> List[Bubble]:
    """
    Spawn decorative bubbles.

    Args:
        config: Bubble population parameters
        rng: Spawn RNG stream

    Returns:
        List of bubbles ordered by bubble_id
    """
    return [
        Bubble(
            bubble_id=i,
            position=[random_in_range(rng, config.x_range), random_in_range(rng, config.y_range)],
            size=random_in_range(rng, config.size_range),
            speed=random_in_range(rng, config.speed_range)
        )
        for i in range(config.count)
    ]


def spawn_decorations(config: DecorationConfig, rng: np.random.Generator) -> List[Decoration]:
    """Spawn static starfish or shells along the sand."""
    decorations = []

    for i in range(config.count):
        decorations.append(Decoration(
            decoration_id=i,
            kind=config.kind,
            x=random_in_range(rng, config.x_range),
            y=random_in_range(rng, config.y_range),
            size=random_in_range(rng, config.size_range),
            rotation=random_in_range(rng, config.rotation_range),
            color=config.colors[i % len(config.colors)]
        ))

    return decorations
