"""
Synthetic tank scenarios for tests.

Builds small, seeded tanks and hand-placed fish so behavior tests can set
up exact geometry without going through the random spawners.
"""

import numpy as np
from typing import List, Optional

from aquarium_friends.simulation import TankSimulation
from aquarium_friends.entity import Fish
from aquarium_friends.data_types import TankConfig


def build_tank(
    fish: int = 0,
    bubbles: int = 0,
    starfish: int = 0,
    shells: int = 0,
    seed: int = 42,
    now: float = 0.0,
    use_ckdtree: bool = True,
    config: Optional[TankConfig] = None
) -> TankSimulation:
    """
    Build and populate a tank with the given population counts.

    Args:
        fish, bubbles, starfish, shells: Population counts
        seed: Tank seed for deterministic spawns
        now: Population time (seconds)
        use_ckdtree: Nearest-food backend
        config: Base configuration (counts are overridden)

    Returns:
        Populated simulation
    """
    config = config if config is not None else TankConfig()
    config.seed = seed
    config.fish.count = fish
    config.bubbles.count = bubbles
    config.starfish.count = starfish
    config.shells.count = shells

    sim = TankSimulation(config=config, use_ckdtree=use_ckdtree)
    sim.populate(now)
    return sim


def make_fish(
    fish_id: int,
    x: float,
    y: float,
    vx: float = 0.0,
    vy: float = 0.0,
    hungry: bool = True,
    last_eaten: float = 0.0
) -> Fish:
    """Create a fish at an exact position with an exact velocity."""
    return Fish(
        fish_id=fish_id,
        position=np.array([x, y], dtype=np.float64),
        velocity=np.array([vx, vy], dtype=np.float64),
        size=50.0,
        color='#ff5733',
        is_hungry=hungry,
        last_eaten=last_eaten
    )


def place_fish(sim: TankSimulation, school: List[Fish]):
    """Replace the tank's fish with a hand-built school."""
    sim.fish = list(school)
