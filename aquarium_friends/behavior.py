"""
Fish behavior engine.

Per-fish, per-tick decision between two behaviors:
- seek: hungry and unclaimed food exists; swim straight at the nearest
  particle at hungry speed and eat it once within reach
- wander: everything else; bounded random walk in velocity space

Followed by integration, edge reflection and the facing flag. Fish are
evaluated one at a time in a fixed order; a particle claimed by an earlier
fish is invisible to later fish in the same tick.
"""

import numpy as np
from typing import Optional, Set, Tuple

from .entity import Fish, Food
from .data_types import FishConfig, TankBounds
from .spatial import steer_toward, clamp_components, reflect_at_bounds
from .spatial_queries import FoodIndex

BEHAVIOR_SEEK = "seek"
BEHAVIOR_WANDER = "wander"


def update_timers(fish: Fish, now: float, config: FishConfig):
    """
    Apply hunger and happiness timers.

    A satiated fish turns hungry once more than hunger_interval has passed
    since its last meal; a happy fish calms down once now passes happy_until.
    """
    if not fish.is_hungry and now - fish.last_eaten > config.hunger_interval:
        fish.is_hungry = True

    if fish.is_happy and now > fish.happy_until:
        fish.is_happy = False


def select_target(fish: Fish, food_index: FoodIndex, claimed: Set[int]) -> Tuple[Optional[Food], float]:
    """
    Nearest food particle not yet claimed this tick.

    Returns:
        (food, distance), or (None, inf) if nothing is left to chase
    """
    return food_index.nearest_unclaimed(fish.position, claimed)


def seek_food(
    fish: Fish,
    target: Food,
    distance: float,
    now: float,
    config: FishConfig,
    claimed: Set[int]
) -> bool:
    """
    Steer at target with hungry speed and eat it when within reach.

    The hungry speed overrides the wander clamp. A fish sitting exactly on
    its target has no bearing: velocity is left as is and the food counts
    as reached.

    Args:
        fish: Hungry fish
        target: Nearest unclaimed particle
        distance: Distance from fish to target
        now: Tick time (seconds)
        config: Fish parameters
        claimed: Per-tick claimed set, updated in place on eating

    Returns:
        True if the fish ate the target
    """
    velocity, _ = steer_toward(fish.position, target.position, config.hungry_speed)
    arrived = velocity is None

    if not arrived:
        fish.velocity = velocity

    if arrived or distance < config.eat_distance:
        claimed.add(target.food_id)
        fish.eat(now, config.happy_duration)
        return True

    return False


def wander(fish: Fish, config: FishConfig, rng: np.random.Generator):
    """
    Random acceleration on each velocity component, then clamp each
    component to [-speed, speed].
    """
    jitter = rng.uniform(-config.wander_jitter, config.wander_jitter, size=2)
    fish.velocity = clamp_components(fish.velocity + jitter, config.speed)


def update_fish_behavior(
    fish: Fish,
    config: FishConfig,
    bounds: TankBounds,
    food_index: FoodIndex,
    claimed: Set[int],
    now: float,
    rng: np.random.Generator,
    step: float = 1.0
) -> str:
    """
    Run one tick for one fish.

    Updates timers, velocity (seek or wander), position, edge reflection
    and is_flipped, in that order.

    Args:
        fish: Fish to update
        config: Fish parameters
        bounds: Tank extent and reflection margins
        food_index: Food index built for this tick
        claimed: food_ids eaten earlier this tick (updated in place)
        now: Tick time (seconds), identical for every fish in the tick
        rng: Wander RNG stream
        step: Elapsed time in frames

    Returns:
        Behavior that governed the velocity update ("seek" or "wander")
    """
    update_timers(fish, now, config)

    behavior = BEHAVIOR_WANDER
    if fish.is_hungry:
        target, distance = select_target(fish, food_index, claimed)
        if target is not None:
            seek_food(fish, target, distance, now, config, claimed)
            behavior = BEHAVIOR_SEEK

    if behavior == BEHAVIOR_WANDER:
        wander(fish, config, rng)

    fish.update_position(step)
    fish.velocity = reflect_at_bounds(fish.position, fish.velocity, bounds)
    fish.is_flipped = bool(fish.velocity[0] < 0)
    fish.active_behavior = behavior

    return behavior
