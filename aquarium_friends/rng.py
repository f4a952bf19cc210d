"""
Deterministic RNG utilities for the aquarium simulation.

Uses SHA256 hashing to derive stable seeds from hierarchical components
(tank seed, stream name). All randomness uses numpy.random.Generator(PCG64)
so a seeded tank replays identically. An unseeded tank draws fresh entropy.
"""

import hashlib
import numpy as np
from typing import Any, Optional, Tuple


def make_seed(*components: Any) -> int:
    """
    Generate deterministic 64-bit seed from hierarchical components.

    Args:
        *components: Seed components (tank_seed, stream name, index, etc.)

    Returns:
        64-bit integer seed for numpy RNG

    Example:
        wander_seed = make_seed(tank_seed, "wander")
    """
    hash_input = ":".join(str(c) for c in components)

    hash_bytes = hashlib.sha256(hash_input.encode('utf-8')).digest()
    seed = int.from_bytes(hash_bytes[:8], byteorder='big')

    return seed


def make_rng(tank_seed: Optional[int], stream: str) -> np.random.Generator:
    """
    Create the generator for one named random stream.

    Separate streams keep, for example, feed commands from perturbing
    the wander jitter of a seeded run.

    Args:
        tank_seed: Tank seed, or None for a non-reproducible run
        stream: Stream name ("spawn-fish", "wander", "feed", ...)

    Returns:
        PCG64-backed numpy Generator
    """
    if tank_seed is None:
        return np.random.Generator(np.random.PCG64())
    return np.random.Generator(np.random.PCG64(make_seed(tank_seed, stream)))


def random_in_range(rng: np.random.Generator, value_range: Tuple[float, float]) -> float:
    """Uniform draw from [min, max) as a builtin float."""
    low, high = value_range
    return float(rng.uniform(low, high))
