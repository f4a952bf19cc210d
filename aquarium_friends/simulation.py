"""
Aquarium simulation kernel.

Main simulation class that owns every entity collection, runs the per-tick
update and publishes immutable snapshots for renderers.
"""

import numpy as np
import os
import time
from typing import Callable, List, Optional

from .entity import Fish, Bubble, Decoration, Food
from .data_types import TankConfig, TankSnapshot
from .spawning import spawn_fish, spawn_bubbles, spawn_decorations
from .food import FoodManager
from .behavior import update_fish_behavior, BEHAVIOR_SEEK
from .spatial_queries import FoodIndex
from .rng import make_rng, random_in_range
from .constants import TICK_TIME_WINDOW, USE_CKDTREE

SnapshotListener = Callable[[TankSnapshot], None]


class TankSimulation:
    """
    Main simulation class for the aquarium.

    Owns fish, food, bubbles and decorations. All state lives in these
    collections, so the driving clock can stop and restart freely.
    """

    def __init__(
        self,
        config: Optional[TankConfig] = None,
        seed: Optional[int] = None,
        use_ckdtree: bool = USE_CKDTREE
    ):
        """
        Initialize an empty tank. Populations are spawned by populate(),
        which the first tick calls automatically.

        Args:
            config: Tank configuration (defaults from constants.py if None)
            seed: Optional seed override (falls back to config.seed)
            use_ckdtree: Nearest-food backend (see spatial_queries.py)
        """
        self.config: TankConfig = config if config is not None else TankConfig()
        self.seed: Optional[int] = seed if seed is not None else self.config.seed

        # Independent random streams
        self._fish_rng = make_rng(self.seed, "spawn-fish")
        self._bubble_spawn_rng = make_rng(self.seed, "spawn-bubbles")
        self._starfish_rng = make_rng(self.seed, "spawn-starfish")
        self._shell_rng = make_rng(self.seed, "spawn-shells")
        self._wander_rng = make_rng(self.seed, "wander")
        self._bubble_rng = make_rng(self.seed, "bubbles")
        self._feed_rng = make_rng(self.seed, "feed")

        # Simulation state
        self.fish: List[Fish] = []
        self.food = FoodManager(self.config.food)
        self.bubbles: List[Bubble] = []
        self.starfish: List[Decoration] = []
        self.shells: List[Decoration] = []
        self.tick_count: int = 0
        self.current_time: float = 0.0
        self._populated: bool = False

        # Spatial indexing
        self.food_index = FoodIndex(use_ckdtree=use_ckdtree)

        # Render boundary
        self._snapshot: Optional[TankSnapshot] = None
        self._listeners: List[SnapshotListener] = []

        # Performance metrics
        self._tick_times: List[float] = []
        self._tick_time_sum: float = 0.0
        self._tick_time_window: int = TICK_TIME_WINDOW

        # Per-tick telemetry
        self.meals_last_tick: int = 0
        self.food_lost_last_tick: int = 0

    @property
    def is_populated(self) -> bool:
        return self._populated

    def populate(self, now: float):
        """
        Spawn fish, bubbles, starfish and shells. Later calls are no-ops.

        Args:
            now: Current time (seconds), used to back-date fish meals
        """
        if self._populated:
            return

        cfg = self.config
        self.fish = spawn_fish(cfg.fish, self._fish_rng, now)
        self.bubbles = spawn_bubbles(cfg.bubbles, self._bubble_spawn_rng)
        self.starfish = spawn_decorations(cfg.starfish, self._starfish_rng)
        self.shells = spawn_decorations(cfg.shells, self._shell_rng)
        self.current_time = now
        self._populated = True

        print(f"[OK] Tank populated: {len(self.fish)} fish, {len(self.bubbles)} bubbles, "
              f"{len(self.starfish)} starfish, {len(self.shells)} shells (seed={self.seed})")

    # ========================================================================
    # Feed commands
    # ========================================================================

    def feed_random(self) -> Food:
        """Drop one particle at a random x near the water surface."""
        food_cfg = self.config.food
        x = random_in_range(self._feed_rng, food_cfg.random_x_range)
        return self.food.add_food(x, food_cfg.random_y)

    def feed_at(self, x: float, y: float) -> Optional[Food]:
        """
        Drop one particle at (x, y) in normalized coordinates.

        Points outside the water (off the sides, above the top, or below
        feed_max_y where the sand starts) are ignored.

        Returns:
            The new particle, or None if the point was ignored
        """
        bounds = self.config.bounds
        if not (0.0 <= x <= bounds.width):
            return None
        if not (0.0 <= y <= self.config.food.feed_max_y):
            return None
        return self.food.add_food(x, y)

    # ========================================================================
    # Tick
    # ========================================================================

    def tick(self, now: Optional[float] = None, step: float = 1.0) -> TankSnapshot:
        """
        Advance the simulation by one frame.

        Order: bubbles, food (sink and prune), fish pass in fish_id order,
        removal of food eaten this tick, snapshot publication. The same
        `now` is used for every timer comparison within the tick.

        Args:
            now: Tick time in seconds (defaults to time.time())
            step: Elapsed time in frames (1.0 at the nominal frame rate)

        Returns:
            The snapshot published for this tick
        """
        start_time = time.perf_counter()

        if now is None:
            now = time.time()
        if not self._populated:
            self.populate(now)
        self.current_time = now

        self._advance_bubbles(step)
        self.food_lost_last_tick = self.food.advance(step)

        self.food_index.build(self.food.particles)

        # Scratch set, rebuilt every tick
        claimed = set()
        for fish in self.fish:
            update_fish_behavior(
                fish,
                self.config.fish,
                self.config.bounds,
                self.food_index,
                claimed,
                now,
                self._wander_rng,
                step
            )

        self.meals_last_tick = self.food.remove_eaten(claimed)

        self.tick_count += 1

        elapsed = time.perf_counter() - start_time
        self._record_tick_time(elapsed)

        # Debug invariant check (zero perf impact when env var not set)
        if os.getenv('SIM_DEBUG_INVARIANTS') == '1':
            self._check_invariants()

        return self._publish()

    def _advance_bubbles(self, step: float):
        """Raise bubbles; past the surface they restart below the floor at a new x."""
        cfg = self.config.bubbles
        surface = self.config.bounds.height

        for bubble in self.bubbles:
            bubble.position[1] += bubble.speed * step
            if bubble.position[1] > surface:
                bubble.position[1] = cfg.reset_y
                bubble.position[0] = random_in_range(self._bubble_rng, cfg.x_range)

    def _check_invariants(self):
        floor_y = self.config.food.floor_y
        limit = max(self.config.fish.speed, self.config.fish.hungry_speed)

        for fish in self.fish:
            assert not (fish.is_hungry and fish.is_happy), \
                f"Fish {fish.fish_id} is hungry and happy at once"
            assert np.all(np.isfinite(fish.position)), \
                f"Fish {fish.fish_id} has non-finite position {fish.position}"
            assert np.all(np.abs(fish.velocity) <= limit + 1e-9), \
                f"Fish {fish.fish_id} velocity {fish.velocity} exceeds {limit}"

        for food in self.food:
            assert food.position[1] < floor_y, \
                f"Food {food.food_id} at y={food.position[1]} is below the floor"

    # ========================================================================
    # Render boundary
    # ========================================================================

    def subscribe(self, listener: SnapshotListener):
        """Register a callback that receives every published snapshot."""
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: SnapshotListener):
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _build_snapshot(self) -> TankSnapshot:
        return TankSnapshot(
            tick_count=self.tick_count,
            time=self.current_time,
            fish=tuple(f.to_view() for f in self.fish),
            food=tuple(f.to_view() for f in self.food),
            bubbles=tuple(b.to_view() for b in self.bubbles),
            starfish=tuple(s.to_view() for s in self.starfish),
            shells=tuple(s.to_view() for s in self.shells)
        )

    def _publish(self) -> TankSnapshot:
        self._snapshot = self._build_snapshot()
        for listener in list(self._listeners):
            listener(self._snapshot)
        return self._snapshot

    def get_snapshot(self) -> TankSnapshot:
        """
        Get the snapshot published by the last tick.

        Before the first tick, a snapshot of the current state is built.
        Feed commands issued since the last tick show up after the next one.
        """
        if self._snapshot is None:
            return self._build_snapshot()
        return self._snapshot

    # ========================================================================
    # Timing
    # ========================================================================

    def get_tick_stats(self) -> dict:
        """
        Get current tick timing statistics.

        Returns:
            Dict with tick_count, avg_tick_time_ms, last_tick_time_ms
        """
        if not self._tick_times:
            return {
                'tick_count': self.tick_count,
                'avg_tick_time_ms': 0.0,
                'last_tick_time_ms': 0.0
            }

        avg_time = self._tick_time_sum / len(self._tick_times)
        last_time = self._tick_times[-1]

        return {
            'tick_count': self.tick_count,
            'avg_tick_time_ms': avg_time * 1000.0,
            'last_tick_time_ms': last_time * 1000.0
        }

    def _record_tick_time(self, elapsed: float):
        """
        Record tick timing for rolling average.

        Args:
            elapsed: Tick time in seconds
        """
        self._tick_times.append(elapsed)
        self._tick_time_sum += elapsed

        # Maintain rolling window
        if len(self._tick_times) > self._tick_time_window:
            removed = self._tick_times.pop(0)
            self._tick_time_sum -= removed

    def print_tick_summary(self):
        """Print tick summary to console (lightweight monitoring)"""
        stats = self.get_tick_stats()
        hungry = sum(1 for f in self.fish if f.is_hungry)
        happy = sum(1 for f in self.fish if f.is_happy)
        seeking = sum(1 for f in self.fish if f.active_behavior == BEHAVIOR_SEEK)
        print(f"Tick {stats['tick_count']:5d} | "
              f"Avg: {stats['avg_tick_time_ms']:6.3f} ms | "
              f"Last: {stats['last_tick_time_ms']:6.3f} ms | "
              f"Fish: {len(self.fish)} (hungry={hungry} happy={happy} seeking={seeking}) | "
              f"Food: {len(self.food)} (eaten={self.food.total_eaten} lost={self.food.total_lost})")
