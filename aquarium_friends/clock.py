"""
Simulation clock.

Drives TankSimulation.tick() once per display frame on a single-threaded
asyncio loop. Each tick reads the time source once; the position step is
the elapsed time expressed in frames, capped so a stalled loop does not
teleport fish across the tank.

run_frames() drives the same tick path synchronously for headless runs
and tests.
"""

import asyncio
import time
from typing import Callable, Optional

from .simulation import TankSimulation
from .data_types import ClockConfig, TankSnapshot

TimeSource = Callable[[], float]


class ManualTimeSource:
    """Time source that only moves when told to (headless runs, tests)."""

    def __init__(self, start: float = 0.0):
        self.now = float(start)

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


class SimulationClock:
    """
    Cooperative frame loop for a TankSimulation.

    The clock holds no simulation state: stopping and starting again resumes
    from whatever the entity collections contain.
    """

    def __init__(
        self,
        simulation: TankSimulation,
        time_source: TimeSource = time.time,
        config: Optional[ClockConfig] = None
    ):
        """
        Args:
            simulation: Simulation to drive
            time_source: Returns the current time in seconds
            config: Frame pacing (defaults to the simulation's clock config)
        """
        self.simulation = simulation
        self.time_source = time_source
        self.config: ClockConfig = config if config is not None else simulation.config.clock

        self._task: Optional[asyncio.Task] = None
        self._running: bool = False
        self._last_tick_time: Optional[float] = None

    @property
    def frame_interval(self) -> float:
        return self.config.frame_interval

    @property
    def is_running(self) -> bool:
        return self._running

    def _step_for(self, now: float) -> float:
        """Elapsed frames since the previous tick, 1.0 for the first tick."""
        if self._last_tick_time is None:
            return 1.0
        elapsed = max(0.0, now - self._last_tick_time)
        return min(elapsed / self.frame_interval, self.config.max_step)

    def tick_once(self) -> TankSnapshot:
        """Read the time source once and run one simulation tick."""
        now = self.time_source()
        step = self._step_for(now)
        self._last_tick_time = now
        return self.simulation.tick(now, step)

    # ========================================================================
    # Async lifecycle
    # ========================================================================

    async def start(self) -> None:
        """Populate the tank if needed and start ticking."""
        if self._running:
            print("[WARN] Simulation clock already running")
            return

        self.simulation.populate(self.time_source())
        self._last_tick_time = None
        self._running = True
        self._task = asyncio.create_task(self._run_loop(), name="aquarium_clock")
        self._task.add_done_callback(self._on_loop_done)
        print(f"[OK] Simulation clock started ({1.0 / self.frame_interval:.0f} fps)")

    async def stop(self) -> None:
        """
        Stop ticking. No tick runs after this returns.

        Raises:
            Exception: Whatever tick error ended the loop, if it died on its own
        """
        if self._task is None:
            return

        self._running = False
        task = self._task
        self._task = None
        self._last_tick_time = None

        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass

        print(f"[OK] Simulation clock stopped at tick {self.simulation.tick_count}")

    def _on_loop_done(self, task: asyncio.Task) -> None:
        """Report a loop that ended on a tick error; stop() still re-raises it."""
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            print(f"[WARN] Simulation clock loop died at tick {self.simulation.tick_count}: {error!r}")

    async def _run_loop(self) -> None:
        """Main frame loop: tick, then sleep until the next frame is due."""
        loop = asyncio.get_running_loop()
        next_frame = loop.time()

        try:
            while self._running:
                self.tick_once()

                next_frame += self.frame_interval
                delay = next_frame - loop.time()
                if delay < 0:
                    # Running behind: skip missed frames, the step covers them
                    next_frame = loop.time()
                    delay = 0.0
                await asyncio.sleep(delay)
        finally:
            self._running = False

    # ========================================================================
    # Synchronous driving
    # ========================================================================

    def run_frames(
        self,
        frames: int,
        before_tick: Optional[Callable[[int], None]] = None
    ) -> TankSnapshot:
        """
        Run a fixed number of ticks without an event loop.

        Args:
            frames: Number of ticks
            before_tick: Optional callback(frame_index) run before each tick,
                         e.g. to advance a ManualTimeSource or issue feeds

        Returns:
            Snapshot after the last tick
        """
        if self._running:
            raise RuntimeError("Cannot run frames while the clock loop is running")

        for frame in range(frames):
            if before_tick is not None:
                before_tick(frame)
            self.tick_once()

        return self.simulation.get_snapshot()
