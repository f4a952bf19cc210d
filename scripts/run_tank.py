"""
Headless aquarium runner.

Simulated-time mode (default) runs a fixed number of frames on a manual
clock, dropping food on a schedule. Realtime mode runs the asyncio frame
loop against the wall clock for a number of seconds.

Examples:
    python scripts/run_tank.py --frames 3600 --seed 7 --feed-every 600
    python scripts/run_tank.py --realtime 5 --snapshot-out tank.json
"""

import argparse
import asyncio
import json
import sys
from pathlib import Path

from aquarium_friends.clock import SimulationClock, ManualTimeSource
from aquarium_friends.loader import load_tank_config, DEFAULT_CONFIG_PATH, DataLoadError
from aquarium_friends.simulation import TankSimulation
from aquarium_friends.constants import TICK_SUMMARY_INTERVAL


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the aquarium simulation headless.")
    parser.add_argument('--config', type=Path, default=DEFAULT_CONFIG_PATH,
                        help="Tank YAML file (default: bundled tank.yaml)")
    parser.add_argument('--seed', type=int, default=None,
                        help="Seed override for a reproducible run")
    parser.add_argument('--frames', type=int, default=3600,
                        help="Frames to simulate in simulated-time mode")
    parser.add_argument('--feed-every', type=int, default=600,
                        help="Drop one random food particle every N frames (0 = never)")
    parser.add_argument('--summary-every', type=int, default=TICK_SUMMARY_INTERVAL,
                        help="Print a tick summary every N frames")
    parser.add_argument('--realtime', type=float, default=None,
                        help="Run the wall-clock frame loop for this many seconds instead")
    parser.add_argument('--snapshot-out', type=Path, default=None,
                        help="Write the final snapshot as JSON")
    return parser.parse_args(argv)


def run_simulated(sim: TankSimulation, frames: int, feed_every: int, summary_every: int):
    """Run frames on a manual clock advanced by one frame interval per tick."""
    time_source = ManualTimeSource()
    clock = SimulationClock(sim, time_source=time_source)

    def before_tick(frame: int):
        if frame > 0:
            time_source.advance(clock.frame_interval)
        if feed_every > 0 and frame % feed_every == 0:
            sim.feed_random()

    def after_tick(snapshot):
        if summary_every > 0 and snapshot.tick_count % summary_every == 0:
            sim.print_tick_summary()

    sim.subscribe(after_tick)
    try:
        return clock.run_frames(frames, before_tick=before_tick)
    finally:
        sim.unsubscribe(after_tick)


async def run_realtime(sim: TankSimulation, seconds: float, feed_every: int, summary_every: int):
    """Run the asyncio frame loop against the wall clock."""
    clock = SimulationClock(sim)

    def after_tick(snapshot):
        if feed_every > 0 and snapshot.tick_count % feed_every == 0:
            sim.feed_random()
        if summary_every > 0 and snapshot.tick_count % summary_every == 0:
            sim.print_tick_summary()

    sim.subscribe(after_tick)
    await clock.start()
    try:
        await asyncio.sleep(seconds)
    finally:
        await clock.stop()
        sim.unsubscribe(after_tick)

    return sim.get_snapshot()


def main(argv=None) -> int:
    args = parse_args(argv)

    print("=" * 70)
    print("Aquarium Friends: headless run")
    print("=" * 70)

    try:
        config = load_tank_config(args.config)
    except DataLoadError as e:
        print(f"[FAIL] {e}")
        return 1

    sim = TankSimulation(config=config, seed=args.seed)

    if args.realtime is not None:
        snapshot = asyncio.run(run_realtime(sim, args.realtime, args.feed_every, args.summary_every))
    else:
        snapshot = run_simulated(sim, args.frames, args.feed_every, args.summary_every)

    sim.print_tick_summary()

    if args.snapshot_out is not None:
        with open(args.snapshot_out, 'w') as f:
            json.dump(snapshot.to_dict(), f, indent=2)
        print(f"[OK] Snapshot written to {args.snapshot_out}")

    return 0


if __name__ == '__main__':
    sys.exit(main())
