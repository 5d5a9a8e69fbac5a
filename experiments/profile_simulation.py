"""Profile tick_world() to see where a chemotaxis tick spends its time."""

import cProfile
import pstats
import time
from io import StringIO

from chemotaxis.config import SimulationSettings
from chemotaxis.engine.simulation import tick_world
from chemotaxis.model.world import World, create_world


def create_test_world(seed: int = 42) -> World:
    """Create the reference scenario with a fixed seed."""
    return create_world(SimulationSettings(seed=seed))


def measure_tick_rate(world: World, num_ticks: int) -> tuple[float, int]:
    """Measure ticks per second and peak live particle count."""
    start_time = time.perf_counter()
    max_live = 0

    for _ in range(num_ticks):
        snapshot = tick_world(world)
        max_live = max(max_live, snapshot.live_count)

    elapsed = time.perf_counter() - start_time
    ticks_per_sec = num_ticks / elapsed if elapsed > 0 else 0
    return ticks_per_sec, max_live


def profile_tick_world(world: World, num_ticks: int) -> str:
    """Profile tick_world and return the top functions by cumulative time."""
    profiler = cProfile.Profile()

    profiler.enable()
    for _ in range(num_ticks):
        tick_world(world)
    profiler.disable()

    stats_stream = StringIO()
    stats = pstats.Stats(profiler, stream=stats_stream)
    stats.sort_stats("cumulative")
    stats.print_stats(20)

    return stats_stream.getvalue()


def measure_probe_share(world: World, num_ticks: int) -> float:
    """Fraction of information-particle updates that probed the ligand field."""
    probes = 0
    updates = 0
    for _ in range(num_ticks):
        due = sum(1 for p in world.information_particles if p.tumble_timer <= 0)
        live = len(world.information_particles)
        tick_world(world)
        probes += due
        updates += live
    return probes / updates if updates else 0.0


def main() -> None:
    print("=" * 60)
    print("Chemotaxis tick profiling")
    print("=" * 60)

    world = create_test_world()
    rate, max_live = measure_tick_rate(world, 200)
    print(f"Reference scenario: {rate:.1f} ticks/sec, peak live particles {max_live}")

    share = measure_probe_share(world, 200)
    print(f"Stimulus probes per particle update: {share:.2%}")

    print()
    print(profile_tick_world(create_test_world(), 100))


if __name__ == "__main__":
    main()
