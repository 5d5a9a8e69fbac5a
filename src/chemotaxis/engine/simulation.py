"""World simulation tick driver: executes one chemotaxis tick.

Tick sequence:
1. Re-transmit a batch of information particles every retransmit_interval ticks
2. Tumble and run every chemotactic particle
3. For every information particle: sense (lazily), tumble, run, try to bind
4. Compact: drop released particles, returning receptors held by bound ones
5. Increment world.tick
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from chemotaxis.engine.stimulus import count_in_range

if TYPE_CHECKING:
    from chemotaxis.model.particle import InformationParticle
    from chemotaxis.model.world import World

logger = logging.getLogger(__name__)

TickObserver = Callable[["TickSnapshot"], None]


@dataclass(frozen=True)
class TickSnapshot:
    """Observable summary of the world after one tick.

    Attributes:
        tick: Ticks completed, i.e. world.tick after the increment.
        bound_count: Receptors occupied (max_receptors - free_receptors).
        live_count: Information particles still in the live set.
        free_receptors: Receptors available for binding.
        transmitted: Information particles emitted during this tick.
        terminated: Information particles dropped during compaction.
    """

    tick: int
    bound_count: int
    live_count: int
    free_receptors: int
    transmitted: int = 0
    terminated: int = 0


def tick_world(world: World) -> TickSnapshot:
    """Execute one simulation tick.

    Args:
        world: The world to advance

    Returns:
        Snapshot of the world after the tick.

    Side effects:
        - Mutates world.tick
        - Mutates both particle collections
        - Mutates the receiver's receptor pool

    Raises:
        SimulationError: If the random source fails or a heading becomes
            non-finite. The tick is abandoned where it stands.
    """
    # 1. Periodic re-supply
    transmitted = _retransmit(world)

    # 2. Ligand field always diffuses
    _advance_chemotactic_field(world)

    # 3. Sense, tumble, run, bind
    _advance_information_particles(world)

    # 4. Compact the live set
    terminated = _compact(world)

    # 5. Increment world.tick
    world.tick += 1

    if world.tick % world.log_interval == 0:
        logger.debug(
            "Simulation tick %d: live=%d, bound=%d, free=%d",
            world.tick,
            len(world.information_particles),
            world.receiver.bound_count,
            world.receiver.free_receptors,
        )

    return TickSnapshot(
        tick=world.tick,
        bound_count=world.receiver.bound_count,
        live_count=len(world.information_particles),
        free_receptors=world.receiver.free_receptors,
        transmitted=transmitted,
        terminated=terminated,
    )


def _retransmit(world: World) -> int:
    """Append a fresh transmitter batch when the tick is due."""
    if world.tick % world.retransmit_interval != 0:
        return 0
    batch = world.transmitter.transmit(world.rng)
    world.information_particles.extend(batch)
    logger.info("Tick %d: transmitted %d information particles", world.tick, len(batch))
    return len(batch)


def _advance_chemotactic_field(world: World) -> None:
    for ligand in world.chemotactic_particles:
        ligand.tumble(world.rng)
        ligand.run()


def _advance_information_particles(world: World) -> None:
    """Move every information particle and resolve receptor binding.

    Particles are processed one at a time in list order, so the receptor pool
    is only ever touched sequentially.
    """
    receiver = world.receiver
    for particle in world.information_particles:
        current_stimulus = sample_stimulus(world, particle)
        particle.tumble(current_stimulus, world.rng)
        particle.run()
        if not particle.stopped and receiver.rect.has_intersection(particle.rect):
            if receiver.receive():
                particle.bind()


def sample_stimulus(world: World, particle: InformationParticle) -> int:
    """Stimulus for this tick, probing the field only when the particle may tumble.

    While tumble_timer is positive the last sensed value is reused.
    """
    if particle.tumble_timer <= 0:
        return count_in_range(particle, world.chemotactic_particles, world.sensing_range)
    return particle.stimulus


def _compact(world: World) -> int:
    """Drop released particles, returning receptors for bound ones first.

    Partition and release are separate passes so no receptor is touched while
    the live list is being iterated.
    """
    keep: list[InformationParticle] = []
    terminate: list[InformationParticle] = []
    for particle in world.information_particles:
        (terminate if particle.released else keep).append(particle)

    for particle in terminate:
        if particle.stopped:
            world.receiver.release()

    world.information_particles = keep
    world.receiver.pool.check_invariant()
    return len(terminate)


def run_simulation(
    world: World,
    ticks: int,
    observers: Iterable[TickObserver] = (),
    should_stop: Callable[[], bool] | None = None,
) -> list[TickSnapshot]:
    """Advance the world for up to `ticks` ticks.

    Args:
        world: The world to advance.
        ticks: Maximum number of ticks to run.
        observers: Callables notified with every snapshot. They must not
            mutate the world.
        should_stop: Polled before each tick; returning True ends the run.

    Returns:
        Snapshots of every completed tick, in order.
    """
    observers = list(observers)
    snapshots: list[TickSnapshot] = []
    for _ in range(ticks):
        if should_stop is not None and should_stop():
            logger.info("Stop requested at tick %d", world.tick)
            break
        snapshot = tick_world(world)
        for observer in observers:
            observer(snapshot)
        snapshots.append(snapshot)
    return snapshots
