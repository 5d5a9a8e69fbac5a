"""World dataclass: container holding all simulation state."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from chemotaxis.engine.random_source import RandomAngleSource
from chemotaxis.model.geometry import Rect
from chemotaxis.model.receiver import Receiver
from chemotaxis.model.transmitter import Transmitter

if TYPE_CHECKING:
    from chemotaxis.config import SimulationSettings
    from chemotaxis.model.particle import ChemotacticParticle, InformationParticle

logger = logging.getLogger(__name__)


@dataclass
class World:
    """Source of truth for one run.

    The world exclusively owns both particle collections. Receiver and
    transmitter anchors are fixed for the run; only the receptor pool changes.
    """

    transmitter: Transmitter
    receiver: Receiver
    rng: RandomAngleSource = field(default_factory=RandomAngleSource)

    information_particles: list[InformationParticle] = field(default_factory=list)
    chemotactic_particles: list[ChemotacticParticle] = field(default_factory=list)

    # Simulation clock
    tick: int = 0

    # Driver parameters
    retransmit_interval: int = 3000
    sensing_range: float = 20.0
    log_interval: int = 100

    @property
    def bound_count(self) -> int:
        """Number of information particles currently holding a receptor."""
        return self.receiver.bound_count


def create_world(settings: SimulationSettings | None = None) -> World:
    """Build the initial world for a run.

    The receiver emits the ligand field once. The information collection starts
    empty: the first tick (tick 0) performs the first transmission.

    Args:
        settings: Run configuration. Defaults to SimulationSettings().

    Returns:
        A world at tick 0.
    """
    if settings is None:
        from chemotaxis.config import SimulationSettings

        settings = SimulationSettings()

    rng = RandomAngleSource(settings.seed)
    transmitter = Transmitter(
        rect=Rect(
            settings.transmitter_x,
            settings.transmitter_y,
            settings.anchor_size,
            settings.anchor_size,
        ),
        transmission_size=settings.transmission_size,
        particle_size=settings.particle_size,
        speed=settings.information_speed,
        residence_time=settings.residence_time,
        run_extension=settings.run_extension,
        arena_half_width=settings.arena_half_width,
    )
    receiver = Receiver(
        rect=Rect(
            settings.receiver_x,
            settings.receiver_y,
            settings.anchor_size,
            settings.anchor_size,
        ),
        max_receptors=settings.max_receptors,
        chemotactic_molecules_count=settings.chemotactic_molecules_count,
        particle_size=settings.particle_size,
        chemotactic_speed=settings.chemotactic_speed,
    )
    world = World(
        transmitter=transmitter,
        receiver=receiver,
        rng=rng,
        chemotactic_particles=receiver.transmit(rng),
        retransmit_interval=settings.retransmit_interval,
        sensing_range=settings.sensing_range,
        log_interval=settings.log_interval,
    )
    logger.debug(
        "Created world: field=%d, receptors=%d, seed=%s",
        len(world.chemotactic_particles),
        receiver.max_receptors,
        settings.seed,
    )
    return world
