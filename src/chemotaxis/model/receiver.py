"""Receiver: anchor area with a bounded receptor pool and the ligand field emitter."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from chemotaxis.errors import ReceptorInvariantError
from chemotaxis.model.geometry import Rect
from chemotaxis.model.particle import CHEMOTACTIC_SPEED, PARTICLE_SIZE, ChemotacticParticle

if TYPE_CHECKING:
    from chemotaxis.engine.random_source import RandomAngleSource

logger = logging.getLogger(__name__)

MAX_RECEPTORS = 20
CHEMOTACTIC_MOLECULES_COUNT = 1000


@dataclass
class ReceptorPool:
    """Bounded counter of free receptors.

    Only try_acquire() and try_release() mutate the pool; both are total and
    report success as a bool.
    """

    capacity: int
    free: int | None = None

    def __post_init__(self) -> None:
        if self.capacity < 0:
            raise ValueError(f"Receptor capacity must be non-negative, got {self.capacity}")
        if self.free is None:
            self.free = self.capacity
        self.check_invariant()

    @property
    def in_use(self) -> int:
        return self.capacity - self.free

    def try_acquire(self) -> bool:
        """Take one receptor if any is free."""
        if self.free > 0:
            self.free -= 1
            return True
        return False

    def try_release(self) -> bool:
        """Return one receptor unless the pool is already full."""
        if self.free < self.capacity:
            self.free += 1
            return True
        return False

    def check_invariant(self) -> None:
        """Raise ReceptorInvariantError if free has left [0, capacity]."""
        if not 0 <= self.free <= self.capacity:
            raise ReceptorInvariantError(
                f"Free receptors {self.free} outside [0, {self.capacity}]",
                free=self.free,
                capacity=self.capacity,
            )


@dataclass
class Receiver:
    """Target of the information particles.

    Information particles whose footprint overlaps rect may bind to one of
    max_receptors receptors. The receiver also seeds the chemotactic field that
    the information particles sense.
    """

    rect: Rect
    max_receptors: int = MAX_RECEPTORS
    chemotactic_molecules_count: int = CHEMOTACTIC_MOLECULES_COUNT
    particle_size: int = PARTICLE_SIZE
    chemotactic_speed: float = CHEMOTACTIC_SPEED
    timer: int = 0  # reserved, nothing reads it yet
    pool: ReceptorPool = field(init=False)

    def __post_init__(self) -> None:
        self.pool = ReceptorPool(capacity=self.max_receptors)

    @property
    def free_receptors(self) -> int:
        return self.pool.free

    @property
    def bound_count(self) -> int:
        """Number of receptors currently occupied."""
        return self.pool.in_use

    def receive(self) -> bool:
        """Try to bind a particle. False means every receptor is taken."""
        return self.pool.try_acquire()

    def release(self) -> bool:
        """Free a receptor. False means the pool was already full."""
        released = self.pool.try_release()
        if not released:
            logger.debug("Release rejected: all %d receptors already free", self.max_receptors)
        return released

    def set_timer(self, value: int) -> None:
        self.timer = value

    def transmit(self, rng: RandomAngleSource) -> list[ChemotacticParticle]:
        """Emit the chemotactic field at the receiver's anchor.

        Args:
            rng: Source of the initial headings.

        Returns:
            chemotactic_molecules_count fresh particles.
        """
        return [
            ChemotacticParticle(
                rect=Rect(self.rect.x, self.rect.y, self.particle_size, self.particle_size),
                speed=self.chemotactic_speed,
                direction=rng.draw(),
            )
            for _ in range(self.chemotactic_molecules_count)
        ]
