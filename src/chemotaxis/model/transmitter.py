"""Transmitter: emits batches of information particles at a fixed anchor."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from chemotaxis.model.geometry import Rect
from chemotaxis.model.particle import (
    ARENA_HALF_WIDTH,
    INFORMATION_SPEED,
    PARTICLE_SIZE,
    RESIDENCE_TIME,
    RUN_EXTENSION,
    InformationParticle,
)

if TYPE_CHECKING:
    from chemotaxis.engine.random_source import RandomAngleSource

TRANSMISSION_SIZE = 800


@dataclass
class Transmitter:
    """Stateless factory for information particles."""

    rect: Rect
    transmission_size: int = TRANSMISSION_SIZE
    particle_size: int = PARTICLE_SIZE
    speed: float = INFORMATION_SPEED
    residence_time: int = RESIDENCE_TIME
    run_extension: int = RUN_EXTENSION
    arena_half_width: int = ARENA_HALF_WIDTH

    def transmit(self, rng: RandomAngleSource) -> list[InformationParticle]:
        """Emit one batch of transmission_size particles at the anchor.

        Each particle gets its own footprint and an independently drawn heading.
        """
        return [
            InformationParticle(
                rect=Rect(self.rect.x, self.rect.y, self.particle_size, self.particle_size),
                speed=self.speed,
                direction=rng.draw(),
                residence_time=self.residence_time,
                run_extension=self.run_extension,
                arena_half_width=self.arena_half_width,
            )
            for _ in range(self.transmission_size)
        ]
