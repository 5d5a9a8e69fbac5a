"""Particle dataclasses: information particles and the chemotactic ligand field.

Both particle kinds move by run-and-tumble on the integer grid. Information
particles bias their tumbling on the sensed stimulus and carry a small
lifecycle (MOVING -> BOUND -> TERMINATED); chemotactic particles diffuse
forever with no memory.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from chemotaxis.errors import PositionOverflowError
from chemotaxis.model.geometry import Rect

if TYPE_CHECKING:
    from chemotaxis.engine.random_source import RandomAngleSource

# Particle constants
PARTICLE_SIZE = 5  # footprint edge length in cells
INFORMATION_SPEED = 12.2  # cells per tick
CHEMOTACTIC_SPEED = 10.2  # cells per tick
RESIDENCE_TIME = 60  # ticks a bound particle stays on its receptor
RUN_EXTENSION = 15  # ticks of straight running granted by a stimulus rise
ARENA_HALF_WIDTH = 2000  # free particles beyond ±this on either axis are lost


class ParticleState(Enum):
    """Lifecycle of an information particle."""

    MOVING = "moving"
    BOUND = "bound"
    TERMINATED = "terminated"


def _displacement(speed: float, direction: float) -> tuple[int, int]:
    """Integer step for one run along a heading."""
    if not math.isfinite(direction):
        raise PositionOverflowError(f"Cannot move along non-finite heading {direction!r}")
    return round(speed * math.cos(direction)), round(speed * math.sin(direction))


@dataclass
class ChemotacticParticle:
    """A freely diffusing ligand proxy performing an unbiased random walk."""

    rect: Rect
    speed: float = CHEMOTACTIC_SPEED
    direction: float = 0.0

    @property
    def x(self) -> int:
        return self.rect.x

    @property
    def y(self) -> int:
        return self.rect.y

    def tumble(self, rng: RandomAngleSource) -> None:
        """Turn by a fresh random angle. Headings accumulate, they are not wrapped."""
        self.direction += rng.draw()

    def run(self) -> None:
        """Take one step along the current heading."""
        dx, dy = _displacement(self.speed, self.direction)
        self.rect.translate(dx, dy)


@dataclass
class InformationParticle:
    """The chemotactic agent: a biased run-and-tumble walker.

    A rising stimulus resets tumble_timer so the particle keeps running straight;
    a flat or falling stimulus lets it tumble again once the timer has lapsed.
    Once stopped (bound to a receptor) it stays put for residence_time ticks and
    is then released.
    """

    rect: Rect
    speed: float = INFORMATION_SPEED
    direction: float = 0.0

    # Lifecycle
    residence_time: int = RESIDENCE_TIME
    stopped: bool = False  # bound to a receptor, position frozen
    released: bool = False  # terminal, removed at the next compaction

    # Chemotactic memory
    stimulus: int = 0  # last sensed concentration
    tumble_timer: int = 0  # tumbling allowed when <= 0

    run_extension: int = RUN_EXTENSION
    arena_half_width: int = ARENA_HALF_WIDTH

    @property
    def x(self) -> int:
        return self.rect.x

    @property
    def y(self) -> int:
        return self.rect.y

    @property
    def state(self) -> ParticleState:
        """Current lifecycle state derived from the stopped/released flags."""
        if self.released:
            return ParticleState.TERMINATED
        if self.stopped:
            return ParticleState.BOUND
        return ParticleState.MOVING

    def tumble(self, current_stimulus: int, rng: RandomAngleSource) -> None:
        """Update heading from the sensed stimulus.

        The rise check and the timer check both run in the same call and the
        timer is decremented unconditionally afterwards, so a granted run shows
        tumble_timer == run_extension - 1 right after the call.

        Args:
            current_stimulus: Concentration sensed this tick.
            rng: Source of the tumble angle.
        """
        if current_stimulus > self.stimulus:
            self.tumble_timer = self.run_extension
        if self.tumble_timer <= 0:
            self.direction += rng.draw()
        self.tumble_timer -= 1
        self.stimulus = current_stimulus

    def run(self) -> None:
        """Advance one tick: move if free, count down residence if bound."""
        if not self.stopped:
            dx, dy = _displacement(self.speed, self.direction)
            self.rect.translate(dx, dy)
            if self.is_outside_arena():
                self.released = True
        else:
            self.residence_time -= 1
            if self.residence_time == 0:
                self.released = True

    def bind(self) -> None:
        """Freeze the particle on a receptor."""
        self.stopped = True

    def is_outside_arena(self) -> bool:
        """Whether the position lies beyond the arena on either axis."""
        limit = self.arena_half_width
        return abs(self.rect.x) > limit or abs(self.rect.y) > limit
