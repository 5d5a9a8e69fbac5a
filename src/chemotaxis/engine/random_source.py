"""Explicit, seedable source of random headings.

Every directional decision in the simulation draws from one RandomAngleSource
owned by the world, so a fixed seed replays a run step for step.
"""

from __future__ import annotations

import math
import random

from chemotaxis.errors import RandomSourceError

TWO_PI = 2.0 * math.pi


class RandomAngleSource:
    """Uniform angles in [0, 2π) drawn from a dedicated random.Random stream."""

    def __init__(self, seed: int | None = None, rng: random.Random | None = None) -> None:
        """Initialize the source.

        Args:
            seed: Seed for a fresh generator. Ignored when rng is given.
            rng: Existing generator to draw from (e.g. a shared or mocked one).
        """
        self.seed = seed
        self._rng = rng if rng is not None else random.Random(seed)

    def draw(self) -> float:
        """Draw one angle in radians, uniform over [0, 2π).

        Raises:
            RandomSourceError: If the underlying generator fails or returns a
                value outside [0, 1).
        """
        try:
            u = self._rng.random()
        except Exception as e:
            raise RandomSourceError(f"Random source failed: {e}") from e
        if not (isinstance(u, float) and 0.0 <= u < 1.0):
            raise RandomSourceError(f"Random source returned invalid sample: {u!r}")
        return u * TWO_PI

    def reseed(self, seed: int | None) -> None:
        """Restart the stream from a new seed."""
        self.seed = seed
        self._rng.seed(seed)
