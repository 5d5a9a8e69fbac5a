"""Shared fixtures for the chemotaxis test suite."""

from __future__ import annotations

import logging
import math
import random
from collections.abc import Callable, Iterator

import pytest

from chemotaxis.engine.random_source import RandomAngleSource


class SequenceRandom(random.Random):
    """random.Random whose random() replays a fixed list of samples."""

    def __init__(self, samples: list[float]) -> None:
        super().__init__(0)
        self._samples = list(samples)

    def random(self) -> float:
        return self._samples.pop(0)


@pytest.fixture
def make_angles() -> Callable[..., RandomAngleSource]:
    """Factory for angle sources that return exactly the given angles, in order."""

    def _make(*radians: float) -> RandomAngleSource:
        return RandomAngleSource(rng=SequenceRandom([a / (2.0 * math.pi) for a in radians]))

    return _make


@pytest.fixture
def rng() -> RandomAngleSource:
    """Seeded angle source."""
    return RandomAngleSource(seed=1234)


@pytest.fixture(autouse=True)
def _restore_chemotaxis_logger() -> Iterator[None]:
    """Undo configure_logging() side effects between tests."""
    logger = logging.getLogger("chemotaxis")
    handlers, level, propagate = list(logger.handlers), logger.level, logger.propagate
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate
