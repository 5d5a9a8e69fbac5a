"""Simulation engine: random headings, stimulus probe, world tick driver."""

from chemotaxis.engine.random_source import TWO_PI, RandomAngleSource
from chemotaxis.engine.simulation import (
    TickObserver,
    TickSnapshot,
    run_simulation,
    sample_stimulus,
    tick_world,
)
from chemotaxis.engine.stimulus import count_in_range

__all__ = [
    "TWO_PI",
    "RandomAngleSource",
    "TickObserver",
    "TickSnapshot",
    "count_in_range",
    "run_simulation",
    "sample_stimulus",
    "tick_world",
]
