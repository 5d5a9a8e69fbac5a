"""Exceptions raised by the simulation core.

Bind and release rejections are not errors; Receiver.receive() and
Receiver.release() report them as False.
"""

from __future__ import annotations


class SimulationError(Exception):
    """Base exception for faults that abort a simulation tick."""

    pass


class RandomSourceError(SimulationError):
    """Raised when the random angle stream fails or yields an invalid angle."""

    pass


class PositionOverflowError(SimulationError):
    """Raised when a displacement cannot be computed from a particle heading."""

    pass


class ReceptorInvariantError(SimulationError):
    """Raised when a receptor pool's free count leaves [0, capacity].

    Attributes:
        free: The offending free count.
        capacity: The pool capacity.
    """

    def __init__(self, message: str, free: int, capacity: int) -> None:
        super().__init__(message)
        self.free = free
        self.capacity = capacity
