"""Telemetry recorder: append-only (bound_count, tick) records.

Records use the compact "bound,tick;" datapoint format, one per recorded tick,
with no separators between records.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING, TextIO

if TYPE_CHECKING:
    from chemotaxis.engine.simulation import TickSnapshot

logger = logging.getLogger(__name__)


class TelemetryRecorder:
    """Tick observer that writes bound-receptor counts to a text stream."""

    def __init__(self, stream: TextIO, every: int = 1) -> None:
        """Initialize recorder.

        Args:
            stream: Writable text stream.
            every: Record one snapshot out of every `every` ticks.
        """
        if every < 1:
            raise ValueError(f"Recording cadence must be >= 1, got {every}")
        self.stream = stream
        self.every = every
        self.records_written = 0

    def __call__(self, snapshot: TickSnapshot) -> None:
        if snapshot.tick % self.every != 0:
            return
        self.stream.write(format_record(snapshot))
        self.records_written += 1


def format_record(snapshot: TickSnapshot) -> str:
    return f"{snapshot.bound_count},{snapshot.tick};"


def parse_records(text: str) -> list[tuple[int, int]]:
    """Parse recorder output back into (bound_count, tick) pairs.

    Raises:
        ValueError: If a record is malformed.
    """
    records = []
    for chunk in text.split(";"):
        chunk = chunk.strip()
        if not chunk:
            continue
        bound, _, tick = chunk.partition(",")
        records.append((int(bound), int(tick)))
    return records


@contextmanager
def open_recorder(path: str | Path, every: int = 1) -> Iterator[TelemetryRecorder]:
    """Create (truncate) a telemetry file and yield a recorder writing to it."""
    path = Path(path)
    with path.open("w", encoding="utf-8") as fh:
        recorder = TelemetryRecorder(fh, every=every)
        yield recorder
    logger.info("Wrote %d telemetry records to %s", recorder.records_written, path)
