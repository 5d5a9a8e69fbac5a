"""Frame projector: World state to visual Frame for rendering.

A Frame is a detached snapshot of everything a renderer draws: the two anchor
rectangles, the information particles (bound ones flagged) and the ligand
field. Projecting never mutates the world.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from chemotaxis.model.geometry import Rect
    from chemotaxis.model.world import World


@dataclass
class AnchorVisual:
    """Filled rectangle for the transmitter or receiver."""

    kind: str  # "transmitter" or "receiver"
    x: int
    y: int
    w: int
    h: int
    color: str = "#000000"


@dataclass
class ParticleVisual:
    """Outlined rectangle for one particle footprint."""

    x: int
    y: int
    w: int
    h: int
    bound: bool = False


@dataclass
class Frame:
    """Complete visual state for one rendered frame."""

    tick: int
    anchors: list[AnchorVisual] = field(default_factory=list)
    information_particles: list[ParticleVisual] = field(default_factory=list)
    chemotactic_particles: list[ParticleVisual] = field(default_factory=list)
    bound_count: int = 0
    free_receptors: int = 0


def _anchor(kind: str, rect: Rect) -> AnchorVisual:
    return AnchorVisual(kind=kind, x=rect.x, y=rect.y, w=rect.w, h=rect.h)


def project(world: World) -> Frame:
    """Project the world into a Frame.

    Args:
        world: The world to read.

    Returns:
        A Frame sharing no mutable state with the world.
    """
    return Frame(
        tick=world.tick,
        anchors=[
            _anchor("transmitter", world.transmitter.rect),
            _anchor("receiver", world.receiver.rect),
        ],
        information_particles=[
            ParticleVisual(x=p.rect.x, y=p.rect.y, w=p.rect.w, h=p.rect.h, bound=p.stopped)
            for p in world.information_particles
        ],
        chemotactic_particles=[
            ParticleVisual(x=c.rect.x, y=c.rect.y, w=c.rect.w, h=c.rect.h)
            for c in world.chemotactic_particles
        ],
        bound_count=world.receiver.bound_count,
        free_receptors=world.receiver.free_receptors,
    )


def frame_to_dict(frame: Frame) -> dict[str, Any]:
    """Convert a Frame to a JSON-serializable dict."""
    return asdict(frame)
