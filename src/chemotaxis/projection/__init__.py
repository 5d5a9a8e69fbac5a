"""Frame projection: read-only views of the world for rendering."""

from chemotaxis.projection.projector import (
    AnchorVisual,
    Frame,
    ParticleVisual,
    frame_to_dict,
    project,
)

__all__ = ["AnchorVisual", "Frame", "ParticleVisual", "frame_to_dict", "project"]
