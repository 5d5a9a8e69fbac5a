"""Local concentration probe: counts ligand particles around an information particle."""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from chemotaxis.model.particle import ChemotacticParticle, InformationParticle


def count_in_range(
    particle: InformationParticle,
    field: Iterable[ChemotacticParticle],
    range_: float,
) -> int:
    """Count ligand particles inside the closed square around a particle.

    The square has half-width int(range_) and is centred on the particle's
    top-left corner; a ligand particle counts when |dx| <= range and
    |dy| <= range. Cost is linear in the field size, so callers sample it only
    when the particle is ready to tumble.

    Args:
        particle: The sensing information particle.
        field: The chemotactic particles.
        range_: Half-width of the box in cells.

    Returns:
        Number of ligand particles in the box.
    """
    half = int(range_)
    x1 = particle.rect.x
    y1 = particle.rect.y
    min_x, max_x = x1 - half, x1 + half
    min_y, max_y = y1 - half, y1 + half

    count = 0
    for ligand in field:
        if min_x <= ligand.rect.x <= max_x and min_y <= ligand.rect.y <= max_y:
            count += 1
    return count
