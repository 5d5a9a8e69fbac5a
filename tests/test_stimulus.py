"""Tests for the local concentration probe."""

from chemotaxis.engine.stimulus import count_in_range
from chemotaxis.model.geometry import Rect
from chemotaxis.model.particle import ChemotacticParticle, InformationParticle


def make_field(*positions: tuple[int, int]) -> list[ChemotacticParticle]:
    """Create ligand particles at the given positions."""
    return [ChemotacticParticle(rect=Rect(x, y, 5, 5)) for x, y in positions]


def make_probe_target(x: int = 0, y: int = 0) -> InformationParticle:
    return InformationParticle(rect=Rect(x, y, 5, 5))


class TestCountInRange:
    """Tests for count_in_range()."""

    def test_empty_field(self):
        """No ligands means zero stimulus."""
        assert count_in_range(make_probe_target(), [], 20.0) == 0

    def test_box_is_closed(self):
        """Ligands exactly on the box edge and corners should count."""
        field = make_field((20, 20), (-20, -20), (20, -20), (0, 0))

        assert count_in_range(make_probe_target(), field, 20.0) == 4

    def test_outside_box_not_counted(self):
        """Ligands beyond the half-width on either axis should not count."""
        field = make_field((21, 0), (0, -21), (30, 30))

        assert count_in_range(make_probe_target(), field, 20.0) == 0

    def test_box_is_square_not_circle(self):
        """A corner ligand farther than range in Euclidean distance still counts."""
        field = make_field((19, 19))

        assert count_in_range(make_probe_target(), field, 20.0) == 1

    def test_range_truncated_to_whole_cells(self):
        """Fractional ranges should be truncated to whole cells."""
        field = make_field((21, 0))

        assert count_in_range(make_probe_target(), field, 20.9) == 0
        assert count_in_range(make_probe_target(), field, 21.0) == 1

    def test_centred_on_particle_position(self):
        """The box should follow the particle."""
        field = make_field((660, 510))

        assert count_in_range(make_probe_target(650, 500), field, 10.0) == 1
        assert count_in_range(make_probe_target(200, 200), field, 10.0) == 0

    def test_monotonic_in_range(self, rng):
        """Counts should never decrease as the range grows."""
        target = make_probe_target()
        field = [
            ChemotacticParticle(rect=Rect(int(rng.draw() * 100) - 300, int(rng.draw() * 100) - 300, 5, 5))
            for _ in range(200)
        ]

        counts = [count_in_range(target, field, float(r)) for r in range(0, 400, 10)]

        assert counts == sorted(counts)

    def test_large_range_covers_whole_field(self):
        """A range spanning the arena should count every ligand."""
        field = make_field((2000, 2000), (-2000, -2000), (1500, -300), (0, 0))

        assert count_in_range(make_probe_target(), field, 4000.0) == len(field)

    def test_does_not_mutate(self):
        """Probing should leave the particle and the field untouched."""
        target = make_probe_target()
        field = make_field((1, 1))

        count_in_range(target, field, 20.0)

        assert target.stimulus == 0
        assert (field[0].x, field[0].y) == (1, 1)
