"""Tests for the frame projector."""

from chemotaxis.config import SimulationSettings
from chemotaxis.engine.simulation import tick_world
from chemotaxis.model.world import create_world
from chemotaxis.projection.projector import Frame, frame_to_dict, project


def make_world():
    """Create a small seeded world."""
    return create_world(
        SimulationSettings(seed=5, transmission_size=10, chemotactic_molecules_count=8)
    )


class TestProject:
    """Tests for project()."""

    def test_initial_frame(self):
        """The initial frame should show both anchors and the ligand field."""
        frame = project(make_world())

        assert isinstance(frame, Frame)
        assert frame.tick == 0
        assert [a.kind for a in frame.anchors] == ["transmitter", "receiver"]
        assert (frame.anchors[1].x, frame.anchors[1].y) == (650, 500)
        assert len(frame.chemotactic_particles) == 8
        assert frame.information_particles == []
        assert frame.free_receptors == 20

    def test_frame_tracks_particles(self):
        """After a tick the frame should mirror particle positions."""
        world = make_world()
        tick_world(world)

        frame = project(world)

        assert frame.tick == 1
        assert [(p.x, p.y) for p in frame.information_particles] == [
            (p.x, p.y) for p in world.information_particles
        ]

    def test_bound_flag(self):
        """Bound particles should be flagged in the frame."""
        world = make_world()
        tick_world(world)
        world.information_particles[0].bind()

        frame = project(world)

        assert frame.information_particles[0].bound is True
        assert frame.information_particles[1].bound is False

    def test_projection_is_read_only(self):
        """Mutating a frame should not touch the world."""
        world = make_world()
        tick_world(world)
        before = (world.information_particles[0].x, world.information_particles[0].y)

        frame = project(world)
        frame.information_particles[0].x += 100

        assert (world.information_particles[0].x, world.information_particles[0].y) == before
        assert world.tick == 1


class TestFrameToDict:
    """Tests for frame serialization."""

    def test_serializable_structure(self):
        """frame_to_dict() should produce plain nested dicts and lists."""
        data = frame_to_dict(project(make_world()))

        assert data["tick"] == 0
        assert data["anchors"][0]["kind"] == "transmitter"
        assert isinstance(data["chemotactic_particles"], list)
        assert set(data["chemotactic_particles"][0]) == {"x", "y", "w", "h", "bound"}
