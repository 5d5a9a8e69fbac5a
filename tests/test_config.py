"""Tests for simulation settings."""

from __future__ import annotations

import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from chemotaxis.config import SimulationSettings, get_settings


class TestSimulationSettings:
    """Tests for SimulationSettings defaults, env loading and validation."""

    def test_reference_defaults(self) -> None:
        """Defaults should reproduce the reference scenario."""
        with patch.dict(os.environ, {}, clear=True):
            settings = SimulationSettings(_env_file=None)

        assert settings.seed is None
        assert settings.transmission_size == 800
        assert settings.chemotactic_molecules_count == 1000
        assert settings.max_receptors == 20
        assert settings.residence_time == 60
        assert settings.run_extension == 15
        assert settings.retransmit_interval == 3000
        assert settings.sensing_range == 20.0
        assert settings.arena_half_width == 2000
        assert settings.information_speed == 12.2
        assert settings.chemotactic_speed == 10.2
        assert (settings.transmitter_x, settings.transmitter_y) == (200, 200)
        assert (settings.receiver_x, settings.receiver_y) == (650, 500)

    def test_reads_prefixed_environment(self) -> None:
        """CHEMOTAXIS_* variables should override defaults."""
        env = {"CHEMOTAXIS_MAX_RECEPTORS": "5", "CHEMOTAXIS_SEED": "42"}
        with patch.dict(os.environ, env):
            settings = SimulationSettings(_env_file=None)

        assert settings.max_receptors == 5
        assert settings.seed == 42

    def test_rejects_negative_capacity(self) -> None:
        """Receptor capacity must be non-negative."""
        with pytest.raises(ValidationError):
            SimulationSettings(_env_file=None, max_receptors=-1)

    def test_rejects_zero_interval(self) -> None:
        """The re-transmission interval must be positive."""
        with pytest.raises(ValidationError):
            SimulationSettings(_env_file=None, retransmit_interval=0)

    def test_rejects_anchor_outside_arena(self) -> None:
        """Anchors must lie inside the arena."""
        with pytest.raises(ValidationError, match="outside the arena"):
            SimulationSettings(_env_file=None, receiver_x=2500)

    def test_repr_is_compact(self) -> None:
        """repr() should summarize the run parameters."""
        settings = SimulationSettings(_env_file=None, seed=1)
        assert "seed=1" in repr(settings)
        assert "receptors=20" in repr(settings)


class TestGetSettings:
    """Tests for the cached settings accessor."""

    def test_returns_cached_instance(self) -> None:
        """get_settings() should return the same object until cleared."""
        get_settings.cache_clear()
        try:
            assert get_settings() is get_settings()
        finally:
            get_settings.cache_clear()
