"""Simulation settings loaded from the environment.

This module provides Pydantic-based configuration loading from environment
variables (prefix CHEMOTAXIS_) and .env files. Defaults reproduce the
reference scenario: one transmitter at (200, 200), one receiver at (650, 500)
with 20 receptors, batches of 800 information particles every 3000 ticks and a
1000-particle ligand field.
"""

from __future__ import annotations

import logging
from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class SimulationSettings(BaseSettings):
    """Configuration for one simulation run.

    Environment Variables:
        CHEMOTAXIS_SEED: Seed for the random angle stream (default: unseeded)
        CHEMOTAXIS_TRANSMISSION_SIZE: Information particles per batch (default: 800)
        CHEMOTAXIS_CHEMOTACTIC_MOLECULES_COUNT: Ligand field size (default: 1000)
        CHEMOTAXIS_MAX_RECEPTORS: Receptor pool capacity (default: 20)
        CHEMOTAXIS_RETRANSMIT_INTERVAL: Ticks between batches (default: 3000)
        CHEMOTAXIS_SENSING_RANGE: Stimulus box half-width (default: 20.0)
        CHEMOTAXIS_LOG_INTERVAL: Ticks between progress log lines (default: 100)

    Example:
        >>> settings = SimulationSettings(seed=7, max_receptors=5)
    """

    model_config = SettingsConfigDict(
        env_prefix="CHEMOTAXIS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    seed: int | None = Field(default=None, description="Random stream seed")

    # Emission
    transmission_size: int = Field(default=800, ge=0, description="Particles per batch")
    chemotactic_molecules_count: int = Field(default=1000, ge=0, description="Ligand field size")
    retransmit_interval: int = Field(default=3000, ge=1, description="Ticks between batches")

    # Receptors
    max_receptors: int = Field(default=20, ge=0, description="Receptor pool capacity")
    residence_time: int = Field(default=60, ge=1, description="Ticks a particle stays bound")

    # Motion
    information_speed: float = Field(default=12.2, ge=0.0, description="Information particle speed")
    chemotactic_speed: float = Field(default=10.2, ge=0.0, description="Ligand particle speed")
    particle_size: int = Field(default=5, ge=1, description="Particle footprint edge")
    run_extension: int = Field(default=15, ge=1, description="Run ticks granted by a stimulus rise")
    sensing_range: float = Field(default=20.0, ge=0.0, description="Stimulus box half-width")
    arena_half_width: int = Field(default=2000, ge=1, description="Arena bound per axis")

    # Anchors
    transmitter_x: int = Field(default=200, description="Transmitter anchor x")
    transmitter_y: int = Field(default=200, description="Transmitter anchor y")
    receiver_x: int = Field(default=650, description="Receiver anchor x")
    receiver_y: int = Field(default=500, description="Receiver anchor y")
    anchor_size: int = Field(default=40, ge=1, description="Anchor rectangle edge")

    log_interval: int = Field(default=100, ge=1, description="Ticks between progress logs")

    @model_validator(mode="after")
    def anchors_inside_arena(self) -> SimulationSettings:
        """Reject anchors placed outside the arena."""
        limit = self.arena_half_width
        for name in ("transmitter_x", "transmitter_y", "receiver_x", "receiver_y"):
            value = getattr(self, name)
            if abs(value) > limit:
                raise ValueError(f"{name}={value} lies outside the arena (±{limit})")
        return self

    def __repr__(self) -> str:
        return (
            f"SimulationSettings("
            f"seed={self.seed}, "
            f"transmission_size={self.transmission_size}, "
            f"field={self.chemotactic_molecules_count}, "
            f"receptors={self.max_receptors}, "
            f"retransmit_interval={self.retransmit_interval}"
            f")"
        )


@lru_cache
def get_settings() -> SimulationSettings:
    """Get cached simulation settings singleton.

    To reload settings, call get_settings.cache_clear() first.
    """
    settings = SimulationSettings()
    logger.info("Loaded simulation settings: %s", settings)
    return settings
