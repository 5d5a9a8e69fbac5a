"""Domain model: particles, transmitter, receiver, world."""

from chemotaxis.model.geometry import Rect
from chemotaxis.model.particle import ChemotacticParticle, InformationParticle, ParticleState
from chemotaxis.model.receiver import Receiver, ReceptorPool
from chemotaxis.model.transmitter import Transmitter
from chemotaxis.model.world import World, create_world

__all__ = [
    "ChemotacticParticle",
    "InformationParticle",
    "ParticleState",
    "Receiver",
    "ReceptorPool",
    "Rect",
    "Transmitter",
    "World",
    "create_world",
]
