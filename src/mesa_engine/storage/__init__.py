"""Collaborator interfaces and an in-process implementation.

Provides:
- Protocols for the persistence gateway and the creature/character catalogues
- MemoryStore, a dictionary-backed implementation of all three
"""

from mesa_engine.storage.memory import MemoryStore
from mesa_engine.storage.protocols import (
    CharacterCatalogue,
    CreatureCatalogue,
    PersistenceGateway,
)

__all__ = [
    "CharacterCatalogue",
    "CreatureCatalogue",
    "PersistenceGateway",
    "MemoryStore",
]
