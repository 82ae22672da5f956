"""Interfaces of the collaborators the engine is driven through.

The engine never touches a database or network. The host application
supplies objects satisfying these protocols: a persistence gateway for
hit points, audit events, roll log entries and encounter entries, and the
read-only creature and character catalogues.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from mesa_engine.models.character import CharacterSheet, HitPoints
from mesa_engine.models.combat import CombatEvent, RollLogEntry
from mesa_engine.models.encounter import CreatureTemplate, EncounterEntry
from mesa_engine.models.enums import GameSystem


@runtime_checkable
class CharacterCatalogue(Protocol):
    """Source of validated character sheets."""

    def load_character(self, character_id: str) -> CharacterSheet:
        """Return the sheet of a character.

        Implementations raise their own not-found error for unknown ids.
        """
        ...


@runtime_checkable
class PersistenceGateway(CharacterCatalogue, Protocol):
    """Write side of the host application's storage."""

    def save_hit_points(self, character_id: str, hit_points: HitPoints) -> None:
        """Persist a character's new hit point pool."""
        ...

    def append_combat_event(self, event: CombatEvent) -> None:
        """Append a damage or healing record to the audit log."""
        ...

    def append_roll_log_entry(self, entry: RollLogEntry) -> None:
        """Append an entry to the campaign roll log."""
        ...

    def load_encounter_entries(self, encounter_id: str) -> Sequence[EncounterEntry]:
        """Return the stored entries of an encounter (empty for a new one)."""
        ...

    def save_encounter_entries(
        self,
        encounter_id: str,
        entries: Sequence[EncounterEntry],
    ) -> None:
        """Replace the stored entries of an encounter."""
        ...


@runtime_checkable
class CreatureCatalogue(Protocol):
    """Read-only creature catalogue."""

    def creatures_for(self, system: GameSystem) -> Sequence[CreatureTemplate]:
        """Return the creatures available in a game system."""
        ...


__all__ = [
    "CharacterCatalogue",
    "PersistenceGateway",
    "CreatureCatalogue",
]
