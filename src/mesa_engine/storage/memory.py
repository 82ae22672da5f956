"""In-process implementation of the collaborator protocols.

``MemoryStore`` keeps characters, hit points, audit events, roll log
entries and encounter entries in plain containers. It backs local tools
and tests; production hosts supply their own gateway.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from mesa_engine.core.logging import get_logger
from mesa_engine.models.character import CharacterSheet, HitPoints
from mesa_engine.models.combat import CombatEvent, RollLogEntry
from mesa_engine.models.encounter import CreatureTemplate, EncounterEntry
from mesa_engine.models.enums import GameSystem


logger = get_logger(__name__)


class MemoryStore:
    """Dictionary-backed persistence gateway and catalogues.

    Attributes:
        combat_events: Appended audit records, oldest first.
        roll_log: Appended roll log entries, oldest first.
    """

    def __init__(
        self,
        *,
        characters: Iterable[CharacterSheet] = (),
        creatures: Iterable[CreatureTemplate] = (),
    ) -> None:
        self._characters: dict[str, CharacterSheet] = {c.id: c for c in characters}
        self._creatures: list[CreatureTemplate] = list(creatures)
        self._encounters: dict[str, list[EncounterEntry]] = {}
        self.combat_events: list[CombatEvent] = []
        self.roll_log: list[RollLogEntry] = []

    # Characters

    def add_character(self, sheet: CharacterSheet) -> None:
        self._characters[sheet.id] = sheet

    def load_character(self, character_id: str) -> CharacterSheet:
        """Return a copy of a stored sheet.

        Raises:
            KeyError: If the character is unknown.
        """
        try:
            return self._characters[character_id].model_copy(deep=True)
        except KeyError:
            raise KeyError(f"Character not found: {character_id}") from None

    def save_hit_points(self, character_id: str, hit_points: HitPoints) -> None:
        sheet = self.load_character(character_id)
        self._characters[character_id] = sheet.model_copy(
            update={"hp_current": hit_points.current, "hp_max": hit_points.max},
        )
        logger.debug("Hit points saved", character_id=character_id, hp=hit_points.current)

    # Logs

    def append_combat_event(self, event: CombatEvent) -> None:
        self.combat_events.append(event)

    def append_roll_log_entry(self, entry: RollLogEntry) -> None:
        self.roll_log.append(entry)

    # Encounters

    def load_encounter_entries(self, encounter_id: str) -> list[EncounterEntry]:
        return [e.model_copy(deep=True) for e in self._encounters.get(encounter_id, [])]

    def save_encounter_entries(
        self,
        encounter_id: str,
        entries: Sequence[EncounterEntry],
    ) -> None:
        self._encounters[encounter_id] = [e.model_copy(deep=True) for e in entries]
        logger.debug("Encounter saved", encounter_id=encounter_id, entries=len(entries))

    # Creatures

    def add_creature(self, creature: CreatureTemplate) -> None:
        self._creatures.append(creature)

    def creatures_for(self, system: GameSystem) -> list[CreatureTemplate]:
        """Creatures of ``system``, plus creatures that declare no system."""
        return [c for c in self._creatures if c.system in (None, system)]


__all__ = [
    "MemoryStore",
]
