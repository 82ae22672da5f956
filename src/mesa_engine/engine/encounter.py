"""Encounter tracking.

This module keeps the ordered list of combatants of one encounter:
adding creatures and characters, renaming, initiative edits, manual and
initiative-based reordering, and turn/round progression.

The tracker owns its entries exclusively. Persistence is left to the
caller, which reads ``snapshot()`` and writes it through its gateway.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from mesa_engine.core.config import get_settings
from mesa_engine.core.exceptions import (
    EncounterError,
    EntryRenameError,
    InvalidOrderError,
    UnknownEntryError,
    ValidationError,
)
from mesa_engine.core.logging import get_logger
from mesa_engine.models.character import CharacterSheet, HitPoints
from mesa_engine.models.encounter import BudgetPlan, CreatureTemplate, EncounterEntry


logger = get_logger(__name__)


def letter_suffix(index: int) -> str:
    """Return the disambiguating suffix for a 0-based index: A..Z, AA, AB, ..."""
    n = index + 1
    letters = ""
    while n > 0:
        n, rem = divmod(n - 1, 26)
        letters = chr(ord("A") + rem) + letters
    return letters


class EncounterTracker:
    """Ordered list of combatants in one encounter.

    Entries are ordered by ``sort_order``. After ``reorder`` (and therefore
    after ``sort_by_initiative_descending``) sort orders are ``0..N-1``;
    a bare ``remove`` may leave a gap.

    Example:
        >>> tracker = EncounterTracker("enc-1")
        >>> tracker.add_entry(goblin).display_name
        'Goblin'
        >>> tracker.add_entry(goblin).display_name
        'Goblin B'
    """

    def __init__(
        self,
        encounter_id: str | None = None,
        *,
        entries: Iterable[EncounterEntry] = (),
        default_initiative: int | None = None,
        suffix_duplicates: bool | None = None,
    ) -> None:
        """Initialize the tracker.

        Args:
            encounter_id: Identifier of the encounter, used in errors and logs.
            entries: Entries to start from (copied).
            default_initiative: Initiative for entries added without one.
            suffix_duplicates: Whether repeated names receive letter suffixes.
        """
        settings = get_settings().encounter
        self._encounter_id = encounter_id
        self._default_initiative = (
            settings.default_initiative if default_initiative is None else default_initiative
        )
        self._suffix_duplicates = (
            settings.suffix_duplicates if suffix_duplicates is None else suffix_duplicates
        )
        self._entries: list[EncounterEntry] = sorted(
            (e.model_copy(deep=True) for e in entries),
            key=lambda e: e.sort_order,
        )
        self._active = True
        self._round = 0
        self._turn_index = 0

        ids = [e.id for e in self._entries]
        if len(ids) != len(set(ids)):
            raise EncounterError(
                "Duplicate entry ids in encounter",
                encounter_id=encounter_id,
            )

    @classmethod
    def load(
        cls,
        encounter_id: str,
        entries: Iterable[EncounterEntry],
        **kwargs: object,
    ) -> EncounterTracker:
        """Restore a tracker from persisted entries."""
        tracker = cls(encounter_id, entries=entries, **kwargs)  # type: ignore[arg-type]
        logger.debug("Encounter loaded", encounter_id=encounter_id, entries=len(tracker))
        return tracker

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    @property
    def encounter_id(self) -> str | None:
        """Identifier of the encounter."""
        return self._encounter_id

    @property
    def entries(self) -> list[EncounterEntry]:
        """Entries ordered by sort order, ties by insertion."""
        return sorted(self._entries, key=lambda e: e.sort_order)

    @property
    def is_active(self) -> bool:
        """Whether the encounter accepts changes."""
        return self._active

    @property
    def round_number(self) -> int:
        """Current round (0 before ``start``)."""
        return self._round

    @property
    def turn_index(self) -> int:
        """Position of the acting entry in ``entries``."""
        return self._turn_index

    @property
    def current_entry(self) -> EncounterEntry | None:
        """The acting entry, or None before ``start`` or when empty."""
        if self._round == 0 or not self._entries:
            return None
        return self.entries[self._turn_index]

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, entry_id: object) -> bool:
        return any(e.id == entry_id for e in self._entries)

    def get(self, entry_id: str) -> EncounterEntry:
        """Return an entry by id.

        Raises:
            UnknownEntryError: If the entry is not in the encounter.
        """
        for entry in self._entries:
            if entry.id == entry_id:
                return entry
        raise UnknownEntryError(
            "Entry not found in encounter",
            encounter_id=self._encounter_id,
            entry_id=entry_id,
        )

    def snapshot(self) -> list[EncounterEntry]:
        """Return ordered deep copies of the entries, for persistence."""
        return [e.model_copy(deep=True) for e in self.entries]

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def _require_active(self) -> None:
        if not self._active:
            raise EncounterError("Encounter is closed", encounter_id=self._encounter_id)

    def _display_name_for(self, base: str) -> str:
        if not self._suffix_duplicates:
            return base
        count = sum(1 for e in self._entries if e.display_name.startswith(base))
        if count == 0:
            return base
        return f"{base} {letter_suffix(count)}"

    def add_entry(
        self,
        source: CreatureTemplate | CharacterSheet,
        *,
        initiative: int | None = None,
        entry_id: str | None = None,
    ) -> EncounterEntry:
        """Add a creature or a player character to the encounter.

        A repeated base name receives a letter suffix from the number of
        current entries whose name starts with it ("Goblin", "Goblin B"...).

        Args:
            source: Catalogue creature or validated character sheet.
            initiative: Initiative value, defaulting to the configured one.
            entry_id: Explicit id for the new entry.

        Returns:
            The new entry, placed last.

        Raises:
            EncounterError: If the encounter is closed or ``entry_id`` is taken.
        """
        self._require_active()
        if entry_id is not None and entry_id in self:
            raise EncounterError(
                "Entry id already in encounter",
                encounter_id=self._encounter_id,
                entry_id=entry_id,
            )

        fields: dict[str, object] = {
            "display_name": self._display_name_for(source.name),
            "initiative": self._default_initiative if initiative is None else initiative,
            "sort_order": max((e.sort_order for e in self._entries), default=-1) + 1,
        }
        if entry_id is not None:
            fields["id"] = entry_id

        if isinstance(source, CharacterSheet):
            fields.update(
                hp_current=source.hp_current,
                hp_max=source.hp_max,
                is_player_controlled=True,
                character_id=source.id,
                armor_class=source.armor_class,
            )
        else:
            fields.update(
                hp_current=source.hp,
                hp_max=source.effective_max_hp,
                is_player_controlled=False,
                creature_id=source.id,
                armor_class=source.armor_class,
            )

        entry = EncounterEntry.model_validate(fields)
        self._entries.append(entry)

        logger.info(
            "Entry added",
            encounter_id=self._encounter_id,
            entry_id=entry.id,
            display_name=entry.display_name,
            player=entry.is_player_controlled,
        )
        return entry

    def add_plan(self, plan: BudgetPlan) -> list[EncounterEntry]:
        """Add every creature of a confirmed budget plan, in plan order."""
        self._require_active()
        return [self.add_entry(creature) for creature in plan.creatures]

    def reorder(self, new_order: Sequence[str]) -> None:
        """Set each entry's sort order to its position in ``new_order``.

        Args:
            new_order: Every current entry id, exactly once.

        Raises:
            UnknownEntryError: If an id is not a current entry.
            InvalidOrderError: If ids are repeated or missing.
        """
        self._require_active()
        by_id = {e.id: e for e in self._entries}

        for entry_id in new_order:
            if entry_id not in by_id:
                raise UnknownEntryError(
                    "Cannot reorder: entry not found in encounter",
                    encounter_id=self._encounter_id,
                    entry_id=entry_id,
                )
        if len(new_order) != len(set(new_order)) or len(new_order) != len(by_id):
            raise InvalidOrderError(
                "Reorder must list every entry exactly once",
                encounter_id=self._encounter_id,
                details={"expected": len(by_id), "received": len(new_order)},
            )

        acting = self.current_entry
        for position, entry_id in enumerate(new_order):
            by_id[entry_id].sort_order = position
        self._entries = [by_id[entry_id] for entry_id in new_order]
        if acting is not None:
            self._turn_index = new_order.index(acting.id)

        logger.info("Entries reordered", encounter_id=self._encounter_id, count=len(new_order))

    def sort_by_initiative_descending(self) -> None:
        """Reorder by initiative, highest first, keeping ties in their current order."""
        ordered = sorted(self.entries, key=lambda e: e.initiative, reverse=True)
        self.reorder([e.id for e in ordered])

    def set_initiative(self, entry_id: str, value: int) -> EncounterEntry:
        """Set an entry's initiative."""
        self._require_active()
        entry = self.get(entry_id)
        entry.initiative = value
        logger.debug(
            "Initiative set",
            encounter_id=self._encounter_id,
            entry_id=entry_id,
            initiative=value,
        )
        return entry

    def rename(self, entry_id: str, new_name: str) -> EncounterEntry:
        """Rename a game-master controlled entry.

        Raises:
            UnknownEntryError: If the entry is not in the encounter.
            EntryRenameError: If the entry is player-controlled.
            ValidationError: If the name is blank.
        """
        self._require_active()
        entry = self.get(entry_id)
        if entry.is_player_controlled:
            raise EntryRenameError(
                "Player-controlled entries take their name from the character",
                encounter_id=self._encounter_id,
                entry_id=entry_id,
            )
        name = new_name.strip()
        if not name:
            raise ValidationError(
                "Display name must not be blank",
                field_name="display_name",
                invalid_value=new_name,
            )

        old_name = entry.display_name
        entry.display_name = name
        logger.info(
            "Entry renamed",
            encounter_id=self._encounter_id,
            entry_id=entry_id,
            old_name=old_name,
            new_name=name,
        )
        return entry

    def remove(self, entry_id: str) -> EncounterEntry:
        """Remove an entry, leaving a gap in the sort orders.

        Raises:
            UnknownEntryError: If the entry is not in the encounter.
        """
        self._require_active()
        entry = self.get(entry_id)
        position = self.entries.index(entry)
        self._entries.remove(entry)

        if self._round:
            if position < self._turn_index:
                self._turn_index -= 1
            if self._turn_index >= len(self._entries):
                self._turn_index = 0

        logger.info(
            "Entry removed",
            encounter_id=self._encounter_id,
            entry_id=entry_id,
            display_name=entry.display_name,
        )
        return entry

    def set_hit_points(self, entry_id: str, hit_points: HitPoints) -> EncounterEntry:
        """Replace an entry's hit point pool."""
        self._require_active()
        entry = self.get(entry_id)
        updated = entry.model_copy(
            update={"hp_current": hit_points.current, "hp_max": hit_points.max},
        )
        self._entries[self._entries.index(entry)] = updated
        logger.debug(
            "Entry hit points set",
            encounter_id=self._encounter_id,
            entry_id=entry_id,
            hp_current=hit_points.current,
            hp_max=hit_points.max,
        )
        return updated

    # -------------------------------------------------------------------------
    # Turns
    # -------------------------------------------------------------------------

    def start(self) -> EncounterEntry:
        """Start round 1 with the first entry acting.

        Raises:
            EncounterError: If the encounter is closed or empty.
        """
        self._require_active()
        if not self._entries:
            raise EncounterError(
                "Cannot start an encounter without entries",
                encounter_id=self._encounter_id,
            )
        self._round = 1
        self._turn_index = 0
        logger.info("Encounter started", encounter_id=self._encounter_id)
        return self.entries[0]

    def next_turn(self) -> EncounterEntry:
        """Advance to the next entry, wrapping into a new round.

        Raises:
            EncounterError: If the encounter is closed, not started or empty.
        """
        self._require_active()
        if self._round == 0:
            raise EncounterError("Encounter has not started", encounter_id=self._encounter_id)
        if not self._entries:
            raise EncounterError("Encounter has no entries", encounter_id=self._encounter_id)

        self._turn_index += 1
        if self._turn_index >= len(self._entries):
            self._turn_index = 0
            self._round += 1
            logger.info("New round started", encounter_id=self._encounter_id, round=self._round)

        current = self.entries[self._turn_index]
        logger.debug(
            "Next turn",
            encounter_id=self._encounter_id,
            entry=current.display_name,
            round=self._round,
        )
        return current

    def close(self) -> None:
        """Close the encounter; further mutations raise EncounterError."""
        self._active = False
        logger.info("Encounter closed", encounter_id=self._encounter_id, entries=len(self))


__all__ = [
    "letter_suffix",
    "EncounterTracker",
]
