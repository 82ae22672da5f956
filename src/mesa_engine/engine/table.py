"""Game table orchestration.

``GameTable`` wires the engine components to the host application's
collaborators: it loads character sheets, resolves checks and combat
events, and forwards the produced records to the persistence gateway.
Every input is validated before the first write.
"""

from __future__ import annotations

from collections.abc import Iterable

from mesa_engine.core.exceptions import EncounterError
from mesa_engine.core.logging import get_logger, log_context
from mesa_engine.engine.budget import ChallengeBudgetPlanner
from mesa_engine.engine.combat_events import CombatEventProcessor, CombatResolution
from mesa_engine.engine.dice import RandomSource, RollOutcome, create_rng, evaluate
from mesa_engine.engine.encounter import EncounterTracker
from mesa_engine.engine.rules import get_profile
from mesa_engine.engine.skills import SkillResolver
from mesa_engine.models.checks import D20CheckResult, PercentileCheckResult
from mesa_engine.models.combat import CustomRoll, FixedAmount, FormulaAmount, RollLogEntry
from mesa_engine.models.encounter import BudgetPlan, EncounterEntry
from mesa_engine.models.enums import BudgetStrategy, CombatEventKind, GameSystem
from mesa_engine.storage.protocols import CharacterCatalogue, CreatureCatalogue, PersistenceGateway


logger = get_logger(__name__)


class GameTable:
    """Entry point for host applications.

    Example:
        >>> table = GameTable(store, store)
        >>> result = table.roll_skill("char-1", "perception")
        >>> store.roll_log[-1].label
        'Percepção'
    """

    def __init__(
        self,
        persistence: PersistenceGateway,
        creatures: CreatureCatalogue,
        *,
        characters: CharacterCatalogue | None = None,
        processor: CombatEventProcessor | None = None,
        planner: ChallengeBudgetPlanner | None = None,
    ) -> None:
        """Initialize the table.

        Args:
            persistence: Gateway receiving hit points, events and log entries.
            creatures: Creature catalogue for budget planning.
            characters: Character source; defaults to the persistence gateway.
            processor: Combat event processor to use.
            planner: Challenge budget planner to use.
        """
        self._persistence = persistence
        self._creatures = creatures
        self._characters = characters if characters is not None else persistence
        self._processor = processor or CombatEventProcessor()
        self._planner = planner or ChallengeBudgetPlanner()

    # -------------------------------------------------------------------------
    # Rolls
    # -------------------------------------------------------------------------

    def roll_skill(
        self,
        character_id: str,
        skill_id: str,
        rng: RandomSource | None = None,
    ) -> D20CheckResult | PercentileCheckResult:
        """Roll a skill check for a character and log it.

        Raises:
            UnknownSkillError: If the skill is not in the character's system.
        """
        with log_context(character_id=character_id, skill=skill_id):
            sheet = self._characters.load_character(character_id)
            result = SkillResolver(sheet.system).roll_for_character(sheet, skill_id, rng)
            self._persistence.append_roll_log_entry(result.to_log_entry(character_id=sheet.id))
            logger.info("Skill rolled", display_total=result.display_total)
        return result

    def roll_custom(
        self,
        character_id: str,
        custom_roll: CustomRoll,
        rng: RandomSource | None = None,
    ) -> RollOutcome:
        """Roll one of a character's saved formulas and log it."""
        with log_context(character_id=character_id):
            outcome = evaluate(custom_roll.formula, rng if rng is not None else create_rng())
            self._persistence.append_roll_log_entry(
                RollLogEntry(
                    label=custom_roll.name,
                    formula=custom_roll.formula,
                    result=outcome.total,
                    details=f"{custom_roll.name}: {outcome.rendered_detail}",
                    roll_type=custom_roll.roll_type,
                    character_id=character_id,
                )
            )
            logger.info("Custom roll", name=custom_roll.name, total=outcome.total)
        return outcome

    # -------------------------------------------------------------------------
    # Combat
    # -------------------------------------------------------------------------

    def apply_combat_event(
        self,
        character_id: str,
        kind: CombatEventKind,
        amount_input: FixedAmount | FormulaAmount,
        rng: RandomSource | None = None,
        *,
        damage_type: str | None = None,
        note: str | None = None,
    ) -> CombatResolution:
        """Apply damage or healing to a character and persist the outcome.

        Writes the audit event, the roll log entry and the new hit points, in
        that order, only once the amount has been resolved.

        Raises:
            InvalidFormulaError: If the formula does not parse.
            NonPositiveAmountError: If the amount is not positive.
        """
        with log_context(character_id=character_id):
            sheet = self._characters.load_character(character_id)
            resolution = self._processor.process(
                sheet.hit_points,
                kind,
                amount_input,
                rng,
                damage_type=damage_type,
                note=note,
                character_id=sheet.id,
            )
            self._persistence.append_combat_event(resolution.event)
            self._persistence.append_roll_log_entry(resolution.roll_log_entry)
            self._persistence.save_hit_points(sheet.id, resolution.hit_points)
        return resolution

    # -------------------------------------------------------------------------
    # Encounters
    # -------------------------------------------------------------------------

    def open_encounter(self, encounter_id: str) -> EncounterTracker:
        """Load an encounter's stored entries into a tracker."""
        return EncounterTracker.load(
            encounter_id,
            self._persistence.load_encounter_entries(encounter_id),
        )

    def save_encounter(self, tracker: EncounterTracker) -> list[EncounterEntry]:
        """Persist a tracker's entries.

        Raises:
            EncounterError: If the tracker has no encounter id.
        """
        if tracker.encounter_id is None:
            raise EncounterError("Cannot save an encounter without an id")
        with log_context(encounter_id=tracker.encounter_id):
            entries = tracker.snapshot()
            self._persistence.save_encounter_entries(tracker.encounter_id, entries)
            logger.info("Encounter saved", entries=len(entries))
        return entries

    def add_character(
        self,
        tracker: EncounterTracker,
        character_id: str,
        *,
        initiative: int | None = None,
    ) -> EncounterEntry:
        """Add a player character to an encounter."""
        with log_context(character_id=character_id):
            sheet = self._characters.load_character(character_id)
            return tracker.add_entry(sheet, initiative=initiative)

    def suggest_creatures(
        self,
        system: GameSystem | str,
        target_budget: float,
        creature_count: int,
        strategy: BudgetStrategy | str,
        rng: RandomSource | None = None,
        *,
        excluded_ids: Iterable[str] = (),
    ) -> BudgetPlan:
        """Plan creatures from the catalogue of a game system.

        Raises:
            UnknownSystemError: If the system has no rules profile.
        """
        profile = get_profile(system)
        with log_context(system=profile.system.value):
            pool = self._creatures.creatures_for(profile.system)
            return self._planner.plan(
                target_budget,
                creature_count,
                pool,
                strategy,
                rng,
                excluded_ids=excluded_ids,
            )


__all__ = [
    "GameTable",
]
