"""Integration tests for the game table.

Drives checks, custom rolls, combat events and encounters through
``GameTable`` backed by the in-memory store.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any

import pytest
import structlog

from mesa_engine import GameTable
from mesa_engine.core.exceptions import (
    EncounterError,
    NonPositiveAmountError,
    UnknownSkillError,
    UnknownSystemError,
)
from mesa_engine.engine.encounter import EncounterTracker
from mesa_engine.models import (
    CombatEventKind,
    CustomRoll,
    FixedAmount,
    FormulaAmount,
    RollCategory,
)


RngFactory = Callable[..., Callable[[], float]]


@pytest.fixture
def table(memory_store: Any) -> GameTable:
    """Provide a table backed by the in-memory store."""
    return GameTable(memory_store, memory_store)


class TestRollFlow:
    """Test checks and custom rolls reaching the roll log."""

    def test_d20_skill(self, table: GameTable, memory_store: Any, dice_rng: RngFactory) -> None:
        """Perception for the fighter: 13 + 2 (SAB) + 3 (proficiency) + 1."""
        result = table.roll_skill("char-fighter", "perception", dice_rng(20, 13))

        assert result.total == 19
        entry = memory_store.roll_log[-1]
        assert entry.label == "Percepção"
        assert entry.result == 19
        assert entry.roll_type is RollCategory.SKILL
        assert entry.character_id == "char-fighter"

    def test_percentile_skill(
        self,
        table: GameTable,
        memory_store: Any,
        dice_rng: RngFactory,
    ) -> None:
        """Listen for the investigator: 60 against POD 65 + 5."""
        result = table.roll_skill("char-investigator", "listen", dice_rng(100, 60))

        assert result.is_success is True
        assert memory_store.roll_log[-1].details == "Ouvir: 60 ✓ Sucesso!"
        assert memory_store.roll_log[-1].result == 60

    def test_unknown_skill_not_logged(self, table: GameTable, memory_store: Any) -> None:
        """A skill outside the character's system fails before logging."""
        with pytest.raises(UnknownSkillError):
            table.roll_skill("char-fighter", "listen")
        assert memory_store.roll_log == []

    def test_custom_roll(self, table: GameTable, memory_store: Any, dice_rng: RngFactory) -> None:
        """A saved formula is rolled and logged under its own name."""
        sword = CustomRoll(name="Espada longa", formula="1d8+3", roll_type="attack")

        outcome = table.roll_custom("char-fighter", sword, dice_rng(8, 5))

        assert outcome.total == 8
        entry = memory_store.roll_log[-1]
        assert entry.label == "Espada longa"
        assert entry.details == "Espada longa: [5] + 3 = 8"
        assert entry.roll_type is RollCategory.ATTACK


class TestCombatFlow:
    """Test damage and healing persisted through the gateway."""

    def test_damage_then_healing(
        self,
        table: GameTable,
        memory_store: Any,
        dice_rng: RngFactory,
    ) -> None:
        """Damage and healing update the stored sheet and both logs."""
        table.apply_combat_event("char-fighter", CombatEventKind.DAMAGE_TAKEN, FixedAmount(value=12))
        assert memory_store.load_character("char-fighter").hp_current == 18

        resolution = table.apply_combat_event(
            "char-fighter",
            CombatEventKind.HEALING_DONE,
            FormulaAmount(formula="2d4"),
            dice_rng(4, 4, 4),
        )

        assert resolution.hit_points.current == 26
        assert memory_store.load_character("char-fighter").hp_current == 26
        assert [e.kind for e in memory_store.combat_events] == [
            CombatEventKind.DAMAGE_TAKEN,
            CombatEventKind.HEALING_DONE,
        ]
        assert [e.roll_type for e in memory_store.roll_log] == [
            RollCategory.DAMAGE_TAKEN,
            RollCategory.HEALING,
        ]

    def test_lethal_damage_clamped(self, table: GameTable, memory_store: Any) -> None:
        """Damage beyond the pool leaves the character at 0."""
        resolution = table.apply_combat_event(
            "char-investigator",
            CombatEventKind.DAMAGE_TAKEN,
            FixedAmount(value=50),
        )

        assert resolution.applied == 9
        assert memory_store.load_character("char-investigator").hit_points.is_down

    def test_rejected_amount_writes_nothing(self, table: GameTable, memory_store: Any) -> None:
        """An invalid amount leaves hit points and logs untouched."""
        with pytest.raises(NonPositiveAmountError):
            table.apply_combat_event("char-fighter", CombatEventKind.DAMAGE_TAKEN, FixedAmount(value=0))

        assert memory_store.load_character("char-fighter").hp_current == 30
        assert memory_store.combat_events == []
        assert memory_store.roll_log == []


class TestEncounterFlow:
    """Test building, running and persisting an encounter."""

    def test_plan_and_persist(self, table: GameTable, dice_rng: RngFactory) -> None:
        """Plan goblins, add the fighter, sort, save and reopen."""
        tracker = table.open_encounter("enc-1")
        assert len(tracker) == 0

        plan = table.suggest_creatures("5e", 4, 2, "fixed", dice_rng(4, 1, 1))
        goblin, goblin_b = tracker.add_plan(plan)
        fighter = table.add_character(tracker, "char-fighter", initiative=15)

        assert (goblin.display_name, goblin_b.display_name) == ("Goblin", "Goblin B")

        tracker.set_initiative(goblin.id, 12)
        tracker.set_initiative(goblin_b.id, 17)
        tracker.sort_by_initiative_descending()
        table.save_encounter(tracker)

        reopened = table.open_encounter("enc-1")
        assert [e.display_name for e in reopened.entries] == ["Goblin B", "Thorin", "Goblin"]
        assert [e.sort_order for e in reopened.entries] == [0, 1, 2]
        assert reopened.get(fighter.id).is_player_controlled

    def test_creatures_filtered_by_system(
        self,
        table: GameTable,
        memory_store: Any,
        dice_rng: RngFactory,
    ) -> None:
        """Creatures of another system never reach the plan."""
        from mesa_engine.models import CreatureTemplate

        memory_store.add_creature(
            CreatureTemplate(id="deep-one", name="Deep One", system="horror", difficulty_rating=1, hp=20)
        )

        plan = table.suggest_creatures("horror", 1, 1, "random", dice_rng(1, 1))

        assert [c.id for c in plan.creatures] == ["deep-one"]

    def test_unknown_system(self, table: GameTable) -> None:
        """Planning for an unsupported system fails."""
        with pytest.raises(UnknownSystemError):
            table.suggest_creatures("gurps", 4, 2, "fixed")

    def test_save_requires_id(self, table: GameTable) -> None:
        """Anonymous trackers cannot be persisted."""
        with pytest.raises(EncounterError):
            table.save_encounter(EncounterTracker())


class TestOperationLogging:
    """Test identifiers bound around table operations reach nested events."""

    @staticmethod
    def _events(stream: Any) -> list[dict[str, Any]]:
        return [json.loads(line) for line in stream.getvalue().splitlines()]

    def test_skill_roll_context(
        self,
        table: GameTable,
        captured_logs: Any,
        dice_rng: RngFactory,
    ) -> None:
        """Dice draws made for a skill check carry the character and skill."""
        table.roll_skill("char-fighter", "perception", dice_rng(20, 13))

        dice_event = next(e for e in self._events(captured_logs) if e["event"] == "Dice rolled")
        assert dice_event["character_id"] == "char-fighter"
        assert dice_event["skill"] == "perception"
        assert dice_event["engine"] == "mesa_engine"

    def test_context_released(self, table: GameTable, captured_logs: Any) -> None:
        """Identifiers do not leak into events logged after the operation."""
        table.apply_combat_event("char-fighter", CombatEventKind.DAMAGE_TAKEN, FixedAmount(value=3))
        structlog.get_logger().info("After event")

        events = self._events(captured_logs)
        saved = next(e for e in events if e["event"] == "Hit points saved")
        after = next(e for e in events if e["event"] == "After event")
        assert saved["character_id"] == "char-fighter"
        assert "character_id" not in after
