"""Enumeration types for the MesaHub rules engine.

These enums name the game systems a campaign can declare, the kinds of
checks and combat events the engine produces, and the categories used
when forwarding rolls to the campaign roll log.
"""

from __future__ import annotations

from enum import StrEnum


class GameSystem(StrEnum):
    """Game systems a campaign can run.

    Values match the identifiers stored by the campaign records.
    """

    D20_ABILITY = "5e"
    D20_CUSTOM = "olho_da_morte"
    PERCENTILE = "horror"

    @property
    def is_d20(self) -> bool:
        """Whether checks in this system roll a d20 and add bonuses."""
        return self is not GameSystem.PERCENTILE


class CheckKind(StrEnum):
    """How a skill check is resolved."""

    D20 = "d20"
    PERCENTILE = "percentile"


class CombatEventKind(StrEnum):
    """Hit point events recorded in the campaign audit log."""

    DAMAGE_TAKEN = "DAMAGE_TAKEN"
    HEALING_DONE = "HEALING_DONE"


class AmountSource(StrEnum):
    """Whether a damage or healing amount was typed in or rolled."""

    FIXED = "fixed"
    FORMULA = "formula"


class BudgetStrategy(StrEnum):
    """Distribution strategies of the challenge budget planner."""

    FIXED = "fixed"
    RANDOM = "random"


class RollCategory(StrEnum):
    """Categories of entries in the campaign roll log."""

    ATTACK = "attack"
    TEST = "test"
    DAMAGE = "damage"
    OTHER = "other"
    SKILL = "skill"
    DAMAGE_TAKEN = "damage_taken"
    HEALING = "healing"

    @property
    def label(self) -> str:
        """Display label shown next to roll log entries."""
        return _ROLL_CATEGORY_LABELS[self]


_ROLL_CATEGORY_LABELS: dict[RollCategory, str] = {
    RollCategory.ATTACK: "Ataque",
    RollCategory.TEST: "Teste",
    RollCategory.DAMAGE: "Dano",
    RollCategory.OTHER: "Outro",
    RollCategory.SKILL: "Perícia",
    RollCategory.DAMAGE_TAKEN: "Dano Recebido",
    RollCategory.HEALING: "Cura",
}


__all__ = [
    "GameSystem",
    "CheckKind",
    "CombatEventKind",
    "AmountSource",
    "BudgetStrategy",
    "RollCategory",
]
