"""Pydantic V2 schemas for the MesaHub rules engine.

Submodules:
    enums: Enumeration types (GameSystem, CombatEventKind, BudgetStrategy...)
    character: Character slice read by the engine (CharacterSheet, HitPoints, SkillState)
    combat: Combat events, roll log entries, amount inputs and custom rolls
    checks: Tagged skill check results
    encounter: Creature templates, encounter entries and budget plans

Example:
    >>> from mesa_engine.models import HitPoints
    >>> HitPoints(current=7, max=10).with_current(15)
    HitPoints(current=10, max=10)
"""

from __future__ import annotations

# =============================================================================
# Enumerations
# =============================================================================
from mesa_engine.models.enums import (
    AmountSource,
    BudgetStrategy,
    CheckKind,
    CombatEventKind,
    GameSystem,
    RollCategory,
)

# =============================================================================
# Character
# =============================================================================
from mesa_engine.models.character import (
    AttributeSet,
    CharacterSheet,
    HitPoints,
    SkillState,
)

# =============================================================================
# Combat & Roll Log
# =============================================================================
from mesa_engine.models.combat import (
    AmountInput,
    CombatEvent,
    CustomRoll,
    FixedAmount,
    FormulaAmount,
    RollLogEntry,
)

# =============================================================================
# Check Results
# =============================================================================
from mesa_engine.models.checks import (
    D20CheckResult,
    PercentileCheckResult,
    SkillCheckResult,
)

# =============================================================================
# Encounter
# =============================================================================
from mesa_engine.models.encounter import (
    BudgetPlan,
    CreatureTemplate,
    EncounterEntry,
    parse_difficulty,
)


__all__ = [
    # Enums
    "AmountSource",
    "BudgetStrategy",
    "CheckKind",
    "CombatEventKind",
    "GameSystem",
    "RollCategory",
    # Character
    "AttributeSet",
    "CharacterSheet",
    "HitPoints",
    "SkillState",
    # Combat
    "AmountInput",
    "CombatEvent",
    "CustomRoll",
    "FixedAmount",
    "FormulaAmount",
    "RollLogEntry",
    # Checks
    "D20CheckResult",
    "PercentileCheckResult",
    "SkillCheckResult",
    # Encounter
    "BudgetPlan",
    "CreatureTemplate",
    "EncounterEntry",
    "parse_difficulty",
]
