"""Rules resolution and encounter management engine.

Submodules:
    dice: Dice formula parsing and evaluation against an injected random source
    rules: Per-system rules profiles (skills, attributes, check policy)
    skills: Skill check resolution
    combat_events: Damage and healing resolution
    encounter: Encounter tracker (ordering, initiative, turns)
    budget: Challenge budget planner
    table: Orchestration over the host application's collaborators

Example:
    >>> from mesa_engine.engine import SkillResolver, create_rng
    >>>
    >>> result = SkillResolver("5e").roll("perception", 14, None, 5, create_rng(3))
    >>> print(result.describe())
"""

from __future__ import annotations

# =============================================================================
# Dice
# =============================================================================
from mesa_engine.engine.dice import (
    DiceFormula,
    DiceFormulaEngine,
    RandomSource,
    RollOutcome,
    create_rng,
    evaluate,
    parse,
    roll,
)

# =============================================================================
# Rules & Skills
# =============================================================================
from mesa_engine.engine.rules import (
    AttributeDefinition,
    CheckSpec,
    SkillDefinition,
    SystemRulesProfile,
    ability_modifier,
    get_profile,
    proficiency_bonus,
)
from mesa_engine.engine.skills import SkillResolver

# =============================================================================
# Combat
# =============================================================================
from mesa_engine.engine.combat_events import (
    CombatEventProcessor,
    CombatResolution,
    ResolvedAmount,
    apply_damage,
    apply_healing,
)

# =============================================================================
# Encounters
# =============================================================================
from mesa_engine.engine.encounter import EncounterTracker
from mesa_engine.engine.budget import ChallengeBudgetPlanner, suggest_target_budget
from mesa_engine.engine.table import GameTable


__all__ = [
    # Dice
    "DiceFormula",
    "DiceFormulaEngine",
    "RandomSource",
    "RollOutcome",
    "create_rng",
    "evaluate",
    "parse",
    "roll",
    # Rules
    "AttributeDefinition",
    "CheckSpec",
    "SkillDefinition",
    "SystemRulesProfile",
    "ability_modifier",
    "get_profile",
    "proficiency_bonus",
    "SkillResolver",
    # Combat
    "CombatEventProcessor",
    "CombatResolution",
    "ResolvedAmount",
    "apply_damage",
    "apply_healing",
    # Encounters
    "EncounterTracker",
    "ChallengeBudgetPlanner",
    "suggest_target_budget",
    "GameTable",
]
