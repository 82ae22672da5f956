"""Rules constants for the MesaHub rules engine.

This module defines the numeric tables shared by the rules profiles,
the combat processor and the challenge budget planner.
"""

from __future__ import annotations

# =============================================================================
# Dice
# =============================================================================

DICE_FORMULA_PATTERN = r"^([0-9]+)[dD]([0-9]+)(?:([+-])([0-9]+))?$"
"""Grammar accepted for dice formulas (``NdM``, ``NdM+K``, ``NdM-K``), ASCII digits only."""

D20_CHECK_FORMULA = "1d20"
"""Die rolled for checks in the d20 systems."""

PERCENTILE_CHECK_FORMULA = "1d100"
"""Die rolled for checks in the percentile system."""

# =============================================================================
# Attribute Scores
# =============================================================================

D20_DEFAULT_SCORE = 10
"""Default attribute score in the d20 systems."""

D20_SCORE_RANGE = (1, 30)
"""Expected attribute score range in the d20 systems (informational only)."""

PERCENTILE_DEFAULT_SCORE = 50
"""Default attribute score in the percentile system."""

PERCENTILE_SCORE_RANGE = (1, 99)
"""Expected attribute score range in the percentile system (informational only)."""

# =============================================================================
# Proficiency (level threshold, bonus), highest threshold first
# =============================================================================

PROFICIENCY_TABLE = (
    (17, 6),
    (13, 5),
    (9, 4),
    (5, 3),
)

DEFAULT_PROFICIENCY_BONUS = 2
"""Proficiency bonus below the first threshold."""

# =============================================================================
# Encounter
# =============================================================================

DEFAULT_INITIATIVE = 0
"""Initiative assigned to entries added without a value."""

# =============================================================================
# Challenge Budget
# =============================================================================

MAX_RANDOM_BUDGET_ATTEMPTS = 100
"""Failed draws tolerated by the random strategy before it stops."""

FIXED_BUDGET_SLACK = 1
"""Difficulty tolerance above the per-creature budget (fixed strategy)."""

RANDOM_BUDGET_SLACK = 1
"""Difficulty tolerance above the per-creature ceiling (random strategy)."""

DEFAULT_DIFFICULTY_RATING = 0.25
"""Rating assumed for catalogue creatures that declare none."""

EMPTY_POOL_NOTICE = "Nenhuma criatura disponível no pool!"
"""Notice attached to a plan when no creature was eligible."""

SHORT_PLAN_NOTICE = "Algumas vagas ficaram sem criatura elegível."
"""Notice attached to a plan that holds fewer creatures than requested."""


__all__ = [
    "DICE_FORMULA_PATTERN",
    "D20_CHECK_FORMULA",
    "PERCENTILE_CHECK_FORMULA",
    "D20_DEFAULT_SCORE",
    "D20_SCORE_RANGE",
    "PERCENTILE_DEFAULT_SCORE",
    "PERCENTILE_SCORE_RANGE",
    "PROFICIENCY_TABLE",
    "DEFAULT_PROFICIENCY_BONUS",
    "DEFAULT_INITIATIVE",
    "MAX_RANDOM_BUDGET_ATTEMPTS",
    "FIXED_BUDGET_SLACK",
    "RANDOM_BUDGET_SLACK",
    "DEFAULT_DIFFICULTY_RATING",
    "EMPTY_POOL_NOTICE",
    "SHORT_PLAN_NOTICE",
]
