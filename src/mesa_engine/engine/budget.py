"""Challenge budget planning.

Given a target difficulty, a creature pool and a desired creature count,
the planner picks a multiset of creatures whose ratings approximate the
target. Two distribution strategies exist:

- ``fixed``: each slot draws independently among creatures rated at most
  ``max(1, floor(target / count)) + 1``; a slot with no eligible creature
  is skipped.
- ``random``: draws greedily against a remaining budget, capping each pick
  at ``min(remaining, ceil(target / count) + 1)`` and ignoring unrated
  creatures, until the count is reached, the budget is spent or too many
  draws fail.

Plans are advisory; nothing reaches an encounter until the caller passes
the plan to ``EncounterTracker.add_plan``.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from typing import TypeVar

from mesa_engine.core.config import get_settings
from mesa_engine.core.constants import EMPTY_POOL_NOTICE, SHORT_PLAN_NOTICE
from mesa_engine.core.exceptions import DiceRollError, ValidationError
from mesa_engine.core.logging import get_logger
from mesa_engine.engine.dice import RandomSource, create_rng
from mesa_engine.models.encounter import BudgetPlan, CreatureTemplate
from mesa_engine.models.enums import BudgetStrategy


logger = get_logger(__name__)

T = TypeVar("T")


def choose(items: Sequence[T], rng: RandomSource) -> T:
    """Pick ``items[floor(rng() * len(items))]``.

    Raises:
        DiceRollError: If the random source yields a value outside ``[0, 1)``.
    """
    value = rng()
    if not 0.0 <= value < 1.0:
        raise DiceRollError(f"Random source returned {value!r}, expected a value in [0, 1)")
    return items[math.floor(value * len(items))]


def suggest_target_budget(levels: Iterable[int]) -> int:
    """Default target budget for a party: mean level rounded half up, at least 1."""
    levels = list(levels)
    if not levels:
        return 1
    return max(1, math.floor(sum(levels) / len(levels) + 0.5))


class ChallengeBudgetPlanner:
    """Selects creatures to match a target difficulty.

    Example:
        >>> planner = ChallengeBudgetPlanner()
        >>> plan = planner.plan(4, 2, pool, BudgetStrategy.FIXED, rng)
        >>> len(plan.creatures)
        2
    """

    def __init__(
        self,
        *,
        max_random_attempts: int | None = None,
        fixed_slack: int | None = None,
        random_slack: int | None = None,
    ) -> None:
        """Initialize the planner.

        Args:
            max_random_attempts: Failed draws tolerated by the random strategy.
            fixed_slack: Rating tolerance above the per-creature budget.
            random_slack: Rating tolerance above the per-creature ceiling.
        """
        settings = get_settings().budget
        self._max_random_attempts = (
            settings.max_random_attempts if max_random_attempts is None else max_random_attempts
        )
        self._fixed_slack = settings.fixed_slack if fixed_slack is None else fixed_slack
        self._random_slack = settings.random_slack if random_slack is None else random_slack

    def plan(
        self,
        target_budget: float,
        creature_count: int,
        pool: Iterable[CreatureTemplate],
        strategy: BudgetStrategy | str,
        rng: RandomSource | None = None,
        *,
        excluded_ids: Iterable[str] = (),
    ) -> BudgetPlan:
        """Build a plan.

        Args:
            target_budget: Total difficulty to approximate, greater than 0.
            creature_count: Number of creatures wanted, at least 1.
            pool: Candidate creatures.
            strategy: ``fixed`` or ``random``.
            rng: Random source for the draws.
            excluded_ids: Creature ids removed from the pool before selection.

        Returns:
            The plan. An empty pool yields an empty plan with a notice, not an error.

        Raises:
            ValidationError: If the budget or count is out of range.
        """
        if target_budget <= 0:
            raise ValidationError(
                "Target budget must be greater than 0",
                field_name="target_budget",
                invalid_value=target_budget,
            )
        if creature_count < 1:
            raise ValidationError(
                "Creature count must be at least 1",
                field_name="creature_count",
                invalid_value=creature_count,
            )
        strategy = BudgetStrategy(strategy)
        rng = rng if rng is not None else create_rng()

        excluded = set(excluded_ids)
        candidates = [c for c in pool if c.id not in excluded]

        if not candidates:
            logger.warning(
                "Budget pool is empty",
                strategy=strategy.value,
                excluded=len(excluded),
            )
            return BudgetPlan(
                strategy=strategy,
                target_budget=target_budget,
                creature_count=creature_count,
                notice=EMPTY_POOL_NOTICE,
            )

        if strategy is BudgetStrategy.FIXED:
            selected = self._plan_fixed(target_budget, creature_count, candidates, rng)
        else:
            selected = self._plan_random(target_budget, creature_count, candidates, rng)

        notice = None
        if not selected:
            notice = EMPTY_POOL_NOTICE
        elif strategy is BudgetStrategy.FIXED and len(selected) < creature_count:
            notice = SHORT_PLAN_NOTICE

        plan = BudgetPlan(
            strategy=strategy,
            target_budget=target_budget,
            creature_count=creature_count,
            creatures=tuple(selected),
            notice=notice,
        )
        logger.info(
            "Budget plan produced",
            strategy=strategy.value,
            target_budget=target_budget,
            requested=creature_count,
            selected=len(selected),
            total_difficulty=plan.total_difficulty,
        )
        return plan

    def _plan_fixed(
        self,
        target_budget: float,
        creature_count: int,
        candidates: list[CreatureTemplate],
        rng: RandomSource,
    ) -> list[CreatureTemplate]:
        per_creature = max(1, math.floor(target_budget / creature_count))
        ceiling = per_creature + self._fixed_slack
        eligible = [c for c in candidates if c.difficulty_rating <= ceiling]
        logger.debug("Fixed budget candidates", per_creature=per_creature, eligible=len(eligible))

        selected: list[CreatureTemplate] = []
        for slot in range(creature_count):
            if not eligible:
                logger.warning("Budget slot skipped", slot=slot, ceiling=ceiling)
                continue
            selected.append(choose(eligible, rng))
        return selected

    def _plan_random(
        self,
        target_budget: float,
        creature_count: int,
        candidates: list[CreatureTemplate],
        rng: RandomSource,
    ) -> list[CreatureTemplate]:
        cap = math.ceil(target_budget / creature_count) + self._random_slack
        remaining = target_budget
        failed = 0

        selected: list[CreatureTemplate] = []
        while remaining > 0 and len(selected) < creature_count:
            ceiling = min(remaining, cap)
            eligible = [c for c in candidates if 0 < c.difficulty_rating <= ceiling]
            if not eligible:
                failed += 1
                if failed >= self._max_random_attempts:
                    logger.warning(
                        "Random budget gave up",
                        attempts=failed,
                        remaining=remaining,
                        selected=len(selected),
                    )
                    break
                continue

            picked = choose(eligible, rng)
            selected.append(picked)
            remaining -= picked.difficulty_rating
        return selected


__all__ = [
    "choose",
    "suggest_target_budget",
    "ChallengeBudgetPlanner",
]
