"""Dice formula parsing and evaluation.

This module parses ``NdM``, ``NdM+K`` and ``NdM-K`` formulas and rolls
them against an injected random source, so every outcome is reproducible
under a seeded generator.

Example:
    >>> from mesa_engine.engine.dice import create_rng, roll
    >>> outcome = roll("2d6+3", create_rng(42))
    >>> 5 <= outcome.total <= 15
    True
"""

from __future__ import annotations

import math
import random
import re
from collections.abc import Callable
from dataclasses import dataclass
from typing import Literal

from mesa_engine.core.config import get_settings
from mesa_engine.core.constants import DICE_FORMULA_PATTERN
from mesa_engine.core.exceptions import DiceRollError, InvalidFormulaError
from mesa_engine.core.logging import get_logger


logger = get_logger(__name__)

RandomSource = Callable[[], float]
"""Zero-argument callable returning a uniform float in ``[0, 1)``."""

_FORMULA_RE = re.compile(DICE_FORMULA_PATTERN, re.ASCII)


@dataclass(frozen=True)
class DiceFormula:
    """A parsed dice formula.

    Attributes:
        dice_count: Number of dice rolled.
        die_size: Faces on each die.
        operator: Sign applied to the modifier.
        modifier: Unsigned flat modifier.
    """

    dice_count: int
    die_size: int
    operator: Literal["+", "-"] = "+"
    modifier: int = 0

    def __str__(self) -> str:
        base = f"{self.dice_count}d{self.die_size}"
        if self.modifier:
            return f"{base}{self.operator}{self.modifier}"
        return base

    @property
    def signed_modifier(self) -> int:
        """Modifier with its sign applied."""
        return self.modifier if self.operator == "+" else -self.modifier

    @property
    def minimum(self) -> int:
        """Lowest possible total."""
        return self.dice_count + self.signed_modifier

    @property
    def maximum(self) -> int:
        """Highest possible total."""
        return self.dice_count * self.die_size + self.signed_modifier


@dataclass(frozen=True)
class RollOutcome:
    """Result of evaluating a dice formula.

    Attributes:
        formula: The formula that was rolled.
        rolls: Face shown by each die, in draw order.
        total: Sum of the dice with the modifier applied.
        rendered_detail: Breakdown such as ``"[3, 5] + 2 = 10"``.
    """

    formula: DiceFormula
    rolls: tuple[int, ...]
    total: int
    rendered_detail: str


def parse(formula: str) -> DiceFormula:
    """Parse a dice formula.

    Only the ``d`` is case-insensitive; whitespace anywhere is rejected.

    Args:
        formula: Formula string, e.g. ``"2d6+3"``.

    Returns:
        The parsed formula. A missing modifier is normalized to ``+0``; the
        operator of an explicit zero modifier is kept.

    Raises:
        InvalidFormulaError: If the string does not match the grammar or
            declares zero dice or zero-sided dice.
    """
    if not isinstance(formula, str):
        raise InvalidFormulaError("Dice formula must be a string", expression=repr(formula))

    match = _FORMULA_RE.fullmatch(formula)
    if match is None:
        raise InvalidFormulaError("Formula does not match NdM, NdM+K or NdM-K", expression=formula)

    dice_count = int(match.group(1))
    die_size = int(match.group(2))
    if dice_count < 1 or die_size < 1:
        raise InvalidFormulaError("Dice count and die size must be positive", expression=formula)

    modifier = int(match.group(4)) if match.group(4) else 0
    operator = match.group(3) or "+"
    return DiceFormula(
        dice_count=dice_count,
        die_size=die_size,
        operator=operator,  # type: ignore[arg-type]
        modifier=modifier,
    )


def _draw(rng: RandomSource, die_size: int) -> int:
    value = rng()
    if not 0.0 <= value < 1.0:
        raise DiceRollError(
            f"Random source returned {value!r}, expected a value in [0, 1)",
            details={"die_size": die_size},
        )
    return math.floor(value * die_size) + 1


def render_detail(rolls: tuple[int, ...], formula: DiceFormula, total: int) -> str:
    """Render ``"[r1, r2, ...] ± modifier = total"``, omitting a zero modifier."""
    detail = f"[{', '.join(str(r) for r in rolls)}]"
    if formula.modifier:
        detail += f" {formula.operator} {formula.modifier}"
    return f"{detail} = {total}"


def evaluate(formula: DiceFormula | str, rng: RandomSource) -> RollOutcome:
    """Roll a formula against a random source.

    Args:
        formula: Parsed formula, or a string to parse first.
        rng: Random source yielding floats in ``[0, 1)``.

    Returns:
        A fresh RollOutcome.

    Raises:
        InvalidFormulaError: If ``formula`` is a malformed string.
        DiceRollError: If the random source yields a value outside ``[0, 1)``.
    """
    parsed = parse(formula) if isinstance(formula, str) else formula

    rolls = tuple(_draw(rng, parsed.die_size) for _ in range(parsed.dice_count))
    total = sum(rolls) + parsed.signed_modifier
    outcome = RollOutcome(
        formula=parsed,
        rolls=rolls,
        total=total,
        rendered_detail=render_detail(rolls, parsed, total),
    )

    logger.debug("Dice rolled", formula=str(parsed), rolls=list(rolls), total=total)
    return outcome


def create_rng(seed: int | None = None) -> RandomSource:
    """Create a uniform random source.

    Args:
        seed: Seed for a reproducible stream. Falls back to the configured
            ``rules.rng_seed``; when both are unset the stream is unseeded.

    Returns:
        A callable yielding floats in ``[0, 1)``.
    """
    if seed is None:
        seed = get_settings().rules.rng_seed
    return random.Random(seed).random


def roll(formula: DiceFormula | str, rng: RandomSource | None = None) -> RollOutcome:
    """Parse and evaluate a formula, creating a random source when none is given."""
    return evaluate(formula, rng if rng is not None else create_rng())


class DiceFormulaEngine:
    """Dice evaluation bound to a single random source.

    Example:
        >>> engine = DiceFormulaEngine(seed=7)
        >>> engine.roll("1d20").total in range(1, 21)
        True
    """

    def __init__(self, rng: RandomSource | None = None, *, seed: int | None = None) -> None:
        """Initialize the engine.

        Args:
            rng: Random source to draw from. Takes precedence over ``seed``.
            seed: Seed for a private generator when ``rng`` is omitted.
        """
        self._rng = rng if rng is not None else create_rng(seed)
        logger.debug("DiceFormulaEngine initialized", seeded=seed is not None)

    @property
    def rng(self) -> RandomSource:
        """The bound random source."""
        return self._rng

    @staticmethod
    def parse(formula: str) -> DiceFormula:
        """Parse a dice formula. See :func:`parse`."""
        return parse(formula)

    def evaluate(self, formula: DiceFormula | str) -> RollOutcome:
        """Evaluate a formula with the bound random source."""
        return evaluate(formula, self._rng)

    def roll(self, formula: DiceFormula | str) -> RollOutcome:
        """Alias of :meth:`evaluate`."""
        return self.evaluate(formula)

    @staticmethod
    def is_valid(formula: str) -> bool:
        """Whether ``formula`` parses."""
        try:
            parse(formula)
        except InvalidFormulaError:
            return False
        return True


__all__ = [
    "RandomSource",
    "DiceFormula",
    "RollOutcome",
    "parse",
    "evaluate",
    "render_detail",
    "roll",
    "create_rng",
    "DiceFormulaEngine",
]
