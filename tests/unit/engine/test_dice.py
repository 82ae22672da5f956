"""Tests for dice formula parsing and evaluation."""

from __future__ import annotations

import random
from collections.abc import Callable

import pytest

from mesa_engine.core.exceptions import DiceRollError, InvalidFormulaError
from mesa_engine.engine.dice import (
    DiceFormula,
    DiceFormulaEngine,
    RollOutcome,
    create_rng,
    evaluate,
    parse,
    roll,
)


RngFactory = Callable[..., Callable[[], float]]


class TestParse:
    """Tests for the formula grammar."""

    @pytest.mark.parametrize(
        ("formula", "expected"),
        [
            ("1d20", DiceFormula(1, 20, "+", 0)),
            ("2d6+3", DiceFormula(2, 6, "+", 3)),
            ("1d4-1", DiceFormula(1, 4, "-", 1)),
            ("3D8", DiceFormula(3, 8, "+", 0)),
            ("1d6-0", DiceFormula(1, 6, "-", 0)),
            ("1d6+0", DiceFormula(1, 6, "+", 0)),
        ],
    )
    def test_valid_formulas(self, formula: str, expected: DiceFormula) -> None:
        """Test well-formed formulas parse into their parts."""
        assert parse(formula) == expected

    @pytest.mark.parametrize(
        "formula",
        [
            "", "d6", "1d", "2x6", "1d6+", "1d6*2", "1d6+1d4", " 1d6", "1d6 ", "1 d6", "1d6 + 2",
            "0d6", "1d0", "1d6\n", "\u0663d6", "\uff12d\uff16+1", "1d\u0666",
        ],
    )
    def test_invalid_formulas(self, formula: str) -> None:
        """Test malformed formulas are rejected, never coerced."""
        with pytest.raises(InvalidFormulaError) as exc_info:
            parse(formula)

        assert exc_info.value.kind == "InvalidFormula"

    def test_zero_modifier_keeps_operator(self) -> None:
        """Test an explicit zero modifier keeps its sign but is not rendered."""
        parsed = parse("1d6-0")

        assert parsed.operator == "-"
        assert parsed.signed_modifier == 0
        assert str(parsed) == "1d6"

    def test_non_string_rejected(self) -> None:
        """Test non-string input is rejected."""
        with pytest.raises(InvalidFormulaError):
            parse(20)  # type: ignore[arg-type]

    @pytest.mark.parametrize("formula", ["1d20", "2d6+3", "4d10-2", "10d100+15"])
    def test_rendering_reproduces_parts(self, formula: str) -> None:
        """Test re-rendering a parsed formula parses back to the same parts."""
        parsed = parse(formula)
        assert str(parsed) == formula
        assert parse(str(parsed)) == parsed

    def test_bounds(self) -> None:
        """Test minimum and maximum totals."""
        formula = parse("2d6-1")
        assert formula.minimum == 1
        assert formula.maximum == 11


class TestEvaluate:
    """Tests for rolling formulas against a random source."""

    def test_rolls_and_detail(self, dice_rng: RngFactory) -> None:
        """Test dice faces, total and rendered detail."""
        outcome = evaluate(parse("2d6+2"), dice_rng(6, 3, 5))

        assert isinstance(outcome, RollOutcome)
        assert outcome.rolls == (3, 5)
        assert outcome.total == 10
        assert outcome.rendered_detail == "[3, 5] + 2 = 10"

    def test_negative_modifier(self, dice_rng: RngFactory) -> None:
        """Test a subtracted modifier may drive the total below zero."""
        outcome = evaluate("1d4-5", dice_rng(4, 2))

        assert outcome.total == -3
        assert outcome.rendered_detail == "[2] - 5 = -3"

    def test_zero_modifier_omitted(self, dice_rng: RngFactory) -> None:
        """Test the modifier segment is omitted when zero."""
        assert evaluate("1d8", dice_rng(8, 4)).rendered_detail == "[4] = 4"

    def test_draw_extremes(self, scripted_rng: RngFactory) -> None:
        """Test 0.0 maps to face 1 and values just below 1 map to the top face."""
        outcome = evaluate("2d20", scripted_rng(0.0, 0.999999))
        assert outcome.rolls == (1, 20)

    def test_deterministic_with_seed(self) -> None:
        """Test the same seed yields the same rolls and total."""
        first = evaluate("4d6+1", create_rng(42))
        second = evaluate("4d6+1", create_rng(42))

        assert first.rolls == second.rolls
        assert first.total == second.total

    @pytest.mark.parametrize("seed", range(25))
    def test_3d6_range(self, seed: int) -> None:
        """Test 3d6 totals stay in [3, 18] and each die in [1, 6]."""
        outcome = evaluate("3d6", create_rng(seed))

        assert 3 <= outcome.total <= 18
        assert all(1 <= r <= 6 for r in outcome.rolls)

    @pytest.mark.parametrize("value", [1.0, -0.1, 2.5])
    def test_out_of_range_source(self, scripted_rng: RngFactory, value: float) -> None:
        """Test a random source outside [0, 1) is an error."""
        with pytest.raises(DiceRollError):
            evaluate("1d6", scripted_rng(value))


class TestCreateRng:
    """Tests for random source creation."""

    def test_explicit_seed(self) -> None:
        """Test an explicit seed matches the standard generator."""
        assert create_rng(7)() == random.Random(7).random()

    def test_configured_seed(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test the configured seed is used when none is given."""
        monkeypatch.setenv("MESA_ENGINE_RULES_RNG_SEED", "99")

        assert create_rng()() == random.Random(99).random()

    def test_roll_convenience(self) -> None:
        """Test roll parses and evaluates with a fresh source."""
        assert 1 <= roll("1d20").total <= 20


class TestDiceFormulaEngine:
    """Tests for the engine object bound to one random source."""

    def test_seeded_engine_matches_functions(self) -> None:
        """Test a seeded engine rolls like evaluate with the same seed."""
        engine = DiceFormulaEngine(seed=5)
        assert engine.roll("3d8").rolls == evaluate("3d8", create_rng(5)).rolls

    def test_bound_source(self, dice_rng: RngFactory) -> None:
        """Test an injected source is used for every draw."""
        engine = DiceFormulaEngine(dice_rng(20, 17, 2))

        assert engine.evaluate("1d20").total == 17
        assert engine.evaluate("1d20").total == 2

    def test_is_valid(self) -> None:
        """Test formula validity checks."""
        assert DiceFormulaEngine.is_valid("2d6+1") is True
        assert DiceFormulaEngine.is_valid("2d6 +1") is False
