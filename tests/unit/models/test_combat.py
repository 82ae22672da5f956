"""Tests for combat and roll log models."""

from __future__ import annotations

import pytest
from pydantic import TypeAdapter, ValidationError

from mesa_engine.core.exceptions import InvalidFormulaError
from mesa_engine.models import (
    AmountInput,
    CombatEvent,
    CombatEventKind,
    CustomRoll,
    FixedAmount,
    FormulaAmount,
    RollCategory,
)


class TestAmountInput:
    """Tests for the discriminated amount input."""

    def test_fixed_from_dict(self) -> None:
        """Test a fixed amount row is parsed by its source tag."""
        amount = TypeAdapter(AmountInput).validate_python({"source": "fixed", "value": 5})
        assert isinstance(amount, FixedAmount)
        assert amount.value == 5

    def test_formula_from_dict(self) -> None:
        """Test a formula row is parsed by its source tag."""
        amount = TypeAdapter(AmountInput).validate_python({"source": "formula", "formula": "2d6"})
        assert isinstance(amount, FormulaAmount)

    def test_fixed_accepts_non_positive(self) -> None:
        """Test positivity is left to the combat processor."""
        assert FixedAmount(value=0).value == 0


class TestCombatEvent:
    """Tests for the CombatEvent audit record."""

    def test_amount_must_be_positive(self) -> None:
        """Test a zero amount is rejected."""
        with pytest.raises(ValidationError):
            CombatEvent(kind=CombatEventKind.DAMAGE_TAKEN, amount=0, source_detail="x")

    def test_timestamp_is_aware(self) -> None:
        """Test events carry a timezone-aware timestamp."""
        event = CombatEvent(kind=CombatEventKind.HEALING_DONE, amount=3, source_detail="x")
        assert event.occurred_at.tzinfo is not None


class TestCustomRoll:
    """Tests for saved character formulas."""

    def test_formula_normalized(self) -> None:
        """Test the formula is stored in canonical form."""
        roll = CustomRoll(name="Espada longa", formula="1D8+0", roll_type=RollCategory.DAMAGE)
        assert roll.formula == "1d8"

    def test_invalid_formula(self) -> None:
        """Test malformed formulas raise InvalidFormulaError."""
        with pytest.raises(InvalidFormulaError):
            CustomRoll(name="Quebrada", formula="1d")

    def test_roll_type_restricted(self) -> None:
        """Test only attack, test, damage and other are allowed."""
        with pytest.raises(ValidationError):
            CustomRoll(name="X", formula="1d4", roll_type=RollCategory.SKILL)


class TestRollCategory:
    """Tests for roll log categories."""

    def test_labels(self) -> None:
        """Test display labels."""
        assert RollCategory.DAMAGE_TAKEN.label == "Dano Recebido"
        assert RollCategory.HEALING.label == "Cura"
