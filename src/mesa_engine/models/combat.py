"""Pydantic V2 schemas for combat events and roll log records.

This module defines the immutable records the engine hands back to the
host application for persistence: hit point audit events, roll log
entries, and the inputs describing a damage or healing amount.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from mesa_engine.models.enums import AmountSource, CombatEventKind, RollCategory


def _utcnow() -> datetime:
    return datetime.now(UTC)


class FixedAmount(BaseModel):
    """A damage or healing amount typed in directly.

    The value is validated by the combat processor, not here, so that a
    non-positive amount surfaces as ``NonPositiveAmountError``.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    source: Literal[AmountSource.FIXED] = AmountSource.FIXED
    value: int = Field(description="Amount entered by the user")


class FormulaAmount(BaseModel):
    """A damage or healing amount rolled from a dice formula."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    source: Literal[AmountSource.FORMULA] = AmountSource.FORMULA
    formula: str = Field(description="Dice formula, e.g. '2d6+3'")


AmountInput = Annotated[FixedAmount | FormulaAmount, Field(discriminator="source")]
"""Either kind of amount input, discriminated on ``source``."""


class CombatEvent(BaseModel):
    """Audit record of a hit point change.

    Attributes:
        kind: Damage taken or healing done.
        amount: Positive amount resolved for the event.
        source_detail: How the amount was obtained (fixed value or rendered roll).
        character_id: Character the event applies to, when known.
        occurred_at: When the event was created.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: CombatEventKind = Field(description="Event kind")
    amount: Annotated[int, Field(ge=1, description="Resolved amount")]
    source_detail: str = Field(description="Origin of the amount")
    character_id: str | None = Field(default=None, description="Affected character")
    occurred_at: datetime = Field(default_factory=_utcnow, description="Creation time")


class RollLogEntry(BaseModel):
    """Entry forwarded to the campaign roll log.

    Attributes:
        label: What was rolled (skill name, custom roll name, event label).
        formula: Formula shown next to the result.
        result: Numeric result displayed.
        details: Human-readable breakdown.
        roll_type: Roll log category.
        character_id: Character that rolled, when known.
        rolled_at: When the roll happened.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    label: str = Field(description="Roll label")
    formula: str = Field(description="Displayed formula")
    result: int = Field(description="Displayed result")
    details: str = Field(default="", description="Breakdown")
    roll_type: RollCategory = Field(description="Roll category")
    character_id: str | None = Field(default=None, description="Rolling character")
    rolled_at: datetime = Field(default_factory=_utcnow, description="Roll time")


class CustomRoll(BaseModel):
    """A named formula saved on a character sheet.

    Attributes:
        id: Identifier of the saved roll, when persisted.
        name: Display name.
        formula: Dice formula, validated on construction.
        roll_type: Roll log category (attack, test, damage or other).
        description: Optional free text.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str | None = Field(default=None, description="Saved roll id")
    name: str = Field(min_length=1, max_length=100, description="Display name")
    formula: str = Field(description="Dice formula")
    roll_type: Literal[
        RollCategory.ATTACK, RollCategory.TEST, RollCategory.DAMAGE, RollCategory.OTHER
    ] = RollCategory.TEST
    description: str | None = Field(default=None, description="Notes")

    @field_validator("formula", mode="after")
    @classmethod
    def validate_formula(cls, value: str) -> str:
        """Reject formulas the dice engine cannot parse.

        Raises:
            InvalidFormulaError: If the formula is malformed.
        """
        from mesa_engine.engine.dice import parse

        return str(parse(value))


__all__ = [
    "FixedAmount",
    "FormulaAmount",
    "AmountInput",
    "CombatEvent",
    "RollLogEntry",
    "CustomRoll",
]
