"""Tagged skill check results.

A check result is either a d20 result (roll plus bonuses against no fixed
target) or a percentile result (roll under a target). The two shapes are
distinct models discriminated on ``kind`` so host applications never pass
an untyped row where a result is expected.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

from mesa_engine.models.combat import RollLogEntry
from mesa_engine.models.enums import CheckKind, GameSystem, RollCategory


class _CheckResultBase(BaseModel, ABC):
    """Fields and log conversion shared by both result shapes."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    system: GameSystem = Field(description="System the check was resolved under")
    skill_id: str = Field(description="Skill identifier")
    skill_name: str = Field(description="Skill display name")
    attribute: str = Field(description="Governing attribute label")
    natural_roll: int = Field(description="Face shown by the die")
    formula: str = Field(description="Rendered check formula")

    @property
    @abstractmethod
    def display_total(self) -> int:
        """Number shown to players for this result."""

    @abstractmethod
    def describe(self) -> str:
        """Render the result as a one-line breakdown."""

    def to_log_entry(self, *, character_id: str | None = None) -> RollLogEntry:
        """Build the roll log entry for this result."""
        return RollLogEntry(
            label=self.skill_name,
            formula=self.formula,
            result=self.display_total,
            details=self.describe(),
            roll_type=RollCategory.SKILL,
            character_id=character_id,
        )


class D20CheckResult(_CheckResultBase):
    """Result of a d20 skill check.

    Attributes:
        modifier: Attribute modifier applied.
        proficiency_bonus: Proficiency bonus applied (0 when not proficient).
        extra_bonus: Extra bonus from the skill overlay.
        total: Natural roll plus every bonus.
    """

    kind: Literal[CheckKind.D20] = CheckKind.D20
    modifier: int = Field(description="Attribute modifier")
    proficiency_bonus: int = Field(default=0, description="Applied proficiency bonus")
    extra_bonus: int = Field(default=0, description="Extra bonus")
    total: int = Field(description="Check total")

    @property
    def display_total(self) -> int:
        """Number shown to the table."""
        return self.total

    @property
    def is_success(self) -> bool | None:
        """d20 checks have no built-in target."""
        return None

    def describe(self) -> str:
        return f"{self.skill_name}: {self.natural_roll} + bônus = {self.total}"


class PercentileCheckResult(_CheckResultBase):
    """Result of a percentile (roll-under) skill check.

    Attributes:
        target: Attribute score plus extra bonus.
        success: Whether the roll was at or under the target.
    """

    kind: Literal[CheckKind.PERCENTILE] = CheckKind.PERCENTILE
    target: int = Field(description="Success target")
    success: bool = Field(description="Roll at or under the target")

    @property
    def display_total(self) -> int:
        """Number shown to the table (the roll itself)."""
        return self.natural_roll

    @property
    def is_success(self) -> bool | None:
        return self.success

    def describe(self) -> str:
        outcome = "✓ Sucesso!" if self.success else "✗ Falha"
        return f"{self.skill_name}: {self.natural_roll} {outcome}"


SkillCheckResult = Annotated[
    D20CheckResult | PercentileCheckResult,
    Field(discriminator="kind"),
]
"""Either check result, discriminated on ``kind``."""


__all__ = [
    "D20CheckResult",
    "PercentileCheckResult",
    "SkillCheckResult",
]
