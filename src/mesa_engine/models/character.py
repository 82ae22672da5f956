"""Pydantic V2 schemas for the character state read by the rules engine.

The character record itself is owned by the host application. This module
defines the validated slice of it that enters the engine: attribute scores,
per-skill overlays, level, and the hit point pool.
"""

from __future__ import annotations

from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from mesa_engine.models.enums import GameSystem


AttributeSet = dict[str, int]
"""Attribute label (``"FOR"``, ``"DES"``, ``"POD"``...) to integer score."""


class HitPoints(BaseModel):
    """Hit point pool of a character or combatant.

    The bound ``0 <= current <= max`` holds for every instance; all
    mutations return a new value through clamped arithmetic.

    Attributes:
        current: Current hit points.
        max: Maximum hit points.
    """

    model_config = ConfigDict(
        frozen=True,
        strict=True,
        extra="forbid",
    )

    current: Annotated[int, Field(ge=0, description="Current hit points")]
    max: Annotated[int, Field(ge=1, description="Maximum hit points")]

    @model_validator(mode="after")
    def check_bounds(self) -> HitPoints:
        """Ensure current hit points never exceed the maximum."""
        if self.current > self.max:
            msg = f"current ({self.current}) must not exceed max ({self.max})"
            raise ValueError(msg)
        return self

    @property
    def is_down(self) -> bool:
        """Whether the pool is empty."""
        return self.current == 0

    @property
    def missing(self) -> int:
        """Hit points needed to reach the maximum."""
        return self.max - self.current

    def with_current(self, value: int) -> HitPoints:
        """Return a copy with ``current`` set, clamped into ``[0, max]``."""
        return HitPoints(current=max(0, min(value, self.max)), max=self.max)

    def with_max(self, value: int) -> HitPoints:
        """Return a copy with a new maximum (at least 1), pulling ``current`` down if needed."""
        new_max = max(1, value)
        return HitPoints(current=min(self.current, new_max), max=new_max)


class SkillState(BaseModel):
    """Per-character overlay on a skill definition.

    Attributes:
        is_proficient: Whether the proficiency bonus applies (d20 systems).
        extra_bonus: Flat bonus added to checks (or to the percentile target).
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )

    is_proficient: bool = Field(default=False, description="Proficient in the skill")
    extra_bonus: int = Field(default=0, description="Extra flat bonus")


class CharacterSheet(BaseModel):
    """Validated character data consumed by the skill resolver and combat flow.

    Untyped rows from the host application are validated into this model
    before reaching the engine.

    Attributes:
        id: Character identifier.
        name: Character display name.
        system: Game system of the owning campaign.
        level: Character level.
        attributes: Attribute scores keyed by label.
        skills: Skill overlays keyed by skill id.
        hp_current: Current hit points.
        hp_max: Maximum hit points.
        armor_class: Armor class or defense, when the system uses one.
    """

    model_config = ConfigDict(
        extra="ignore",
        validate_assignment=True,
    )

    id: str = Field(min_length=1, description="Character identifier")
    name: str = Field(min_length=1, max_length=100, description="Display name")
    system: GameSystem = Field(description="Campaign game system")
    level: Annotated[int, Field(ge=1, le=20, description="Character level")] = 1
    attributes: AttributeSet = Field(default_factory=dict, description="Attribute scores")
    skills: dict[str, SkillState] = Field(default_factory=dict, description="Skill overlays")
    hp_current: Annotated[int, Field(ge=0, description="Current hit points")] = 10
    hp_max: Annotated[int, Field(ge=1, description="Maximum hit points")] = 10
    armor_class: int | None = Field(default=None, description="Armor class / defense")

    @model_validator(mode="before")
    @classmethod
    def normalize_attribute_labels(cls, data: Any) -> Any:
        """Upper-case attribute labels so ``"for"`` and ``"FOR"`` match."""
        if isinstance(data, dict) and isinstance(data.get("attributes"), dict):
            data = {
                **data,
                "attributes": {str(k).upper(): v for k, v in data["attributes"].items()},
            }
        return data

    @model_validator(mode="after")
    def check_hp_bounds(self) -> CharacterSheet:
        """Reject sheets whose current hit points exceed the maximum."""
        if self.hp_current > self.hp_max:
            msg = f"hp_current ({self.hp_current}) must not exceed hp_max ({self.hp_max})"
            raise ValueError(msg)
        return self

    @property
    def hit_points(self) -> HitPoints:
        """Hit point pool as an immutable value."""
        return HitPoints(current=self.hp_current, max=self.hp_max)

    def skill_state(self, skill_id: str) -> SkillState:
        """Return the overlay for a skill, defaulting to not proficient with no bonus."""
        return self.skills.get(skill_id, SkillState())


__all__ = [
    "AttributeSet",
    "HitPoints",
    "SkillState",
    "CharacterSheet",
]
