"""Pydantic V2 schemas for encounters and the creature catalogue.

This module defines the read-only creature templates supplied by the
catalogue, the mutable entries tracked during an encounter, and the
advisory plan produced by the challenge budget planner.
"""

from __future__ import annotations

from fractions import Fraction
from typing import Annotated, Any
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from mesa_engine.core.constants import DEFAULT_DIFFICULTY_RATING
from mesa_engine.models.character import HitPoints
from mesa_engine.models.enums import BudgetStrategy, GameSystem


def parse_difficulty(value: Any) -> Any:
    """Convert a difficulty rating such as ``"1/4"``, ``"0.5"`` or ``2`` to a float.

    Fractions are parsed exactly, so ``"1/4"`` becomes ``0.25``.

    Raises:
        ValueError: If a string is not a number or a fraction.
    """
    if isinstance(value, Fraction):
        return float(value)
    if isinstance(value, str):
        try:
            return float(Fraction(value.strip()))
        except (ValueError, ZeroDivisionError) as exc:
            msg = f"Invalid difficulty rating: {value!r}"
            raise ValueError(msg) from exc
    return value


class CreatureTemplate(BaseModel):
    """Read-only catalogue entry for a creature.

    Attributes:
        id: Catalogue identifier.
        name: Creature name, used as the base display name in encounters.
        system: Game system the creature belongs to.
        creature_type: Free-form type ("Humanoide", "Morto-vivo"...).
        difficulty_rating: Challenge rating / level, the unit of budget planning.
        hp: Hit points a fresh creature starts with.
        max_hp: Maximum hit points.
        armor_class: Armor class or defense.
        description: Catalogue description.
        tags: Search tags.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
    )

    id: str = Field(min_length=1, description="Catalogue id")
    name: str = Field(min_length=1, max_length=100, description="Creature name")
    system: GameSystem | None = Field(default=None, description="Game system")
    creature_type: str = Field(default="", description="Creature type")
    difficulty_rating: Annotated[float, Field(ge=0, description="Difficulty rating")] = (
        DEFAULT_DIFFICULTY_RATING
    )
    hp: Annotated[int, Field(ge=1, description="Starting hit points")]
    max_hp: int | None = Field(default=None, ge=1, description="Maximum hit points")
    armor_class: int = Field(default=10, description="Armor class")
    description: str = Field(default="", description="Description")
    tags: tuple[str, ...] = Field(default=(), description="Search tags")

    @field_validator("difficulty_rating", mode="before")
    @classmethod
    def coerce_rating(cls, value: Any) -> Any:
        """Accept fractional ratings written as strings."""
        return parse_difficulty(value)

    @model_validator(mode="after")
    def check_hit_points(self) -> CreatureTemplate:
        """Ensure starting hit points do not exceed the maximum."""
        if self.max_hp is not None and self.hp > self.max_hp:
            msg = f"hp ({self.hp}) must not exceed max_hp ({self.max_hp})"
            raise ValueError(msg)
        return self

    @property
    def effective_max_hp(self) -> int:
        """Maximum hit points, defaulting to the starting value."""
        return self.max_hp if self.max_hp is not None else self.hp


class EncounterEntry(BaseModel):
    """A combatant tracked in an encounter.

    Attributes:
        id: Entry identifier.
        display_name: Name shown in the initiative list.
        initiative: Initiative value.
        hp_current: Current hit points.
        hp_max: Maximum hit points.
        is_player_controlled: Whether the entry mirrors a player character.
        sort_order: Position in the initiative list.
        creature_id: Catalogue template the entry was created from.
        character_id: Character the entry mirrors.
        armor_class: Armor class or defense.
    """

    model_config = ConfigDict(
        extra="forbid",
        validate_assignment=True,
    )

    id: str = Field(default_factory=lambda: uuid4().hex, description="Entry id")
    display_name: str = Field(min_length=1, max_length=100, description="Display name")
    initiative: int = Field(default=0, description="Initiative")
    hp_current: Annotated[int, Field(ge=0, description="Current hit points")]
    hp_max: Annotated[int, Field(ge=1, description="Maximum hit points")]
    is_player_controlled: bool = Field(default=False, description="Player character entry")
    sort_order: Annotated[int, Field(ge=0, description="Position in the list")] = 0
    creature_id: str | None = Field(default=None, description="Source creature")
    character_id: str | None = Field(default=None, description="Linked character")
    armor_class: int | None = Field(default=None, description="Armor class")

    @model_validator(mode="after")
    def check_hit_points(self) -> EncounterEntry:
        """Ensure current hit points stay within the pool."""
        if self.hp_current > self.hp_max:
            msg = f"hp_current ({self.hp_current}) must not exceed hp_max ({self.hp_max})"
            raise ValueError(msg)
        return self

    @property
    def hit_points(self) -> HitPoints:
        """Hit point pool as an immutable value."""
        return HitPoints(current=self.hp_current, max=self.hp_max)


class BudgetPlan(BaseModel):
    """Advisory creature selection produced by the challenge budget planner.

    Nothing in a plan is committed to an encounter until the caller confirms it.

    Attributes:
        strategy: Distribution strategy used.
        target_budget: Requested total difficulty.
        creature_count: Requested number of creatures.
        creatures: Selected templates, duplicates allowed.
        notice: Caller-visible notice for empty or short plans.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    strategy: BudgetStrategy = Field(description="Distribution strategy")
    target_budget: float = Field(gt=0, description="Requested total difficulty")
    creature_count: int = Field(ge=1, description="Requested creature count")
    creatures: tuple[CreatureTemplate, ...] = Field(default=(), description="Selection")
    notice: str | None = Field(default=None, description="Notice for the caller")

    @property
    def total_difficulty(self) -> float:
        """Sum of the selected ratings."""
        return sum(c.difficulty_rating for c in self.creatures)

    @property
    def is_empty(self) -> bool:
        """Whether no creature was selected."""
        return not self.creatures

    def without(self, index: int) -> BudgetPlan:
        """Return a copy with the suggestion at ``index`` dropped.

        Raises:
            IndexError: If ``index`` is out of range.
        """
        if not -len(self.creatures) <= index < len(self.creatures):
            msg = f"Suggestion index out of range: {index}"
            raise IndexError(msg)
        remaining = list(self.creatures)
        del remaining[index]
        return self.model_copy(update={"creatures": tuple(remaining)})


__all__ = [
    "parse_difficulty",
    "CreatureTemplate",
    "EncounterEntry",
    "BudgetPlan",
]
