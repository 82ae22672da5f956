"""Skill check resolution.

The resolver combines a rules profile with a character's attribute score,
skill overlay and level. The die itself is drawn through the dice engine
(``1d20`` or ``1d100``); bonuses are added in code because they depend on
character state rather than on a static formula.
"""

from __future__ import annotations

from mesa_engine.core.logging import get_logger
from mesa_engine.engine.dice import RandomSource, create_rng, evaluate
from mesa_engine.engine.rules import CheckSpec, SkillDefinition, SystemRulesProfile, get_profile
from mesa_engine.models.character import CharacterSheet, SkillState
from mesa_engine.models.checks import D20CheckResult, PercentileCheckResult
from mesa_engine.models.enums import CheckKind, GameSystem


logger = get_logger(__name__)


class SkillResolver:
    """Resolves skill checks under one rules profile.

    Example:
        >>> resolver = SkillResolver("horror")
        >>> result = resolver.roll("dodge", 65, SkillState(extra_bonus=5), 1, rng)
        >>> result.is_success
        True
    """

    def __init__(self, profile: SystemRulesProfile | GameSystem | str) -> None:
        self._profile = profile if isinstance(profile, SystemRulesProfile) else get_profile(profile)

    @property
    def profile(self) -> SystemRulesProfile:
        """The rules profile checks are resolved under."""
        return self._profile

    def _skill(self, skill: SkillDefinition | str) -> SkillDefinition:
        if isinstance(skill, SkillDefinition):
            return skill
        return self._profile.get_skill(skill)

    def preview(
        self,
        skill: SkillDefinition | str,
        attribute_value: int,
        proficiency_state: SkillState | None = None,
        level: int = 1,
    ) -> CheckSpec:
        """Compute the check breakdown without rolling.

        Raises:
            UnknownSkillError: If ``skill`` is an id missing from the profile.
        """
        self._skill(skill)
        state = proficiency_state or SkillState()
        return self._profile.compute_check(
            attribute_value,
            is_proficient=state.is_proficient,
            extra_bonus=state.extra_bonus,
            level=level,
        )

    def roll(
        self,
        skill: SkillDefinition | str,
        attribute_value: int,
        proficiency_state: SkillState | None,
        level: int,
        rng: RandomSource,
    ) -> D20CheckResult | PercentileCheckResult:
        """Roll a skill check.

        Args:
            skill: Skill definition or id.
            attribute_value: Score of the governing attribute. Out-of-range
                values are accepted.
            proficiency_state: Skill overlay; None means not proficient, no bonus.
            level: Character level.
            rng: Random source for the die.

        Returns:
            A D20CheckResult or PercentileCheckResult.

        Raises:
            UnknownSkillError: If ``skill`` is an id missing from the profile.
        """
        definition = self._skill(skill)
        spec = self.preview(definition, attribute_value, proficiency_state, level)
        natural = evaluate(spec.die, rng).total

        result: D20CheckResult | PercentileCheckResult
        if spec.kind is CheckKind.PERCENTILE:
            result = PercentileCheckResult(
                system=self._profile.system,
                skill_id=definition.id,
                skill_name=definition.display_name,
                attribute=definition.governing_attribute,
                natural_roll=natural,
                formula=spec.formula_description,
                target=spec.target,
                success=bool(spec.is_success(natural)),
            )
        else:
            result = D20CheckResult(
                system=self._profile.system,
                skill_id=definition.id,
                skill_name=definition.display_name,
                attribute=definition.governing_attribute,
                natural_roll=natural,
                formula=spec.formula_description,
                modifier=spec.modifier,
                proficiency_bonus=spec.proficiency_bonus,
                extra_bonus=spec.extra_bonus,
                total=spec.total_for(natural),
            )

        logger.debug(
            "Skill check rolled",
            system=self._profile.system.value,
            skill=definition.id,
            natural_roll=natural,
            display_total=result.display_total,
            success=result.is_success,
        )
        return result

    def roll_for_character(
        self,
        sheet: CharacterSheet,
        skill_id: str,
        rng: RandomSource | None = None,
    ) -> D20CheckResult | PercentileCheckResult:
        """Roll a skill check for a validated character sheet.

        A missing attribute falls back to the profile default; a missing
        skill overlay means not proficient with no extra bonus.
        """
        definition = self._profile.get_skill(skill_id)
        attribute_value = sheet.attributes.get(
            definition.governing_attribute,
            self._profile.default_score,
        )
        return self.roll(
            definition,
            attribute_value,
            sheet.skill_state(skill_id),
            sheet.level,
            rng if rng is not None else create_rng(),
        )


__all__ = [
    "SkillResolver",
]
