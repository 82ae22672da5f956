"""Per-system rules profiles.

A rules profile holds the attribute and skill catalogues of one game system
and the numeric policy that turns an attribute score into a check:

- ``5e`` and ``olho_da_morte`` roll 1d20 and add the ability modifier,
  the level-scaled proficiency bonus (when proficient) and any extra bonus.
- ``horror`` rolls 1d100 and succeeds when the roll is at or under the
  raw attribute score plus the extra bonus.

Example:
    >>> from mesa_engine.engine.rules import get_profile
    >>> spec = get_profile("5e").compute_check(14, is_proficient=True, extra_bonus=1, level=5)
    >>> spec.formula_description
    '1d20+2+3+1'
"""

from __future__ import annotations

from dataclasses import dataclass

from mesa_engine.core.config import get_settings
from mesa_engine.core.constants import (
    D20_CHECK_FORMULA,
    D20_DEFAULT_SCORE,
    D20_SCORE_RANGE,
    DEFAULT_PROFICIENCY_BONUS,
    PERCENTILE_CHECK_FORMULA,
    PERCENTILE_DEFAULT_SCORE,
    PERCENTILE_SCORE_RANGE,
    PROFICIENCY_TABLE,
)
from mesa_engine.core.exceptions import UnknownSkillError, UnknownSystemError
from mesa_engine.models.character import AttributeSet
from mesa_engine.models.enums import CheckKind, GameSystem


# =============================================================================
# Numeric Policy
# =============================================================================


def ability_modifier(score: int) -> int:
    """Return the d20 ability modifier ``floor((score - 10) / 2)``.

    Out-of-range scores are accepted and simply produce unusual modifiers.
    """
    return (score - 10) // 2


def proficiency_bonus(level: int) -> int:
    """Return the level-scaled proficiency bonus (+2 to +6)."""
    for threshold, bonus in PROFICIENCY_TABLE:
        if level >= threshold:
            return bonus
    return DEFAULT_PROFICIENCY_BONUS


# =============================================================================
# Catalogue Types
# =============================================================================


@dataclass(frozen=True)
class AttributeDefinition:
    """An attribute of a game system.

    Attributes:
        label: Short label used as the key in attribute sets.
        name: Display name.
    """

    label: str
    name: str


@dataclass(frozen=True)
class SkillDefinition:
    """A skill of a game system.

    Attributes:
        id: Skill identifier, the key of character skill overlays.
        display_name: Localized name.
        governing_attribute: Label of the attribute the skill rolls against.
    """

    id: str
    display_name: str
    governing_attribute: str


@dataclass(frozen=True)
class CheckSpec:
    """Breakdown of a check before the die is rolled.

    Attributes:
        kind: d20 (roll plus bonuses) or percentile (roll under target).
        die: Formula rolled for the natural result.
        modifier: Ability modifier (0 for percentile checks).
        proficiency_bonus: Proficiency bonus applied (0 when not proficient).
        extra_bonus: Extra bonus from the skill overlay.
        target: Success target for percentile checks, else None.
        formula_description: Rendered formula, e.g. ``"1d20+2+3"`` or ``"1d100 (alvo: 70)"``.
    """

    kind: CheckKind
    die: str
    modifier: int
    proficiency_bonus: int
    extra_bonus: int
    target: int | None
    formula_description: str

    @property
    def total_bonus(self) -> int:
        """Sum of every bonus added to a d20 roll."""
        return self.modifier + self.proficiency_bonus + self.extra_bonus

    def total_for(self, natural_roll: int) -> int:
        """Return the d20 check total for a natural roll."""
        return natural_roll + self.total_bonus

    def is_success(self, natural_roll: int) -> bool | None:
        """Return whether a percentile roll succeeds, or None for d20 checks."""
        if self.target is None:
            return None
        return natural_roll <= self.target


# =============================================================================
# Profiles
# =============================================================================


@dataclass(frozen=True)
class SystemRulesProfile:
    """Skill and attribute catalogue plus check policy of one game system.

    Attributes:
        system: The game system.
        check_kind: How checks are resolved.
        attributes: Ordered attribute catalogue.
        skills: Ordered skill catalogue.
        default_score: Attribute score assumed when a sheet has none.
        score_range: Expected score range, informational only.
    """

    system: GameSystem
    check_kind: CheckKind
    attributes: tuple[AttributeDefinition, ...]
    skills: tuple[SkillDefinition, ...]
    default_score: int
    score_range: tuple[int, int]

    @property
    def attribute_labels(self) -> tuple[str, ...]:
        """Attribute labels in catalogue order."""
        return tuple(a.label for a in self.attributes)

    def get_skill(self, skill_id: str) -> SkillDefinition:
        """Look up a skill by id.

        Raises:
            UnknownSkillError: If the skill is not in this profile's catalogue.
        """
        for skill in self.skills:
            if skill.id == skill_id:
                return skill
        raise UnknownSkillError(
            f"Skill {skill_id!r} does not exist in system {self.system.value!r}",
            skill_id=skill_id,
            system=self.system.value,
        )

    def governing_attribute(self, skill_id: str) -> str:
        """Return the label of the attribute a skill rolls against."""
        return self.get_skill(skill_id).governing_attribute

    def default_attributes(self) -> AttributeSet:
        """Return an attribute set with every attribute at its default score."""
        return {a.label: self.default_score for a in self.attributes}

    def compute_check(
        self,
        attribute_value: int,
        *,
        is_proficient: bool = False,
        extra_bonus: int = 0,
        level: int = 1,
    ) -> CheckSpec:
        """Compute the breakdown of a check.

        Args:
            attribute_value: Score of the governing attribute.
            is_proficient: Whether the proficiency bonus applies (d20 only).
            extra_bonus: Flat bonus from the skill overlay.
            level: Character level, for the proficiency bonus.

        Returns:
            The CheckSpec to roll against.
        """
        if self.check_kind is CheckKind.PERCENTILE:
            target = attribute_value + extra_bonus
            return CheckSpec(
                kind=CheckKind.PERCENTILE,
                die=PERCENTILE_CHECK_FORMULA,
                modifier=0,
                proficiency_bonus=0,
                extra_bonus=extra_bonus,
                target=target,
                formula_description=f"{PERCENTILE_CHECK_FORMULA} (alvo: {target})",
            )

        modifier = ability_modifier(attribute_value)
        prof = proficiency_bonus(level) if is_proficient else 0

        description = f"{D20_CHECK_FORMULA}{modifier:+d}"
        if prof:
            description += f"+{prof}"
        if extra_bonus:
            description += f"{extra_bonus:+d}"

        return CheckSpec(
            kind=CheckKind.D20,
            die=D20_CHECK_FORMULA,
            modifier=modifier,
            proficiency_bonus=prof,
            extra_bonus=extra_bonus,
            target=None,
            formula_description=description,
        )

    def skill_modifier_summary(
        self,
        attribute_value: int,
        *,
        is_proficient: bool = False,
        extra_bonus: int = 0,
        level: int = 1,
    ) -> int:
        """Return the number shown in a skill sheet's bonus column.

        For d20 systems this is the static bonus added to the roll; for the
        percentile system it is the success target.
        """
        spec = self.compute_check(
            attribute_value,
            is_proficient=is_proficient,
            extra_bonus=extra_bonus,
            level=level,
        )
        if spec.target is not None:
            return spec.target
        return spec.total_bonus


def _skills(*rows: tuple[str, str, str]) -> tuple[SkillDefinition, ...]:
    return tuple(SkillDefinition(id=i, display_name=n, governing_attribute=a) for i, n, a in rows)


def _attributes(*rows: tuple[str, str]) -> tuple[AttributeDefinition, ...]:
    return tuple(AttributeDefinition(label=label, name=name) for label, name in rows)


D20_ABILITY_PROFILE = SystemRulesProfile(
    system=GameSystem.D20_ABILITY,
    check_kind=CheckKind.D20,
    attributes=_attributes(
        ("FOR", "Força"),
        ("DES", "Destreza"),
        ("CON", "Constituição"),
        ("INT", "Inteligência"),
        ("SAB", "Sabedoria"),
        ("CAR", "Carisma"),
    ),
    skills=_skills(
        ("acrobatics", "Acrobacia", "DES"),
        ("arcana", "Arcanismo", "INT"),
        ("athletics", "Atletismo", "FOR"),
        ("deception", "Enganação", "CAR"),
        ("history", "História", "INT"),
        ("insight", "Intuição", "SAB"),
        ("intimidation", "Intimidação", "CAR"),
        ("investigation", "Investigação", "INT"),
        ("medicine", "Medicina", "SAB"),
        ("nature", "Natureza", "INT"),
        ("perception", "Percepção", "SAB"),
        ("performance", "Atuação", "CAR"),
        ("persuasion", "Persuasão", "CAR"),
        ("religion", "Religião", "INT"),
        ("sleight_of_hand", "Prestidigitação", "DES"),
        ("stealth", "Furtividade", "DES"),
        ("survival", "Sobrevivência", "SAB"),
        ("animal_handling", "Adestrar Animais", "SAB"),
    ),
    default_score=D20_DEFAULT_SCORE,
    score_range=D20_SCORE_RANGE,
)

D20_CUSTOM_PROFILE = SystemRulesProfile(
    system=GameSystem.D20_CUSTOM,
    check_kind=CheckKind.D20,
    attributes=_attributes(
        ("FOR", "Força"),
        ("AGI", "Agilidade"),
        ("VIG", "Vigor"),
        ("INT", "Intelecto"),
        ("VON", "Vontade"),
        ("PRE", "Presença"),
    ),
    skills=_skills(
        ("combate", "Combate", "FOR"),
        ("pontaria", "Pontaria", "AGI"),
        ("reflexos", "Reflexos", "AGI"),
        ("furtividade", "Furtividade", "AGI"),
        ("resistencia", "Resistência", "VIG"),
        ("percepcao", "Percepção", "INT"),
        ("investigacao", "Investigação", "INT"),
        ("conhecimento", "Conhecimento", "INT"),
        ("sobrevivencia", "Sobrevivência", "INT"),
        ("intimidacao", "Intimidação", "PRE"),
        ("persuasao", "Persuasão", "PRE"),
        ("enganacao", "Enganação", "PRE"),
        ("vontade", "Vontade", "VON"),
        ("ocultismo", "Ocultismo", "VON"),
    ),
    default_score=D20_DEFAULT_SCORE,
    score_range=D20_SCORE_RANGE,
)

PERCENTILE_PROFILE = SystemRulesProfile(
    system=GameSystem.PERCENTILE,
    check_kind=CheckKind.PERCENTILE,
    attributes=_attributes(
        ("FOR", "Força"),
        ("DES", "Destreza"),
        ("CON", "Constituição"),
        ("INT", "Inteligência"),
        ("EDU", "Educação"),
        ("POD", "Poder"),
        ("APR", "Aparência"),
        ("TAM", "Tamanho"),
    ),
    skills=_skills(
        ("accounting", "Contabilidade", "EDU"),
        ("anthropology", "Antropologia", "EDU"),
        ("archaeology", "Arqueologia", "EDU"),
        ("art", "Arte", "POD"),
        ("charm", "Charme", "APR"),
        ("climb", "Escalar", "FOR"),
        ("cthulhu_mythos", "Mitos de Cthulhu", "INT"),
        ("disguise", "Disfarce", "APR"),
        ("dodge", "Esquiva", "DES"),
        ("drive", "Dirigir", "DES"),
        ("first_aid", "Primeiros Socorros", "EDU"),
        ("firearms", "Armas de Fogo", "DES"),
        ("history", "História", "EDU"),
        ("intimidate", "Intimidar", "POD"),
        ("jump", "Saltar", "FOR"),
        ("language_own", "Língua (Nativa)", "EDU"),
        ("law", "Direito", "EDU"),
        ("library", "Usar Bibliotecas", "EDU"),
        ("listen", "Ouvir", "POD"),
        ("locksmith", "Chaveiro", "DES"),
        ("medicine", "Medicina", "EDU"),
        ("occult", "Ocultismo", "EDU"),
        ("persuade", "Persuadir", "APR"),
        ("psychology", "Psicologia", "INT"),
        ("science", "Ciência", "EDU"),
        ("spot_hidden", "Encontrar", "INT"),
        ("stealth", "Furtividade", "DES"),
        ("swim", "Nadar", "CON"),
        ("throw", "Arremessar", "DES"),
        ("track", "Rastrear", "INT"),
    ),
    default_score=PERCENTILE_DEFAULT_SCORE,
    score_range=PERCENTILE_SCORE_RANGE,
)

_PROFILES: dict[GameSystem, SystemRulesProfile] = {
    GameSystem.D20_ABILITY: D20_ABILITY_PROFILE,
    GameSystem.D20_CUSTOM: D20_CUSTOM_PROFILE,
    GameSystem.PERCENTILE: PERCENTILE_PROFILE,
}


def get_profile(system: GameSystem | str | None = None) -> SystemRulesProfile:
    """Return the rules profile of a game system.

    Args:
        system: A GameSystem or its stored value (``"5e"``, ``"olho_da_morte"``,
            ``"horror"``). Defaults to the configured default system.

    Raises:
        UnknownSystemError: If the system has no profile.
    """
    if system is None:
        system = get_settings().rules.default_system
    try:
        key = GameSystem(system)
    except ValueError as exc:
        raise UnknownSystemError(f"Unknown game system: {system!r}", system=str(system)) from exc
    return _PROFILES[key]


__all__ = [
    "ability_modifier",
    "proficiency_bonus",
    "AttributeDefinition",
    "SkillDefinition",
    "CheckSpec",
    "SystemRulesProfile",
    "D20_ABILITY_PROFILE",
    "D20_CUSTOM_PROFILE",
    "PERCENTILE_PROFILE",
    "get_profile",
]
