"""Damage and healing resolution.

The processor turns a fixed or rolled amount into a new hit point pool, a
``CombatEvent`` for the audit log and a companion roll log entry. Nothing
is persisted here; every value is returned to the caller, and validation
completes before any hit point value is computed.
"""

from __future__ import annotations

from dataclasses import dataclass

from mesa_engine.core.exceptions import NonPositiveAmountError
from mesa_engine.core.logging import get_logger
from mesa_engine.engine.dice import RandomSource, RollOutcome, create_rng, evaluate, parse
from mesa_engine.models.character import HitPoints
from mesa_engine.models.combat import CombatEvent, FixedAmount, FormulaAmount, RollLogEntry
from mesa_engine.models.enums import CombatEventKind, RollCategory


logger = get_logger(__name__)

_LOG_PREFIXES: dict[CombatEventKind, str] = {
    CombatEventKind.DAMAGE_TAKEN: "🛡️ Dano Recebido",
    CombatEventKind.HEALING_DONE: "💚 Cura",
}

_LOG_CATEGORIES: dict[CombatEventKind, RollCategory] = {
    CombatEventKind.DAMAGE_TAKEN: RollCategory.DAMAGE_TAKEN,
    CombatEventKind.HEALING_DONE: RollCategory.HEALING,
}


@dataclass(frozen=True)
class ResolvedAmount:
    """A positive amount together with how it was obtained.

    Attributes:
        amount: Resolved amount, at least 1.
        detail: ``"Valor fixo: N"`` or ``"<formula>: <roll breakdown>"``.
        formula: Formula shown in the roll log (the number itself for fixed amounts).
        outcome: The dice outcome for rolled amounts.
    """

    amount: int
    detail: str
    formula: str
    outcome: RollOutcome | None = None


@dataclass(frozen=True)
class CombatResolution:
    """Everything produced by one damage or healing event.

    Attributes:
        hit_points: New authoritative hit point pool.
        event: Audit record to append.
        roll_log_entry: Roll log record to append.
        applied: Hit points actually removed or restored after clamping.
    """

    hit_points: HitPoints
    event: CombatEvent
    roll_log_entry: RollLogEntry
    applied: int


def _check_amount(amount: int) -> None:
    if amount < 0:
        raise NonPositiveAmountError(f"Amount must not be negative, got {amount}", amount=amount)


def apply_damage(hp: HitPoints, amount: int) -> HitPoints:
    """Return ``hp`` with ``amount`` removed, floored at 0.

    Raises:
        NonPositiveAmountError: If ``amount`` is negative.
    """
    _check_amount(amount)
    return hp.with_current(hp.current - amount)


def apply_healing(hp: HitPoints, amount: int) -> HitPoints:
    """Return ``hp`` with ``amount`` restored, capped at the maximum.

    Raises:
        NonPositiveAmountError: If ``amount`` is negative.
    """
    _check_amount(amount)
    return hp.with_current(hp.current + amount)


class CombatEventProcessor:
    """Applies damage and healing events to hit point pools."""

    apply_damage = staticmethod(apply_damage)
    apply_healing = staticmethod(apply_healing)

    def apply(self, hp: HitPoints, kind: CombatEventKind, amount: int) -> HitPoints:
        """Apply an amount according to the event kind."""
        if kind is CombatEventKind.DAMAGE_TAKEN:
            return apply_damage(hp, amount)
        return apply_healing(hp, amount)

    def resolve_amount(
        self,
        amount_input: FixedAmount | FormulaAmount,
        rng: RandomSource | None = None,
        *,
        character_id: str | None = None,
    ) -> ResolvedAmount:
        """Resolve a fixed or rolled amount.

        Args:
            amount_input: The amount as entered.
            rng: Random source for formula amounts.
            character_id: Character the amount applies to, for error context.

        Returns:
            The resolved amount.

        Raises:
            InvalidFormulaError: If the formula does not parse.
            NonPositiveAmountError: If the fixed value or rolled total is not positive.
        """
        if isinstance(amount_input, FixedAmount):
            if amount_input.value <= 0:
                raise NonPositiveAmountError(
                    f"Amount must be greater than 0, got {amount_input.value}",
                    amount=amount_input.value,
                    combatant_id=character_id,
                )
            return ResolvedAmount(
                amount=amount_input.value,
                detail=f"Valor fixo: {amount_input.value}",
                formula=str(amount_input.value),
            )

        formula = parse(amount_input.formula)
        outcome = evaluate(formula, rng if rng is not None else create_rng())
        if outcome.total <= 0:
            raise NonPositiveAmountError(
                f"Rolled amount must be greater than 0, got {outcome.total}",
                amount=outcome.total,
                combatant_id=character_id,
                details={"roll": outcome.rendered_detail},
            )
        return ResolvedAmount(
            amount=outcome.total,
            detail=f"{formula}: {outcome.rendered_detail}",
            formula=str(formula),
            outcome=outcome,
        )

    def process(
        self,
        hp: HitPoints,
        kind: CombatEventKind,
        amount_input: FixedAmount | FormulaAmount,
        rng: RandomSource | None = None,
        *,
        damage_type: str | None = None,
        note: str | None = None,
        character_id: str | None = None,
    ) -> CombatResolution:
        """Resolve and apply one damage or healing event.

        Args:
            hp: Current hit point pool.
            kind: Damage taken or healing done.
            amount_input: Fixed value or formula.
            rng: Random source for formula amounts.
            damage_type: Optional damage type appended to the detail.
            note: Optional note appended to the detail.
            character_id: Character the event applies to.

        Returns:
            The new pool with the event and roll log entry to persist.

        Raises:
            InvalidFormulaError: If the formula does not parse.
            NonPositiveAmountError: If the amount is not positive.
        """
        resolved = self.resolve_amount(amount_input, rng, character_id=character_id)

        detail = resolved.detail
        if damage_type:
            detail += f" ({damage_type})"
        if note:
            detail += f" - {note}"

        new_hp = self.apply(hp, kind, resolved.amount)
        event = CombatEvent(
            kind=kind,
            amount=resolved.amount,
            source_detail=detail,
            character_id=character_id,
        )
        log_entry = RollLogEntry(
            label=_LOG_CATEGORIES[kind].label,
            formula=resolved.formula,
            result=resolved.amount,
            details=f"{_LOG_PREFIXES[kind]}: {detail}",
            roll_type=_LOG_CATEGORIES[kind],
            character_id=character_id,
        )

        applied = abs(new_hp.current - hp.current)
        logger.info(
            "Combat event applied",
            kind=kind.value,
            amount=resolved.amount,
            applied=applied,
            hp_before=hp.current,
            hp_after=new_hp.current,
            character_id=character_id,
        )
        return CombatResolution(
            hit_points=new_hp,
            event=event,
            roll_log_entry=log_entry,
            applied=applied,
        )


__all__ = [
    "ResolvedAmount",
    "CombatResolution",
    "apply_damage",
    "apply_healing",
    "CombatEventProcessor",
]
