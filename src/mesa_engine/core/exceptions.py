"""Custom exception hierarchy for the MesaHub rules engine.

This module defines the exception hierarchy used by every engine component.
All exceptions inherit from MesaEngineError, enabling unified error handling
at the application boundary while preserving domain-specific context.

Each exception class carries a ``kind`` naming the failure category that
callers surface to players and game masters (``InvalidFormula``,
``NonPositiveAmount``, ``UnknownEntry``...). Every failure is recoverable by
retrying with corrected input; none of them is process-fatal.

Example:
    >>> from mesa_engine.core.exceptions import InvalidFormulaError
    >>> raise InvalidFormulaError("Formula does not match NdM+K", expression="2x6")
"""

from __future__ import annotations

from typing import Any, ClassVar


class MesaEngineError(Exception):
    """Base exception for all rules engine errors.

    Attributes:
        kind: Failure category identifier.
        message: Human-readable error description.
        details: Optional dictionary containing additional error context.
    """

    kind: ClassVar[str] = "MesaEngineError"

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        """Initialize the base exception.

        Args:
            message: Human-readable error description.
            details: Optional dictionary containing additional error context.
        """
        self.message = message
        self.details = details or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the exception message with optional details.

        Returns:
            Formatted error message including any provided details.
        """
        if self.details:
            detail_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            return f"{self.message} [{detail_str}]"
        return self.message

    def __repr__(self) -> str:
        """Return a detailed string representation of the exception.

        Returns:
            String representation suitable for debugging.
        """
        return f"{self.__class__.__name__}(message={self.message!r}, details={self.details!r})"


# =============================================================================
# Configuration & Validation Exceptions
# =============================================================================


class ConfigurationError(MesaEngineError):
    """Raised when engine configuration is invalid."""

    kind = "Configuration"

    def __init__(
        self,
        message: str,
        *,
        config_key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize configuration error with config key context.

        Args:
            message: Human-readable error description.
            config_key: The configuration key that caused the error.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if config_key:
            combined_details["config_key"] = config_key
        super().__init__(message, details=combined_details)


class ValidationError(MesaEngineError):
    """Raised when caller-supplied input fails validation.

    This covers out-of-range planner inputs, blank names and similar
    constraint violations detected before any state is touched.
    """

    kind = "Validation"

    def __init__(
        self,
        message: str,
        *,
        field_name: str | None = None,
        invalid_value: Any | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize validation error with field context.

        Args:
            message: Human-readable error description.
            field_name: Name of the field that failed validation.
            invalid_value: The value that failed validation.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if field_name:
            combined_details["field_name"] = field_name
        if invalid_value is not None:
            combined_details["invalid_value"] = invalid_value
        super().__init__(message, details=combined_details)


# =============================================================================
# Game Engine Domain Exceptions
# =============================================================================


class GameEngineError(MesaEngineError):
    """Base exception for rules resolution and encounter errors."""

    kind = "GameEngine"


class DiceRollError(GameEngineError):
    """Raised when dice rolling operations fail.

    This typically occurs when the random source yields a value
    outside ``[0, 1)``.
    """

    kind = "DiceRoll"

    def __init__(
        self,
        message: str,
        *,
        expression: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize dice roll error with expression context.

        Args:
            message: Human-readable error description.
            expression: The dice expression that caused the error.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if expression is not None:
            combined_details["expression"] = expression
        super().__init__(message, details=combined_details)


class InvalidFormulaError(DiceRollError):
    """Raised when a dice expression does not match ``NdM`` / ``NdM+K`` / ``NdM-K``.

    Malformed formulas are never auto-corrected.
    """

    kind = "InvalidFormula"
    user_message: ClassVar[str] = "Fórmula inválida. Use formato XdY ou XdY+Z"


class RulesError(GameEngineError):
    """Base exception for rules profile lookups."""

    kind = "Rules"


class UnknownSystemError(RulesError):
    """Raised when a campaign declares a game system with no rules profile."""

    kind = "UnknownSystem"

    def __init__(
        self,
        message: str,
        *,
        system: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        combined_details = details or {}
        if system is not None:
            combined_details["system"] = system
        super().__init__(message, details=combined_details)


class UnknownSkillError(RulesError):
    """Raised when a skill id is not part of a profile's catalogue."""

    kind = "UnknownSkill"

    def __init__(
        self,
        message: str,
        *,
        skill_id: str | None = None,
        system: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        combined_details = details or {}
        if skill_id is not None:
            combined_details["skill_id"] = skill_id
        if system is not None:
            combined_details["system"] = system
        super().__init__(message, details=combined_details)


class CombatError(GameEngineError):
    """Raised when a damage or healing event cannot be applied."""

    kind = "Combat"

    def __init__(
        self,
        message: str,
        *,
        combatant_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize combat error with combatant context.

        Args:
            message: Human-readable error description.
            combatant_id: Identifier of the character involved.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if combatant_id:
            combined_details["combatant_id"] = combatant_id
        super().__init__(message, details=combined_details)


class NonPositiveAmountError(CombatError):
    """Raised when a damage or healing amount is not positive.

    Rejection happens before any hit point mutation.
    """

    kind = "NonPositiveAmount"
    user_message: ClassVar[str] = "O valor deve ser maior que 0"

    def __init__(
        self,
        message: str,
        *,
        amount: int | None = None,
        combatant_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        combined_details = details or {}
        if amount is not None:
            combined_details["amount"] = amount
        super().__init__(message, combatant_id=combatant_id, details=combined_details)


class EncounterError(GameEngineError):
    """Raised when an encounter tracker operation fails."""

    kind = "Encounter"

    def __init__(
        self,
        message: str,
        *,
        encounter_id: str | None = None,
        entry_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize encounter error with tracker context.

        Args:
            message: Human-readable error description.
            encounter_id: Identifier of the encounter.
            entry_id: Identifier of the entry involved.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if encounter_id:
            combined_details["encounter_id"] = encounter_id
        if entry_id:
            combined_details["entry_id"] = entry_id
        super().__init__(message, details=combined_details)


class UnknownEntryError(EncounterError):
    """Raised when an operation references an entry that is not in the encounter.

    This indicates a stale client view; callers should reload their entry list.
    """

    kind = "UnknownEntry"


class InvalidOrderError(EncounterError):
    """Raised when a reorder sequence is not a permutation of the current entries."""

    kind = "InvalidOrder"


class EntryRenameError(EncounterError):
    """Raised when renaming an entry whose name is derived from a linked character."""

    kind = "EntryRename"


__all__ = [
    # Base exception
    "MesaEngineError",
    # Configuration exceptions
    "ConfigurationError",
    "ValidationError",
    # Game engine exceptions
    "GameEngineError",
    "DiceRollError",
    "InvalidFormulaError",
    "RulesError",
    "UnknownSystemError",
    "UnknownSkillError",
    "CombatError",
    "NonPositiveAmountError",
    "EncounterError",
    "UnknownEntryError",
    "InvalidOrderError",
    "EntryRenameError",
]
