"""Core module providing configuration, logging, and base exceptions.

Exports:
    Exceptions:
        MesaEngineError: Base exception for all engine errors.
        InvalidFormulaError, NonPositiveAmountError, UnknownEntryError: the
        recoverable failure kinds surfaced to callers.

    Configuration:
        Settings: Main engine settings class.
        get_settings: Get the settings singleton.
        clear_settings_cache: Force settings reload.

    Logging:
        configure_logging: Set up engine logging.
        get_logger: Get a logger instance.
        log_context: Bind identifiers to the events of one operation.
"""

from __future__ import annotations

from mesa_engine.core.config import (
    BudgetSettings,
    EncounterSettings,
    RulesSettings,
    Settings,
    clear_settings_cache,
    get_settings,
)
from mesa_engine.core.exceptions import (
    CombatError,
    ConfigurationError,
    DiceRollError,
    EncounterError,
    EntryRenameError,
    GameEngineError,
    InvalidFormulaError,
    InvalidOrderError,
    MesaEngineError,
    NonPositiveAmountError,
    RulesError,
    UnknownEntryError,
    UnknownSkillError,
    UnknownSystemError,
    ValidationError,
)
from mesa_engine.core.logging import (
    configure_logging,
    get_logger,
    log_context,
)


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
    # Configuration
    "Settings",
    "RulesSettings",
    "EncounterSettings",
    "BudgetSettings",
    "get_settings",
    "clear_settings_cache",
    # Logging
    "configure_logging",
    "get_logger",
    "log_context",
]
