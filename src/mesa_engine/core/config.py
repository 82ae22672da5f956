"""Configuration management for the MesaHub rules engine.

This module provides centralized configuration management using pydantic-settings,
supporting environment variables, .env files, and runtime configuration overrides.
Engine components take their tunables as explicit arguments and only fall back
to these settings when a caller leaves them out.

Example:
    >>> from mesa_engine.core.config import get_settings
    >>> settings = get_settings()
    >>> settings.budget.max_random_attempts
    100

Environment Variables:
    MESA_ENGINE_APP_NAME: Engine name stamped on log events
    MESA_ENGINE_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    MESA_ENGINE_LOG_JSON: Render log events as JSON lines
    MESA_ENGINE_RULES_DEFAULT_SYSTEM: System used when a campaign declares none
    MESA_ENGINE_RULES_RNG_SEED: Seed for reproducible dice streams
    MESA_ENGINE_BUDGET_MAX_RANDOM_ATTEMPTS: Retry bound of the random budget strategy
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from mesa_engine.core.constants import (
    DEFAULT_INITIATIVE,
    FIXED_BUDGET_SLACK,
    MAX_RANDOM_BUDGET_ATTEMPTS,
    RANDOM_BUDGET_SLACK,
)
from mesa_engine.core.exceptions import ConfigurationError


class RulesSettings(BaseSettings):
    """Configuration for rules resolution.

    Attributes:
        default_system: Game system used when a campaign declares none.
        rng_seed: Seed applied by ``create_rng`` when no explicit seed is given.
    """

    model_config = SettingsConfigDict(
        env_prefix="MESA_ENGINE_RULES_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    default_system: Literal["5e", "olho_da_morte", "horror"] = Field(
        default="5e",
        description="Default game system",
    )
    rng_seed: int | None = Field(
        default=None,
        description="Seed for reproducible dice streams",
    )

    @field_validator("rng_seed", mode="after")
    @classmethod
    def validate_seed(cls, value: int | None) -> int | None:
        """Reject negative seeds.

        Args:
            value: The configured seed.

        Returns:
            The validated seed.

        Raises:
            ConfigurationError: If the seed is negative.
        """
        if value is not None and value < 0:
            raise ConfigurationError(
                f"rng_seed must be non-negative, got {value}",
                config_key="rng_seed",
            )
        return value


class EncounterSettings(BaseSettings):
    """Configuration for the encounter tracker.

    Attributes:
        default_initiative: Initiative given to entries added without one.
        suffix_duplicates: Append letter suffixes to repeated display names.
    """

    model_config = SettingsConfigDict(
        env_prefix="MESA_ENGINE_ENCOUNTER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    default_initiative: int = Field(
        default=DEFAULT_INITIATIVE,
        description="Initiative for entries added without one",
    )
    suffix_duplicates: bool = Field(
        default=True,
        description="Disambiguate repeated names with letter suffixes",
    )


class BudgetSettings(BaseSettings):
    """Configuration for the challenge budget planner.

    Attributes:
        max_random_attempts: Failed draws tolerated by the random strategy.
        fixed_slack: Rating tolerance above the per-creature budget (fixed strategy).
        random_slack: Rating tolerance above the per-creature ceiling (random strategy).
    """

    model_config = SettingsConfigDict(
        env_prefix="MESA_ENGINE_BUDGET_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    max_random_attempts: int = Field(
        default=MAX_RANDOM_BUDGET_ATTEMPTS,
        ge=1,
        le=10_000,
        description="Failed attempts before the random strategy gives up",
    )
    fixed_slack: int = Field(
        default=FIXED_BUDGET_SLACK,
        ge=0,
        le=10,
        description="Tolerance above the per-creature budget",
    )
    random_slack: int = Field(
        default=RANDOM_BUDGET_SLACK,
        ge=0,
        le=10,
        description="Tolerance above the per-creature ceiling",
    )


class Settings(BaseSettings):
    """Main engine settings aggregating all configuration domains.

    Attributes:
        app_name: Name stamped as ``engine`` on every log event.
        log_level: Logging level.
        log_json: Emit JSON logs instead of console output.
        rules: Rules resolution settings.
        encounter: Encounter tracker settings.
        budget: Challenge budget planner settings.
    """

    model_config = SettingsConfigDict(
        env_prefix="MESA_ENGINE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_nested_delimiter="__",
    )

    app_name: str = Field(
        default="mesa_engine",
        min_length=1,
        description="Engine name shown in log events",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    log_json: bool = Field(
        default=False,
        description="Emit JSON formatted logs",
    )

    rules: RulesSettings = Field(default_factory=RulesSettings)
    encounter: EncounterSettings = Field(default_factory=EncounterSettings)
    budget: BudgetSettings = Field(default_factory=BudgetSettings)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the engine settings singleton.

    Returns:
        The engine Settings instance.

    Raises:
        ConfigurationError: If configuration is missing or invalid.
    """
    try:
        return Settings()
    except ConfigurationError:
        raise
    except Exception as exc:
        raise ConfigurationError(
            f"Failed to load engine settings: {exc}",
            details={"original_error": str(exc)},
        ) from exc


def clear_settings_cache() -> None:
    """Clear the settings cache, forcing a reload on next access."""
    get_settings.cache_clear()


__all__ = [
    "RulesSettings",
    "EncounterSettings",
    "BudgetSettings",
    "Settings",
    "get_settings",
    "clear_settings_cache",
]
