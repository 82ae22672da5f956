"""Pytest configuration and shared fixtures.

This module provides common fixtures for the rules engine test suite:
settings cache isolation, scripted random sources, sample character
sheets and creatures, and an in-memory collaborator store.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

import pytest


if TYPE_CHECKING:
    from collections.abc import Generator


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_settings_cache() -> Generator[None, None, None]:
    """Reset the settings cache before and after each test."""
    from mesa_engine.core.config import clear_settings_cache

    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture(autouse=True)
def reset_structlog() -> Generator[None, None, None]:
    """Restore structlog defaults and drop bound context after each test."""
    import structlog

    yield
    structlog.reset_defaults()
    structlog.contextvars.clear_contextvars()


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Any, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run each test away from any local .env file and engine variables."""
    import os

    monkeypatch.chdir(tmp_path)
    for key in list(os.environ):
        if key.startswith("MESA_ENGINE_"):
            monkeypatch.delenv(key)


# =============================================================================
# Random Source Fixtures
# =============================================================================


@pytest.fixture
def scripted_rng() -> Callable[..., Callable[[], float]]:
    """Build a random source that returns the given values in order.

    Returns:
        Factory taking the float values to yield.
    """

    def make(*values: float) -> Callable[[], float]:
        remaining = list(values)

        def rng() -> float:
            assert remaining, "scripted random source exhausted"
            return remaining.pop(0)

        return rng

    return make


@pytest.fixture
def dice_rng(
    scripted_rng: Callable[..., Callable[[], float]],
) -> Callable[..., Callable[[], float]]:
    """Build a random source that makes a die of ``size`` show ``faces`` in order.

    Also picks ``items[face - 1]`` when used for a choice among ``size`` items.

    Returns:
        Factory taking the die size and the faces to show.
    """

    def make(size: int, *faces: int) -> Callable[[], float]:
        return scripted_rng(*((face - 0.5) / size for face in faces))

    return make


# =============================================================================
# Model Fixtures
# =============================================================================


@pytest.fixture
def fighter_sheet() -> Any:
    """A level 5 fighter in the d20 ability system."""
    from mesa_engine.models import CharacterSheet

    return CharacterSheet.model_validate(
        {
            "id": "char-fighter",
            "name": "Thorin",
            "system": "5e",
            "level": 5,
            "attributes": {"for": 16, "des": 12, "con": 14, "int": 8, "sab": 14, "car": 10},
            "skills": {
                "perception": {"is_proficient": True, "extra_bonus": 1},
                "athletics": {"is_proficient": True},
            },
            "hp_current": 30,
            "hp_max": 44,
            "armor_class": 18,
        }
    )


@pytest.fixture
def investigator_sheet() -> Any:
    """An investigator in the percentile horror system."""
    from mesa_engine.models import CharacterSheet

    return CharacterSheet.model_validate(
        {
            "id": "char-investigator",
            "name": "Harvey Walters",
            "system": "horror",
            "attributes": {"FOR": 40, "DES": 55, "INT": 70, "POD": 65, "EDU": 80},
            "skills": {"listen": {"extra_bonus": 5}},
            "hp_current": 9,
            "hp_max": 11,
        }
    )


@pytest.fixture
def creature_pool() -> list[Any]:
    """A small 5e creature catalogue with fractional ratings."""
    from mesa_engine.models import CreatureTemplate

    return [
        CreatureTemplate(id="goblin", name="Goblin", system="5e", difficulty_rating="1/4", hp=7, armor_class=15),
        CreatureTemplate(id="orc", name="Orc", system="5e", difficulty_rating="1/2", hp=15, armor_class=13),
        CreatureTemplate(id="bugbear", name="Bugbear", system="5e", difficulty_rating=1, hp=27, armor_class=16),
        CreatureTemplate(id="ogre", name="Ogre", system="5e", difficulty_rating=2, hp=59, armor_class=11),
        CreatureTemplate(id="troll", name="Troll", system="5e", difficulty_rating=5, hp=84, armor_class=15),
    ]


@pytest.fixture
def goblin(creature_pool: list[Any]) -> Any:
    """The goblin template."""
    return creature_pool[0]


# =============================================================================
# Collaborator Fixtures
# =============================================================================


@pytest.fixture
def memory_store(fighter_sheet: Any, investigator_sheet: Any, creature_pool: list[Any]) -> Any:
    """An in-memory store holding the sample characters and creatures."""
    from mesa_engine.storage import MemoryStore

    return MemoryStore(
        characters=[fighter_sheet, investigator_sheet],
        creatures=creature_pool,
    )


# =============================================================================
# Logging Fixtures
# =============================================================================


@pytest.fixture
def captured_logs() -> Any:
    """Route engine events to an in-memory stream as DEBUG-level JSON lines."""
    import io

    from mesa_engine.core.logging import configure_logging

    stream = io.StringIO()
    configure_logging(level="DEBUG", json_format=True, stream=stream)
    return stream
