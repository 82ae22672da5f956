"""MesaHub rules engine.

Rules resolution and encounter management for a multi-system tabletop
RPG campaign manager: dice formulas, skill checks under three game
systems, damage and healing, encounter ordering and challenge budget
suggestions.

The engine performs no I/O. Randomness is injected as a zero-argument
callable, and storage is reached only through the collaborator protocols
in ``mesa_engine.storage``.

Example:
    >>> from mesa_engine import GameTable, MemoryStore, FixedAmount, CombatEventKind
    >>>
    >>> store = MemoryStore(characters=[sheet])
    >>> table = GameTable(store, store)
    >>> table.apply_combat_event(sheet.id, CombatEventKind.DAMAGE_TAKEN, FixedAmount(value=4))

Modules:
    core: Configuration, logging, and base exceptions.
    models: Pydantic V2 schemas.
    engine: Dice, rules profiles, checks, combat events, encounters, budget planning.
    storage: Collaborator protocols and an in-memory implementation.
"""

from __future__ import annotations

# Core
from mesa_engine.core.config import Settings, get_settings
from mesa_engine.core.exceptions import MesaEngineError
from mesa_engine.core.logging import configure_logging, get_logger

# Models
from mesa_engine.models import (
    BudgetPlan,
    BudgetStrategy,
    CharacterSheet,
    CombatEvent,
    CombatEventKind,
    CreatureTemplate,
    CustomRoll,
    EncounterEntry,
    FixedAmount,
    FormulaAmount,
    GameSystem,
    HitPoints,
    RollLogEntry,
    SkillCheckResult,
    SkillState,
)

# Engine
from mesa_engine.engine import (
    ChallengeBudgetPlanner,
    CombatEventProcessor,
    DiceFormulaEngine,
    EncounterTracker,
    GameTable,
    SkillResolver,
    create_rng,
    get_profile,
    roll,
)

# Storage
from mesa_engine.storage import MemoryStore


__version__ = "0.1.0"
__all__ = [
    # Version info
    "__version__",
    # Core
    "MesaEngineError",
    "Settings",
    "get_settings",
    "configure_logging",
    "get_logger",
    # Models
    "BudgetPlan",
    "BudgetStrategy",
    "CharacterSheet",
    "CombatEvent",
    "CombatEventKind",
    "CreatureTemplate",
    "CustomRoll",
    "EncounterEntry",
    "FixedAmount",
    "FormulaAmount",
    "GameSystem",
    "HitPoints",
    "RollLogEntry",
    "SkillCheckResult",
    "SkillState",
    # Engine
    "ChallengeBudgetPlanner",
    "CombatEventProcessor",
    "DiceFormulaEngine",
    "EncounterTracker",
    "GameTable",
    "SkillResolver",
    "create_rng",
    "get_profile",
    "roll",
    # Storage
    "MemoryStore",
]
