"""JobQuest - Turn-Based Job Battle Engine.

Pick a party of jobs, fight enemies whose affinities reward the right
matchups, level up, and try to clear a short gauntlet of encounters.

ARCHITECTURE:
- The catalog supplies immutable job and enemy definitions
- The battle engine owns one encounter's turn state machine
- The campaign controller loops encounters and persists run state
- Every random number comes from the d20-backed DiceRoller

Example:
    >>> from jobquest import CampaignController, InMemorySelectionStore, StaticCatalog
    >>>
    >>> store = InMemorySelectionStore()
    >>> store.set_selected_job_ids(["hero", "wizard", "monk"])
    >>>
    >>> controller = CampaignController(StaticCatalog(), store)
    >>> controller.start()
    >>> enemy = controller.offered_enemies()[0]
    >>> engine = controller.begin_encounter(enemy.id).engine
    >>> engine.attack()

Modules:
    core: Configuration, logging, constants and base exceptions.
    models: Pydantic V2 schemas for definitions, combatants and run state.
    catalog: Bundled job/enemy data and the catalog provider.
    engine: Battle engine, compatibility, dice, campaign and training.
    storage: Key-value selection store (in-memory and SQLite).
"""

from __future__ import annotations

# Core
from jobquest.core.config import Settings, get_settings
from jobquest.core.exceptions import JobQuestError
from jobquest.core.logging import configure_logging, get_logger

# Catalog
from jobquest.catalog.provider import CatalogProvider, StaticCatalog

# Models
from jobquest.models import (
    BattlePhase,
    CampaignState,
    CampaignStatus,
    Combatant,
    EnemyDefinition,
    EnemyInstance,
    JobDefinition,
    PartyMemberRecord,
)

# Engine
from jobquest.engine import (
    ActionResult,
    BattleEngine,
    CampaignController,
    DiceRoller,
    TableCompatibility,
    TagCompatibility,
    TrainingSession,
    build_party,
)

# Storage
from jobquest.storage import InMemorySelectionStore, SqliteSelectionStore


__version__ = "0.1.0"
__all__ = [
    # Version info
    "__version__",
    # Core
    "JobQuestError",
    "Settings",
    "get_settings",
    "configure_logging",
    "get_logger",
    # Catalog
    "CatalogProvider",
    "StaticCatalog",
    # Models
    "BattlePhase",
    "CampaignState",
    "CampaignStatus",
    "Combatant",
    "EnemyDefinition",
    "EnemyInstance",
    "JobDefinition",
    "PartyMemberRecord",
    # Engine
    "ActionResult",
    "BattleEngine",
    "CampaignController",
    "DiceRoller",
    "TableCompatibility",
    "TagCompatibility",
    "TrainingSession",
    "build_party",
    # Storage
    "InMemorySelectionStore",
    "SqliteSelectionStore",
]
