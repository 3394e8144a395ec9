"""Pydantic V2 schemas for the JobQuest battle engine.

Submodules:
    enums: Phases, categories and policy enumerations.
    definitions: Immutable job and enemy definitions.
    combatants: Live party members and enemy instances.
    battle_log: Append-only encounter log.
    campaign: Campaign run state.
    progression: Experience thresholds and level-up resolution.

Example:
    >>> from jobquest.models import Combatant, JobDefinition
    >>> job = JobDefinition(id="hero", name="Hero", hp=100, attack=20, defense=12, magic=8)
    >>> Combatant.from_job(job).experience_to_next_level
    100
"""

from __future__ import annotations

from jobquest.models.battle_log import BattleLog, BattleLogEntry
from jobquest.models.campaign import CampaignState, PartyMemberRecord
from jobquest.models.combatants import Combatant, EnemyInstance
from jobquest.models.definitions import EnemyDefinition, JobDefinition
from jobquest.models.enums import (
    ActionType,
    ActorPolicy,
    BattlePhase,
    CampaignMode,
    CampaignStatus,
    CompatibilityBand,
    CompatibilityScope,
    LogCategory,
)
from jobquest.models.progression import (
    ProgressionResult,
    apply_experience,
    experience_to_next_level,
    split_reward,
)


__all__ = [
    # Enumerations
    "ActionType",
    "ActorPolicy",
    "BattlePhase",
    "CampaignMode",
    "CampaignStatus",
    "CompatibilityBand",
    "CompatibilityScope",
    "LogCategory",
    # Definitions
    "JobDefinition",
    "EnemyDefinition",
    # Live records
    "Combatant",
    "EnemyInstance",
    "BattleLog",
    "BattleLogEntry",
    "CampaignState",
    "PartyMemberRecord",
    # Progression
    "ProgressionResult",
    "apply_experience",
    "experience_to_next_level",
    "split_reward",
]
