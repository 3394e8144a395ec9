"""Battle engine module for JobQuest.

Provides the encounter state machine, compatibility strategies, party
construction, dice, and the campaign and training drivers built on top.
"""

from jobquest.engine.battle import ActionResult, BattleEngine
from jobquest.engine.campaign import CampaignActionResult, CampaignController
from jobquest.engine.compatibility import (
    CompatibilityStrategy,
    NeutralCompatibility,
    TableCompatibility,
    TagCompatibility,
    affinity_note,
    band_for_score,
    effective_multiplier,
    party_score,
    scale_damage,
    strategy_for_mode,
)
from jobquest.engine.dice import DiceRoller
from jobquest.engine.events import BattleEvent, BattleListener, EventKind
from jobquest.engine.party import build_party, toggle_job_selection
from jobquest.engine.training import TrainingSession

__all__ = [
    # Battle
    "ActionResult",
    "BattleEngine",
    "BattleEvent",
    "BattleListener",
    "EventKind",
    # Compatibility
    "CompatibilityStrategy",
    "TableCompatibility",
    "TagCompatibility",
    "NeutralCompatibility",
    "strategy_for_mode",
    "party_score",
    "effective_multiplier",
    "scale_damage",
    "band_for_score",
    "affinity_note",
    # Party & dice
    "build_party",
    "toggle_job_selection",
    "DiceRoller",
    # Drivers
    "CampaignActionResult",
    "CampaignController",
    "TrainingSession",
]
