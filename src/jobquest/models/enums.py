"""Enumeration types for the JobQuest battle engine."""

from __future__ import annotations

from enum import StrEnum


class BattlePhase(StrEnum):
    """States of the encounter state machine."""

    AWAITING_ENEMY = "awaiting_enemy"
    PLAYER_TURN = "player_turn"
    ENEMY_TURN = "enemy_turn"
    VICTORY = "victory"
    DEFEAT = "defeat"
    FLED = "fled"

    @property
    def is_terminal(self) -> bool:
        """Whether the encounter has ended in this phase."""
        return self in (BattlePhase.VICTORY, BattlePhase.DEFEAT, BattlePhase.FLED)

    @property
    def is_active(self) -> bool:
        """Whether an encounter is in progress in this phase."""
        return self in (BattlePhase.PLAYER_TURN, BattlePhase.ENEMY_TURN)


class LogCategory(StrEnum):
    """Who a battle log entry is about."""

    PLAYER = "player"
    ENEMY = "enemy"
    SYSTEM = "system"


class ActionType(StrEnum):
    """Actions the battle engine understands."""

    SELECT_ENEMY = "select_enemy"
    ATTACK = "attack"
    MAGIC = "magic"
    HEAL = "heal"
    SWITCH = "switch"
    FLEE = "flee"
    ENEMY_ATTACK = "enemy_attack"


class ActorPolicy(StrEnum):
    """How the acting party member is chosen each player turn."""

    MANUAL = "manual"
    """Explicit active pointer, moved by switch_active or when a member falls."""

    RANDOM = "random"
    """A random living member acts each player turn."""


class CompatibilityScope(StrEnum):
    """Whose affinity feeds the damage multiplier."""

    ATTACKER = "attacker"
    PARTY = "party"


class CampaignMode(StrEnum):
    """Which compatibility rules a campaign plays under."""

    ADVENTURE = "adventure"
    """Species/job multiplier table."""

    ARENA = "arena"
    """Per-enemy weakness and resistance tags."""


class CampaignStatus(StrEnum):
    """Lifecycle of a campaign run."""

    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    CLEARED = "cleared"
    GAME_OVER = "game_over"

    @property
    def is_terminal(self) -> bool:
        """Whether the run has ended."""
        return self in (CampaignStatus.CLEARED, CampaignStatus.GAME_OVER)


class CompatibilityBand(StrEnum):
    """Display bands derived from a compatibility score."""

    VERY_FAVORABLE = "very favorable"
    FAVORABLE = "favorable"
    NEUTRAL = "neutral"
    UNFAVORABLE = "unfavorable"
    VERY_UNFAVORABLE = "very unfavorable"


__all__ = [
    "BattlePhase",
    "LogCategory",
    "ActionType",
    "ActorPolicy",
    "CompatibilityScope",
    "CampaignMode",
    "CampaignStatus",
    "CompatibilityBand",
]
