"""Notifications emitted by the battle engine.

Callers register listeners with ``BattleEngine.add_listener`` and receive
a BattleEvent for every log entry and state change. Listeners run
synchronously; a listener that raises is logged and skipped.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any, Callable


# =============================================================================
# Event Kinds
# =============================================================================


class EventKind(StrEnum):
    """What changed in the encounter."""

    LOG = "log"
    """A battle log entry was appended."""

    PHASE_CHANGED = "phase_changed"
    """The state machine moved to a new phase."""

    HP_CHANGED = "hp_changed"
    """A combatant's or the enemy's HP changed."""

    ACTIVE_CHANGED = "active_changed"
    """A different party member became active."""

    ENCOUNTER_ENDED = "encounter_ended"
    """The encounter reached victory, defeat or fled."""


@dataclass(frozen=True)
class BattleEvent:
    """A single engine notification.

    Attributes:
        kind: What changed.
        payload: Event-specific data (phase names, hp values, log text).
    """

    kind: EventKind
    payload: dict[str, Any] = field(default_factory=dict)


BattleListener = Callable[[BattleEvent], None]


__all__ = [
    "EventKind",
    "BattleEvent",
    "BattleListener",
]
