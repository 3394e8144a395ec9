"""Compatibility multipliers between jobs and enemies.

Two interchangeable strategies produce the damage multiplier for an
attacking job against an enemy:

- TableCompatibility looks the pair up in a species/job table.
- TagCompatibility reads the enemy's weakness and resistance tags.

The display bands returned by ``band_for_score`` are presentation only
and never feed back into damage math.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping
from typing import Protocol, runtime_checkable

from jobquest.catalog.data import COMPATIBILITY_TABLE
from jobquest.core.constants import (
    AFFINITY_NOTE_HIGH,
    AFFINITY_NOTE_LOW,
    BAND_FAVORABLE,
    BAND_NEUTRAL,
    BAND_UNFAVORABLE,
    BAND_VERY_FAVORABLE,
    MAGIC_COMPATIBILITY_FLOOR,
    MAGIC_COMPATIBILITY_WEIGHT,
    NEUTRAL_MULTIPLIER,
    RESISTANCE_MULTIPLIER,
    WEAKNESS_MULTIPLIER,
)
from jobquest.models.definitions import EnemyDefinition
from jobquest.models.enums import CampaignMode, CompatibilityBand


# =============================================================================
# Strategies
# =============================================================================


@runtime_checkable
class CompatibilityStrategy(Protocol):
    """Produces a damage multiplier (> 0) for a job against an enemy."""

    def score(self, job_id: str, enemy: EnemyDefinition) -> float:
        """Multiplier for ``job_id`` attacking ``enemy``."""
        ...


class TableCompatibility:
    """Species/job lookup table. Missing entries are neutral."""

    def __init__(self, table: Mapping[str, Mapping[str, float]] | None = None) -> None:
        """Initialize with a ``{species: {job_id: multiplier}}`` table.

        Args:
            table: Multiplier table; defaults to the bundled table.
        """
        source = COMPATIBILITY_TABLE if table is None else table
        self._table: dict[str, dict[str, float]] = {
            species: dict(row) for species, row in source.items()
        }

    def score(self, job_id: str, enemy: EnemyDefinition) -> float:
        """Multiplier for ``job_id`` against the enemy's species."""
        return self._table.get(enemy.name, {}).get(job_id, NEUTRAL_MULTIPLIER)


class TagCompatibility:
    """Weakness/resistance tags carried by each enemy."""

    def score(self, job_id: str, enemy: EnemyDefinition) -> float:
        """1.5 for a weakness, 0.7 for a resistance, else 1.0."""
        if job_id in enemy.weaknesses:
            return WEAKNESS_MULTIPLIER
        if job_id in enemy.resistances:
            return RESISTANCE_MULTIPLIER
        return NEUTRAL_MULTIPLIER


class NeutralCompatibility:
    """Every pairing is neutral. Used by training sessions."""

    def score(self, job_id: str, enemy: EnemyDefinition) -> float:
        return NEUTRAL_MULTIPLIER


def strategy_for_mode(
    mode: CampaignMode,
    table: Mapping[str, Mapping[str, float]] | None = None,
) -> CompatibilityStrategy:
    """Get the strategy a campaign mode plays under."""
    if mode == CampaignMode.ARENA:
        return TagCompatibility()
    return TableCompatibility(table)


def party_score(
    strategy: CompatibilityStrategy,
    job_ids: Iterable[str],
    enemy: EnemyDefinition,
) -> float:
    """Arithmetic mean of per-job multipliers; 1.0 for an empty party."""
    scores = [strategy.score(job_id, enemy) for job_id in job_ids]
    if not scores:
        return NEUTRAL_MULTIPLIER
    return sum(scores) / len(scores)


# =============================================================================
# Damage Math
# =============================================================================


def effective_multiplier(score: float, *, magic: bool = False) -> float:
    """Multiplier applied to a roll. Magic is less sensitive to affinity."""
    if magic:
        return score * MAGIC_COMPATIBILITY_WEIGHT + MAGIC_COMPATIBILITY_FLOOR
    return score


def scale_damage(roll: int, score: float, *, magic: bool = False) -> int:
    """Apply the multiplier to an integer roll and floor the result.

    Args:
        roll: Base damage roll (>= 0).
        score: Compatibility score.
        magic: Whether the attack is magical.

    Returns:
        ``floor(roll * multiplier)``, never negative.
    """
    return max(0, math.floor(roll * effective_multiplier(score, magic=magic)))


# =============================================================================
# Presentation
# =============================================================================


def band_for_score(score: float) -> CompatibilityBand:
    """Display band for a score."""
    if score >= BAND_VERY_FAVORABLE:
        return CompatibilityBand.VERY_FAVORABLE
    if score >= BAND_FAVORABLE:
        return CompatibilityBand.FAVORABLE
    if score >= BAND_NEUTRAL:
        return CompatibilityBand.NEUTRAL
    if score >= BAND_UNFAVORABLE:
        return CompatibilityBand.UNFAVORABLE
    return CompatibilityBand.VERY_UNFAVORABLE


def affinity_note(score: float) -> str | None:
    """Log line describing a notable multiplier after a physical hit."""
    if score > AFFINITY_NOTE_HIGH:
        return f"Good matchup! Damage x{score:.1f}!"
    if score < AFFINITY_NOTE_LOW:
        return f"Poor matchup... damage x{score:.1f}."
    return None


__all__ = [
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
]
