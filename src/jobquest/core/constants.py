"""Game rule constants for the JobQuest battle engine.

These values are the fixed parts of the damage, healing and progression
formulas. Tunable knobs (campaign length, party size, policies) live in
the settings classes instead.
"""

from __future__ import annotations

# =============================================================================
# Compatibility
# =============================================================================

NEUTRAL_MULTIPLIER = 1.0
"""Multiplier used when no affinity is known."""

WEAKNESS_MULTIPLIER = 1.5
"""Tag-based multiplier when the attacker's job is in the enemy's weaknesses."""

RESISTANCE_MULTIPLIER = 0.7
"""Tag-based multiplier when the attacker's job is in the enemy's resistances."""

MAGIC_COMPATIBILITY_WEIGHT = 0.8
"""Share of the compatibility multiplier that applies to magic damage."""

MAGIC_COMPATIBILITY_FLOOR = 0.2
"""Constant share of magic damage unaffected by compatibility."""

# Score thresholds for the display bands, highest first
BAND_VERY_FAVORABLE = 1.3
BAND_FAVORABLE = 1.1
BAND_NEUTRAL = 0.9
BAND_UNFAVORABLE = 0.7

# Thresholds for the affinity note after a physical attack
AFFINITY_NOTE_HIGH = 1.1
AFFINITY_NOTE_LOW = 0.9

# =============================================================================
# Combat
# =============================================================================

HEAL_RATIO = 0.3
"""Fraction of max HP restored by a heal action."""

DEFENSE_DIVISOR = 2
"""Enemy damage is reduced by defense // DEFENSE_DIVISOR."""

MIN_ENEMY_DAMAGE = 1
"""An enemy attack always deals at least this much damage."""

# =============================================================================
# Progression
# =============================================================================

STARTING_LEVEL = 1
EXPERIENCE_PER_LEVEL = 100
"""Experience needed to leave a level is level * EXPERIENCE_PER_LEVEL."""

# =============================================================================
# Party & Campaign Defaults
# =============================================================================

DEFAULT_MAX_PARTY_SIZE = 3
DEFAULT_BATTLES_TO_CLEAR = 3
DEFAULT_MAX_LOSSES = 3
DEFAULT_ENEMIES_OFFERED = 2

# =============================================================================
# Selection Store Keys
# =============================================================================

SELECTED_JOBS_KEY = "selected_jobs"
CAMPAIGN_STATE_KEY = "campaign_state"


__all__ = [
    "NEUTRAL_MULTIPLIER",
    "WEAKNESS_MULTIPLIER",
    "RESISTANCE_MULTIPLIER",
    "MAGIC_COMPATIBILITY_WEIGHT",
    "MAGIC_COMPATIBILITY_FLOOR",
    "BAND_VERY_FAVORABLE",
    "BAND_FAVORABLE",
    "BAND_NEUTRAL",
    "BAND_UNFAVORABLE",
    "AFFINITY_NOTE_HIGH",
    "AFFINITY_NOTE_LOW",
    "HEAL_RATIO",
    "DEFENSE_DIVISOR",
    "MIN_ENEMY_DAMAGE",
    "STARTING_LEVEL",
    "EXPERIENCE_PER_LEVEL",
    "DEFAULT_MAX_PARTY_SIZE",
    "DEFAULT_BATTLES_TO_CLEAR",
    "DEFAULT_MAX_LOSSES",
    "DEFAULT_ENEMIES_OFFERED",
    "SELECTED_JOBS_KEY",
    "CAMPAIGN_STATE_KEY",
]
