"""Bundled catalog data.

Five jobs, five enemies and the species/job multiplier table used by
adventure runs. Weakness and resistance tags on the enemies drive arena
runs.
"""

from __future__ import annotations

from jobquest.models.definitions import EnemyDefinition, JobDefinition


# =============================================================================
# Jobs
# =============================================================================

JOBS: tuple[JobDefinition, ...] = (
    JobDefinition(
        id="wizard",
        name="Wizard",
        icon="🧙",
        description="Strikes with powerful spells. Low HP, high magic.",
        hp=60,
        attack=8,
        defense=5,
        magic=25,
    ),
    JobDefinition(
        id="warrior",
        name="Warrior",
        icon="⚔️",
        description="Fights with sword and shield. Well-rounded.",
        hp=120,
        attack=18,
        defense=15,
        magic=3,
    ),
    JobDefinition(
        id="hero",
        name="Hero",
        icon="👑",
        description="The hero of legend. Strong all round.",
        hp=100,
        attack=20,
        defense=12,
        magic=8,
    ),
    JobDefinition(
        id="rogue",
        name="Jester",
        icon="🎭",
        description="Runs rings around enemies with quick footwork.",
        hp=80,
        attack=15,
        defense=8,
        magic=5,
    ),
    JobDefinition(
        id="monk",
        name="Priest",
        icon="🙏",
        description="Specialist in healing and defense. Supports the party.",
        hp=90,
        attack=10,
        defense=18,
        magic=15,
    ),
)

TRAINEE_JOB = JobDefinition(
    id="trainee",
    name="You",
    icon="🧑",
    description="Lone adventurer used by the training ground.",
    hp=100,
    attack=15,
    defense=0,
    magic=0,
)
"""Single combatant for training sessions. Not part of the selectable jobs."""


# =============================================================================
# Enemies
# =============================================================================

ENEMIES: tuple[EnemyDefinition, ...] = (
    EnemyDefinition(
        id=1,
        name="Slime",
        icon="🟢",
        hp=30,
        attack=8,
        exp_reward=30,
        weaknesses=frozenset({"wizard", "rogue"}),
        resistances=frozenset({"hero"}),
    ),
    EnemyDefinition(
        id=2,
        name="Goblin",
        icon="👹",
        hp=50,
        attack=14,
        exp_reward=60,
        weaknesses=frozenset({"warrior", "rogue"}),
        resistances=frozenset({"wizard"}),
    ),
    EnemyDefinition(
        id=3,
        name="Orc",
        icon="👺",
        hp=80,
        attack=20,
        exp_reward=90,
        weaknesses=frozenset({"monk"}),
        resistances=frozenset({"rogue"}),
    ),
    EnemyDefinition(
        id=4,
        name="Dragon",
        icon="🐉",
        hp=150,
        attack=32,
        exp_reward=200,
        weaknesses=frozenset({"hero"}),
        resistances=frozenset({"wizard", "rogue"}),
    ),
    EnemyDefinition(
        id=5,
        name="Demon",
        icon="😈",
        hp=120,
        attack=28,
        exp_reward=150,
        weaknesses=frozenset({"monk", "wizard"}),
        resistances=frozenset({"rogue"}),
    ),
)


# =============================================================================
# Species / Job Multipliers
# =============================================================================

COMPATIBILITY_TABLE: dict[str, dict[str, float]] = {
    "Slime": {
        "wizard": 1.5,
        "warrior": 0.8,
        "hero": 0.7,
        "rogue": 1.2,
        "monk": 1.0,
    },
    "Goblin": {
        "wizard": 0.8,
        "warrior": 1.3,
        "hero": 1.2,
        "rogue": 1.4,
        "monk": 1.1,
    },
    "Orc": {
        "wizard": 1.2,
        "warrior": 0.9,
        "hero": 1.1,
        "rogue": 0.8,
        "monk": 1.3,
    },
    "Dragon": {
        "wizard": 0.6,
        "warrior": 0.8,
        "hero": 1.5,
        "rogue": 0.7,
        "monk": 1.2,
    },
    "Demon": {
        "wizard": 1.4,
        "warrior": 0.9,
        "hero": 1.1,
        "rogue": 0.8,
        "monk": 1.5,
    },
}


__all__ = [
    "JOBS",
    "TRAINEE_JOB",
    "ENEMIES",
    "COMPATIBILITY_TABLE",
]
