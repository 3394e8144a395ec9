"""Pydantic V2 schemas for catalog definitions.

Job and enemy definitions are immutable: the engine copies the numbers it
needs into live Combatant and EnemyInstance records and never writes back.
"""

from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field


class JobDefinition(BaseModel):
    """A selectable job class.

    Attributes:
        id: Unique job identifier (e.g. "wizard").
        name: Display name.
        icon: Display icon.
        description: Flavor text for the selection screen.
        hp: Base and maximum hit points.
        attack: Physical attack power.
        defense: Defense; halves into enemy damage reduction.
        magic: Magic attack power.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )

    id: str = Field(min_length=1, max_length=50, description="Unique job ID")
    name: str = Field(min_length=1, max_length=100, description="Display name")
    icon: str = Field(default="", max_length=20, description="Display icon")
    description: str = Field(default="", max_length=500, description="Flavor text")
    hp: Annotated[int, Field(ge=1, description="Base HP")]
    attack: Annotated[int, Field(ge=0, description="Attack power")]
    defense: Annotated[int, Field(ge=0, description="Defense")]
    magic: Annotated[int, Field(ge=0, description="Magic power")]


class EnemyDefinition(BaseModel):
    """A scripted enemy.

    The name doubles as the species key for table-based compatibility.

    Attributes:
        id: Unique enemy identifier.
        name: Display name and species key.
        hp: Maximum hit points.
        attack: Attack power; enemy rolls fall in [1, attack].
        exp_reward: Experience shared by the party on victory.
        weaknesses: Job ids that deal boosted damage (arena rules).
        resistances: Job ids that deal reduced damage (arena rules).
        icon: Display icon.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )

    id: int | str = Field(description="Unique enemy ID")
    name: str = Field(min_length=1, max_length=100, description="Name / species")
    hp: Annotated[int, Field(ge=1, description="Maximum HP")]
    attack: Annotated[int, Field(ge=0, description="Attack power")]
    exp_reward: Annotated[int, Field(ge=0, description="Experience reward")]
    weaknesses: frozenset[str] = Field(default_factory=frozenset, description="Weak to jobs")
    resistances: frozenset[str] = Field(
        default_factory=frozenset,
        description="Resistant to jobs",
    )
    icon: str = Field(default="👾", max_length=20, description="Display icon")


__all__ = [
    "JobDefinition",
    "EnemyDefinition",
]
