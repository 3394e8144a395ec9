"""Pydantic V2 schema for campaign run state.

CampaignState is the single serialization boundary between the campaign
controller and the selection store: it is written as one JSON document
rather than as scattered keyed entries.
"""

from __future__ import annotations

from typing import Annotated
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field, model_validator

from jobquest.models.combatants import Combatant


class PartyMemberRecord(BaseModel):
    """Progress of one party member, enough to rebuild its Combatant.

    Attributes:
        job_id: Catalog job the member was built from.
        level: Current level.
        experience: Experience toward the next level.
        current_hp: HP when the snapshot was taken.
    """

    model_config = ConfigDict(extra="forbid")

    job_id: str = Field(min_length=1, description="Catalog job ID")
    level: Annotated[int, Field(ge=1, description="Level")] = 1
    experience: Annotated[int, Field(ge=0, description="Experience")] = 0
    current_hp: Annotated[int, Field(ge=0, description="Current HP")]

    @classmethod
    def from_combatant(cls, member: Combatant) -> "PartyMemberRecord":
        """Capture a live party member."""
        return cls(
            job_id=member.id,
            level=member.level,
            experience=member.experience,
            current_hp=member.current_hp,
        )


class CampaignState(BaseModel):
    """Progress of one campaign run.

    Attributes:
        id: Unique run identifier.
        required_wins: Wins needed to clear.
        max_losses: Losses that end the run.
        wins: Encounters won so far.
        losses: Encounters lost or fled so far.
        current_battle: 1-based index of the next encounter.
        fought_enemy_ids: Enemies already fought this run.
        used_member_ids: Party members already used (arena exclusion).
        offered_enemy_ids: Current candidate enemies.
        party: Party member progress, in party order.
    """

    model_config = ConfigDict(
        extra="forbid",
        validate_assignment=True,
    )

    id: UUID = Field(default_factory=uuid4, description="Unique run ID")
    required_wins: Annotated[int, Field(ge=1, description="Wins to clear")]
    max_losses: Annotated[int, Field(ge=1, description="Losses allowed")]
    wins: Annotated[int, Field(ge=0, description="Wins")] = 0
    losses: Annotated[int, Field(ge=0, description="Losses")] = 0
    current_battle: Annotated[int, Field(ge=1, description="Next encounter index")] = 1
    fought_enemy_ids: set[int | str] = Field(default_factory=set, description="Fought enemies")
    used_member_ids: set[str] = Field(default_factory=set, description="Used party members")
    offered_enemy_ids: list[int | str] = Field(
        default_factory=list,
        description="Current candidate enemies",
    )
    party: list[PartyMemberRecord] = Field(
        default_factory=list,
        description="Party member progress",
    )

    @model_validator(mode="after")
    def validate_counters(self) -> "CampaignState":
        """Keep the counters within their thresholds."""
        if self.wins > self.required_wins:
            raise ValueError(f"wins ({self.wins}) exceeds required_wins ({self.required_wins})")
        if self.losses > self.max_losses:
            raise ValueError(f"losses ({self.losses}) exceeds max_losses ({self.max_losses})")
        return self

    @property
    def is_cleared(self) -> bool:
        """Whether enough encounters were won."""
        return self.wins >= self.required_wins

    @property
    def is_game_over(self) -> bool:
        """Whether too many encounters were lost."""
        return self.losses >= self.max_losses

    @property
    def battles_fought(self) -> int:
        """Encounters concluded so far."""
        return self.wins + self.losses


__all__ = [
    "PartyMemberRecord",
    "CampaignState",
]
