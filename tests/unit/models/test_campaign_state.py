"""Tests for campaign state and the battle log."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from jobquest.models.battle_log import BattleLog
from jobquest.models.campaign import CampaignState, PartyMemberRecord
from jobquest.models.enums import LogCategory


class TestCampaignState:
    """Tests for the CampaignState model."""

    def test_defaults(self) -> None:
        """Test a new run starts at battle 1 with empty sets."""
        state = CampaignState(required_wins=3, max_losses=3)

        assert state.wins == 0
        assert state.losses == 0
        assert state.current_battle == 1
        assert state.fought_enemy_ids == set()
        assert state.used_member_ids == set()
        assert not state.is_cleared
        assert not state.is_game_over

    def test_counters_bounded(self) -> None:
        """Test wins cannot exceed the required count."""
        state = CampaignState(required_wins=1, max_losses=3)
        state.wins = 1

        with pytest.raises(ValidationError):
            state.wins = 2

    def test_terminal_flags(self) -> None:
        """Test clear and game over flags follow the counters."""
        state = CampaignState(required_wins=2, max_losses=1, wins=2)
        assert state.is_cleared

        state = CampaignState(required_wins=2, max_losses=1, losses=1)
        assert state.is_game_over
        assert state.battles_fought == 1

    def test_json_round_trip(self) -> None:
        """Test the state survives a JSON dump and reload."""
        state = CampaignState(
            required_wins=3,
            max_losses=3,
            wins=1,
            losses=1,
            current_battle=3,
            fought_enemy_ids={1, "boss"},
            used_member_ids={"hero"},
            offered_enemy_ids=[2, 3],
        )

        restored = CampaignState.model_validate(state.model_dump(mode="json"))

        assert restored == state
        assert 1 in restored.fought_enemy_ids
        assert "boss" in restored.fought_enemy_ids


class TestPartyMemberRecord:
    """Tests for saved party progress."""

    def test_from_combatant(self, make_party) -> None:
        """Test a record captures job, level, experience and HP."""
        [member] = make_party({"id": "hero", "hp": 40})
        member.gain_experience(130)
        member.take_damage(15)

        record = PartyMemberRecord.from_combatant(member)

        assert record.job_id == "hero"
        assert record.level == 2
        assert record.experience == 30
        assert record.current_hp == 25

    def test_rejects_negative_hp(self) -> None:
        """Test saved HP cannot be negative."""
        with pytest.raises(ValidationError):
            PartyMemberRecord(job_id="hero", current_hp=-1)

    def test_state_validates_records(self) -> None:
        """Test CampaignState builds records from plain JSON data."""
        state = CampaignState.model_validate(
            {
                "required_wins": 3,
                "max_losses": 3,
                "party": [{"job_id": "monk", "level": 2, "experience": 5, "current_hp": 9}],
            }
        )

        assert state.party == [
            PartyMemberRecord(job_id="monk", level=2, experience=5, current_hp=9)
        ]


class TestBattleLog:
    """Tests for the BattleLog container."""

    def test_append_numbers_entries(self) -> None:
        """Test entries are numbered in order."""
        log = BattleLog()

        first = log.append("Slime appeared!", LogCategory.SYSTEM)
        second = log.append("Hero attacks!", LogCategory.PLAYER)

        assert (first.sequence, second.sequence) == (1, 2)
        assert log.messages == ["Slime appeared!", "Hero attacks!"]
        assert len(log) == 2

    def test_clear_restarts_numbering(self) -> None:
        """Test clearing empties the log."""
        log = BattleLog()
        log.append("One", LogCategory.SYSTEM)

        log.clear()
        entry = log.append("Two", LogCategory.ENEMY)

        assert entry.sequence == 1
        assert [e.category for e in log] == [LogCategory.ENEMY]

    def test_entries_are_copies(self) -> None:
        """Test callers cannot mutate the log through entries."""
        log = BattleLog()
        log.append("One", LogCategory.SYSTEM)

        log.entries.clear()

        assert len(log) == 1
