"""Tests for level progression rules."""

from __future__ import annotations

import pytest

from jobquest.models.progression import (
    apply_experience,
    experience_to_next_level,
    split_reward,
)


class TestExperienceThreshold:
    """Tests for the per-level threshold."""

    @pytest.mark.parametrize(("level", "expected"), [(1, 100), (2, 200), (5, 500)])
    def test_threshold(self, level: int, expected: int) -> None:
        """Test the threshold is level * 100."""
        assert experience_to_next_level(level) == expected


class TestApplyExperience:
    """Tests for level-up resolution."""

    def test_no_level_up(self) -> None:
        """Test experience below the threshold just accumulates."""
        result = apply_experience(1, 40, 30)

        assert result.level == 1
        assert result.experience == 70
        assert result.levels_gained == []

    def test_exact_threshold(self) -> None:
        """Test reaching the threshold exactly levels up with zero left."""
        result = apply_experience(1, 70, 30)

        assert result.level == 2
        assert result.experience == 0

    def test_multiple_levels(self) -> None:
        """Test one large reward can raise several levels."""
        result = apply_experience(1, 0, 350)

        assert result.level == 3
        assert result.experience == 50
        assert result.levels_gained == [2, 3]

    def test_negative_gain_rejected(self) -> None:
        """Test negative experience is refused."""
        with pytest.raises(ValueError):
            apply_experience(1, 0, -1)

    def test_remainder_below_threshold(self) -> None:
        """Test the loop always leaves experience within [0, threshold)."""
        for reward in range(0, 3000, 37):
            result = apply_experience(1, 0, reward)

            assert 0 <= result.experience < experience_to_next_level(result.level)


class TestSplitReward:
    """Tests for reward sharing."""

    @pytest.mark.parametrize(
        ("reward", "size", "share"),
        [(30, 1, 30), (100, 3, 33), (200, 3, 66), (5, 10, 0)],
    )
    def test_floor_division(self, reward: int, size: int, share: int) -> None:
        """Test shares are floored and the remainder dropped."""
        assert split_reward(reward, size) == share

    def test_empty_party(self) -> None:
        """Test an empty party receives nothing."""
        assert split_reward(100, 0) == 0
