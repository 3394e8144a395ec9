"""Tests for combatant and enemy instance models."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest
from pydantic import ValidationError

from jobquest.models.combatants import Combatant, EnemyInstance


class TestCombatant:
    """Tests for the Combatant model."""

    def test_from_job(self, make_job: Callable[..., Any]) -> None:
        """Test a fresh combatant copies the job's stats at full HP."""
        job = make_job(hp=80, attack=15, defense=8, magic=5)
        combatant = Combatant.from_job(job)

        assert combatant.current_hp == 80
        assert combatant.max_hp == 80
        assert (combatant.attack, combatant.defense, combatant.magic) == (15, 8, 5)
        assert combatant.level == 1
        assert combatant.experience == 0
        assert combatant.experience_to_next_level == 100
        assert combatant.id == "fighter"
        assert combatant.name == "Fighter"

    def test_take_damage_clamps_at_zero(self, make_job: Callable[..., Any]) -> None:
        """Test HP never drops below zero."""
        combatant = Combatant.from_job(make_job(hp=50))

        lost = combatant.take_damage(80)

        assert lost == 50
        assert combatant.current_hp == 0
        assert combatant.is_alive is False

    def test_negative_damage_ignored(self, make_job: Callable[..., Any]) -> None:
        """Test negative damage does not heal."""
        combatant = Combatant.from_job(make_job(hp=50))
        combatant.take_damage(10)

        assert combatant.take_damage(-5) == 0
        assert combatant.current_hp == 40

    def test_restore_hp_clamps_at_max(self, make_job: Callable[..., Any]) -> None:
        """Test healing stops at max HP."""
        combatant = Combatant.from_job(make_job(hp=50))
        combatant.take_damage(20)

        restored = combatant.restore_hp(35)

        assert restored == 20
        assert combatant.current_hp == 50
        assert combatant.is_full_hp

    def test_restore_full(self, make_job: Callable[..., Any]) -> None:
        """Test full restore after a knockout."""
        combatant = Combatant.from_job(make_job(hp=50))
        combatant.take_damage(50)

        combatant.restore_full()

        assert combatant.current_hp == 50
        assert combatant.is_alive

    def test_hp_above_max_rejected(self, make_job: Callable[..., Any]) -> None:
        """Test construction rejects current HP above max HP."""
        job = make_job(hp=50)

        with pytest.raises(ValidationError):
            Combatant(
                job=job,
                current_hp=51,
                max_hp=50,
                attack=10,
                defense=0,
                magic=0,
            )

    def test_negative_hp_assignment_rejected(self, make_job: Callable[..., Any]) -> None:
        """Test assignments are validated."""
        combatant = Combatant.from_job(make_job())

        with pytest.raises(ValidationError):
            combatant.current_hp = -1

    def test_level_up_carries_overflow(self, make_job: Callable[..., Any]) -> None:
        """Test 95 experience plus 30 reaches level 2 with 25 left over."""
        combatant = Combatant.from_job(make_job())
        combatant.experience = 95

        result = combatant.gain_experience(30)

        assert result.levels_gained == [2]
        assert combatant.level == 2
        assert combatant.experience == 25
        assert combatant.experience_to_next_level == 200

    def test_computed_fields_serialized(self, make_job: Callable[..., Any]) -> None:
        """Test computed fields appear in the dump."""
        data = Combatant.from_job(make_job()).model_dump()

        assert data["is_alive"] is True
        assert data["experience_to_next_level"] == 100


class TestEnemyInstance:
    """Tests for the EnemyInstance model."""

    def test_spawn_at_full_hp(self, make_enemy: Callable[..., Any]) -> None:
        """Test a spawned enemy starts at the definition's HP."""
        enemy = EnemyInstance.spawn(make_enemy(hp=30, name="Slime"))

        assert enemy.current_hp == 30
        assert enemy.max_hp == 30
        assert enemy.name == "Slime"
        assert enemy.is_alive

    def test_take_damage_clamps_at_zero(self, make_enemy: Callable[..., Any]) -> None:
        """Test enemy HP never drops below zero."""
        enemy = EnemyInstance.spawn(make_enemy(hp=30))

        assert enemy.take_damage(45) == 30
        assert enemy.current_hp == 0
        assert enemy.is_alive is False

    def test_hp_above_definition_rejected(self, make_enemy: Callable[..., Any]) -> None:
        """Test an instance cannot exceed its definition's HP."""
        with pytest.raises(ValidationError):
            EnemyInstance(definition=make_enemy(hp=30), current_hp=31)

    def test_definition_untouched(self, make_enemy: Callable[..., Any]) -> None:
        """Test damage never writes back to the definition."""
        definition = make_enemy(hp=30)
        EnemyInstance.spawn(definition).take_damage(10)

        assert definition.hp == 30
