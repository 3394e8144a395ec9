"""Pytest configuration and shared fixtures.

This module provides common fixtures and configuration for all tests
in the JobQuest test suite.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING, Any, TypeVar

import pytest

from jobquest.engine.dice import DiceRoller


if TYPE_CHECKING:
    from collections.abc import Generator
    from pathlib import Path


T = TypeVar("T")


# =============================================================================
# Scripted Dice
# =============================================================================


class ScriptedRoller(DiceRoller):
    """DiceRoller that replays scripted values.

    Args:
        rolls: Values returned by roll_die, in order.
        choices: Positions picked by choice, in order.
        fallback: Roll used once the script runs out; None means the
            highest face of the requested die.
    """

    def __init__(
        self,
        rolls: Sequence[int] = (),
        *,
        choices: Sequence[int] = (),
        fallback: int | None = None,
    ) -> None:
        super().__init__()
        self._rolls = list(rolls)
        self._choices = list(choices)
        self._fallback = fallback
        self.sides_requested: list[int] = []

    def roll_die(self, sides: int) -> int:
        self.sides_requested.append(sides)
        if self._rolls:
            return self._rolls.pop(0)
        if self._fallback is None:
            return sides
        return min(self._fallback, sides)

    def choice(self, options: Sequence[T]) -> T:
        position = self._choices.pop(0) if self._choices else 0
        return options[position]

    def sample(self, options: Sequence[T], count: int) -> list[T]:
        return list(options)[:count]


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_settings_cache() -> Generator[None, None, None]:
    """Reset the settings cache before and after each test."""
    from jobquest.core.config import clear_settings_cache

    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture(autouse=True)
def reset_log_context() -> Generator[None, None, None]:
    """Drop any campaign context bound by a previous test."""
    from jobquest.core.logging import clear_context

    clear_context()
    yield
    clear_context()


@pytest.fixture
def battle_settings() -> Any:
    """Provide default battle settings (manual actor, attacker scope).

    Returns:
        BattleSettings instance.
    """
    from jobquest.core.config import BattleSettings

    return BattleSettings()


@pytest.fixture
def campaign_settings() -> Any:
    """Provide default adventure campaign settings.

    Returns:
        CampaignSettings instance.
    """
    from jobquest.core.config import CampaignSettings

    return CampaignSettings()


# =============================================================================
# Catalog Fixtures
# =============================================================================


@pytest.fixture
def catalog() -> Any:
    """Provide the bundled catalog.

    Returns:
        StaticCatalog instance.
    """
    from jobquest.catalog.provider import StaticCatalog

    return StaticCatalog()


@pytest.fixture
def make_job() -> Callable[..., Any]:
    """Factory for custom job definitions.

    Returns:
        Function building a JobDefinition from keyword overrides.
    """
    from jobquest.models.definitions import JobDefinition

    def _make_job(**overrides: Any) -> JobDefinition:
        data: dict[str, Any] = {
            "id": "fighter",
            "name": "Fighter",
            "hp": 50,
            "attack": 10,
            "defense": 0,
            "magic": 0,
        }
        data.update(overrides)
        return JobDefinition(**data)

    return _make_job


@pytest.fixture
def make_enemy() -> Callable[..., Any]:
    """Factory for custom enemy definitions.

    Returns:
        Function building an EnemyDefinition from keyword overrides.
    """
    from jobquest.models.definitions import EnemyDefinition

    def _make_enemy(**overrides: Any) -> EnemyDefinition:
        data: dict[str, Any] = {
            "id": 99,
            "name": "Training Dummy",
            "hp": 50,
            "attack": 3,
            "exp_reward": 30,
        }
        data.update(overrides)
        return EnemyDefinition(**data)

    return _make_enemy


@pytest.fixture
def make_party(make_job: Callable[..., Any]) -> Callable[..., list[Any]]:
    """Factory for parties of fresh combatants.

    Returns:
        Function building one Combatant per job override dict.
    """
    from jobquest.models.combatants import Combatant

    def _make_party(*jobs: dict[str, Any]) -> list[Combatant]:
        return [Combatant.from_job(make_job(**job)) for job in jobs]

    return _make_party


# =============================================================================
# Engine Fixtures
# =============================================================================


@pytest.fixture
def dice_roller() -> DiceRoller:
    """Create a DiceRoller with a fixed seed for reproducible tests.

    Returns:
        DiceRoller instance with fixed seed.
    """
    return DiceRoller(seed=42)


@pytest.fixture
def scripted_roller() -> Callable[..., ScriptedRoller]:
    """Factory for ScriptedRoller instances.

    Returns:
        The ScriptedRoller class, called with the script.
    """
    return ScriptedRoller


# =============================================================================
# Storage Fixtures
# =============================================================================


@pytest.fixture
def memory_store() -> Any:
    """Provide an empty in-memory selection store.

    Returns:
        InMemorySelectionStore instance.
    """
    from jobquest.storage.selection_store import InMemorySelectionStore

    return InMemorySelectionStore()


@pytest.fixture
def sqlite_store(tmp_path: Path) -> Any:
    """Provide a SQLite selection store in a temporary directory.

    Args:
        tmp_path: Pytest temporary path fixture.

    Returns:
        SqliteSelectionStore instance.
    """
    from jobquest.storage.selection_store import SqliteSelectionStore

    return SqliteSelectionStore(tmp_path / "data" / "jobquest.db")
