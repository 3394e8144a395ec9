"""Configuration management for the JobQuest battle engine.

This module provides centralized configuration management using pydantic-settings,
supporting environment variables, .env files, and runtime configuration overrides.

Example:
    >>> from jobquest.core.config import get_settings
    >>> settings = get_settings()
    >>> settings.campaign.battles_to_clear
    3

Environment Variables:
    JOBQUEST_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    JOBQUEST_BATTLE_ACTOR_POLICY: "manual" or "random"
    JOBQUEST_CAMPAIGN_MODE: "adventure" or "arena"
    JOBQUEST_STORAGE_DATABASE_PATH: Path to the SQLite selection store
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from jobquest.core.constants import (
    DEFAULT_BATTLES_TO_CLEAR,
    DEFAULT_ENEMIES_OFFERED,
    DEFAULT_MAX_LOSSES,
    DEFAULT_MAX_PARTY_SIZE,
)
from jobquest.core.exceptions import ConfigurationError
from jobquest.models.enums import ActorPolicy, CampaignMode, CompatibilityScope


class BattleSettings(BaseSettings):
    """Configuration for a single encounter.

    Attributes:
        actor_policy: How the acting party member is chosen.
        compatibility_scope: Whether the multiplier comes from the attacker
            or from the whole party's average.
        enemy_turn_delay_seconds: Suggested pause before callers resolve the
            enemy turn. The engine never sleeps on its own.
    """

    model_config = SettingsConfigDict(
        env_prefix="JOBQUEST_BATTLE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    actor_policy: ActorPolicy = Field(
        default=ActorPolicy.MANUAL,
        description="How the acting party member is chosen",
    )
    compatibility_scope: CompatibilityScope = Field(
        default=CompatibilityScope.ATTACKER,
        description="Source of the damage multiplier",
    )
    enemy_turn_delay_seconds: float = Field(
        default=1.0,
        ge=0,
        le=10,
        description="Presentation delay before the enemy turn",
    )


class CampaignSettings(BaseSettings):
    """Configuration for a campaign run.

    Attributes:
        mode: Compatibility rules the run plays under.
        battles_to_clear: Wins needed to clear the run.
        max_losses: Losses (defeats or flees) that end the run.
        enemies_offered: Candidate enemies drawn before each encounter.
        max_party_size: Largest party the builder accepts.
        exclude_fought_enemies: Never offer an enemy twice in one run.
        exclude_used_members: Arena only: a member fights at most once per run.
    """

    model_config = SettingsConfigDict(
        env_prefix="JOBQUEST_CAMPAIGN_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    mode: CampaignMode = Field(
        default=CampaignMode.ADVENTURE,
        description="Compatibility rules for the run",
    )
    battles_to_clear: int = Field(
        default=DEFAULT_BATTLES_TO_CLEAR,
        ge=1,
        le=20,
        description="Wins required to clear",
    )
    max_losses: int = Field(
        default=DEFAULT_MAX_LOSSES,
        ge=1,
        le=20,
        description="Losses allowed before game over",
    )
    enemies_offered: int = Field(
        default=DEFAULT_ENEMIES_OFFERED,
        ge=1,
        le=10,
        description="Candidate enemies per encounter",
    )
    max_party_size: int = Field(
        default=DEFAULT_MAX_PARTY_SIZE,
        ge=1,
        le=10,
        description="Maximum party size",
    )
    exclude_fought_enemies: bool = Field(
        default=True,
        description="Never offer an already-fought enemy again",
    )
    exclude_used_members: bool = Field(
        default=False,
        description="Arena only: exclude members who already fought",
    )

    @model_validator(mode="after")
    def validate_member_exclusion_mode(self) -> "CampaignSettings":
        """Ensure member exclusion is only enabled for arena runs.

        Returns:
            Self if validation passes.

        Raises:
            ConfigurationError: If exclude_used_members is set outside arena mode.
        """
        if self.exclude_used_members and self.mode != CampaignMode.ARENA:
            raise ConfigurationError(
                "exclude_used_members is only supported in arena mode",
                config_key="exclude_used_members",
                details={"mode": self.mode.value},
            )
        return self


class StorageSettings(BaseSettings):
    """Configuration for the persistent selection store.

    Attributes:
        database_path: Path to the SQLite database file.
    """

    model_config = SettingsConfigDict(
        env_prefix="JOBQUEST_STORAGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    database_path: Path = Field(
        default=Path("data/jobquest.db"),
        description="Path to SQLite database",
    )


class Settings(BaseSettings):
    """Main application settings aggregating all configuration domains.

    Attributes:
        app_name: Application name.
        debug: Enable debug mode.
        log_level: Application logging level.
        json_logs: Emit JSON log lines instead of console output.
        battle: Encounter settings.
        campaign: Campaign settings.
        storage: Selection store settings.
    """

    model_config = SettingsConfigDict(
        env_prefix="JOBQUEST_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_nested_delimiter="__",
    )

    app_name: str = Field(default="JobQuest", description="Application name")
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    json_logs: bool = Field(default=False, description="Emit JSON logs")

    battle: BattleSettings = Field(default_factory=BattleSettings)
    campaign: CampaignSettings = Field(default_factory=CampaignSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the application settings singleton.

    Returns:
        The application Settings instance.

    Raises:
        ConfigurationError: If configuration is missing or invalid.
    """
    try:
        return Settings()
    except ConfigurationError:
        raise
    except Exception as exc:
        raise ConfigurationError(
            f"Failed to load application settings: {exc}",
            details={"original_error": str(exc)},
        ) from exc


def clear_settings_cache() -> None:
    """Clear the settings cache, forcing a reload on next access."""
    get_settings.cache_clear()


__all__ = [
    "BattleSettings",
    "CampaignSettings",
    "StorageSettings",
    "Settings",
    "get_settings",
    "clear_settings_cache",
]
