"""Core module providing configuration, logging, constants and base exceptions.

Exports:
    Exceptions:
        JobQuestError: Base exception for all application errors.
        InvalidStateTransitionError, EmptyPartyError,
        UnknownCatalogReferenceError: Engine and catalog errors.

    Configuration:
        Settings: Main application settings class.
        get_settings: Get the settings singleton.
        clear_settings_cache: Force settings reload.

    Logging:
        configure_logging: Set up application logging.
        get_logger: Get a configured logger instance.
        bind_context: Add context to log entries.
        clear_context: Clear logging context.
"""

from __future__ import annotations

from jobquest.core.config import (
    BattleSettings,
    CampaignSettings,
    Settings,
    StorageSettings,
    clear_settings_cache,
    get_settings,
)
from jobquest.core.exceptions import (
    CatalogError,
    ConfigurationError,
    DiceRollError,
    EmptyPartyError,
    GameEngineError,
    InvalidStateTransitionError,
    JobQuestError,
    StorageError,
    UnknownCatalogReferenceError,
)
from jobquest.core.logging import (
    bind_context,
    clear_context,
    configure_logging,
    get_logger,
)


__all__ = [
    # Exceptions
    "JobQuestError",
    "CatalogError",
    "UnknownCatalogReferenceError",
    "GameEngineError",
    "InvalidStateTransitionError",
    "EmptyPartyError",
    "DiceRollError",
    "StorageError",
    "ConfigurationError",
    # Configuration
    "Settings",
    "BattleSettings",
    "CampaignSettings",
    "StorageSettings",
    "get_settings",
    "clear_settings_cache",
    # Logging
    "configure_logging",
    "get_logger",
    "bind_context",
    "clear_context",
]
