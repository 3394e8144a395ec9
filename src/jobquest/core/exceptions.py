"""Custom exception hierarchy for the JobQuest battle engine.

This module defines the exception hierarchy used across the engine. All
exceptions inherit from JobQuestError, enabling unified error handling at
the application boundary while preserving domain-specific context.

Example:
    >>> from jobquest.core.exceptions import UnknownCatalogReferenceError
    >>> raise UnknownCatalogReferenceError("No such job", reference="ninja", kind="job")
"""

from __future__ import annotations

from typing import Any


class JobQuestError(Exception):
    """Base exception for all JobQuest errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary containing additional error context.
    """

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        """Initialize the base exception.

        Args:
            message: Human-readable error description.
            details: Optional dictionary containing additional error context.
        """
        self.message = message
        self.details = details or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the exception message with optional details.

        Returns:
            Formatted error message including any provided details.
        """
        if self.details:
            detail_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            return f"{self.message} [{detail_str}]"
        return self.message

    def __repr__(self) -> str:
        """Return a detailed string representation of the exception."""
        return f"{self.__class__.__name__}(message={self.message!r}, details={self.details!r})"


# =============================================================================
# Catalog Domain Exceptions
# =============================================================================


class CatalogError(JobQuestError):
    """Base exception for catalog (job/enemy data) errors."""


class UnknownCatalogReferenceError(CatalogError):
    """Raised when a job or enemy id cannot be resolved by the catalog.

    Callers treat this as a data-integrity fault and skip the entry
    rather than aborting the encounter.
    """

    def __init__(
        self,
        message: str,
        *,
        reference: str | int | None = None,
        kind: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize with the unresolved reference.

        Args:
            message: Human-readable error description.
            reference: The id that could not be resolved.
            kind: Which catalog was searched ("job" or "enemy").
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if reference is not None:
            combined_details["reference"] = reference
        if kind:
            combined_details["kind"] = kind
        self.reference = reference
        self.kind = kind
        super().__init__(message, details=combined_details)


# =============================================================================
# Game Engine Domain Exceptions
# =============================================================================


class GameEngineError(JobQuestError):
    """Base exception for all battle and campaign engine errors."""


class InvalidStateTransitionError(GameEngineError):
    """Raised when an action is attempted in a phase that does not allow it.

    The engine's public operations catch this and report a rejected
    action, so UI code may call them speculatively.
    """

    def __init__(
        self,
        message: str,
        *,
        current_state: str | None = None,
        action: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize with state context.

        Args:
            message: Human-readable error description.
            current_state: The phase the engine was in.
            action: The action that was attempted.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if current_state:
            combined_details["current_state"] = current_state
        if action:
            combined_details["action"] = action
        self.current_state = current_state
        self.action = action
        super().__init__(message, details=combined_details)


class EmptyPartyError(GameEngineError):
    """Raised when a party cannot be built because no job id resolved."""

    def __init__(
        self,
        message: str,
        *,
        requested_ids: list[str] | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize with the ids that were requested.

        Args:
            message: Human-readable error description.
            requested_ids: The job ids the builder was given.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if requested_ids is not None:
            combined_details["requested_ids"] = requested_ids
        super().__init__(message, details=combined_details)


class DiceRollError(GameEngineError):
    """Raised when a dice roll cannot be performed."""

    def __init__(
        self,
        message: str,
        *,
        expression: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize dice roll error with expression context.

        Args:
            message: Human-readable error description.
            expression: The dice expression that caused the error.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if expression:
            combined_details["expression"] = expression
        super().__init__(message, details=combined_details)


# =============================================================================
# Storage & Configuration Exceptions
# =============================================================================


class StorageError(JobQuestError):
    """Raised when the selection store cannot read or write a value."""

    def __init__(
        self,
        message: str,
        *,
        key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize storage error with key context.

        Args:
            message: Human-readable error description.
            key: The store key involved.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if key:
            combined_details["key"] = key
        super().__init__(message, details=combined_details)


class ConfigurationError(JobQuestError):
    """Raised when application configuration is invalid."""

    def __init__(
        self,
        message: str,
        *,
        config_key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize configuration error with config key context.

        Args:
            message: Human-readable error description.
            config_key: The configuration key that caused the error.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if config_key:
            combined_details["config_key"] = config_key
        super().__init__(message, details=combined_details)


__all__ = [
    "JobQuestError",
    # Catalog
    "CatalogError",
    "UnknownCatalogReferenceError",
    # Engine
    "GameEngineError",
    "InvalidStateTransitionError",
    "EmptyPartyError",
    "DiceRollError",
    # Storage & configuration
    "StorageError",
    "ConfigurationError",
]
