"""Battle log records.

The log is append-only for the lifetime of one encounter and cleared
when the next enemy is selected.
"""

from __future__ import annotations

from collections.abc import Iterator

from pydantic import BaseModel, ConfigDict, Field

from jobquest.models.enums import LogCategory


class BattleLogEntry(BaseModel):
    """One line of the battle log.

    Attributes:
        sequence: Position within the encounter, starting at 1.
        message: Display text.
        category: Who the entry is about.
    """

    model_config = ConfigDict(
        frozen=True,
        strict=True,
        extra="forbid",
    )

    sequence: int = Field(ge=1, description="Position in the encounter log")
    message: str = Field(min_length=1, description="Display text")
    category: LogCategory = Field(description="Entry category")


class BattleLog:
    """Ordered, append-only sequence of log entries."""

    def __init__(self) -> None:
        self._entries: list[BattleLogEntry] = []

    def append(self, message: str, category: LogCategory) -> BattleLogEntry:
        """Append an entry and return it."""
        entry = BattleLogEntry(
            sequence=len(self._entries) + 1,
            message=message,
            category=category,
        )
        self._entries.append(entry)
        return entry

    def clear(self) -> None:
        """Drop all entries."""
        self._entries.clear()

    @property
    def entries(self) -> list[BattleLogEntry]:
        """Copy of the entries in order."""
        return self._entries.copy()

    @property
    def messages(self) -> list[str]:
        """Entry messages in order."""
        return [entry.message for entry in self._entries]

    def __iter__(self) -> Iterator[BattleLogEntry]:
        return iter(self._entries.copy())

    def __len__(self) -> int:
        return len(self._entries)


__all__ = [
    "BattleLogEntry",
    "BattleLog",
]
