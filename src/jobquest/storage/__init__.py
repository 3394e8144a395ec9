"""Storage module for JobQuest persistence.

Provides key-value storage for:
- Selected job ids (the character screen)
- Campaign state snapshots (one JSON document per run)
"""

from jobquest.storage.selection_store import (
    InMemorySelectionStore,
    SelectionStore,
    SqliteSelectionStore,
    get_selection_store,
)

__all__ = [
    "SelectionStore",
    "InMemorySelectionStore",
    "SqliteSelectionStore",
    "get_selection_store",
]
