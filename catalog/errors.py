"""Error taxonomy shared by the write and read paths."""
from __future__ import annotations


class CatalogError(Exception):
    """Base class for every catalog failure."""


class ConflictError(CatalogError):
    """An item with the requested name already exists."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Item with name {name!r} already exists")
        self.name = name


class StoreError(CatalogError):
    """A durable collaborator (record store or search index) failed.

    ``store`` and ``operation`` identify where the fault happened so the
    message is useful for triage without digging through the chained cause.
    """

    def __init__(self, store: str, operation: str, message: str = "") -> None:
        detail = f"{store}.{operation} failed"
        if message:
            detail = f"{detail}: {message}"
        super().__init__(detail)
        self.store = store
        self.operation = operation
        self.message = message


class IndexingFailed(StoreError):
    """The search index rejected the new document; nothing was persisted."""


class PersistenceFailed(StoreError):
    """The record store write failed."""


class CacheError(CatalogError):
    """Cache backend malfunction. Never surfaced past the search gateway."""
