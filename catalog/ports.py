"""Narrow capability interfaces for the catalog's external collaborators."""
from __future__ import annotations

from typing import List, Optional, Protocol

from .cache import CacheBackend
from .domain import Item
from .query_plan import QueryPlan


class RecordStore(Protocol):
    """Authoritative item storage. Faults raise :class:`~catalog.errors.StoreError`."""

    def find_by_name(self, name: str) -> Optional[Item]: ...

    def get(self, item_id: str) -> Optional[Item]: ...

    def save(self, item: Item) -> Item: ...

    def count(self) -> int: ...


class SearchIndex(Protocol):
    """Document index. Faults raise :class:`~catalog.errors.StoreError`."""

    def index_document(self, item: Item) -> None: ...

    def query(self, plan: QueryPlan) -> List[Item]: ...

    def suggest(self, plan: QueryPlan) -> List[str]: ...


__all__ = ["CacheBackend", "RecordStore", "SearchIndex"]
