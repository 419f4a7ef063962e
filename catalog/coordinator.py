"""Dual-write protocol that keeps the record store and search index in step.

The search index is written first and gates the record store write, so a
record without a search document never exists. A failure after indexing
leaves an orphan search document with no backing record.
"""
from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import Callable

from .domain import Item, NewItemData
from .errors import ConflictError, IndexingFailed, PersistenceFailed, StoreError
from .ports import RecordStore, SearchIndex

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _new_id() -> str:
    return str(uuid.uuid4())


class ItemWriteCoordinator:
    def __init__(
        self,
        records: RecordStore,
        index: SearchIndex,
        *,
        clock: Callable[[], datetime] = _utcnow,
        id_factory: Callable[[], str] = _new_id,
    ) -> None:
        self._records = records
        self._index = index
        self._clock = clock
        self._id_factory = id_factory

    def create(self, candidate: NewItemData) -> Item:
        logger.info("Creating item: %s", candidate.name)

        try:
            existing = self._records.find_by_name(candidate.name)
        except StoreError as exc:
            raise PersistenceFailed(exc.store, exc.operation, exc.message) from exc
        if existing is not None:
            logger.warning("Item with name: %s, already exists", candidate.name)
            raise ConflictError(candidate.name)

        item = Item.new(candidate, item_id=self._id_factory(), now=self._clock())

        try:
            self._index.index_document(item)
        except StoreError as exc:
            logger.error("Indexing item %s failed, record store left untouched", candidate.name)
            raise IndexingFailed(exc.store, exc.operation, exc.message) from exc

        try:
            saved = self._records.save(item)
        except StoreError as exc:
            logger.error("Persisting item %s failed; search document %s is orphaned", candidate.name, item.id)
            raise PersistenceFailed(exc.store, exc.operation, exc.message) from exc

        logger.info("Item with name: %s, created successfully (id=%s)", saved.name, saved.id)
        return saved
