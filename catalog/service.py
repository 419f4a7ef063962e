"""Catalog facade and default wiring of the concrete collaborators."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import List

from .cache import get_cache
from .config import settings
from .coordinator import ItemWriteCoordinator
from .database import create_schema, make_engine, make_session_factory
from .domain import AutocompleteQuery, Item, NewItemData, SearchQuery
from .es_client import get_client
from .gateway import CachedSearchGateway
from .ports import RecordStore
from .record_store import SqlItemRecordStore
from .search_index import ElasticsearchItemIndex

logger = logging.getLogger(__name__)


@dataclass
class CatalogService:
    coordinator: ItemWriteCoordinator
    gateway: CachedSearchGateway
    records: RecordStore

    def create_item(self, candidate: NewItemData) -> Item:
        return self.coordinator.create(candidate)

    def search_items(self, query: SearchQuery) -> List[Item]:
        return self.gateway.search(query)

    def autocomplete(self, text: str) -> List[str]:
        return self.gateway.autocomplete(AutocompleteQuery(text))


@lru_cache(maxsize=1)
def build_service() -> CatalogService:
    engine = make_engine(settings.database_url)
    create_schema(engine)
    records = SqlItemRecordStore(make_session_factory(engine))
    index = ElasticsearchItemIndex(get_client(), settings.es_index, refresh=settings.es_refresh)
    gateway = CachedSearchGateway(
        index,
        get_cache(),
        search_ttl=settings.search_cache_ttl_seconds,
        autocomplete_ttl=settings.autocomplete_cache_ttl_seconds,
    )
    logger.info(
        "Catalog wired: index=%s search_ttl=%ss autocomplete_ttl=%ss",
        settings.es_index,
        settings.search_cache_ttl_seconds,
        settings.autocomplete_cache_ttl_seconds,
    )
    return CatalogService(coordinator=ItemWriteCoordinator(records, index), gateway=gateway, records=records)
