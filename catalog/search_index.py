"""Elasticsearch implementation of the search index port."""
from __future__ import annotations

import logging
from typing import List

from elastic_transport import TransportError
from elasticsearch import Elasticsearch
from elasticsearch.exceptions import ApiError

from .domain import Item
from .errors import StoreError
from .query_plan import QueryPlan

logger = logging.getLogger(__name__)

STORE_NAME = "search_index"


class ElasticsearchItemIndex:
    def __init__(self, es: Elasticsearch, index: str, refresh: str | None = "wait_for") -> None:
        self._es = es
        self._index = index
        # "false" keeps the client default (document visible after the next refresh)
        self._refresh = None if refresh in (None, "", "false") else refresh

    def index_document(self, item: Item) -> None:
        kwargs = {"refresh": self._refresh} if self._refresh else {}
        try:
            self._es.index(index=self._index, id=item.id, document=item.to_document(), **kwargs)
        except (ApiError, TransportError) as exc:
            logger.exception("Error while indexing item %r", item.name)
            raise StoreError(STORE_NAME, "index_document", str(exc)) from exc
        logger.info("Item %s indexed into %s", item.id, self._index)

    def _search(self, plan: QueryPlan, operation: str) -> list[dict]:
        body = plan.to_body()
        logger.debug("ES query payload=%s", body)
        try:
            response = self._es.search(index=self._index, body=body)
        except (ApiError, TransportError) as exc:
            logger.exception("Error while running %s against %s", operation, self._index)
            raise StoreError(STORE_NAME, operation, str(exc)) from exc
        return response.get("hits", {}).get("hits", [])

    def query(self, plan: QueryPlan) -> List[Item]:
        hits = self._search(plan, "query")
        return [Item.from_document({"id": hit.get("_id"), **hit.get("_source", {})}) for hit in hits]

    def suggest(self, plan: QueryPlan) -> List[str]:
        hits = self._search(plan, "suggest")
        return [hit["_source"]["name"] for hit in hits if hit.get("_source", {}).get("name")]
