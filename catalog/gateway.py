"""Cache-aside read paths for search and autocomplete."""
from __future__ import annotations

import hashlib
import json
import logging
from dataclasses import fields
from decimal import Decimal, InvalidOperation
from enum import Enum
from time import perf_counter
from typing import Any, List, Optional

from .cache import CacheBackend
from .domain import AutocompleteQuery, Item, SearchQuery
from .errors import CacheError
from .ports import SearchIndex
from .query_plan import AUTOCOMPLETE_SIZE, translate, translate_autocomplete

logger = logging.getLogger(__name__)

SEARCH_KEY_PREFIX = "items:search:"
AUTOCOMPLETE_KEY_PREFIX = "items:autocomplete:"


def _canonical_value(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, Decimal):
        return format(value.normalize(), "f")
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return format(Decimal(str(value)).normalize(), "f")
    return value


def search_cache_key(query: SearchQuery) -> str:
    """Stable key for a search request.

    Every field is encoded in declaration order as ``[name, value]`` with
    ``null`` for an absent field, so an omitted bound never collides with an
    explicit default and dict ordering never leaks into the key.
    """

    pairs = [[f.name, _canonical_value(getattr(query, f.name))] for f in fields(query)]
    raw = json.dumps(pairs, separators=(",", ":"), ensure_ascii=False)
    return SEARCH_KEY_PREFIX + hashlib.sha256(raw.encode("utf-8")).hexdigest()


def autocomplete_cache_key(query: AutocompleteQuery) -> str:
    return AUTOCOMPLETE_KEY_PREFIX + query.text


class CachedSearchGateway:
    def __init__(
        self,
        index: SearchIndex,
        cache: CacheBackend,
        *,
        search_ttl: int,
        autocomplete_ttl: int,
    ) -> None:
        self._index = index
        self._cache = cache
        self._search_ttl = search_ttl
        self._autocomplete_ttl = autocomplete_ttl

    def _lookup(self, key: str) -> Optional[Any]:
        try:
            return self._cache.get(key)
        except CacheError as exc:
            logger.warning("cache degraded on get key=%s: %s", key, exc)
            return None

    def _populate(self, key: str, value: Any, ttl: int) -> None:
        try:
            self._cache.set(key, value, ttl)
        except CacheError as exc:
            logger.warning("cache degraded on set key=%s: %s", key, exc)
            return
        logger.debug("cache_store key=%s ttl=%s", key, ttl)

    def search(self, query: SearchQuery) -> List[Item]:
        key = search_cache_key(query)
        start = perf_counter()
        cached = self._lookup(key)
        if cached is not None:
            try:
                items = [Item.from_document(doc) for doc in cached]
            except (KeyError, TypeError, ValueError, InvalidOperation) as exc:
                logger.warning("cache degraded on decode key=%s: %r", key, exc)
            else:
                logger.info("timing: total=%.2fms cache_hit=1 query=%s", (perf_counter() - start) * 1000, query)
                return items

        plan = translate(query)
        t_plan = perf_counter()
        items = self._index.query(plan)
        t_index = perf_counter()
        self._populate(key, [item.to_document() for item in items], self._search_ttl)
        logger.info(
            "timing: total=%.2fms index=%.2fms cache_hit=0 hits=%s query=%s",
            (perf_counter() - start) * 1000,
            (t_index - t_plan) * 1000,
            len(items),
            query,
        )
        return items

    def autocomplete(self, query: AutocompleteQuery) -> List[str]:
        key = autocomplete_cache_key(query)
        cached = self._lookup(key)
        if cached is not None:
            if isinstance(cached, list) and all(isinstance(name, str) for name in cached):
                logger.info("Suggestions found in cache for text=%r", query.text)
                return cached[:AUTOCOMPLETE_SIZE]
            logger.warning("cache degraded on decode key=%s: unexpected payload", key)

        logger.info("Suggestions not found in cache for text=%r", query.text)
        names = self._index.suggest(translate_autocomplete(query))[:AUTOCOMPLETE_SIZE]
        self._populate(key, names, self._autocomplete_ttl)
        return names
