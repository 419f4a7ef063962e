"""Elasticsearch client factory.

The catalog core is synchronous and uses the official blocking client; the
HTTP layer moves calls off the event loop with ``asyncio.to_thread``.
"""
from __future__ import annotations

import logging
from functools import lru_cache

from elasticsearch import Elasticsearch

from .config import settings

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_client() -> Elasticsearch:
    logger.info("Connecting to Elasticsearch at %s (index=%s)", settings.es_host, settings.es_index)
    return Elasticsearch(settings.es_host, request_timeout=settings.es_request_timeout)
