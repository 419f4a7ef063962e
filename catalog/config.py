"""Application configuration and constants."""
from __future__ import annotations

import os
from dataclasses import dataclass


def _get_env(name: str, default: str) -> str:
    value = os.getenv(name)
    return value if value is not None else default


@dataclass(frozen=True)
class Settings:
    """Simple settings container with environment variable overrides."""

    es_host: str = _get_env("ES_HOST", "http://localhost:9200")
    es_index: str = _get_env("ES_INDEX", "items")
    es_refresh: str = _get_env("ES_REFRESH", "wait_for")
    es_request_timeout: float = float(_get_env("ES_REQUEST_TIMEOUT", "10"))
    mapping_path: str = _get_env("MAPPING_PATH", "product-mapping.json")
    database_url: str = _get_env("DATABASE_URL", "sqlite:///catalog.db")
    redis_host: str = _get_env("REDIS_HOST", "localhost")
    redis_port: int = int(_get_env("REDIS_PORT", "6379"))
    search_cache_ttl_seconds: int = int(_get_env("SEARCH_CACHE_TTL_SECONDS", "86400"))
    autocomplete_cache_ttl_seconds: int = int(_get_env("AUTOCOMPLETE_CACHE_TTL_SECONDS", "300"))
    default_page_size: int = int(_get_env("DEFAULT_PAGE_SIZE", "10"))
    seed_path: str = _get_env("SEED_PATH", "seed-items.json")
    load_on_startup: bool = _get_env("LOAD_ON_STARTUP", "true").lower() in {"1", "true", "yes"}
    log_level: str = _get_env("LOG_LEVEL", "INFO")


settings = Settings()
