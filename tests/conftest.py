"""Shared fixtures: in-process fakes for the search index and cache, SQLite record store."""
from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, List, Optional

import pytest

from catalog.coordinator import ItemWriteCoordinator
from catalog.database import create_schema, make_engine, make_session_factory
from catalog.domain import Item, NewItemData
from catalog.errors import CacheError, StoreError
from catalog.gateway import CachedSearchGateway
from catalog.query_plan import QueryPlan
from catalog.record_store import SqlItemRecordStore
from catalog.service import CatalogService

SEARCH_TTL = 86400
AUTOCOMPLETE_TTL = 300


def _clause_matches(doc: Dict[str, Any], clause: dict) -> bool:
    if "match_all" in clause:
        return True
    if "multi_match" in clause:
        needle = clause["multi_match"]["query"].lower()
        haystack = f"{doc['name']} {doc['description']}".lower()
        return any(token in haystack for token in needle.split())
    if "match_phrase_prefix" in clause:
        prefix = clause["match_phrase_prefix"]["name"].lower()
        return doc["name"].lower().startswith(prefix)
    if "term" in clause:
        (field, value), = clause["term"].items()
        return doc.get(field) == value
    if "range" in clause:
        bounds = clause["range"]["price"]
        price = doc["price"]
        return price >= bounds.get("gte", float("-inf")) and price <= bounds.get("lte", float("inf"))
    raise AssertionError(f"unsupported clause {clause}")


class FakeSearchIndex:
    """Evaluates the subset of the query DSL the translator emits."""

    def __init__(self) -> None:
        self.documents: Dict[str, Dict[str, Any]] = {}
        self.index_calls = 0
        self.query_calls = 0
        self.suggest_calls = 0
        self.fail_index = False
        self.fail_query = False
        self.plans: List[QueryPlan] = []

    def index_document(self, item: Item) -> None:
        self.index_calls += 1
        if self.fail_index:
            raise StoreError("search_index", "index_document", "cluster unavailable")
        self.documents[item.id] = item.to_document()

    def _run(self, plan: QueryPlan) -> List[Dict[str, Any]]:
        self.plans.append(plan)
        if self.fail_query:
            raise StoreError("search_index", "query", "cluster unavailable")
        hits = [
            doc
            for doc in self.documents.values()
            if all(_clause_matches(doc, c) for c in plan.must) and all(_clause_matches(doc, c) for c in plan.filter)
        ]
        for spec in reversed(plan.sort or []):
            (field, options), = spec.items()
            if field == "_score":
                continue
            key = "name" if field == "name.keyword" else field
            hits.sort(key=lambda doc: doc[key], reverse=options["order"] == "desc")
        offset = plan.offset or 0
        end = None if plan.size is None else offset + plan.size
        return hits[offset:end]

    def query(self, plan: QueryPlan) -> List[Item]:
        self.query_calls += 1
        return [Item.from_document(doc) for doc in self._run(plan)]

    def suggest(self, plan: QueryPlan) -> List[str]:
        self.suggest_calls += 1
        return [doc["name"] for doc in self._run(plan)]


class FakeCache:
    def __init__(self) -> None:
        self.store: Dict[str, Any] = {}
        self.ttls: Dict[str, int] = {}
        self.get_calls = 0
        self.set_calls = 0
        self.broken = False

    def get(self, key: str) -> Optional[Any]:
        self.get_calls += 1
        if self.broken:
            raise CacheError("connection refused")
        return self.store.get(key)

    def set(self, key: str, value: Any, ttl: int) -> None:
        self.set_calls += 1
        if self.broken:
            raise CacheError("connection refused")
        self.store[key] = value
        self.ttls[key] = ttl


@pytest.fixture
def record_store() -> SqlItemRecordStore:
    engine = make_engine("sqlite://")
    create_schema(engine)
    yield SqlItemRecordStore(make_session_factory(engine))
    engine.dispose()


@pytest.fixture
def search_index() -> FakeSearchIndex:
    return FakeSearchIndex()


@pytest.fixture
def cache() -> FakeCache:
    return FakeCache()


@pytest.fixture
def coordinator(record_store, search_index) -> ItemWriteCoordinator:
    return ItemWriteCoordinator(record_store, search_index)


@pytest.fixture
def gateway(search_index, cache) -> CachedSearchGateway:
    return CachedSearchGateway(search_index, cache, search_ttl=SEARCH_TTL, autocomplete_ttl=AUTOCOMPLETE_TTL)


@pytest.fixture
def service(coordinator, gateway, record_store) -> CatalogService:
    return CatalogService(coordinator=coordinator, gateway=gateway, records=record_store)


def make_candidate(name: str = "Widget", **overrides: Any) -> NewItemData:
    values: Dict[str, Any] = {
        "name": name,
        "description": f"{name} description",
        "price": Decimal("9.99"),
        "stock": 3,
        "category": "Tools",
        "subcategory": "Hand Tools",
        "location": "Denver",
    }
    values.update(overrides)
    return NewItemData(**values)
