"""Translate structured search requests into Elasticsearch query plans.

Translation is pure: the same :class:`SearchQuery` always yields an equal
:class:`QueryPlan`, and nothing here talks to a cluster.
"""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .domain import AutocompleteQuery, SearchQuery, SortField, SortOrder

TEXT_FIELDS = ["name^2", "description"]
EXACT_FILTER_FIELDS = ("category", "subcategory", "location")
AUTOCOMPLETE_SIZE = 5

# name is analysed text; sorting on it would order by token, not lexicographically
SORT_FIELD_MAPPING = {
    SortField.PRICE: "price",
    SortField.NAME: "name.keyword",
    SortField.STOCK: "stock",
    SortField.CREATED_AT: "created_at",
}


@dataclass(frozen=True)
class QueryPlan:
    must: List[dict] = field(default_factory=list)
    filter: List[dict] = field(default_factory=list)
    sort: Optional[List[dict]] = None
    offset: Optional[int] = None
    size: Optional[int] = None
    source: Optional[List[str]] = None

    def to_body(self) -> Dict[str, Any]:
        """Render the request body passed to ``Elasticsearch.search``."""

        body: Dict[str, Any] = {
            "query": {"bool": {"must": list(self.must), "filter": list(self.filter)}},
        }
        if self.sort is not None:
            body["sort"] = list(self.sort)
        if self.offset is not None:
            body["from"] = self.offset
        if self.size is not None:
            body["size"] = self.size
        if self.source is not None:
            body["_source"] = list(self.source)
        return body

    def to_json(self) -> str:
        return json.dumps(self.to_body(), sort_keys=True, separators=(",", ":"))


def _number(value: Any) -> float | int:
    number = float(value)
    return int(number) if number.is_integer() else number


def translate(query: SearchQuery) -> QueryPlan:
    must: List[dict] = []
    filters: List[dict] = []

    if query.q:
        must.append(
            {
                "multi_match": {
                    "query": query.q,
                    "fields": list(TEXT_FIELDS),
                    "fuzziness": "AUTO",
                }
            }
        )
    else:
        must.append({"match_all": {}})

    for name in EXACT_FILTER_FIELDS:
        value = getattr(query, name)
        if value:
            filters.append({"term": {name: value}})

    if query.min_price is not None or query.max_price is not None:
        bounds: Dict[str, float | int] = {}
        if query.min_price is not None:
            bounds["gte"] = _number(query.min_price)
        if query.max_price is not None:
            bounds["lte"] = _number(query.max_price)
        filters.append({"range": {"price": bounds}})

    return QueryPlan(
        must=must,
        filter=filters,
        sort=_build_sort(query.sort, query.order),
        offset=query.offset,
        size=query.limit,
    )


def _build_sort(sort: SortField | None, order: SortOrder | None) -> List[dict]:
    if sort is None or sort == SortField.RELEVANCE:
        return [{"_score": {"order": SortOrder.DESC.value}}]
    direction = (order or SortOrder.ASC).value
    return [{SORT_FIELD_MAPPING[sort]: {"order": direction}}]


def translate_autocomplete(query: AutocompleteQuery) -> QueryPlan:
    return QueryPlan(
        must=[{"match_phrase_prefix": {"name": query.text}}],
        offset=0,
        size=AUTOCOMPLETE_SIZE,
        source=["name"],
    )
