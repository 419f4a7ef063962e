"""Elasticsearch adapter against a mocked client."""
from datetime import datetime, timezone
from decimal import Decimal
from unittest.mock import MagicMock

import pytest
from elastic_transport import ConnectionError as ESConnectionError

from catalog.domain import AutocompleteQuery, Item, SearchQuery
from catalog.errors import StoreError
from catalog.query_plan import translate, translate_autocomplete
from catalog.search_index import ElasticsearchItemIndex

from conftest import make_candidate

NOW = datetime(2024, 1, 2, tzinfo=timezone.utc)


def _hit(item: Item) -> dict:
    source = item.to_document()
    source.pop("id")
    return {"_id": item.id, "_score": 1.0, "_source": source}


def test_index_document_uses_item_id_and_refresh():
    es = MagicMock()
    item = Item.new(make_candidate("Widget"), item_id="abc", now=NOW)

    ElasticsearchItemIndex(es, "items").index_document(item)

    es.index.assert_called_once_with(index="items", id="abc", document=item.to_document(), refresh="wait_for")


def test_refresh_can_be_disabled():
    es = MagicMock()

    ElasticsearchItemIndex(es, "items", refresh="false").index_document(Item.new(make_candidate(), now=NOW))

    assert "refresh" not in es.index.call_args.kwargs


def test_query_sends_plan_body_and_maps_hits():
    es = MagicMock()
    item = Item.new(make_candidate("Widget", price=Decimal("9.99")), item_id="abc", now=NOW)
    es.search.return_value = {"hits": {"hits": [_hit(item)]}}
    plan = translate(SearchQuery(q="widget", limit=10, offset=0))

    results = ElasticsearchItemIndex(es, "items").query(plan)

    es.search.assert_called_once_with(index="items", body=plan.to_body())
    assert results == [item]


def test_suggest_returns_names_only():
    es = MagicMock()
    es.search.return_value = {"hits": {"hits": [{"_id": "1", "_source": {"name": "Laptop"}}, {"_id": "2", "_source": {"name": "Lamp"}}]}}

    names = ElasticsearchItemIndex(es, "items").suggest(translate_autocomplete(AutocompleteQuery("la")))

    assert names == ["Laptop", "Lamp"]
    assert es.search.call_args.kwargs["body"]["_source"] == ["name"]


def test_transport_errors_become_store_errors():
    es = MagicMock()
    es.index.side_effect = ESConnectionError("connection refused")
    es.search.side_effect = ESConnectionError("connection refused")
    index = ElasticsearchItemIndex(es, "items")

    with pytest.raises(StoreError) as excinfo:
        index.index_document(Item.new(make_candidate(), now=NOW))
    assert (excinfo.value.store, excinfo.value.operation) == ("search_index", "index_document")

    with pytest.raises(StoreError) as excinfo:
        index.query(translate(SearchQuery()))
    assert excinfo.value.operation == "query"
