"""Seeding sample items through the write path."""
import json

from catalog.seeder import seed_if_empty

SEED = [
    {"name": "Widget", "description": "d", "price": 9.99, "stock": 3, "category": "Tools"},
    {"name": "Gadget", "description": "d", "price": "19.50", "stock": 1, "category": "Tools", "location": "Denver"},
    {"name": "Widget", "description": "dup", "price": 1, "stock": 1, "category": "Tools"},
]


def test_seed_creates_items_in_both_stores_and_skips_duplicates(tmp_path, service, search_index, record_store):
    path = tmp_path / "seed.json"
    path.write_text(json.dumps(SEED), encoding="utf-8")

    assert seed_if_empty(service, path) == 2
    assert record_store.count() == 2
    assert len(search_index.documents) == 2


def test_seed_skipped_when_catalog_not_empty(tmp_path, service):
    path = tmp_path / "seed.json"
    path.write_text(json.dumps(SEED), encoding="utf-8")
    seed_if_empty(service, path)

    assert seed_if_empty(service, path) == 0


def test_missing_or_lfs_seed_file_is_ignored(tmp_path, service, record_store):
    assert seed_if_empty(service, tmp_path / "absent.json") == 0

    pointer = tmp_path / "seed.json"
    pointer.write_text("version https://git-lfs.github.com/spec/v1\noid sha256:abc\n", encoding="utf-8")
    assert seed_if_empty(service, pointer) == 0
    assert record_store.count() == 0
