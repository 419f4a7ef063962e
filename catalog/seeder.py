"""Load sample items through the write coordinator when the catalog is empty."""
from __future__ import annotations

import json
import logging
from decimal import Decimal
from pathlib import Path
from typing import Iterable

from .domain import NewItemData
from .errors import ConflictError
from .service import CatalogService

logger = logging.getLogger(__name__)


def _load_seed(path: Path) -> list[dict]:
    if not path.exists():
        logger.warning("Seed file %s is missing", path)
        return []
    # Detect Git LFS placeholder to avoid attempting to parse it as JSON.
    with path.open("r", encoding="utf-8") as fh:
        first_line = fh.readline()
        if first_line.startswith("version https://git-lfs.github.com/spec/v1"):
            logger.warning("Seed file %s is a Git LFS pointer; real data not downloaded", path)
            return []
        fh.seek(0)
        return json.load(fh)


def _prepare_candidate(raw: dict) -> NewItemData:
    return NewItemData(
        name=raw.get("name") or raw.get("title") or "",
        description=raw.get("description") or "",
        price=Decimal(str(raw["price"])),
        stock=int(raw.get("stock") or 0),
        category=raw.get("category") or "",
        subcategory=raw.get("subcategory") or "",
        location=raw.get("location") or "",
    )


def seed_items(service: CatalogService, candidates: Iterable[NewItemData]) -> int:
    created = 0
    for candidate in candidates:
        try:
            service.create_item(candidate)
        except ConflictError:
            logger.info("Skipping seed item %r, already present", candidate.name)
            continue
        created += 1
    return created


def seed_if_empty(service: CatalogService, path: Path) -> int:
    if service.records.count() > 0:
        logger.info("Items already seeded")
        return 0
    raw_items = _load_seed(path)
    if not raw_items:
        return 0
    logger.info("Seeding %s items from %s", len(raw_items), path)
    return seed_items(service, (_prepare_candidate(raw) for raw in raw_items))
