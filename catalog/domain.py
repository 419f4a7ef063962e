"""Domain value objects for the item catalog."""
from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Optional

PRICE_QUANTUM = Decimal("0.01")


class SortField(str, Enum):
    PRICE = "price"
    NAME = "name"
    STOCK = "stock"
    CREATED_AT = "created_at"
    RELEVANCE = "relevance"

    @classmethod
    def _missing_(cls, value: object) -> Optional["SortField"]:
        # camelCase spelling used by older clients
        if value == "createdAt":
            return cls.CREATED_AT
        return None


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class NewItemData:
    """Candidate item submitted for creation."""

    name: str
    description: str
    price: Decimal
    stock: int
    category: str
    subcategory: str = ""
    location: str = ""


@dataclass(frozen=True)
class Item:
    id: str
    name: str
    description: str
    price: Decimal
    stock: int
    category: str
    subcategory: str
    location: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def new(cls, candidate: NewItemData, *, item_id: str | None = None, now: datetime | None = None) -> "Item":
        """Build a fresh item with a new identifier and both timestamps set to ``now``.

        The price is rounded to cents, the precision the record store keeps.
        """

        timestamp = now or datetime.now(timezone.utc)
        return cls(
            id=item_id or str(uuid.uuid4()),
            name=candidate.name,
            description=candidate.description,
            price=Decimal(str(candidate.price)).quantize(PRICE_QUANTUM),
            stock=candidate.stock,
            category=candidate.category,
            subcategory=candidate.subcategory,
            location=candidate.location,
            created_at=timestamp,
            updated_at=timestamp,
        )

    def to_document(self) -> Dict[str, Any]:
        """JSON-safe representation used as index source and cache payload."""

        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "price": float(self.price),
            "stock": self.stock,
            "category": self.category,
            "subcategory": self.subcategory,
            "location": self.location,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> "Item":
        return cls(
            id=str(doc["id"]),
            name=doc["name"],
            description=doc.get("description") or "",
            price=Decimal(str(doc["price"])),
            stock=int(doc.get("stock") or 0),
            category=doc.get("category") or "",
            subcategory=doc.get("subcategory") or "",
            location=doc.get("location") or "",
            created_at=datetime.fromisoformat(doc["created_at"]),
            updated_at=datetime.fromisoformat(doc["updated_at"]),
        )


@dataclass(frozen=True)
class SearchQuery:
    """Structured, read-only search request.

    ``min_price`` and ``max_price`` are both inclusive. Their relative order
    is the caller's concern. Pagination defaults are applied by the HTTP
    layer; ``None`` here means "not specified".
    """

    q: Optional[str] = None
    category: Optional[str] = None
    subcategory: Optional[str] = None
    location: Optional[str] = None
    min_price: Optional[Decimal] = None
    max_price: Optional[Decimal] = None
    limit: Optional[int] = None
    offset: Optional[int] = None
    sort: Optional[SortField] = None
    order: Optional[SortOrder] = None


@dataclass(frozen=True)
class AutocompleteQuery:
    text: str

    def __post_init__(self) -> None:
        if not self.text or not self.text.strip():
            raise ValueError("Autocomplete text must not be empty")
