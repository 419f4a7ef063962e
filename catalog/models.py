"""Pydantic models for request/response payloads."""
from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from .domain import Item, NewItemData


class CreateItemRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255, examples=["Gaming Laptop"])
    description: str = Field(..., min_length=1, examples=["Powerful laptop for gaming and video editing"])
    price: Decimal = Field(..., gt=0, max_digits=10, decimal_places=2, examples=[1299.99])
    stock: int = Field(..., ge=0, examples=[50])
    category: str = Field(..., min_length=1, max_length=255, examples=["Electronics"])
    subcategory: str = Field(..., min_length=1, max_length=255, examples=["Computers"])
    location: str = Field(..., min_length=1, max_length=255, examples=["New York"])

    def to_candidate(self) -> NewItemData:
        return NewItemData(**self.model_dump())


class ItemResponse(BaseModel):
    id: str
    name: str
    description: str
    price: float
    stock: int
    category: str
    subcategory: str
    location: str
    createdAt: datetime
    updatedAt: datetime

    @classmethod
    def from_item(cls, item: Item) -> "ItemResponse":
        return cls(
            id=item.id,
            name=item.name,
            description=item.description,
            price=float(item.price),
            stock=item.stock,
            category=item.category,
            subcategory=item.subcategory,
            location=item.location,
            createdAt=item.created_at,
            updatedAt=item.updated_at,
        )


class ErrorResponse(BaseModel):
    detail: str
    store: str | None = None
    operation: str | None = None
