"""SQLAlchemy-backed record store: the authoritative copy of every item."""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional

from sqlalchemy import Column, DateTime, Integer, Numeric, String, Text, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from .database import Base
from .domain import Item
from .errors import StoreError

logger = logging.getLogger(__name__)

STORE_NAME = "record_store"


class ItemRow(Base):
    __tablename__ = "items"

    id = Column(String(36), primary_key=True)
    # unique at the database level: the lookup in the coordinator is best effort only
    name = Column(String(255), nullable=False, unique=True, index=True)
    description = Column(Text, nullable=False, default="")
    price = Column(Numeric(10, 2), nullable=False)
    stock = Column(Integer, nullable=False)
    category = Column(String(255), nullable=False, index=True)
    subcategory = Column(String(255), nullable=False, default="")
    location = Column(String(255), nullable=False, default="")
    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False)


def _aware(value: datetime) -> datetime:
    # SQLite drops tzinfo on the way back
    return value if value.tzinfo is not None else value.replace(tzinfo=timezone.utc)


def _to_domain(row: ItemRow) -> Item:
    return Item(
        id=row.id,
        name=row.name,
        description=row.description,
        price=Decimal(str(row.price)),
        stock=row.stock,
        category=row.category,
        subcategory=row.subcategory,
        location=row.location,
        created_at=_aware(row.created_at),
        updated_at=_aware(row.updated_at),
    )


def _to_row(item: Item) -> ItemRow:
    return ItemRow(
        id=item.id,
        name=item.name,
        description=item.description,
        price=item.price,
        stock=item.stock,
        category=item.category,
        subcategory=item.subcategory,
        location=item.location,
        created_at=item.created_at,
        updated_at=item.updated_at,
    )


class SqlItemRecordStore:
    def __init__(self, session_factory: sessionmaker) -> None:
        self._session_factory = session_factory

    def find_by_name(self, name: str) -> Optional[Item]:
        try:
            with self._session_factory() as session:
                row = session.execute(select(ItemRow).where(ItemRow.name == name)).scalar_one_or_none()
        except SQLAlchemyError as exc:
            logger.exception("Lookup by name %r failed", name)
            raise StoreError(STORE_NAME, "find_by_name", str(exc)) from exc
        return _to_domain(row) if row is not None else None

    def get(self, item_id: str) -> Optional[Item]:
        try:
            with self._session_factory() as session:
                row = session.get(ItemRow, item_id)
        except SQLAlchemyError as exc:
            logger.exception("Lookup by id %s failed", item_id)
            raise StoreError(STORE_NAME, "get", str(exc)) from exc
        return _to_domain(row) if row is not None else None

    def save(self, item: Item) -> Item:
        row = _to_row(item)
        try:
            with self._session_factory.begin() as session:
                session.add(row)
        except SQLAlchemyError as exc:
            logger.error("Error saving item %r: %s", item.name, exc)
            raise StoreError(STORE_NAME, "save", str(exc)) from exc
        logger.info("Item with id: %s saved successfully", item.id)
        return _to_domain(row)

    def count(self) -> int:
        try:
            with self._session_factory() as session:
                return session.execute(select(func.count()).select_from(ItemRow)).scalar_one()
        except SQLAlchemyError as exc:
            raise StoreError(STORE_NAME, "count", str(exc)) from exc
