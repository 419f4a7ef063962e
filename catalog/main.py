"""FastAPI application wiring the catalog service."""
from __future__ import annotations

import asyncio
import logging
from decimal import Decimal
from pathlib import Path
from typing import List

from fastapi import Depends, FastAPI, HTTPException, Query, Request
from fastapi.responses import JSONResponse

from .config import settings
from .domain import SearchQuery, SortField, SortOrder
from .errors import ConflictError, StoreError
from .es_client import get_client
from .indexing import ensure_index, index_is_empty
from .models import CreateItemRequest, ErrorResponse, ItemResponse
from .seeder import seed_if_empty
from .service import CatalogService, build_service

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_LEVEL = logging.getLevelName(settings.log_level.upper())

# ``force=True`` replaces uvicorn's default handlers so module loggers share one format.
logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT, force=True)
for name in ("uvicorn", "uvicorn.error", "uvicorn.access", "elastic_transport"):
    logging.getLogger(name).setLevel(LOG_LEVEL)

logger = logging.getLogger(__name__)
logger.info("Logging configured at %s", settings.log_level.upper())

app = FastAPI(title="Item Catalog Service")


def get_service() -> CatalogService:
    return build_service()


@app.exception_handler(ConflictError)
async def conflict_handler(request: Request, exc: ConflictError) -> JSONResponse:
    return JSONResponse(status_code=409, content=ErrorResponse(detail=str(exc)).model_dump())


@app.exception_handler(StoreError)
async def store_error_handler(request: Request, exc: StoreError) -> JSONResponse:
    logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    payload = ErrorResponse(detail=str(exc), store=exc.store, operation=exc.operation)
    return JSONResponse(status_code=502, content=payload.model_dump())


@app.on_event("startup")
async def startup_event() -> None:
    es = get_client()
    await ensure_index(es)
    service = await asyncio.to_thread(build_service)
    if settings.load_on_startup:
        seeded = await asyncio.to_thread(seed_if_empty, service, Path(settings.seed_path))
        if seeded:
            logger.info("Seeded %s items on startup", seeded)


@app.get("/health")
async def health() -> dict:
    es = get_client()
    status = await asyncio.to_thread(es.cluster.health)
    empty = await index_is_empty(es)
    return {
        "elasticsearch": status.get("status"),
        "index": settings.es_index,
        "empty": empty,
    }


@app.post(
    "/items",
    status_code=201,
    response_model=ItemResponse,
    responses={409: {"model": ErrorResponse}, 502: {"model": ErrorResponse}},
)
async def create_item(payload: CreateItemRequest, service: CatalogService = Depends(get_service)) -> ItemResponse:
    item = await asyncio.to_thread(service.create_item, payload.to_candidate())
    return ItemResponse.from_item(item)


@app.get("/items/search", response_model=List[ItemResponse])
async def search_items(
    q: str | None = Query(None, description="Search text in item name and description"),
    category: str | None = Query(None),
    subcategory: str | None = Query(None),
    location: str | None = Query(None),
    min_price: Decimal | None = Query(None, alias="minPrice", ge=0),
    max_price: Decimal | None = Query(None, alias="maxPrice", ge=0),
    limit: int = Query(settings.default_page_size, gt=0, description="Number of results per page"),
    offset: int = Query(0, ge=0, description="Number of results to skip"),
    sort: SortField | None = Query(None),
    order: SortOrder | None = Query(None),
    service: CatalogService = Depends(get_service),
) -> List[ItemResponse]:
    query = SearchQuery(
        q=q,
        category=category,
        subcategory=subcategory,
        location=location,
        min_price=min_price,
        max_price=max_price,
        limit=limit,
        offset=offset,
        sort=sort,
        order=order,
    )
    items = await asyncio.to_thread(service.search_items, query)
    return [ItemResponse.from_item(item) for item in items]


@app.get("/items/autocomplete", response_model=List[str])
async def autocomplete(
    text: str = Query(..., min_length=1, description="Partial item name"),
    service: CatalogService = Depends(get_service),
) -> List[str]:
    if not text.strip():
        raise HTTPException(status_code=400, detail="Text must not be empty")
    return await asyncio.to_thread(service.autocomplete, text)
