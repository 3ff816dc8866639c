"""
Route definitions for the catalogue API.

Endpoints under /api/catalog:
- GET  /records                    : list records (fetches the catalogue on first call)
- GET  /records/{record_id}        : get one record
- POST /records/{record_id}/toggle : flip the "captured" flag of a record
- GET  /stats                      : per-type counts for the whole catalogue and the captured subset
- POST /load                       : run the initial fetch explicitly
"""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Request

from ..config import Settings
from .errors import RecordNotFoundError
from .pokeapi_service import RecordFetcher
from .schemas import CatalogStats, LoadResult, Record
from .stats import build_stats
from .store import CatalogStore


router = APIRouter(prefix="/api/catalog", tags=["catalog"])


def get_store(request: Request) -> CatalogStore:
    return request.app.state.store


def get_fetcher(request: Request) -> RecordFetcher:
    return request.app.state.fetcher


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


@router.get("/records", response_model=List[Record])
async def list_records(
    store: CatalogStore = Depends(get_store),
    fetcher: RecordFetcher = Depends(get_fetcher),
) -> List[Record]:
    """
    Returns every record in arrival order.

    The first call on an empty store waits for the bulk fetch; later
    calls return whatever the store holds, even if some ids failed.
    """
    await fetcher.ensure_loaded(store)
    return store.all()


@router.get("/records/{record_id}", response_model=Record)
def get_record(record_id: int, store: CatalogStore = Depends(get_store)) -> Record:
    record = store.get(record_id)
    if record is None:
        raise HTTPException(status_code=404, detail="Record not found")
    return record


@router.post("/records/{record_id}/toggle", response_model=Record)
def toggle_record(record_id: int, store: CatalogStore = Depends(get_store)) -> Record:
    try:
        return store.toggle_selected(record_id)
    except RecordNotFoundError:
        raise HTTPException(status_code=404, detail="Record not found")


@router.get("/stats", response_model=CatalogStats)
def catalog_stats(
    store: CatalogStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
) -> CatalogStats:
    # Recomputed from a fresh snapshot on every call.
    return build_stats(store.all(), total=settings.catalog_size)


@router.post("/load", response_model=LoadResult)
async def load_catalog(
    store: CatalogStore = Depends(get_store),
    fetcher: RecordFetcher = Depends(get_fetcher),
) -> LoadResult:
    report = await fetcher.ensure_loaded(store)
    if report is None:
        return LoadResult(status="already_loaded", count=len(store))
    return LoadResult(status="loaded", count=len(store), report=report)
