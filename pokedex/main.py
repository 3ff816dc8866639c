# pokedex/main.py
from typing import Optional

import httpx
from fastapi import FastAPI

from .catalog import catalog_router
from .catalog.pokeapi_service import RecordFetcher
from .catalog.store import CatalogStore
from .config import Settings, get_settings
from .logger import setup_logging


def create_app(
    settings: Optional[Settings] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings.log_level)

    app = FastAPI(
        title="Pokédex",
        description=(
            "Catálogo dos 151 Pokémon da primeira geração obtido da PokeAPI, "
            "com marcação de capturados e contagem por tipo."
        ),
        version="1.0.0",
    )
    # One store per application, shared by every request.
    app.state.settings = settings
    app.state.store = CatalogStore()
    app.state.fetcher = RecordFetcher(settings, transport=transport)

    @app.get("/")
    def health_check():
        store = app.state.store
        return {"status": "ok", "records": len(store), "captured": store.selected_count()}

    app.include_router(catalog_router)
    return app


app = create_app()
