"""
Catalog package for the Pokédex API.

This package contains the schemas, the in-memory store, the PokeAPI
fetcher, the statistics helpers and the route definitions. The store
and the fetcher are created by ``pokedex.main.create_app`` and reach
the routes through ``app.state``; nothing here holds catalogue data at
module level.
"""

from .router import router as catalog_router  # noqa: F401
