# Ensure the repo root is on sys.path so tests can import `pokedex` without requiring editable install
import os
import sys

import httpx
import pytest

HERE = os.path.dirname(__file__)
ROOT = os.path.abspath(os.path.join(HERE, ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from pokedex.config import Settings  # noqa: E402

API_BASE = "https://pokeapi.test/api/v2/pokemon"

# A few real first-generation typings; every other id gets "normal".
TYPES_BY_ID = {
    1: ["grass", "poison"],
    4: ["fire"],
    6: ["fire", "flying"],
    7: ["water"],
    25: ["electric"],
}


def make_payload(record_id, name=None, types=None, thumbnail="default"):
    """Build a PokeAPI-shaped body with a bit of the noise the real API carries."""
    types = types if types is not None else TYPES_BY_ID.get(record_id, ["normal"])
    sprites = {"back_default": None, "other": {}}
    if thumbnail == "default":
        sprites["front_default"] = f"https://img.test/{record_id}.png"
    elif thumbnail is not None:
        sprites["front_default"] = thumbnail
    return {
        "id": record_id,
        "name": name or f"mon-{record_id}",
        "base_experience": 64,
        "height": 7,
        "sprites": sprites,
        "types": [
            {"slot": i + 1, "type": {"name": t, "url": f"https://pokeapi.test/api/v2/type/{t}/"}}
            for i, t in enumerate(types)
        ],
    }


def pokeapi_handler(overrides=None):
    """Return an httpx.MockTransport handler serving ``make_payload`` bodies.

    ``overrides`` maps an id to either a dict body or an ``httpx.Response``.
    """
    overrides = overrides or {}

    def handler(request):
        record_id = int(request.url.path.rstrip("/").split("/")[-1])
        override = overrides.get(record_id)
        if isinstance(override, httpx.Response):
            return override
        if override is not None:
            return httpx.Response(200, json=override)
        return httpx.Response(200, json=make_payload(record_id))

    return handler


@pytest.fixture
def settings():
    return Settings.from_overrides(api_base=API_BASE, first_id=1, last_id=151, log_level="WARNING")
