"""
Pydantic schema definitions for the catalog module.

Two groups of models live here. The payload models (``Sprites``,
``TypeSlot`` and ``PokemonPayload``) mirror the handful of PokeAPI
fields the catalogue consumes; anything else in the response body is
ignored. The ``Record`` model is what the store keeps and what clients
receive: identity and display data from the payload plus the
user-controlled ``selected`` flag. ``CatalogStats`` bundles the two
statistics panels rendered by the front-end.
"""

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field


class NamedResource(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str


class TypeSlot(BaseModel):
    """One entry of the ``types`` array, e.g. ``{"type": {"name": "fire"}}``."""

    model_config = ConfigDict(extra="ignore")

    type: NamedResource


class Sprites(BaseModel):
    model_config = ConfigDict(extra="ignore")

    # Optional here so that the fetcher can decide whether a missing
    # thumbnail is a decode failure.
    front_default: Optional[str] = None


class PokemonPayload(BaseModel):
    """The subset of ``GET /pokemon/{id}`` that the catalogue reads."""

    model_config = ConfigDict(extra="ignore")

    id: int
    name: str
    sprites: Sprites
    types: List[TypeSlot] = Field(min_length=1)


class Record(BaseModel):
    """A single catalogue entry.

    ``categories`` holds the raw type keys in the order the API lists
    them (one or two per creature). ``thumbnail_url`` is an empty
    string when the source has no image and missing thumbnails are
    tolerated. ``selected`` is never part of the remote payload; it
    starts as ``False`` and is only flipped by the user.
    """

    id: int
    name: str
    thumbnail_url: str = ""
    categories: List[str] = Field(min_length=1)
    selected: bool = False

    @computed_field
    @property
    def display_name(self) -> str:
        return self.name.title()

    @classmethod
    def from_payload(cls, payload: PokemonPayload) -> "Record":
        return cls(
            id=payload.id,
            name=payload.name,
            thumbnail_url=payload.sprites.front_default or "",
            categories=[slot.type.name for slot in payload.types],
        )


class FetchReport(BaseModel):
    """Outcome of one bulk fetch: which ids made it into the store."""

    requested: int
    loaded: List[int] = Field(default_factory=list)
    failed: Dict[int, str] = Field(default_factory=dict)


class CategoryCount(BaseModel):
    name: str
    count: int


class StatsPanel(BaseModel):
    title: str
    counts: Dict[str, int]
    rows: List[CategoryCount]


class CatalogStats(BaseModel):
    """Payload for the statistics screen.

    ``captured`` over ``total`` is the "Pokemons Pegos" headline;
    ``catalog`` and ``selected`` are the two per-type panels.
    """

    captured: int
    total: int
    catalog: StatsPanel
    selected: StatsPanel


class LoadResult(BaseModel):
    """Answer of ``POST /load``; ``report`` is ``None`` if nothing was fetched."""

    status: str
    count: int
    report: Optional[FetchReport] = None
