"""
Per-type statistics over the catalogue.

Everything here is pure: functions take a sequence of records and
return new values without touching their inputs. Callers recompute on
demand (the ``/stats`` route does so on every request) instead of
subscribing to store changes.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Sequence

from .schemas import CatalogStats, CategoryCount, Record, StatsPanel


# Display names for the eighteen PokeAPI type keys.
CATEGORY_TRANSLATIONS: Mapping[str, str] = MappingProxyType({
    "normal": "Normal", "fire": "Fogo", "water": "Água", "grass": "Planta",
    "electric": "Elétrico", "ice": "Gelo", "fighting": "Lutador", "poison": "Venenoso",
    "ground": "Terrestre", "flying": "Voador", "psychic": "Psíquico", "bug": "Inseto",
    "rock": "Pedra", "ghost": "Fantasma", "dragon": "Dragão", "dark": "Noturno",
    "steel": "Aço", "fairy": "Fada",
})

CATALOG_PANEL_TITLE = "Total na Pokédex"
SELECTED_PANEL_TITLE = "Tipos dos Selecionados"


def translate_category(key: str, translations: Mapping[str, str] = CATEGORY_TRANSLATIONS) -> str:
    """Return the display name for ``key``, or ``key`` itself if unknown."""
    return translations.get(key, key)


def aggregate(
    records: Iterable[Record],
    translations: Mapping[str, str] = CATEGORY_TRANSLATIONS,
) -> Dict[str, int]:
    """Count how many times each translated category occurs.

    A record with two categories increments two counters. Unknown
    category keys are counted under the raw key.
    """
    counts: Dict[str, int] = {}
    for record in records:
        for key in record.categories:
            name = translate_category(key, translations)
            counts[name] = counts.get(name, 0) + 1
    return counts


def selected(records: Iterable[Record]) -> List[Record]:
    return [r for r in records if r.selected]


def panel_rows(
    counts: Mapping[str, int],
    translations: Mapping[str, str] = CATEGORY_TRANSLATIONS,
) -> List[CategoryCount]:
    """Rows for a statistics panel.

    Every known display name is listed in sorted order, with 0 when
    it does not occur. Names outside the table that do occur in
    ``counts`` follow, also sorted.
    """
    known = set(translations.values())
    rows = [CategoryCount(name=name, count=counts.get(name, 0)) for name in sorted(known)]
    extra = sorted(name for name in counts if name not in known)
    rows.extend(CategoryCount(name=name, count=counts[name]) for name in extra)
    return rows


def _panel(title: str, records: Sequence[Record], translations: Mapping[str, str]) -> StatsPanel:
    counts = aggregate(records, translations)
    return StatsPanel(title=title, counts=counts, rows=panel_rows(counts, translations))


def build_stats(
    records: Sequence[Record],
    total: int,
    translations: Mapping[str, str] = CATEGORY_TRANSLATIONS,
) -> CatalogStats:
    """Assemble the statistics screen from a snapshot of the store.

    ``total`` is the size of the configured catalogue (151 by default),
    not the number of records that were actually fetched.
    """
    picked = selected(records)
    return CatalogStats(
        captured=len(picked),
        total=total,
        catalog=_panel(CATALOG_PANEL_TITLE, records, translations),
        selected=_panel(SELECTED_PANEL_TITLE, picked, translations),
    )
