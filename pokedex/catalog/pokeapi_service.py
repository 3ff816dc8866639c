"""
PokeAPI integration for the catalogue.  This module exposes the
pieces needed to turn a range of creature ids into ``Record`` objects:

* ``build_record_url()`` — format an id into the configured endpoint.

* ``decode_record()`` — validate a JSON body against ``PokemonPayload``
  and convert it into a ``Record``.

* ``RecordFetcher`` — issue one request per id concurrently over a
  shared ``httpx.AsyncClient`` and append every successful decode to
  a ``CatalogStore`` as soon as it arrives.

A failure for one id (bad URL, network error, non-2xx status or
unexpected body) is logged with the id and the reason and the batch
moves on; the entry is simply absent from the store afterwards.
There is no retry.
"""

from __future__ import annotations

import asyncio
import logging
import urllib.parse
from typing import Any, Dict, Iterable, List, Optional

import httpx
from pydantic import ValidationError

from ..config import Settings
from .errors import DecodeError, FetchError, TransportError, UrlConstructionError
from .schemas import FetchReport, PokemonPayload, Record
from .store import CatalogStore


logger = logging.getLogger(__name__)

REQUEST_HEADERS = {
    'User-Agent': 'pokedex-catalog/1.0 (+https://pokeapi.co)',
    'Accept': 'application/json',
}


def catalog_ids(first: int, last: int) -> List[int]:
    """Return the contiguous id range ``first..last`` inclusive."""
    return list(range(first, last + 1))


def build_record_url(base_url: str, record_id: int) -> str:
    """Return ``{base_url}/{record_id}``.

    Raises ``UrlConstructionError`` when the base is not an absolute
    http(s) URL or the id is not a positive integer.
    """
    if isinstance(record_id, bool) or not isinstance(record_id, int) or record_id < 1:
        raise UrlConstructionError(record_id, f"invalid record id {record_id!r}")
    try:
        parts = urllib.parse.urlsplit(base_url or "")
    except ValueError as exc:
        raise UrlConstructionError(record_id, f"malformed base URL {base_url!r}: {exc}") from exc
    if parts.scheme not in ('http', 'https') or not parts.netloc:
        raise UrlConstructionError(record_id, f"malformed base URL {base_url!r}")
    return f"{base_url.rstrip('/')}/{record_id}"


def decode_record(
    data: Any,
    record_id: Optional[int] = None,
    require_thumbnail: bool = True,
) -> Record:
    """Convert a decoded JSON body into a ``Record``.

    When ``record_id`` is given, the body must describe that id. With
    ``require_thumbnail`` set, a missing or null
    ``sprites.front_default`` is a decode failure even though the
    field is optional in the API.
    """
    try:
        payload = PokemonPayload.model_validate(data)
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()
        )
        raise DecodeError(record_id, problems) from exc
    if require_thumbnail and payload.sprites.front_default is None:
        raise DecodeError(record_id, "sprites.front_default: Field required")
    if record_id is not None and payload.id != record_id:
        raise DecodeError(record_id, f"response describes id {payload.id}")
    return Record.from_payload(payload)


class RecordFetcher:
    """Bulk loader for the catalogue.

    ``transport`` is passed straight to ``httpx.AsyncClient``; tests use
    it to plug in an ``httpx.MockTransport``.
    """

    def __init__(
        self,
        settings: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.settings = settings
        self._transport = transport
        self._load_lock = asyncio.Lock()

    def _client(self) -> httpx.AsyncClient:
        kwargs: Dict[str, Any] = {
            'headers': REQUEST_HEADERS,
            'follow_redirects': True,
            # The pool must not be the bottleneck when every id is in flight.
            'limits': httpx.Limits(max_connections=self.settings.max_concurrency or None),
        }
        if self.settings.request_timeout is not None:
            kwargs['timeout'] = self.settings.request_timeout
        if self._transport is not None:
            kwargs['transport'] = self._transport
        return httpx.AsyncClient(**kwargs)

    async def fetch_record(self, client: httpx.AsyncClient, record_id: int) -> Record:
        """Fetch and decode one record; raises a ``FetchError`` subclass."""
        url = build_record_url(self.settings.api_base, record_id)
        try:
            response = await client.get(url)
        except httpx.HTTPError as exc:
            raise TransportError(record_id, str(exc) or exc.__class__.__name__) from exc
        if not response.is_success:
            raise TransportError(record_id, f"HTTP {response.status_code} from {url}")
        try:
            data = response.json()
        except ValueError as exc:
            raise DecodeError(record_id, f"invalid JSON body: {exc}") from exc
        return decode_record(data, record_id, self.settings.require_thumbnail)

    async def fetch_all(self, ids: Iterable[int], store: CatalogStore) -> FetchReport:
        """Fetch every id concurrently and append successes to ``store``.

        One task per id. Records are appended in completion order.
        Errors stay inside this method and are reported in the
        returned ``FetchReport``.
        """
        ids = list(ids)
        report = FetchReport(requested=len(ids))
        limit = self.settings.max_concurrency
        semaphore = asyncio.Semaphore(limit) if limit > 0 else None

        async with self._client() as client:

            async def run(record_id: int) -> None:
                try:
                    if semaphore is None:
                        record = await self.fetch_record(client, record_id)
                    else:
                        async with semaphore:
                            record = await self.fetch_record(client, record_id)
                except FetchError as exc:
                    logger.warning("Error fetching record %s: %s", record_id, exc.reason)
                    report.failed[record_id] = exc.reason
                    return
                store.append(record)
                report.loaded.append(record.id)

            await asyncio.gather(*(run(record_id) for record_id in ids))

        logger.info(
            "Fetched %d/%d records (%d failed)",
            len(report.loaded), report.requested, len(report.failed),
        )
        return report

    async def ensure_loaded(self, store: CatalogStore) -> Optional[FetchReport]:
        """Run the initial bulk fetch unless ``store`` already has data.

        Returns ``None`` when nothing was fetched. Concurrent callers
        wait for the first one instead of starting a second batch.
        """
        async with self._load_lock:
            if not store.is_empty():
                return None
            ids = catalog_ids(self.settings.first_id, self.settings.last_id)
            logger.info("Catalogue empty, fetching %d records from %s", len(ids), self.settings.api_base)
            return await self.fetch_all(ids, store)
