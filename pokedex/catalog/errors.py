"""
Exception types raised by the catalogue package.

Fetch errors never escape ``RecordFetcher.fetch_all``: they are logged
and recorded in the batch report. ``RecordNotFoundError`` does reach
the caller so that the router can answer with a 404.
"""

from __future__ import annotations

from typing import Optional


class CatalogError(Exception):
    """Base class for every catalogue error."""


class FetchError(CatalogError):
    """A single record could not be fetched; the batch continues."""

    def __init__(self, record_id: Optional[int], reason: str) -> None:
        super().__init__(f"record {record_id}: {reason}")
        self.record_id = record_id
        self.reason = reason


class UrlConstructionError(FetchError):
    """The endpoint URL for a record id could not be built."""


class TransportError(FetchError):
    """Network failure, timeout or non-2xx response."""


class DecodeError(FetchError):
    """The response body does not have the expected shape."""


class RecordNotFoundError(CatalogError):
    def __init__(self, record_id: int) -> None:
        super().__init__(f"record {record_id} not found")
        self.record_id = record_id
