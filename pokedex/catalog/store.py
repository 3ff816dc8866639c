"""
In-memory data store for the catalogue.

``CatalogStore`` is created once per application (see ``create_app``)
and handed to every consumer; it is never a module-level global. The
store is filled by concurrent fetch tasks and mutated by request
handlers running in FastAPI's threadpool, so every access to the
underlying list goes through a ``threading.Lock``. Readers get copies
taken under the lock, which keeps a snapshot consistent while later
toggles happen.
"""

from __future__ import annotations

import logging
import threading
from typing import List, Optional

from .errors import RecordNotFoundError
from .schemas import Record


logger = logging.getLogger(__name__)


class CatalogStore:
    """Ordered collection of fetched records.

    Order is arrival order of successful fetches, not id order. There
    is no deletion. A duplicate id is appended like any other record.
    """

    def __init__(self) -> None:
        self._records: List[Record] = []
        self._lock = threading.Lock()

    def append(self, record: Record) -> None:
        with self._lock:
            self._records.append(record)
            size = len(self._records)
        logger.debug("Appended record %s (%s), store size %d", record.id, record.name, size)

    def toggle_selected(self, record_id: int) -> Record:
        """Flip the ``selected`` flag of the record with ``record_id``.

        Returns a copy of the updated record. Raises
        ``RecordNotFoundError`` and leaves the store untouched when no
        record has that id.
        """
        with self._lock:
            record = self._find(record_id)
            if record is None:
                raise RecordNotFoundError(record_id)
            record.selected = not record.selected
            return record.model_copy(deep=True)

    def get(self, record_id: int) -> Optional[Record]:
        with self._lock:
            record = self._find(record_id)
            return record.model_copy(deep=True) if record is not None else None

    def all(self) -> List[Record]:
        with self._lock:
            return [r.model_copy(deep=True) for r in self._records]

    def selected_count(self) -> int:
        with self._lock:
            return sum(1 for r in self._records if r.selected)

    def is_empty(self) -> bool:
        return len(self) == 0

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def _find(self, record_id: int) -> Optional[Record]:
        # Caller must hold the lock.
        return next((r for r in self._records if r.id == record_id), None)
