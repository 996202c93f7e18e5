from __future__ import annotations

import threading
import uuid
from datetime import datetime
from typing import Callable, Dict, Iterable, Optional, Sequence

from ..common.datetime_utils import now_utc, to_iso_timestamp
from .model import NewRecord, Record
from .repository import RecordStore


def _newest_first(records: Iterable[Record]) -> list[Record]:
    # Timestamps share one fixed-width UTC format, so string order is time order.
    return sorted(records, key=lambda r: r.timestamp, reverse=True)


class InMemoryRecordStore(RecordStore):
    """Dict-backed store for tests and the ``memory`` backend.

    A single lock makes every mutation, including each ``delete_page``, atomic.
    """

    def __init__(
        self,
        *,
        clock: Optional[Callable[[], datetime]] = None,
        id_factory: Optional[Callable[[], str]] = None,
    ):
        self._clock = clock or now_utc
        self._id_factory = id_factory or (lambda: uuid.uuid4().hex)
        self._records: Dict[str, Record] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def create(self, fields: NewRecord) -> Record:
        with self._lock:
            record_id = self._id_factory()
            while record_id in self._records:
                record_id = self._id_factory()
            record = Record(
                record_id=record_id,
                timestamp=to_iso_timestamp(self._clock()),
                aches=fields.aches,
                minutes=fields.minutes,
                change=fields.change,
                owner_id=fields.owner_id,
            )
            self._records[record_id] = record
            return record

    def get_by_id(self, record_id: str) -> Optional[Record]:
        with self._lock:
            return self._records.get(record_id)

    def list_by_owner(self, owner_id: str) -> Sequence[Record]:
        with self._lock:
            return _newest_first(r for r in self._records.values() if r.owner_id == owner_id)

    def list_all(self) -> Sequence[Record]:
        with self._lock:
            return _newest_first(self._records.values())

    def delete_page(self, owner_id: Optional[str], page_size: int) -> int:
        with self._lock:
            page = [
                record_id
                for record_id, r in self._records.items()
                if owner_id is None or r.owner_id == owner_id
            ][: int(page_size)]
            for record_id in page:
                del self._records[record_id]
            return len(page)
