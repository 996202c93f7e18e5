from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Mapping, Optional, Sequence

from ..common.validators import (
    is_missing,
    require_choice,
    require_non_empty,
    require_positive_minutes,
    require_record_id,
)
from ..core.constants import DELETE_PAGE_SIZE
from ..core.enums import Ache, Change, ListScope
from ..core.exceptions import (
    ConfigurationError,
    NotFoundError,
    RecordsError,
    TransportError,
    ValidationError,
)
from .model import BulkDeleteResult, NewRecord, Record
from .repository import RecordStore

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("aches", "minutes", "change", "ownerId")


class RecordService:
    """Stateless gateway over a record store: create, point-read, scoped list and bulk delete.

    ``store=None`` means the backing store is not configured; every call then raises
    ConfigurationError. Store failures that are not already a RecordsError are
    surfaced as TransportError.
    """

    def __init__(self, store: Optional[RecordStore], *, page_size: int = DELETE_PAGE_SIZE):
        if int(page_size) <= 0:
            raise ValueError("page_size must be positive")
        self._store = store
        self._page_size = int(page_size)

    @property
    def is_configured(self) -> bool:
        return self._store is not None

    @property
    def page_size(self) -> int:
        return self._page_size

    def _require_store(self) -> RecordStore:
        if self._store is None:
            raise ConfigurationError("Record store not configured")
        return self._store

    @contextmanager
    def _store_call(self, operation: str):
        try:
            yield
        except RecordsError:
            raise
        except Exception as e:
            logger.exception("record store %s failed", operation)
            raise TransportError(f"Record store {operation} failed") from e

    @staticmethod
    def parse_new_record(payload: Any) -> NewRecord:
        if not isinstance(payload, Mapping):
            raise ValidationError("Request body must be a JSON object")

        missing = [name for name in REQUIRED_FIELDS if is_missing(payload.get(name))]
        if missing:
            raise ValidationError(f"Missing fields: {', '.join(missing)}")

        return NewRecord(
            aches=require_choice(payload["aches"], Ache, "aches"),
            minutes=require_positive_minutes(payload["minutes"]),
            change=require_choice(payload["change"], Change, "change"),
            owner_id=require_non_empty(payload["ownerId"], "ownerId"),
        )

    def create_record(self, payload: Mapping[str, Any]) -> Record:
        store = self._require_store()
        fields = self.parse_new_record(payload)
        with self._store_call("create"):
            record = store.create(fields)
        logger.info("created record %s for owner %s", record.record_id, record.owner_id)
        return record

    def get_record(self, record_id: str) -> Record:
        store = self._require_store()
        record_id = require_record_id(record_id)
        with self._store_call("get"):
            record = store.get_by_id(record_id)
        if record is None:
            raise NotFoundError("Record not found")
        return record

    def list_records(self, *, scope: Optional[str] = None, owner_id: Optional[str] = None) -> Sequence[Record]:
        store = self._require_store()
        if scope == ListScope.ALL.value:
            with self._store_call("list"):
                return list(store.list_all())

        if is_missing(owner_id):
            raise ValidationError("ownerId required")
        owner_id = require_non_empty(owner_id, "ownerId")
        with self._store_call("list"):
            return list(store.list_by_owner(owner_id))

    def purge_records(self, *, owner_id: Optional[str] = None) -> BulkDeleteResult:
        """Delete every record matching the optional owner filter, one page at a time.

        Each page is an independent commit; a failing page aborts the loop and the
        error propagates. Records removed by earlier pages stay removed.
        """
        store = self._require_store()
        # The filter is matched verbatim: a blank owner matches nothing, it never widens to "all".
        if owner_id is not None and not isinstance(owner_id, str):
            raise ValidationError("ownerId must be a string")

        deleted_count = 0
        pages = 0
        while True:
            try:
                with self._store_call("delete"):
                    removed = int(store.delete_page(owner_id, self._page_size))
            except RecordsError:
                logger.warning(
                    "purge aborted after %d page(s), %d record(s) already deleted (owner=%s)",
                    pages,
                    deleted_count,
                    owner_id or "all",
                )
                raise
            if removed <= 0:
                break
            pages += 1
            deleted_count += removed
            logger.debug("purge page %d removed %d record(s)", pages, removed)

        logger.info("purged %d record(s) in %d page(s) (owner=%s)", deleted_count, pages, owner_id or "all")
        return BulkDeleteResult(deleted_count=deleted_count, owner_id=owner_id, pages=pages)
