"""Client-side cache of records kept in line with the gateway by explicit refreshes.

The cache is replaced wholesale on every list fetch, never patched. Scope changes
do not refresh on their own: ``set_role``/``set_owner_id`` return a ScopeChange the
caller acts on, and ``set_scope_and_refresh`` does both steps at once.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Callable, List, Optional, Protocol, Sequence, Tuple

from ..common.datetime_utils import parse_iso_timestamp
from ..core.constants import DEFAULT_OWNER_ID
from ..core.enums import Ache, Change, ListScope, Role
from ..core.exceptions import NotFoundError, RecordsError
from ..records.model import BulkDeleteResult, Record

logger = logging.getLogger(__name__)

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


class RecordsApi(Protocol):
    def list_records(self, *, scope: Optional[ListScope] = None, owner_id: Optional[str] = None) -> Sequence[Record]:
        raise NotImplementedError

    def create_record(self, *, aches: Ache, minutes: float, change: Change, owner_id: str) -> Record:
        raise NotImplementedError

    def get_record(self, record_id: str) -> Record:
        raise NotImplementedError

    def purge_records(self, *, owner_id: Optional[str] = None) -> BulkDeleteResult:
        raise NotImplementedError


@dataclass(frozen=True)
class ScopeSelector:
    role: Role = Role.USER
    owner_id: str = DEFAULT_OWNER_ID


@dataclass(frozen=True)
class ScopeChange:
    """Returned by scope mutations; act on ``requires_refresh``."""

    previous: ScopeSelector
    current: ScopeSelector

    @property
    def requires_refresh(self) -> bool:
        return self.previous != self.current


def sort_newest_first(records: Sequence[Record]) -> Tuple[Record, ...]:
    return tuple(
        sorted(records, key=lambda r: parse_iso_timestamp(r.timestamp) or _EPOCH, reverse=True)
    )


Listener = Callable[["RecordsReconciler"], None]


class RecordsReconciler:
    """Owns the record cache and the scope selector for one client.

    ``api=None`` means no gateway URL is configured: refresh empties the cache and
    mutations are skipped.
    """

    def __init__(self, api: Optional[RecordsApi], *, scope: Optional[ScopeSelector] = None):
        self._api = api
        self._scope = scope or ScopeSelector()
        self._records: Tuple[Record, ...] = ()
        self._is_loading = True
        self._is_purging = False
        self._closed = False
        self._listeners: List[Listener] = []

    # -------- observed state --------
    @property
    def records(self) -> Tuple[Record, ...]:
        return self._records

    @property
    def is_loading(self) -> bool:
        return self._is_loading

    @property
    def is_purging(self) -> bool:
        return self._is_purging

    @property
    def scope(self) -> ScopeSelector:
        return self._scope

    @property
    def role(self) -> Role:
        return self._scope.role

    @property
    def owner_id(self) -> str:
        return self._scope.owner_id

    @property
    def closed(self) -> bool:
        return self._closed

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def close(self) -> None:
        """Detach: results of refreshes finishing after this are dropped."""
        self._closed = True
        self._listeners.clear()

    def _notify(self) -> None:
        if self._closed:
            return
        for listener in list(self._listeners):
            listener(self)

    # -------- scope --------
    def _apply_scope(self, scope: ScopeSelector) -> ScopeChange:
        change = ScopeChange(previous=self._scope, current=scope)
        self._scope = scope
        if change.requires_refresh:
            self._notify()
        return change

    def set_role(self, role: Role) -> ScopeChange:
        return self._apply_scope(replace(self._scope, role=Role(role)))

    def set_owner_id(self, owner_id: str) -> ScopeChange:
        return self._apply_scope(replace(self._scope, owner_id=owner_id))

    def set_scope_and_refresh(self, *, role: Optional[Role] = None, owner_id: Optional[str] = None) -> ScopeChange:
        scope = self._scope
        if role is not None:
            scope = replace(scope, role=Role(role))
        if owner_id is not None:
            scope = replace(scope, owner_id=owner_id)
        change = self._apply_scope(scope)
        if change.requires_refresh:
            self.refresh()
        return change

    # -------- sync --------
    def refresh(self) -> None:
        if self._api is None:
            self._records = ()
            self._is_loading = False
            self._notify()
            return

        self._is_loading = True
        scope = self._scope
        records: Tuple[Record, ...] = ()
        try:
            self._notify()
            try:
                if scope.role == Role.ADMIN:
                    fetched = self._api.list_records(scope=ListScope.ALL)
                else:
                    fetched = self._api.list_records(owner_id=scope.owner_id)
                records = sort_newest_first(fetched)
            except RecordsError as e:
                logger.warning("refresh failed, showing no records: %s", e)
            except Exception:
                logger.exception("refresh failed unexpectedly, showing no records")
        finally:
            # Loading always ends; a failed refresh leaves an empty cache, never a stale one.
            if self._closed:
                logger.debug("reconciler closed; dropping refresh result")
            else:
                self._records = records
                self._is_loading = False

        self._notify()

    def add_record(self, *, aches: Ache, minutes: float, change: Change) -> Optional[Record]:
        if self._api is None:
            logger.warning("no records API configured; add_record skipped")
            return None
        # Always the active owner, whatever the role.
        record = self._api.create_record(
            aches=aches,
            minutes=minutes,
            change=change,
            owner_id=self._scope.owner_id,
        )
        self.refresh()
        return record

    def purge_records(self, owner_id: Optional[str] = None) -> Optional[BulkDeleteResult]:
        if self._api is None:
            logger.warning("no records API configured; purge_records skipped")
            return None
        self._is_purging = True
        self._notify()
        try:
            result = self._api.purge_records(owner_id=owner_id or None)
            self.refresh()
            return result
        finally:
            self._is_purging = False
            self._notify()

    # -------- lookup --------
    def get_record_by_id(self, record_id: str) -> Optional[Record]:
        """Cache-only lookup; never touches the network."""
        for record in self._records:
            if record.record_id == record_id:
                return record
        return None

    def resolve_record(self, record_id: str) -> Optional[Record]:
        """Cache first, then a point fetch for records outside the cached scope."""
        record = self.get_record_by_id(record_id)
        if record is not None or self._api is None:
            return record
        try:
            return self._api.get_record(record_id)
        except NotFoundError:
            return None
