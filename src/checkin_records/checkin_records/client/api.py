"""HTTP client for the records gateway.

Maps the gateway's JSON error bodies back onto the typed errors in
``core.exceptions``; anything that goes wrong on the wire becomes TransportError.
"""

from __future__ import annotations

import os
from urllib.parse import quote
from typing import Any, Optional, Sequence

import requests

from ..core.constants import HTTP_TIMEOUT_S
from ..core.enums import Ache, Change, ListScope
from ..core.exceptions import (
    ConfigurationError,
    NotFoundError,
    RecordsError,
    TransportError,
    ValidationError,
)
from ..records.model import BulkDeleteResult, Record

BASE_URL_ENV = "RECORDS_API_BASE_URL"

_ERROR_BY_KIND = {
    ConfigurationError.kind: ConfigurationError,
    ValidationError.kind: ValidationError,
    NotFoundError.kind: NotFoundError,
    TransportError.kind: TransportError,
}

_ERROR_BY_STATUS = {
    400: ValidationError,
    404: NotFoundError,
    500: ConfigurationError,
}


class RecordsApiClient:
    def __init__(self, base_url: str, *, session: Optional[Any] = None, timeout: float = HTTP_TIMEOUT_S):
        if not base_url:
            raise ValueError("base_url required")
        self._base_url = base_url.rstrip("/")
        self._session = session or requests.Session()
        self._timeout = float(timeout)

    @classmethod
    def from_env(cls, environ=None, **kwargs) -> Optional["RecordsApiClient"]:
        environ = os.environ if environ is None else environ
        base_url = (environ.get(BASE_URL_ENV) or "").strip()
        if not base_url:
            return None
        return cls(base_url, **kwargs)

    @property
    def base_url(self) -> str:
        return self._base_url

    def _request(self, method: str, path: str, *, params: Optional[dict] = None, json: Any = None) -> Any:
        url = f"{self._base_url}/api{path}"
        try:
            resp = self._session.request(method, url, params=params, json=json, timeout=self._timeout)
        except requests.RequestException as e:
            raise TransportError(f"{method} {path} failed: {e}") from e

        try:
            body = resp.json()
        except ValueError:
            body = None

        if resp.status_code >= 400:
            raise self._error_from_response(resp.status_code, body)
        if body is None:
            raise TransportError(f"{method} {path} returned a non-JSON body")
        return body

    @staticmethod
    def _error_from_response(status_code: int, body: Any) -> RecordsError:
        message = f"HTTP {status_code}"
        error_cls = None
        if isinstance(body, dict):
            message = str(body.get("error") or message)
            kind = body.get("kind")
            if kind is not None:
                error_cls = _ERROR_BY_KIND.get(kind, TransportError)
        if error_cls is None:
            error_cls = _ERROR_BY_STATUS.get(status_code, TransportError)
        return error_cls(message)

    @staticmethod
    def _records_from(body: Any) -> list[Record]:
        try:
            return [Record.from_payload(item) for item in (body.get("records") or [])]
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise TransportError("Malformed records payload") from e

    @staticmethod
    def _record_from(body: Any) -> Record:
        try:
            return Record.from_payload(body)
        except (KeyError, TypeError, ValueError) as e:
            raise TransportError("Malformed record payload") from e

    def list_records(self, *, scope: Optional[ListScope] = None, owner_id: Optional[str] = None) -> Sequence[Record]:
        params: dict = {}
        if scope == ListScope.ALL:
            params["scope"] = ListScope.ALL.value
        elif owner_id is not None:
            params["ownerId"] = owner_id
        return self._records_from(self._request("GET", "/records", params=params))

    def create_record(self, *, aches: Ache, minutes: float, change: Change, owner_id: str) -> Record:
        body = self._request(
            "POST",
            "/records",
            json={
                "aches": Ache(aches).value,
                "minutes": minutes,
                "change": Change(change).value,
                "ownerId": owner_id,
            },
        )
        return self._record_from(body)

    def get_record(self, record_id: str) -> Record:
        return self._record_from(self._request("GET", f"/records/{quote(record_id, safe='')}"))

    def purge_records(self, *, owner_id: Optional[str] = None) -> BulkDeleteResult:
        params = {"ownerId": owner_id} if owner_id else None
        body = self._request("DELETE", "/records", params=params)
        try:
            return BulkDeleteResult.from_payload(body)
        except (AttributeError, TypeError, ValueError) as e:
            raise TransportError("Malformed purge payload") from e
