from __future__ import annotations

from urllib.parse import urlsplit

import pytest
import requests

from src.checkin_records.checkin_records.client.api import RecordsApiClient
from src.checkin_records.checkin_records.client.reconciler import RecordsReconciler, ScopeSelector
from src.checkin_records.checkin_records.core.enums import Ache, Change, ListScope, Role
from src.checkin_records.checkin_records.core.exceptions import (
    ConfigurationError,
    NotFoundError,
    TransportError,
    ValidationError,
)
from src.checkin_records.checkin_records.main import create_app
from src.checkin_records.checkin_records.records.memory_record_repository import InMemoryRecordStore

BASE_URL = "http://records.test"


class FlaskResponse:
    def __init__(self, resp):
        self.status_code = resp.status_code
        self._resp = resp

    def json(self):
        data = self._resp.get_json(silent=True)
        if data is None:
            raise ValueError("no JSON body")
        return data


class FlaskSession:
    """Routes requests-style calls into a Flask test client."""

    def __init__(self, app):
        self._client = app.test_client()
        self.requests = []

    def request(self, method, url, params=None, json=None, timeout=None):
        self.requests.append((method, url, params, json, timeout))
        path = urlsplit(url).path
        return FlaskResponse(self._client.open(path, method=method, query_string=params, json=json))


class RaisingSession:
    def request(self, method, url, **kwargs):
        raise requests.ConnectionError("connection refused")


class StaticSession:
    def __init__(self, status_code, body):
        self.status_code = status_code
        self._body = body

    def request(self, method, url, **kwargs):
        return self

    def json(self):
        if self._body is None:
            raise ValueError("no JSON body")
        return self._body


@pytest.fixture
def session():
    return FlaskSession(create_app(settings_module="config.testing", store=InMemoryRecordStore()))


@pytest.fixture
def api(session):
    return RecordsApiClient(BASE_URL, session=session, timeout=2.0)


def test_create_get_list_purge_against_gateway(api, session):
    created = api.create_record(aches=Ache.BACK, minutes=5, change=Change.IMPROVED, owner_id="user-1")
    api.create_record(aches=Ache.ARM, minutes=1, change=Change.WORSENED, owner_id="user-2")

    assert api.get_record(created.record_id) == created
    assert [r.record_id for r in api.list_records(owner_id="user-1")] == [created.record_id]
    assert len(api.list_records(scope=ListScope.ALL)) == 2

    result = api.purge_records(owner_id="user-2")
    assert result.deleted_count == 1
    assert result.owner_id == "user-2"
    assert len(api.list_records(scope=ListScope.ALL)) == 1

    method, url, _, body, timeout = session.requests[0]
    assert (method, url, timeout) == ("POST", f"{BASE_URL}/api/records", 2.0)
    assert body == {"aches": "Back", "minutes": 5, "change": "Improved!", "ownerId": "user-1"}


def test_typed_errors_round_trip(api):
    with pytest.raises(NotFoundError):
        api.get_record("missing")
    with pytest.raises(ValidationError):
        api.list_records()
    with pytest.raises(ValidationError):
        api.create_record(aches=Ache.BACK, minutes=0, change=Change.IMPROVED, owner_id="u")


def test_unconfigured_gateway_maps_to_configuration_error():
    session = FlaskSession(create_app(settings_module="config.testing", store=None))
    api = RecordsApiClient(BASE_URL, session=session)

    with pytest.raises(ConfigurationError):
        api.list_records(scope=ListScope.ALL)


def test_network_failure_is_transport_error():
    api = RecordsApiClient(BASE_URL, session=RaisingSession())

    with pytest.raises(TransportError) as exc:
        api.list_records(scope=ListScope.ALL)

    assert exc.value.retryable


def test_error_without_kind_falls_back_to_status_code():
    assert isinstance(RecordsApiClient._error_from_response(404, None), NotFoundError)
    assert isinstance(RecordsApiClient._error_from_response(502, {"error": "bad gateway"}), TransportError)


def test_non_json_success_body_is_transport_error():
    api = RecordsApiClient(BASE_URL, session=StaticSession(200, None))

    with pytest.raises(TransportError):
        api.list_records(scope=ListScope.ALL)


def test_malformed_records_payload_is_transport_error():
    api = RecordsApiClient(BASE_URL, session=StaticSession(200, {"records": [{"id": "x"}]}))

    with pytest.raises(TransportError):
        api.list_records(scope=ListScope.ALL)


def test_from_env():
    assert RecordsApiClient.from_env({}) is None
    client = RecordsApiClient.from_env({"RECORDS_API_BASE_URL": "http://host:5000/"})
    assert client.base_url == "http://host:5000"


def test_reconciler_end_to_end_through_http(api):
    user = RecordsReconciler(api)
    user.refresh()
    user.add_record(aches=Ache.LEG, minutes=2, change=Change.NO_CHANGE)

    other = RecordsReconciler(api, scope=ScopeSelector(owner_id="user-2"))
    other.add_record(aches=Ache.ARM, minutes=4, change=Change.IMPROVED)

    assert [r.owner_id for r in user.records] == ["user-1"]

    # A record outside the cached scope is still reachable by id.
    foreign_id = other.records[0].record_id
    assert user.get_record_by_id(foreign_id) is None
    assert user.resolve_record(foreign_id).owner_id == "user-2"

    admin = RecordsReconciler(api)
    admin.set_scope_and_refresh(role=Role.ADMIN)
    assert len(admin.records) == 2

    admin.purge_records()
    assert admin.records == ()


def test_unknown_error_kind_is_transport_error():
    error = RecordsApiClient._error_from_response(500, {"error": "unexpected", "kind": "error"})

    assert isinstance(error, TransportError)
    assert not isinstance(error, ConfigurationError)
    assert str(error) == "unexpected"
