from __future__ import annotations

import pytest

from config import get_settings_module
from src.checkin_records.checkin_records.container import build_container, build_store
from src.checkin_records.checkin_records.records.memory_record_repository import InMemoryRecordStore
from src.checkin_records.checkin_records.records.mysql_record_repository import MySQLRecordStore


@pytest.mark.parametrize(
    "env,expected",
    [
        ("production", "config.production"),
        ("prod", "config.production"),
        ("testing", "config.testing"),
        ("TEST", "config.testing"),
        ("anything", "config.development"),
    ],
)
def test_get_settings_module(monkeypatch, env, expected):
    monkeypatch.setenv("APP_ENV", env)
    assert get_settings_module() == expected


def test_default_settings_module_is_development(monkeypatch):
    monkeypatch.delenv("APP_ENV", raising=False)
    assert get_settings_module() == "config.development"


def test_build_store_backends():
    assert isinstance(build_store(backend="memory"), InMemoryRecordStore)
    assert build_store(backend="mysql", db_config=None) is None
    assert isinstance(build_store(backend="mysql", db_config={"host": "db"}), MySQLRecordStore)
    with pytest.raises(ValueError):
        build_store(backend="firestore")


def test_build_container_wires_service_to_store():
    store = InMemoryRecordStore()
    container = build_container(store=store, page_size=7)

    assert container.store is store
    assert container.record_service.is_configured
    assert container.record_service.page_size == 7
