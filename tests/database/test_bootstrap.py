from __future__ import annotations

from src.checkin_records.checkin_records.database.bootstrap import (
    _iter_sql_statements,
    _strip_create_db_and_use,
    _strip_line_comments,
    seed_demo_records,
)
from src.checkin_records.checkin_records.records.memory_record_repository import InMemoryRecordStore


def test_sql_splitter_respects_quotes():
    sql = "INSERT INTO t VALUES ('a;b'); SELECT \"x;y\";\nSELECT 1"

    assert list(_iter_sql_statements(sql)) == [
        "INSERT INTO t VALUES ('a;b')",
        'SELECT "x;y"',
        "SELECT 1",
    ]


def test_schema_is_db_name_agnostic():
    sql = "-- header\nCREATE DATABASE IF NOT EXISTS foo;\nUSE foo;\nCREATE TABLE t (id INT);\n"

    cleaned = _strip_create_db_and_use(_strip_line_comments(sql))

    assert list(_iter_sql_statements(cleaned)) == ["CREATE TABLE t (id INT)"]


def test_seed_demo_records_is_idempotent_per_owner():
    store = InMemoryRecordStore()

    assert seed_demo_records(store, owners=("user-1", "user-2"), per_owner=3) == 6
    assert seed_demo_records(store, owners=("user-1", "user-2"), per_owner=3) == 0
    assert seed_demo_records(store, owners=("user-3",), per_owner=2) == 2
    assert len(store) == 8
