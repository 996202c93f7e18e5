from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from src.checkin_records.checkin_records.core.enums import Ache, Change
from src.checkin_records.checkin_records.core.exceptions import ValidationError
from src.checkin_records.checkin_records.records.memory_record_repository import InMemoryRecordStore
from src.checkin_records.checkin_records.records.model import NewRecord, Record


def fixed_clock(*moments):
    it = iter(moments)
    return lambda: next(it)


def new(owner_id="user-1", minutes=5):
    return NewRecord(aches=Ache.ARM, minutes=minutes, change=Change.WORSENED, owner_id=owner_id)


def test_create_assigns_id_and_server_timestamp():
    t0 = datetime(2026, 2, 1, 10, 0, 0, 123000, tzinfo=timezone.utc)
    store = InMemoryRecordStore(clock=fixed_clock(t0), id_factory=lambda: "rec1")

    record = store.create(new())

    assert record.record_id == "rec1"
    assert record.timestamp == "2026-02-01T10:00:00.123Z"
    assert store.get_by_id("rec1") == record


def test_create_retries_colliding_ids():
    ids = iter(["dup", "dup", "fresh"])
    store = InMemoryRecordStore(id_factory=lambda: next(ids))

    first = store.create(new())
    second = store.create(new())

    assert (first.record_id, second.record_id) == ("dup", "fresh")


def test_lists_are_newest_first():
    t0 = datetime(2026, 2, 1, tzinfo=timezone.utc)
    store = InMemoryRecordStore(clock=fixed_clock(t0, t0 + timedelta(hours=2), t0 + timedelta(hours=1)))
    a = store.create(new("a"))
    b = store.create(new("b"))
    c = store.create(new("a"))

    assert [r.record_id for r in store.list_all()] == [b.record_id, c.record_id, a.record_id]
    assert [r.record_id for r in store.list_by_owner("a")] == [c.record_id, a.record_id]


def test_delete_page_is_bounded_by_page_size():
    store = InMemoryRecordStore()
    for _ in range(4):
        store.create(new("a"))
    store.create(new("b"))

    assert store.delete_page("a", 3) == 3
    assert store.delete_page("a", 3) == 1
    assert store.delete_page("a", 3) == 0
    assert len(store) == 1
    assert store.delete_page(None, 10) == 1
    assert len(store) == 0


@pytest.mark.parametrize("minutes", [0, -3, float("nan")])
def test_new_record_rejects_invalid_minutes(minutes):
    with pytest.raises(ValidationError):
        new(minutes=minutes)


def test_new_record_rejects_blank_owner():
    with pytest.raises(ValidationError):
        new(owner_id="  ")


def test_record_summary_and_payload():
    record = Record(
        record_id="r1",
        timestamp="2026-02-01T10:00:00.000Z",
        aches=Ache.BACK,
        minutes=5.0,
        change=Change.IMPROVED,
        owner_id="user-1",
    )

    assert record.summary == "B/5/+"
    assert record.to_payload() == {
        "id": "r1",
        "timestamp": "2026-02-01T10:00:00.000Z",
        "aches": "Back",
        "minutes": 5,
        "change": "Improved!",
        "ownerId": "user-1",
    }
    assert Record.from_payload(record.to_payload()) == record
