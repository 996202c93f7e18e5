from __future__ import annotations

import logging
import uuid
from contextlib import contextmanager
from datetime import datetime
from typing import Any, Callable, Dict, Optional, Sequence

import mysql.connector

from ..common.datetime_utils import now_utc, to_iso_timestamp
from ..core.enums import Ache, Change
from ..core.exceptions import TransportError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import NewRecord, Record
from .repository import RecordStore

logger = logging.getLogger(__name__)

_COLUMNS = "record_id, owner_id, aches, minutes, change_answer, created_at"


def _row_to_record(r: Dict[str, Any]) -> Record:
    return Record(
        record_id=str(r["record_id"]),
        timestamp=str(r["created_at"]),
        aches=Ache(r["aches"]),
        minutes=float(r["minutes"]),
        change=Change(r["change_answer"]),
        owner_id=str(r["owner_id"]),
    )


class MySQLRecordStore(RecordStore):
    def __init__(
        self,
        conn_factory: DatabaseConnection,
        *,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self._conn_factory = conn_factory
        self._clock = clock or now_utc

    @contextmanager
    def _cursor(self, operation: str):
        try:
            with db_cursor(self._conn_factory) as (conn, cur):
                yield conn, cur
        except mysql.connector.Error as e:
            logger.error("record store %s failed: %s", operation, e)
            raise TransportError(f"Record store {operation} failed") from e

    def create(self, fields: NewRecord) -> Record:
        record = Record(
            record_id=uuid.uuid4().hex,
            timestamp=to_iso_timestamp(self._clock()),
            aches=fields.aches,
            minutes=fields.minutes,
            change=fields.change,
            owner_id=fields.owner_id,
        )
        with self._cursor("create") as (_, cur):
            cur.execute(
                f"""
                INSERT INTO records({_COLUMNS})
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (
                    record.record_id,
                    record.owner_id,
                    record.aches.value,
                    record.minutes,
                    record.change.value,
                    record.timestamp,
                ),
            )
        return record

    def get_by_id(self, record_id: str) -> Optional[Record]:
        with self._cursor("get") as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM records WHERE record_id=%s",
                (record_id,),
            )
            r = fetchone(cur)
            return _row_to_record(r) if r else None

    def list_by_owner(self, owner_id: str) -> Sequence[Record]:
        with self._cursor("list") as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM records
                WHERE owner_id=%s
                ORDER BY created_at DESC
                """,
                (owner_id,),
            )
            return [_row_to_record(r) for r in fetchall(cur)]

    def list_all(self) -> Sequence[Record]:
        with self._cursor("list") as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM records
                ORDER BY created_at DESC
                """
            )
            return [_row_to_record(r) for r in fetchall(cur)]

    def delete_page(self, owner_id: Optional[str], page_size: int) -> int:
        clauses = ["1=1"]
        params: list[object] = []
        if owner_id is not None:
            clauses.append("owner_id=%s")
            params.append(owner_id)

        where = " AND ".join(clauses)

        # One statement per page, committed by db_cursor on exit.
        with self._cursor("delete") as (_, cur):
            cur.execute(
                f"""
                DELETE FROM records
                WHERE {where}
                ORDER BY created_at ASC
                LIMIT %s
                """,
                tuple(params + [int(page_size)]),
            )
            return int(cur.rowcount or 0)
