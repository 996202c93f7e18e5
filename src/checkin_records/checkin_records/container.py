from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from .core.constants import DELETE_PAGE_SIZE
from .database.connection import DBConfig, DatabaseConnection
from .records.memory_record_repository import InMemoryRecordStore
from .records.mysql_record_repository import MySQLRecordStore
from .records.repository import RecordStore
from .records.service import RecordService

logger = logging.getLogger(__name__)

STORE_BACKENDS = ("mysql", "memory")


@dataclass(frozen=True)
class Container:
    store: Optional[RecordStore]
    record_service: RecordService


def build_store(*, backend: str = "mysql", db_config: Optional[Mapping[str, Any]] = None) -> Optional[RecordStore]:
    """Return a ready store, or None when the mysql backend has no credentials."""

    backend = (backend or "mysql").lower()
    if backend not in STORE_BACKENDS:
        raise ValueError(f"Unknown record store backend: {backend!r}")

    if backend == "memory":
        return InMemoryRecordStore()

    if not db_config:
        logger.warning("no database credentials found; record store is unconfigured")
        return None
    return MySQLRecordStore(DatabaseConnection(DBConfig.from_mapping(db_config)))


def build_container(*, store: Optional[RecordStore], page_size: int = DELETE_PAGE_SIZE) -> Container:
    return Container(
        store=store,
        record_service=RecordService(store, page_size=page_size),
    )
