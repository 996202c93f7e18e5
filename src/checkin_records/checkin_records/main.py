from __future__ import annotations

import importlib
import logging
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .container import build_container, build_store
from .core.constants import DELETE_PAGE_SIZE
from .database.bootstrap import apply_schema, list_tables, seed_demo_records
from .database.credentials import resolve_db_config
from .records.controller import register as register_records
from .records.repository import RecordStore

logger = logging.getLogger(__name__)

_UNSET = object()


def create_app(*, settings_module: Optional[str] = None, store=_UNSET) -> Flask:
    """Application factory.

    ``store`` overrides the store built from settings; pass ``None`` explicitly to get
    an unconfigured gateway.
    """
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["EXPOSE_DEBUG_ENV"] = bool(getattr(settings, "EXPOSE_DEBUG_ENV", False))

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    backend = str(getattr(settings, "RECORD_STORE", "mysql"))
    db_config = resolve_db_config(os.environ, getattr(settings, "DB_CONFIG", None))

    if store is _UNSET:
        if backend == "mysql" and db_config and bool(getattr(settings, "AUTO_INIT_DB", False)):
            schema_path = Path(__file__).resolve().parents[3] / "database" / "schema.sql"
            apply_schema(db_config, schema_path=schema_path)
            logger.info("schema ready (tables=%d)", len(list_tables(db_config)))
        store = build_store(backend=backend, db_config=db_config)

    record_store: Optional[RecordStore] = store
    if record_store is not None and bool(getattr(settings, "AUTO_SEED_DB", False)):
        created = seed_demo_records(record_store)
        logger.info("demo seed ready (created=%d)", created)

    logger.info(
        "settings=%s store=%s",
        settings_module,
        type(record_store).__name__ if record_store is not None else "unconfigured",
    )

    container = build_container(
        store=record_store,
        page_size=int(getattr(settings, "DELETE_PAGE_SIZE", DELETE_PAGE_SIZE)),
    )
    app.extensions["checkin_records"] = container

    register_records(app, container)

    return app
