from __future__ import annotations

import importlib
import os
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.checkin_records.checkin_records.database.bootstrap import apply_schema, list_tables
from src.checkin_records.checkin_records.database.credentials import resolve_db_config


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    db_config = resolve_db_config(os.environ, getattr(settings, "DB_CONFIG", None))
    if not db_config:
        raise SystemExit("No database credentials: set DB_HOST or RECORDS_DB_CONFIG_JSON / RECORDS_DB_CONFIG_BASE64.")

    schema_path = REPO_ROOT / "database" / "schema.sql"
    apply_schema(db_config, schema_path=schema_path)
    tables = list_tables(db_config)
    print(
        "OK: Applied schema.sql -> "
        f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')} "
        f"(tables={len(tables)})"
    )


if __name__ == "__main__":
    main()
