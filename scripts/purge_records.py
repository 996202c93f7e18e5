"""Purge records through a running gateway.

Usage:
    python scripts/purge_records.py --base-url http://127.0.0.1:5000 [--owner user-1]
"""

from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from src.checkin_records.checkin_records.client.api import BASE_URL_ENV, RecordsApiClient
from src.checkin_records.checkin_records.core.exceptions import RecordsError


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Delete records in pages of the gateway's page size.")
    parser.add_argument("--base-url", default=os.getenv(BASE_URL_ENV, ""), help=f"Gateway URL (default: ${BASE_URL_ENV})")
    parser.add_argument("--owner", default=None, help="Only delete this owner's records (default: all owners)")
    args = parser.parse_args(argv)

    if not args.base_url:
        parser.error(f"--base-url or {BASE_URL_ENV} is required")

    client = RecordsApiClient(args.base_url)
    try:
        result = client.purge_records(owner_id=args.owner)
    except RecordsError as e:
        print(f"FAILED ({e.kind}): {e}", file=sys.stderr)
        return 2 if e.retryable else 1

    print(f"OK: deleted {result.deleted_count} record(s) in {result.pages} page(s) (owner={result.owner_id or 'all'})")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
