"""Resolve MySQL credentials from the environment.

Precedence:
1. ``RECORDS_DB_CONFIG_BASE64``: base64-encoded JSON object
2. ``RECORDS_DB_CONFIG_JSON``: JSON object
3. the settings module's ``DB_CONFIG`` (may be None)

Malformed values are logged and resolve to None ("unconfigured"), so the gateway
keeps running and answers every request with a configuration error.
"""

from __future__ import annotations

import base64
import binascii
import json
import logging
from typing import Any, Mapping, Optional

logger = logging.getLogger(__name__)

BASE64_ENV = "RECORDS_DB_CONFIG_BASE64"
JSON_ENV = "RECORDS_DB_CONFIG_JSON"


def _parse_json_object(raw: str, source: str) -> Optional[dict]:
    try:
        value = json.loads(raw)
    except json.JSONDecodeError as e:
        logger.error("%s is not valid JSON: %s", source, e.msg)
        return None
    if not isinstance(value, dict):
        logger.error("%s must hold a JSON object", source)
        return None
    return value


def resolve_db_config(
    environ: Mapping[str, str],
    fallback: Optional[Mapping[str, Any]] = None,
) -> Optional[dict]:
    encoded = environ.get(BASE64_ENV)
    if encoded:
        try:
            decoded = base64.b64decode(encoded, validate=True).decode("utf-8")
        except (binascii.Error, UnicodeDecodeError):
            logger.error("%s is not valid base64", BASE64_ENV)
            return None
        return _parse_json_object(decoded, BASE64_ENV)

    raw = environ.get(JSON_ENV)
    if raw:
        return _parse_json_object(raw, JSON_ENV)

    return dict(fallback) if fallback else None


def describe_credential_env(environ: Mapping[str, str]) -> dict:
    """Presence report for the credential variables. Never includes the secrets themselves."""

    encoded = environ.get(BASE64_ENV)
    raw = environ.get(JSON_ENV)
    return {
        "hasBase64": bool(encoded),
        "base64Prefix": encoded[:6] if encoded else None,
        "base64Length": len(encoded) if encoded else 0,
        "hasJson": bool(raw),
        "jsonPrefix": raw[:1] if raw else None,
    }
