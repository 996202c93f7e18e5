from __future__ import annotations

import logging
import os
from typing import Optional

from flask import Flask, jsonify, request

from ..container import Container
from ..core.exceptions import (
    ConfigurationError,
    NotFoundError,
    RecordsError,
    TransportError,
    ValidationError,
)
from ..database.credentials import describe_credential_env

logger = logging.getLogger(__name__)

STATUS_BY_ERROR = {
    ConfigurationError: 500,
    ValidationError: 400,
    NotFoundError: 404,
    TransportError: 503,
}


def _status_for(error: RecordsError) -> int:
    for error_cls, status in STATUS_BY_ERROR.items():
        if isinstance(error, error_cls):
            return status
    return 500


def _send_error(error: RecordsError):
    status = _status_for(error)
    if status >= 500:
        logger.warning("%s %s -> %d: %s", request.method, request.path, status, error)
    return jsonify({"error": str(error), "kind": error.kind}), status


def _single_arg(name: str) -> Optional[str]:
    values = request.args.getlist(name)
    if len(values) > 1:
        raise ValidationError(f"{name} must be a string")
    return values[0] if values else None


def register(app: Flask, container: Container) -> None:
    service = container.record_service

    @app.route("/api/records", methods=["GET"], endpoint="list_records")
    def list_records():
        try:
            scope = _single_arg("scope")
            owner_id = _single_arg("ownerId")
            records = service.list_records(scope=scope, owner_id=owner_id)
        except RecordsError as e:
            return _send_error(e)
        return jsonify({"records": [r.to_payload() for r in records]}), 200

    @app.route("/api/records", methods=["POST"], endpoint="create_record")
    def create_record():
        try:
            payload = request.get_json(silent=True)
            record = service.create_record(payload if payload is not None else {})
        except RecordsError as e:
            return _send_error(e)
        return jsonify(record.to_payload()), 201

    @app.route("/api/records", methods=["DELETE"], endpoint="purge_records")
    def purge_records():
        try:
            owner_id = _single_arg("ownerId") or None
            result = service.purge_records(owner_id=owner_id)
        except RecordsError as e:
            return _send_error(e)
        return jsonify(result.to_payload()), 200

    @app.route("/api/records/<record_id>", methods=["GET"], endpoint="get_record")
    def get_record(record_id: str):
        try:
            record = service.get_record(record_id)
        except RecordsError as e:
            return _send_error(e)
        return jsonify(record.to_payload()), 200

    if bool(app.config.get("EXPOSE_DEBUG_ENV", False)):

        @app.route("/api/debug-env", methods=["GET"], endpoint="debug_env")
        def debug_env():
            report = describe_credential_env(os.environ)
            report["storeConfigured"] = service.is_configured
            return jsonify(report), 200
