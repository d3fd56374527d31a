from __future__ import annotations

import logging

from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from ..core.exceptions import DomainError, InvalidReferenceError, ValidationError

logger = logging.getLogger(__name__)


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(exc: DomainError):
        body = {"message": exc.message}
        if isinstance(exc, ValidationError) and exc.errors:
            body["errors"] = exc.errors
        if isinstance(exc, InvalidReferenceError):
            body["errors"] = [{"field": exc.field, "message": exc.message}]
        if exc.status_code >= 500:
            logger.error("Domain error escaped as %s: %s", exc.status_code, exc.message)
        return jsonify(body), exc.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(exc: HTTPException):
        return jsonify({"message": exc.description or exc.name}), exc.code

    @app.errorhandler(Exception)
    def handle_unexpected(exc: Exception):
        logger.exception("Unhandled error")
        return jsonify({"message": "Internal server error"}), 500
