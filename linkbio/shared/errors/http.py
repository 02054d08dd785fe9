# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Error responses: JSON for API-style callers, the error page for browsers."""

from __future__ import annotations

from http import HTTPStatus
from typing import Any

from flask import Flask, Response, jsonify, render_template, request
from werkzeug.exceptions import HTTPException

from linkbio.shared.config import load_config
from linkbio.shared.logging import logger

from .base import AppError


def _wants_json() -> bool:
    if request.is_json:
        return True
    best = request.accept_mimetypes.best_match(["text/html", "application/json"])
    return best == "application/json"


def _respond(
    payload: dict[str, Any], status: int, *, title: str, detail: str | None
) -> tuple[Response | str, int]:
    if _wants_json():
        return jsonify(payload), status
    return render_template("error.html", title=title, detail=detail, status=status), status


def handle_app_error(error: AppError) -> tuple[Response | str, int]:
    detail = getattr(error, "message", None) or (error.context or {}).get("message")
    return _respond(error.to_dict(), int(error.status), title=error.status.phrase, detail=detail)


def register_error_handler(
    app: Flask, *, default_status: HTTPStatus = HTTPStatus.INTERNAL_SERVER_ERROR
) -> None:
    verbose = load_config().debug_logging

    @app.errorhandler(AppError)
    def _handle_app_error(exc: AppError):
        logger.warning(f"{exc.code} ({int(exc.status)}) on {request.method} {request.path}")
        return handle_app_error(exc)

    @app.errorhandler(HTTPException)
    def _handle_http(exc: HTTPException):
        # redirects raised by werkzeug routing are not errors
        if exc.code is None or exc.code < 400:
            return exc
        return _respond(
            {"error": (exc.name or "http_error").lower().replace(" ", "_")},
            exc.code,
            title=exc.name,
            detail=exc.description,
        )

    @app.errorhandler(Exception)
    def _handle_unexpected(exc: Exception):
        if verbose:
            logger.exception(
                f"unhandled {type(exc).__name__} on {request.method} {request.path} "
                f"args={sorted(request.args)} body_size={len(request.get_data(cache=True))}"
            )
        else:
            logger.error(f"unhandled {type(exc).__name__} on {request.method} {request.path}")
        return _respond(
            {"error": "internal_error"},
            int(default_status),
            title=default_status.phrase,
            detail=None,
        )
