# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import hashlib
import secrets
import time
from collections.abc import Iterable, Mapping

from flask import Flask, g, request

from linkbio.shared.config import load_config
from linkbio.shared.logging import clear_correlation_id, logger, set_correlation_id

# health checks and assets would drown the page traffic
_QUIET_PATHS = ("/static/", "/health")

_HASHED_HEADERS = frozenset({"authorization", "cookie", "set-cookie", "x-csrf-token"})
_REDACTED_FIELDS = ("password", "token", "secret", "csrf")


def _client_ip() -> str:
    forwarded = request.headers.get("X-Forwarded-For", "")
    return forwarded.split(",")[0].strip() or request.remote_addr or "unknown"


def _fingerprint(value: str) -> str:
    return f"<sha256:{hashlib.sha256(value.encode()).hexdigest()[:8]}>"


def _safe_headers(headers: Iterable[tuple[str, str]]) -> dict[str, str]:
    return {
        key: _fingerprint(value) if key.lower() in _HASHED_HEADERS else value
        for key, value in headers
    }


def _safe_fields(fields: Mapping[str, str]) -> dict[str, str]:
    return {
        key: "<redacted>" if any(part in key.lower() for part in _REDACTED_FIELDS) else value
        for key, value in fields.items()
    }


def _is_quiet() -> bool:
    return request.path.startswith(_QUIET_PATHS)


def configure_request_logging(app: Flask) -> None:
    verbose = load_config().debug_logging

    @app.before_request
    def _start() -> None:
        set_correlation_id(request.headers.get("X-Request-ID") or secrets.token_hex(6))
        g.request_started = time.perf_counter()
        if _is_quiet():
            return
        if verbose:
            logger.debug(
                f"-> {request.method} {request.path} ip={_client_ip()} "
                f"args={_safe_fields(request.args)} form={_safe_fields(request.form)} "
                f"headers={_safe_headers(request.headers.items())} "
                f"cookies={sorted(request.cookies)}"
            )
        else:
            logger.info(f"-> {request.method} {request.path} ip={_client_ip()}")

    @app.after_request
    def _finish(response):
        if not _is_quiet():
            elapsed = time.perf_counter() - g.get("request_started", time.perf_counter())
            location = response.headers.get("Location")
            logger.info(
                f"<- {request.method} {request.path} {response.status_code} "
                f"{elapsed * 1000:.1f}ms user={g.get('user_id')}"
                + (f" location={location}" if location else "")
            )
        return response

    @app.teardown_request
    def _teardown(exc: BaseException | None) -> None:
        if exc is not None:
            log = logger.exception if verbose else logger.error
            log(f"!! {request.method} {request.path} failed: {type(exc).__name__}")
        clear_correlation_id()


__all__ = ["configure_request_logging"]
