# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Loguru setup with per-request context.

Every record carries the request's correlation id and, once the session is
known, the user id. Both live in context variables so log calls deep inside
the session controller or the API client need no extra arguments.
"""

from __future__ import annotations

import logging
import os
import sys
from contextvars import ContextVar

from loguru import logger as _logger

from .sensitive_filter import sanitize_record

_FMT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<lvl>{level:<8}</lvl> | "
    "<magenta>{extra[correlation_id]}</magenta> "
    "<blue>user={extra[user_id]}</blue> | "
    "<cyan>{name}</cyan>:<cyan>{line}</cyan> | "
    "<lvl>{message}</lvl>"
)

_CORRELATION_ID: ContextVar[str] = ContextVar("correlation_id", default="-")
_USER_ID: ContextVar[str] = ContextVar("user_id", default="-")

# third-party loggers that are too chatty at INFO
_QUIET_LOGGERS = ("httpx", "httpcore", "werkzeug")


def _request_context() -> dict[str, str]:
    return {"correlation_id": _CORRELATION_ID.get(), "user_id": _USER_ID.get()}


def _log_file_path() -> str:
    configured = os.getenv("LOG_FILE")
    if configured:
        return configured
    root = os.path.abspath(os.path.join(os.path.dirname(__file__), "../../instance"))
    return os.path.join(root, "linkbio.log")


class _InterceptHandler(logging.Handler):
    """Routes stdlib ``logging`` records (Flask, werkzeug, httpx) into loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = _logger.level(record.levelname).name
        except ValueError:
            level = record.levelno
        _logger.bind(**_request_context()).opt(
            depth=6, exception=record.exc_info
        ).log(level, record.getMessage())


class ContextualLogger:
    """Loguru proxy binding the current request context on every call."""

    def __getattr__(self, name):  # pragma: no cover
        return getattr(_logger.bind(**_request_context()), name)


def set_correlation_id(value: str | None) -> None:
    _CORRELATION_ID.set(value or "-")


def get_correlation_id() -> str:
    return _CORRELATION_ID.get()


def set_user_id(value: str | None) -> None:
    _USER_ID.set(value or "-")


def clear_correlation_id() -> None:
    _CORRELATION_ID.set("-")
    _USER_ID.set("-")


def setup_logging(level: str | None = None, *, debug_mode: bool = False) -> None:
    level = (level or os.getenv("LOG_LEVEL") or ("DEBUG" if debug_mode else "INFO")).upper()

    _logger.remove()
    _logger.configure(extra={"correlation_id": "-", "user_id": "-"}, patcher=sanitize_record)
    _logger.add(sys.stderr, level=level, format=_FMT, colorize=True, diagnose=False)

    log_file = _log_file_path()
    os.makedirs(os.path.dirname(log_file), exist_ok=True)
    _logger.add(
        log_file,
        level=level,
        format=_FMT,
        colorize=False,
        diagnose=False,
        enqueue=True,
        rotation="10 MB",
        retention=5,
        encoding="utf-8",
    )

    logging.basicConfig(handlers=[_InterceptHandler()], level=0, force=True)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.INFO if debug_mode else logging.WARNING)


logger = ContextualLogger()

__all__ = [
    "clear_correlation_id",
    "get_correlation_id",
    "logger",
    "set_correlation_id",
    "set_user_id",
    "setup_logging",
]
