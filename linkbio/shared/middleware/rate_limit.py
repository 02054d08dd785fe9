# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import threading
import time
from collections import deque
from collections.abc import Callable
from functools import wraps
from http import HTTPStatus

from flask import request

from linkbio.shared.config import load_config
from linkbio.shared.errors import AppError
from linkbio.shared.logging import logger


class RateLimitedError(AppError):
    def __init__(self, retry_after: float) -> None:
        super().__init__(
            code="rate_limited",
            status=HTTPStatus.TOO_MANY_REQUESTS,
            context={"retry_after": round(retry_after, 1)},
        )


class InMemoryRateLimiter:
    """Sliding window of request timestamps per key.

    Process-local; several workers each enforce their own window.
    """

    def __init__(self, limit: int, window_seconds: float) -> None:
        self._limit = max(1, int(limit))
        self._window = max(0.1, float(window_seconds))
        self._hits: dict[str, deque[float]] = {}
        self._lock = threading.Lock()

    def hit(self, key: str) -> float:
        """Record a request; returns 0 when allowed, else seconds until a slot frees."""
        now = time.monotonic()
        with self._lock:
            hits = self._hits.setdefault(key, deque())
            while hits and now - hits[0] > self._window:
                hits.popleft()
            if len(hits) >= self._limit:
                return self._window - (now - hits[0])
            hits.append(now)
            return 0.0

    def allow(self, key: str) -> bool:
        return self.hit(key) == 0.0


def _client_key() -> str:
    forwarded = request.headers.get("X-Forwarded-For", "").split(",")[0].strip()
    return f"{request.path}:{forwarded or request.remote_addr or 'unknown'}"


def rate_limit(limit: int | None = None, window_seconds: float | None = None):
    """Limit a view per client address; limits default to ``RL_LIMIT``/``RL_WINDOW``."""

    def decorator(view: Callable):
        limiter: InMemoryRateLimiter | None = None

        @wraps(view)
        def wrapper(*args, **kwargs):
            nonlocal limiter
            security = load_config().security
            if not security.enable_rate_limit:
                return view(*args, **kwargs)
            if limiter is None:
                limiter = InMemoryRateLimiter(
                    limit or security.rate_limit_requests,
                    window_seconds or security.rate_limit_window,
                )
            wait = limiter.hit(_client_key())
            if wait:
                logger.warning(f"rate_limit: {request.method} {request.path} retry in {wait:.1f}s")
                raise RateLimitedError(wait)
            return view(*args, **kwargs)

        return wrapper

    return decorator


__all__ = ["InMemoryRateLimiter", "RateLimitedError", "rate_limit"]
