# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Timeouts, retries and a circuit breaker around remote API calls."""

from __future__ import annotations

import asyncio
import threading
import time
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

import httpx
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from linkbio.shared.config import load_config
from linkbio.shared.errors import ApiRequestError, CircuitOpenError
from linkbio.shared.logging import logger

T = TypeVar("T")


class CircuitBreaker:
    """Opens after ``failure_threshold`` consecutive failures.

    Once ``reset_timeout`` has passed a single trial call is let through; its
    outcome closes the circuit again or restarts the timeout. Shared by all
    request threads, hence the lock.
    """

    def __init__(self, failure_threshold: int, reset_timeout: float) -> None:
        self.failure_threshold = failure_threshold
        self.reset_timeout = reset_timeout
        self._failures = 0
        self._opened_at: float | None = None
        self._lock = threading.Lock()

    @property
    def is_open(self) -> bool:
        return self._opened_at is not None

    def allow(self) -> bool:
        with self._lock:
            if self._opened_at is None:
                return True
            if time.monotonic() - self._opened_at < self.reset_timeout:
                return False
            # half-open: the trial call gets a fresh timeout window
            self._opened_at = time.monotonic()
            logger.info("breaker: half-open, letting a trial call through")
            return True

    def on_success(self) -> None:
        with self._lock:
            if self._opened_at is not None:
                logger.info("breaker: closed")
            self._failures = 0
            self._opened_at = None

    def on_failure(self) -> None:
        with self._lock:
            self._failures += 1
            if self._failures >= self.failure_threshold:
                if self._opened_at is None:
                    logger.error(f"breaker: open after {self._failures} consecutive failures")
                self._opened_at = time.monotonic()


def is_retryable(exc: BaseException) -> bool:
    """Transport failures, timeouts and 5xx answers; a 4xx is the caller's fault."""
    if isinstance(exc, (httpx.TransportError, TimeoutError)):
        return True
    if isinstance(exc, ApiRequestError):
        return exc.status_code is not None and exc.status_code >= 500
    return False


def _log_retry(state: RetryCallState) -> None:
    exc = state.outcome.exception() if state.outcome else None
    logger.warning(
        f"resilience: attempt {state.attempt_number} failed "
        f"({type(exc).__name__}), retrying in {state.upcoming_sleep:.2f}s"
    )


async def resilient_call(  # noqa: UP047
    func: Callable[..., Awaitable[T]],
    *args: Any,
    breaker: CircuitBreaker | None = None,
    timeout: float | None = None,
    **kwargs: Any,
) -> T:
    """Run ``func`` with a per-attempt timeout, retries and an optional breaker.

    Only retryable errors count against the breaker; a 4xx means the remote
    side is healthy.
    """
    config = load_config()
    if breaker is not None and not breaker.allow():
        raise CircuitOpenError()

    retrying = AsyncRetrying(
        stop=stop_after_attempt(config.resilience.max_retries + 1),
        wait=wait_exponential(
            multiplier=config.resilience.backoff_base,
            max=config.resilience.backoff_cap,
        ),
        retry=retry_if_exception(is_retryable),
        before_sleep=_log_retry,
        reraise=True,
    )
    per_attempt = timeout or config.api.timeout

    try:
        result = await retrying(
            lambda: asyncio.wait_for(func(*args, **kwargs), timeout=per_attempt)
        )
    except Exception as exc:
        if breaker is not None:
            if is_retryable(exc):
                breaker.on_failure()
            else:
                breaker.on_success()
        raise

    if breaker is not None:
        breaker.on_success()
    return result


__all__ = ["CircuitBreaker", "is_retryable", "resilient_call"]
