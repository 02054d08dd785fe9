# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Any

import httpx
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from linkbio.infrastructure.resilience import CircuitBreaker, resilient_call
from linkbio.shared.errors import ApiRequestError, MalformedResponseError
from linkbio.shared.logging import logger


def _error_message(response: httpx.Response) -> str:
    try:
        payload = response.json()
    except ValueError:
        return "Request failed"
    if isinstance(payload, dict) and payload.get("message"):
        message = payload["message"]
        if isinstance(message, list):
            return "; ".join(str(part) for part in message)
        return str(message)
    return "Request failed"


class ApiClient:
    """JSON client for the remote API; one ``httpx.AsyncClient`` per call."""

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 15.0,
        breaker: CircuitBreaker | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._breaker = breaker
        self._transport = transport

    @property
    def base_url(self) -> str:
        return self._base_url

    async def request(
        self,
        method: str,
        endpoint: str,
        *,
        token: str | None = None,
        json: Any = None,
        authenticated: bool = True,
    ) -> Any:
        headers = {"Accept": "application/json", "Cache-Control": "no-store"}
        if json is not None:
            headers["Content-Type"] = "application/json"
        if authenticated:
            headers["Authorization"] = f"Bearer {token}"

        url = f"{self._base_url}{endpoint}"
        try:
            return await resilient_call(
                self._send,
                method,
                url,
                headers=headers,
                json=json,
                breaker=self._breaker,
                timeout=self._timeout,
            )
        except httpx.HTTPError as exc:
            logger.warning(f"api: {method} {endpoint} transport error {type(exc).__name__}")
            raise ApiRequestError("Could not reach the server") from exc
        except TimeoutError as exc:
            logger.warning(f"api: {method} {endpoint} timed out after {self._timeout}s")
            raise ApiRequestError("The server took too long to respond") from exc

    async def _send(
        self,
        method: str,
        url: str,
        *,
        headers: dict[str, str],
        json: Any = None,
    ) -> Any:
        async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as http:
            response = await http.request(method, url, headers=headers, json=json)

        if not response.is_success:
            message = _error_message(response)
            logger.info(
                f"api: {method} {response.request.url.path} -> {response.status_code} {message}"
            )
            raise ApiRequestError(message, status_code=response.status_code)

        if response.status_code == 204 or not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise MalformedResponseError(response.request.url.path, "JSON body") from exc


def parse_payload(model: type[BaseModel], payload: Any, endpoint: str) -> Any:
    """Validate a response body, mapping schema mismatches to ``MalformedResponseError``."""
    if payload is None:
        raise MalformedResponseError(endpoint, "body")
    try:
        return model.model_validate(payload)
    except PydanticValidationError as exc:
        missing = ",".join(
            ".".join(str(part) for part in error.get("loc", ())) for error in exc.errors()
        )
        raise MalformedResponseError(endpoint, missing or "fields") from exc
