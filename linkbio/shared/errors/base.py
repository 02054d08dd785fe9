# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from http import HTTPStatus
from typing import Any, cast


@dataclass(slots=True)
class AppError(Exception):
    code: str
    status: HTTPStatus
    context: Mapping[str, Any] | None = None

    def __post_init__(self) -> None:
        Exception.__init__(self, self.code)

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"error": self.code}
        if self.context:
            payload["context"] = dict(self.context)
        return payload


class DomainError(AppError):
    def __init__(
        self,
        *,
        code: str | None = None,
        status: HTTPStatus | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        resolved_code = code or cast(str, getattr(self, "code", "domain_error"))
        resolved_status = status or cast(
            HTTPStatus, getattr(self, "status", HTTPStatus.BAD_REQUEST)
        )
        super().__init__(code=resolved_code, status=resolved_status, context=context)


class InfrastructureError(AppError):
    def __init__(
        self,
        code: str = "infrastructure_error",
        *,
        status: HTTPStatus | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        resolved_status = status or HTTPStatus.INTERNAL_SERVER_ERROR
        super().__init__(code=code, status=resolved_status, context=context)


class ValidationError(AppError):
    def __init__(
        self,
        code: str = "validation_error",
        *,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(
            code=code,
            status=HTTPStatus.UNPROCESSABLE_ENTITY,
            context=context,
        )


class ApiRequestError(InfrastructureError):
    """Remote API answered with a non-2xx status or could not be reached."""

    def __init__(
        self,
        message: str = "Request failed",
        *,
        status_code: int | None = None,
        code: str = "api_request_failed",
    ) -> None:
        self.message = message
        self.status_code = status_code
        context: dict[str, Any] = {"message": message}
        if status_code is not None:
            context["status_code"] = status_code
        super().__init__(code, status=HTTPStatus.BAD_GATEWAY, context=context)

    def __str__(self) -> str:
        return self.message

    @property
    def is_client_error(self) -> bool:
        return self.status_code is not None and 400 <= self.status_code < 500


class MalformedResponseError(ApiRequestError):
    def __init__(self, endpoint: str, missing: str) -> None:
        super().__init__(
            f"Malformed response from {endpoint}: missing {missing}",
            code="api_malformed_response",
        )


class CircuitOpenError(ApiRequestError):
    def __init__(self) -> None:
        super().__init__("Remote API temporarily unavailable", code="api_circuit_open")
