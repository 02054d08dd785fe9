from .base import (
    ApiRequestError,
    AppError,
    CircuitOpenError,
    DomainError,
    InfrastructureError,
    MalformedResponseError,
    ValidationError,
)
from .http import handle_app_error, register_error_handler

__all__ = [
    "ApiRequestError",
    "AppError",
    "CircuitOpenError",
    "DomainError",
    "InfrastructureError",
    "MalformedResponseError",
    "ValidationError",
    "handle_app_error",
    "register_error_handler",
]
