# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import re

from pydantic import HttpUrl, TypeAdapter
from pydantic import ValidationError as PydanticValidationError
from pydantic_core import PydanticCustomError

from linkbio.shared.errors.validation_types import ValidationErrorType

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

_http_url = TypeAdapter(HttpUrl)


def require_min_length(value: str, min_length: int, label: str) -> str:
    value = value.strip()
    if not value:
        raise PydanticCustomError(
            ValidationErrorType.MISSING,
            "{label} is required",
            {"label": label},
        )
    if len(value) < min_length:
        raise PydanticCustomError(
            ValidationErrorType.TOO_SHORT,
            "{label} must be at least {min_length} characters long",
            {"label": label, "min_length": min_length},
        )
    return value


def require_email(value: str) -> str:
    value = value.strip()
    if not EMAIL_PATTERN.match(value):
        raise PydanticCustomError(
            ValidationErrorType.EMAIL_INVALID,
            "Invalid e-mail address",
            {},
        )
    return value


def require_url(value: str) -> str:
    value = value.strip()
    try:
        _http_url.validate_python(value)
    except PydanticValidationError:
        raise PydanticCustomError(
            ValidationErrorType.URL_INVALID,
            "Invalid URL",
            {},
        ) from None
    # keep what the user typed; HttpUrl would append a trailing slash
    return value
