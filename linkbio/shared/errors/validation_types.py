# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations


class ValidationErrorType:
    MISSING = "missing"
    TOO_SHORT = "too_short"
    EMAIL_INVALID = "email_invalid"
    URL_INVALID = "url_invalid"
