# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Masks credentials before a record reaches any sink.

Tokens show up in three shapes: ``key=value`` pairs in our own log lines and
cookie headers, ``"accessToken": "..."`` in echoed API bodies, and bearer
headers. E-mails are reduced to their domain.
"""

from __future__ import annotations

import re
from typing import Any

_MASK = "***REDACTED***"

_SECRET_KEYS = r"access[_-]?token|refresh[_-]?token|csrf[_-]?token|password|secret[_-]?key"

SENSITIVE_PATTERNS: list[tuple[re.Pattern[str], str]] = [
    (re.compile(r"(bearer\s+)[A-Za-z0-9_\-.=]+", re.IGNORECASE), rf"\1{_MASK}"),
    (re.compile(rf"(\"(?:{_SECRET_KEYS})\"\s*:\s*\")[^\"]*(\")", re.IGNORECASE), rf"\1{_MASK}\2"),
    (re.compile(rf"((?:{_SECRET_KEYS})\s*[:=]\s*['\"]?)[^'\"\s,;}}&]+", re.IGNORECASE), rf"\1{_MASK}"),
    (re.compile(r"(authorization\s*:\s*['\"]?)[^'\"\n]{8,}", re.IGNORECASE), rf"\1{_MASK}"),
    (re.compile(r"[A-Za-z0-9._%+-]+@([A-Za-z0-9.-]+\.[A-Za-z]{2,})"), r"***@\1"),
]


def sanitize_message(message: str) -> str:
    for pattern, replacement in SENSITIVE_PATTERNS:
        message = pattern.sub(replacement, message)
    return message


def sanitize_record(record: dict[str, Any]) -> None:
    record["message"] = sanitize_message(record["message"])


__all__ = ["SENSITIVE_PATTERNS", "sanitize_message", "sanitize_record"]
