# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .cookie_jar import RequestCookieJar
from .strategies import (
    ACCESS_TOKEN_COOKIE,
    REFRESH_TOKEN_COOKIE,
    CookieTokenStore,
    MemoryAccessTokenStore,
)

__all__ = [
    "ACCESS_TOKEN_COOKIE",
    "REFRESH_TOKEN_COOKIE",
    "CookieTokenStore",
    "MemoryAccessTokenStore",
    "RequestCookieJar",
]
