# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .entities import SignupResult, SignupValues, TokenPair, User
from .exceptions import (
    InvalidCredentialsError,
    InvalidSessionError,
    SessionExpiredError,
)
from .repositories import AuthApi, TokenStore

__all__ = [
    "AuthApi",
    "InvalidCredentialsError",
    "InvalidSessionError",
    "SessionExpiredError",
    "SignupResult",
    "SignupValues",
    "TokenPair",
    "TokenStore",
    "User",
]
