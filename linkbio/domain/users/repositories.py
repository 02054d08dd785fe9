# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Protocol

from .entities import SignupResult, SignupValues, TokenPair, User


class AuthApi(Protocol):
    async def login(self, email: str, password: str) -> TokenPair: ...
    async def refresh(self, refresh_token: str) -> str: ...
    async def me(self, access_token: str) -> User | None: ...
    async def create_user(self, values: SignupValues) -> SignupResult: ...


class TokenStore(Protocol):
    """Persistence strategy for the access/refresh token pair."""

    def store(self, access_token: str, refresh_token: str | None = None) -> None: ...
    def retrieve(self) -> TokenPair | None: ...
    def access_token(self) -> str | None: ...
    def refresh_token(self) -> str | None: ...
    def clear_access(self) -> None: ...
    def clear(self) -> None: ...
