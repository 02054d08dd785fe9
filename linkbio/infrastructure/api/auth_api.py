# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from linkbio.domain.users import (
    AuthApi,
    InvalidCredentialsError,
    SignupResult,
    SignupValues,
    TokenPair,
    User,
)
from linkbio.shared.errors import ApiRequestError

from .client import ApiClient, parse_payload
from .schemas import CreateUserResponse, LoginResponse, RefreshResponse, UserPayload


class HttpAuthApi(AuthApi):

    def __init__(self, client: ApiClient) -> None:
        self._client = client

    async def login(self, email: str, password: str) -> TokenPair:
        try:
            payload = await self._client.request(
                "POST",
                "/auth/login",
                json={"email": email, "password": password},
                authenticated=False,
            )
        except ApiRequestError as exc:
            if exc.status_code in (HTTPStatus.BAD_REQUEST, HTTPStatus.UNAUTHORIZED):
                raise InvalidCredentialsError(context={"message": exc.message}) from exc
            raise
        return parse_payload(LoginResponse, payload, "/auth/login").to_entity()

    async def refresh(self, refresh_token: str) -> str:
        payload = await self._client.request(
            "POST",
            "/auth/refresh",
            json={"refreshToken": refresh_token},
            authenticated=False,
        )
        return parse_payload(RefreshResponse, payload, "/auth/refresh").access_token

    async def me(self, access_token: str) -> User | None:
        payload = await self._client.request("GET", "/me", token=access_token)
        return parse_payload(UserPayload, payload, "/me").to_entity()

    async def create_user(self, values: SignupValues) -> SignupResult:
        payload = await self._client.request(
            "POST", "/users", json=values.to_payload(), authenticated=False
        )
        data: CreateUserResponse = parse_payload(CreateUserResponse, payload, "/users")
        tokens = None
        if data.access_token:
            tokens = TokenPair(access_token=data.access_token, refresh_token=data.refresh_token)
        return SignupResult(user_id=data.id, tokens=tokens)
