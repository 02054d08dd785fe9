# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping
from functools import cached_property

import httpx

from linkbio.application.interfaces import Navigator, Notifier
from linkbio.application.links import LinkManager
from linkbio.application.session import SessionController, SessionStore
from linkbio.domain.links import LinkApi
from linkbio.domain.users import AuthApi, TokenStore
from linkbio.infrastructure.api import ApiClient, HttpAuthApi, HttpLinkApi
from linkbio.infrastructure.resilience import CircuitBreaker
from linkbio.infrastructure.tokens import (
    CookieTokenStore,
    MemoryAccessTokenStore,
    RequestCookieJar,
)
from linkbio.shared.config import AppConfig, load_config


class Container:
    """Process-wide collaborators plus factories for the per-request ones."""

    def __init__(
        self,
        config: AppConfig | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        auth_api: AuthApi | None = None,
        link_api: LinkApi | None = None,
    ) -> None:
        self._config = config or load_config()
        self._transport = transport
        if auth_api is not None:
            self.__dict__["auth_api"] = auth_api
        if link_api is not None:
            self.__dict__["link_api"] = link_api

    @property
    def config(self) -> AppConfig:
        return self._config

    @cached_property
    def breaker(self) -> CircuitBreaker:
        return CircuitBreaker(
            failure_threshold=self._config.resilience.circuit_fail_threshold,
            reset_timeout=self._config.resilience.circuit_reset_timeout,
        )

    @cached_property
    def api_client(self) -> ApiClient:
        return ApiClient(
            self._config.api.base_url,
            timeout=self._config.api.timeout,
            breaker=self.breaker,
            transport=self._transport,
        )

    @cached_property
    def auth_api(self) -> AuthApi:
        return HttpAuthApi(self.api_client)

    @cached_property
    def link_api(self) -> LinkApi:
        return HttpLinkApi(self.api_client)

    # Per-request factories

    def cookie_jar(self, cookies: Mapping[str, str]) -> RequestCookieJar:
        security = self._config.security
        return RequestCookieJar(
            cookies,
            secure=security.cookie_secure,
            samesite=security.cookie_samesite,
        )

    def token_store(self, jar: RequestCookieJar) -> TokenStore:
        tokens = self._config.tokens
        if tokens.strategy == "memory":
            return MemoryAccessTokenStore(
                jar, refresh_ttl=tokens.refresh_ttl, path=tokens.cookie_path
            )
        return CookieTokenStore(
            jar,
            access_ttl=tokens.access_ttl,
            refresh_ttl=tokens.refresh_ttl,
            path=tokens.cookie_path,
        )

    def session_controller(
        self,
        *,
        tokens: TokenStore,
        store: SessionStore,
        navigator: Navigator,
        notifier: Notifier,
    ) -> SessionController:
        routes = self._config.routes
        return SessionController(
            auth_api=self.auth_api,
            tokens=tokens,
            store=store,
            navigator=navigator,
            notifier=notifier,
            dashboard_path=routes.dashboard,
            landing_path=routes.landing,
            public_profile_prefix=routes.public_profile_prefix,
        )

    def link_manager(self, session: SessionController, notifier: Notifier) -> LinkManager:
        return LinkManager(
            link_api=self.link_api,
            access_token=lambda: session.access_token,
            notifier=notifier,
        )
