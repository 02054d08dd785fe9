# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Token persistence strategies.

``CookieTokenStore`` keeps both tokens in cookies. ``MemoryAccessTokenStore``
keeps only the refresh token in a cookie; the access token lives on the
instance and is re-minted through a refresh on the next application load.
"""

from __future__ import annotations

from linkbio.domain.users import TokenPair, TokenStore

from .cookie_jar import RequestCookieJar

ACCESS_TOKEN_COOKIE = "accessToken"
REFRESH_TOKEN_COOKIE = "refreshToken"


class CookieTokenStore(TokenStore):

    def __init__(
        self,
        jar: RequestCookieJar,
        *,
        access_ttl: int,
        refresh_ttl: int,
        path: str = "/",
    ) -> None:
        self._jar = jar
        self._access_ttl = access_ttl
        self._refresh_ttl = refresh_ttl
        self._path = path

    def store(self, access_token: str, refresh_token: str | None = None) -> None:
        self._jar.set(ACCESS_TOKEN_COOKIE, access_token, max_age=self._access_ttl, path=self._path)
        if refresh_token:
            self._jar.set(
                REFRESH_TOKEN_COOKIE, refresh_token, max_age=self._refresh_ttl, path=self._path
            )

    def retrieve(self) -> TokenPair | None:
        access_token = self.access_token()
        if not access_token:
            return None
        return TokenPair(access_token=access_token, refresh_token=self.refresh_token())

    def access_token(self) -> str | None:
        return self._jar.get(ACCESS_TOKEN_COOKIE)

    def refresh_token(self) -> str | None:
        return self._jar.get(REFRESH_TOKEN_COOKIE)

    def clear_access(self) -> None:
        self._jar.delete(ACCESS_TOKEN_COOKIE, path=self._path)

    def clear(self) -> None:
        self._jar.delete(ACCESS_TOKEN_COOKIE, path=self._path)
        self._jar.delete(REFRESH_TOKEN_COOKIE, path=self._path)


class MemoryAccessTokenStore(TokenStore):

    def __init__(self, jar: RequestCookieJar, *, refresh_ttl: int, path: str = "/") -> None:
        self._jar = jar
        self._refresh_ttl = refresh_ttl
        self._path = path
        self._access_token: str | None = None

    def store(self, access_token: str, refresh_token: str | None = None) -> None:
        self._access_token = access_token
        if refresh_token:
            self._jar.set(
                REFRESH_TOKEN_COOKIE, refresh_token, max_age=self._refresh_ttl, path=self._path
            )

    def retrieve(self) -> TokenPair | None:
        if not self._access_token:
            return None
        return TokenPair(access_token=self._access_token, refresh_token=self.refresh_token())

    def access_token(self) -> str | None:
        return self._access_token

    def refresh_token(self) -> str | None:
        return self._jar.get(REFRESH_TOKEN_COOKIE)

    def clear_access(self) -> None:
        self._access_token = None

    def clear(self) -> None:
        self._access_token = None
        # a stale accessToken cookie from the cookie strategy must not outlive logout
        self._jar.delete(ACCESS_TOKEN_COOKIE, path=self._path)
        self._jar.delete(REFRESH_TOKEN_COOKIE, path=self._path)
