# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from werkzeug.wrappers import Response


@dataclass(slots=True, frozen=True)
class _CookieWrite:
    value: str | None
    max_age: int | None
    path: str


class RequestCookieJar:
    """Cookies of one request plus the writes queued for its response.

    Reads see queued writes, so a token stored early in a request is visible to
    later steps of the same request before the browser ever receives it.
    """

    def __init__(
        self,
        cookies: Mapping[str, str] | None = None,
        *,
        secure: bool = False,
        samesite: str | None = "Lax",
        httponly: bool = True,
    ) -> None:
        self._incoming = dict(cookies or {})
        self._pending: dict[str, _CookieWrite] = {}
        self._secure = secure
        self._samesite = samesite
        self._httponly = httponly

    def get(self, name: str) -> str | None:
        if name in self._pending:
            return self._pending[name].value
        value = self._incoming.get(name)
        return value or None

    def set(self, name: str, value: str, *, max_age: int, path: str = "/") -> None:
        self._pending[name] = _CookieWrite(value=value, max_age=max_age, path=path)

    def delete(self, name: str, *, path: str = "/") -> None:
        self._pending[name] = _CookieWrite(value=None, max_age=None, path=path)

    @property
    def dirty(self) -> bool:
        return bool(self._pending)

    def apply(self, response: Response) -> Response:
        for name, write in self._pending.items():
            if write.value is None:
                response.delete_cookie(
                    name,
                    path=write.path,
                    secure=self._secure,
                    httponly=self._httponly,
                    samesite=self._samesite,
                )
            else:
                response.set_cookie(
                    name,
                    write.value,
                    max_age=write.max_age,
                    path=write.path,
                    secure=self._secure,
                    httponly=self._httponly,
                    samesite=self._samesite,
                )
        return response
