# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Protocol


class Navigator(Protocol):
    @property
    def current_path(self) -> str: ...

    def replace(self, path: str) -> None: ...


class Notifier(Protocol):
    def success(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...
