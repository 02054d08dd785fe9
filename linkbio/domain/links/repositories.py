# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from .entities import Link, LinkDraft, PublicProfile


class LinkApi(Protocol):
    async def list(self, access_token: str | None) -> Sequence[Link]: ...
    async def create(self, access_token: str | None, draft: LinkDraft) -> Link: ...
    async def update(self, access_token: str | None, link_id: str, draft: LinkDraft) -> Link: ...
    async def delete(self, access_token: str | None, link_id: str) -> None: ...
    async def public_profile(self, user_id: str) -> PublicProfile: ...
