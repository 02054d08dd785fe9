# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Sequence
from urllib.parse import quote

from linkbio.domain.links import Link, LinkApi, LinkDraft, PublicProfile
from linkbio.shared.errors import MalformedResponseError

from .client import ApiClient, parse_payload
from .schemas import LinkPayload, PublicProfilePayload


def _link_path(link_id: str) -> str:
    return f"/links/{quote(str(link_id), safe='')}"


class HttpLinkApi(LinkApi):

    def __init__(self, client: ApiClient) -> None:
        self._client = client

    async def list(self, access_token: str | None) -> Sequence[Link]:
        payload = await self._client.request("GET", "/links", token=access_token)
        if not isinstance(payload, list):
            raise MalformedResponseError("/links", "list body")
        return [parse_payload(LinkPayload, item, "/links").to_entity() for item in payload]

    async def create(self, access_token: str | None, draft: LinkDraft) -> Link:
        payload = await self._client.request(
            "POST", "/links", token=access_token, json=draft.to_payload()
        )
        return parse_payload(LinkPayload, payload, "/links").to_entity()

    async def update(self, access_token: str | None, link_id: str, draft: LinkDraft) -> Link:
        path = _link_path(link_id)
        payload = await self._client.request(
            "PATCH", path, token=access_token, json=draft.to_payload()
        )
        return parse_payload(LinkPayload, payload, path).to_entity()

    async def delete(self, access_token: str | None, link_id: str) -> None:
        await self._client.request("DELETE", _link_path(link_id), token=access_token)

    async def public_profile(self, user_id: str) -> PublicProfile:
        path = f"/links/public/{quote(str(user_id), safe='')}"
        payload = await self._client.request("GET", path, authenticated=False)
        return parse_payload(PublicProfilePayload, payload, path).to_entity()
