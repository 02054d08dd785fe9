# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable

from linkbio.application.interfaces import Notifier
from linkbio.domain.exceptions import InvariantViolation
from linkbio.domain.links import Link, LinkApi, LinkDraft
from linkbio.shared.errors import AppError
from linkbio.shared.logging import logger

LINK_CREATED = "Link added!"
LINK_UPDATED = "Link updated!"
LINK_DELETED = "Link removed!"


class LinkManager:
    """Local mirror of the user's links, mutated only after the API confirms."""

    def __init__(
        self,
        *,
        link_api: LinkApi,
        access_token: Callable[[], str | None],
        notifier: Notifier,
    ) -> None:
        self._link_api = link_api
        self._access_token = access_token
        self._notifier = notifier
        self._links: list[Link] = []
        self._editing_index: int | None = None

    @property
    def links(self) -> tuple[Link, ...]:
        return tuple(self._links)

    @property
    def editing_index(self) -> int | None:
        return self._editing_index

    @property
    def editing(self) -> Link | None:
        if self._editing_index is None:
            return None
        return self._links[self._editing_index]

    async def load(self) -> bool:
        try:
            links = await self._link_api.list(self._access_token())
        except AppError as exc:
            logger.warning(f"links.list: failed code={exc.code}")
            self._notifier.error(str(exc))
            return False
        self._links = list(links)
        self._editing_index = None
        return True

    async def create(self, draft: LinkDraft) -> Link | None:
        try:
            created = await self._link_api.create(self._access_token(), draft)
        except AppError as exc:
            logger.warning(f"links.create: failed code={exc.code}")
            self._notifier.error(str(exc))
            return None
        self._links.append(created)
        self._notifier.success(LINK_CREATED)
        logger.info(f"links.create: ok link_id={created.id}")
        return created

    async def update(self, link_id: str, draft: LinkDraft) -> Link | None:
        try:
            updated = await self._link_api.update(self._access_token(), link_id, draft)
        except AppError as exc:
            logger.warning(f"links.update: failed link_id={link_id} code={exc.code}")
            self._notifier.error(str(exc))
            return None
        index = self._index_of(link_id)
        if index is not None:
            self._links[index] = updated
        self._notifier.success(LINK_UPDATED)
        logger.info(f"links.update: ok link_id={link_id}")
        return updated

    async def delete(self, link_id: str) -> bool:
        try:
            await self._link_api.delete(self._access_token(), link_id)
        except AppError as exc:
            logger.warning(f"links.delete: failed link_id={link_id} code={exc.code}")
            self._notifier.error(str(exc))
            return False
        editing = self.editing
        self._links = [link for link in self._links if link.id != link_id]
        if editing is not None:
            self._editing_index = self._index_of(editing.id)
        self._notifier.success(LINK_DELETED)
        logger.info(f"links.delete: ok link_id={link_id}")
        return True

    def begin_edit(self, index: int) -> LinkDraft:
        if not 0 <= index < len(self._links):
            raise InvariantViolation(f"no link at position {index}", field="editing_index")
        self._editing_index = index
        return self._links[index].as_draft()

    def cancel_edit(self) -> None:
        self._editing_index = None

    async def submit(self, draft: LinkDraft) -> Link | None:
        """Update the record being edited, or create a new one when nothing is."""
        editing = self.editing
        if editing is None:
            return await self.create(draft)
        updated = await self.update(editing.id, draft)
        if updated is not None:
            self._editing_index = None
        return updated

    def _index_of(self, link_id: str) -> int | None:
        for index, link in enumerate(self._links):
            if link.id == link_id:
                return index
        return None
