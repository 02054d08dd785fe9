# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass

from linkbio.domain.exceptions import InvariantViolation


@dataclass(slots=True, frozen=True)
class LinkDraft:

    title: str
    url: str

    def to_payload(self) -> dict[str, str]:
        return {"title": self.title, "url": self.url}


@dataclass(slots=True, frozen=True)
class Link:

    id: str
    title: str
    url: str

    def __post_init__(self) -> None:
        if not self.id:
            raise InvariantViolation("link id must be non-empty", field="id")

    def as_draft(self) -> LinkDraft:
        return LinkDraft(title=self.title, url=self.url)


@dataclass(slots=True, frozen=True)
class PublicUser:

    name: str
    email: str
    avatar: str

    @property
    def initials(self) -> str:
        return self.name[:2].upper()


@dataclass(slots=True, frozen=True)
class PublicProfile:

    user: PublicUser
    links: tuple[LinkDraft, ...]
