# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, field_validator

from linkbio.domain.links import LinkDraft

from ._fields import require_min_length, require_url


class LinkForm(BaseModel):
    model_config = ConfigDict(validate_default=True)

    title: str = ""
    url: str = ""
    editing_index: int | None = None
    editing_id: str | None = None

    @field_validator("title")
    @classmethod
    def validate_title(cls, value: str) -> str:
        return require_min_length(value, 1, "Title")

    @field_validator("url")
    @classmethod
    def validate_url(cls, value: str) -> str:
        return require_url(value)

    @field_validator("editing_index", "editing_id", mode="before")
    @classmethod
    def blank_is_none(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    def to_draft(self) -> LinkDraft:
        return LinkDraft(title=self.title, url=self.url)
