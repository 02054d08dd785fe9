# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Wire models of the remote API (camelCase on the wire)."""

from __future__ import annotations

from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field

from linkbio.domain.links import Link, LinkDraft, PublicProfile, PublicUser
from linkbio.domain.users import TokenPair, User


def _id_to_str(value: Any) -> Any:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(int(value))
    return value


WireId = Annotated[str, BeforeValidator(_id_to_str)]


class _WireModel(BaseModel):
    model_config = ConfigDict(validate_by_name=True, extra="ignore")


class LoginResponse(_WireModel):
    access_token: str = Field(alias="accessToken", min_length=1)
    refresh_token: str = Field(alias="refreshToken", min_length=1)

    def to_entity(self) -> TokenPair:
        return TokenPair(access_token=self.access_token, refresh_token=self.refresh_token)


class RefreshResponse(_WireModel):
    access_token: str = Field(alias="accessToken", min_length=1)


class UserPayload(_WireModel):
    id: WireId | None = None
    name: str = ""
    email: str = ""
    avatar: str = ""
    username: str = ""
    created_at: str | None = Field(None, alias="createdAt")
    updated_at: str | None = Field(None, alias="updatedAt")

    def to_entity(self) -> User | None:
        if not self.id:
            return None
        return User(
            id=self.id,
            name=self.name,
            email=self.email,
            avatar=self.avatar,
            username=self.username,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )


class CreateUserResponse(_WireModel):
    id: WireId | None = None
    access_token: str | None = Field(None, alias="accessToken")
    refresh_token: str | None = Field(None, alias="refreshToken")


class LinkPayload(_WireModel):
    id: WireId
    title: str
    url: str

    def to_entity(self) -> Link:
        return Link(id=self.id, title=self.title, url=self.url)


class PublicUserPayload(_WireModel):
    name: str
    email: str = ""
    avatar: str = ""


class PublicLinkPayload(_WireModel):
    title: str
    url: str


class PublicProfilePayload(_WireModel):
    user: PublicUserPayload
    links: list[PublicLinkPayload] = Field(default_factory=list)

    def to_entity(self) -> PublicProfile:
        return PublicProfile(
            user=PublicUser(
                name=self.user.name, email=self.user.email, avatar=self.user.avatar
            ),
            links=tuple(LinkDraft(title=link.title, url=link.url) for link in self.links),
        )
