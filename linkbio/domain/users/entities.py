# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass

from linkbio.domain.exceptions import InvariantViolation


@dataclass(slots=True, frozen=True)
class User:

    id: str
    name: str
    email: str
    avatar: str
    username: str
    created_at: str | None = None
    updated_at: str | None = None

    def __post_init__(self) -> None:
        if not self.id:
            raise InvariantViolation("user id must be non-empty", field="id")


@dataclass(slots=True, frozen=True)
class TokenPair:

    access_token: str
    refresh_token: str | None = None


@dataclass(slots=True, frozen=True)
class SignupValues:

    name: str
    email: str
    password: str
    username: str
    avatar: str

    def to_payload(self) -> dict[str, str]:
        return {
            "name": self.name,
            "email": self.email,
            "password": self.password,
            "username": self.username,
            "avatar": self.avatar,
        }


@dataclass(slots=True, frozen=True)
class SignupResult:
    """Outcome of ``POST /users``; ``user_id`` is None when the API omitted it."""

    user_id: str | None
    tokens: TokenPair | None
