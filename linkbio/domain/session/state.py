# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Session state, the actions that change it, and the reducer applying them."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum

from linkbio.domain.exceptions import InvariantViolation
from linkbio.domain.users.entities import User


class SessionStatus(str, Enum):
    LOADING = "loading"
    AUTHENTICATED = "authenticated"
    UNAUTHENTICATED = "unauthenticated"


@dataclass(slots=True, frozen=True)
class SessionState:
    """``is_authenticated`` is tri-state: None while unknown, then True/False."""

    is_authenticated: bool | None = None
    user: User | None = None
    is_loading: bool = True

    def __post_init__(self) -> None:
        if self.is_authenticated and self.user is None:
            raise InvariantViolation(
                "authenticated session requires a user", field="user"
            )

    @property
    def status(self) -> SessionStatus:
        if self.is_authenticated is None:
            return SessionStatus.LOADING
        if self.is_authenticated:
            return SessionStatus.AUTHENTICATED
        return SessionStatus.UNAUTHENTICATED


@dataclass(slots=True, frozen=True)
class RestoreStarted:
    pass


@dataclass(slots=True, frozen=True)
class RestoreFinished:
    pass


@dataclass(slots=True, frozen=True)
class UserLoaded:
    user: User


@dataclass(slots=True, frozen=True)
class Authenticated:
    pass


@dataclass(slots=True, frozen=True)
class LoggedOut:
    pass


SessionAction = RestoreStarted | RestoreFinished | UserLoaded | Authenticated | LoggedOut


def reduce(state: SessionState, action: SessionAction) -> SessionState:
    if isinstance(action, RestoreStarted):
        return replace(state, is_loading=True)
    if isinstance(action, RestoreFinished):
        return replace(state, is_loading=False)
    if isinstance(action, UserLoaded):
        return replace(state, user=action.user)
    if isinstance(action, Authenticated):
        if state.user is None:
            raise InvariantViolation("cannot authenticate without a loaded user", field="user")
        return replace(state, is_authenticated=True)
    if isinstance(action, LoggedOut):
        return replace(state, is_authenticated=False, user=None)
    raise TypeError(f"unknown session action: {action!r}")


__all__ = [
    "Authenticated",
    "LoggedOut",
    "RestoreFinished",
    "RestoreStarted",
    "SessionAction",
    "SessionState",
    "SessionStatus",
    "UserLoaded",
    "reduce",
]
