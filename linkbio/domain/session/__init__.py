# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .state import (
    Authenticated,
    LoggedOut,
    RestoreFinished,
    RestoreStarted,
    SessionAction,
    SessionState,
    SessionStatus,
    UserLoaded,
    reduce,
)

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
