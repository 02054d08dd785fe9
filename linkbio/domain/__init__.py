# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .exceptions import InvariantViolation, InvariantViolationError
from .links import Link, LinkDraft, PublicProfile, PublicUser
from .session import SessionState, SessionStatus
from .users import SignupResult, SignupValues, TokenPair, User

__all__ = [
    "InvariantViolation",
    "InvariantViolationError",
    "Link",
    "LinkDraft",
    "PublicProfile",
    "PublicUser",
    "SessionState",
    "SessionStatus",
    "SignupResult",
    "SignupValues",
    "TokenPair",
    "User",
]
