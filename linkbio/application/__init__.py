# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .interfaces import Navigator, Notifier
from .links import LinkManager
from .session import SessionController, SessionStore

__all__ = [
    "LinkManager",
    "Navigator",
    "Notifier",
    "SessionController",
    "SessionStore",
]
