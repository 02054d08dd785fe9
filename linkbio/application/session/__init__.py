# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .controller import SessionController
from .store import SessionStore

__all__ = ["SessionController", "SessionStore"]
