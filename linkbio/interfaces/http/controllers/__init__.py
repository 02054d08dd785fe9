# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .auth_controller import AuthController
from .links_controller import LinksController
from .public_controller import PublicController

__all__ = ["AuthController", "LinksController", "PublicController"]
