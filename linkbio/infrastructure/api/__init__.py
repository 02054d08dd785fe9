# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .auth_api import HttpAuthApi
from .client import ApiClient
from .link_api import HttpLinkApi

__all__ = ["ApiClient", "HttpAuthApi", "HttpLinkApi"]
