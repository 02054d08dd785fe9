# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .entities import Link, LinkDraft, PublicProfile, PublicUser
from .repositories import LinkApi

__all__ = ["Link", "LinkApi", "LinkDraft", "PublicProfile", "PublicUser"]
