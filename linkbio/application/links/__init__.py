# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .manager import LinkManager

__all__ = ["LinkManager"]
