# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .asyncio_utils import run_async

__all__ = ["run_async"]
