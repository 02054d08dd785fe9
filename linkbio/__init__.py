# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Link-in-bio web client."""

__version__ = "0.1.0"
