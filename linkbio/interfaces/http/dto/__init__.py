# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .auth import SigninForm, SignupForm
from .links import LinkForm

__all__ = ["LinkForm", "SigninForm", "SignupForm"]
