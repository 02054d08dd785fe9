# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from linkbio.shared.errors.base import DomainError


class InvalidSessionError(DomainError):
    code = "invalid_session"
    status = HTTPStatus.UNAUTHORIZED


class SessionExpiredError(DomainError):
    code = "session_expired"
    status = HTTPStatus.UNAUTHORIZED


class InvalidCredentialsError(DomainError):
    code = "invalid_credentials"
    status = HTTPStatus.UNAUTHORIZED
