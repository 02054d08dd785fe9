# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus
from typing import Any

from flask import Blueprint, Response, jsonify, render_template, request
from pydantic import ValidationError

from linkbio.interfaces.http.dto import SigninForm, SignupForm
from linkbio.interfaces.http.session import (error_message, get_container,
                                             request_session)
from linkbio.shared.errors import ApiRequestError, AppError
from linkbio.shared.errors.validation import (field_messages,
                                              raise_validation_error)
from linkbio.shared.logging import logger
from linkbio.shared.middleware.csrf import csrf_protect
from linkbio.shared.middleware.rate_limit import rate_limit
from linkbio.shared.utils import run_async


def _status_for(exc: AppError) -> int:
    if isinstance(exc, ApiRequestError) and exc.is_client_error:
        return int(exc.status_code or HTTPStatus.BAD_REQUEST)
    return int(exc.status)


def _render_landing(
    *,
    tab: str = "signin",
    values: dict[str, Any] | None = None,
    errors: dict[str, str] | None = None,
    form_error: str | None = None,
    status: int = HTTPStatus.OK,
) -> tuple[str, int]:
    page = render_template(
        "landing.html",
        tab=tab,
        values=values or {},
        errors=errors or {},
        form_error=form_error,
    )
    return page, status


def _form_values(*exclude: str) -> dict[str, str]:
    return {k: v for k, v in request.form.items() if k not in exclude}


def _payload() -> dict[str, Any]:
    if request.is_json:
        return request.get_json(silent=True) or {}
    return request.form.to_dict()


class AuthController:

    def landing(self) -> Response | tuple[str, int]:
        session = request_session()
        run_async(session.controller.restore_session())
        if session.state.is_authenticated:
            return session.redirect_target(get_container().config.routes.dashboard)
        return _render_landing(tab=request.args.get("tab", "signin"))

    @rate_limit()
    @csrf_protect
    def login(self) -> Response | tuple[str, int]:
        try:
            form = SigninForm.model_validate(_payload())
        except ValidationError as exc:
            if request.is_json:
                raise_validation_error(exc)
            return _render_landing(
                tab="signin",
                values=_form_values("password", "csrf_token"),
                errors=field_messages(exc),
                status=HTTPStatus.UNPROCESSABLE_ENTITY,
            )

        session = request_session()
        try:
            run_async(session.controller.login(form.email, form.password))
        except AppError as exc:
            logger.info(f"auth.login: rejected code={exc.code}")
            if request.is_json:
                return jsonify(exc.to_dict()), _status_for(exc)
            return _render_landing(
                tab="signin",
                values={"email": form.email},
                form_error=error_message(exc),
                status=_status_for(exc),
            )
        return session.redirect_target(get_container().config.routes.dashboard)

    @rate_limit()
    @csrf_protect
    def signup(self) -> Response | tuple[str, int]:
        try:
            form = SignupForm.model_validate(_payload())
        except ValidationError as exc:
            if request.is_json:
                raise_validation_error(exc)
            return _render_landing(
                tab="signup",
                values=_form_values("password", "csrf_token"),
                errors=field_messages(exc),
                status=HTTPStatus.UNPROCESSABLE_ENTITY,
            )

        session = request_session()
        if not run_async(session.controller.signup(form.to_values())):
            if session.navigator.target is not None:
                return session.redirect_target(get_container().config.routes.landing)
            return _render_landing(
                tab="signup",
                values=_form_values("password", "csrf_token"),
                status=HTTPStatus.BAD_REQUEST,
            )
        return session.redirect_target(get_container().config.routes.dashboard)

    @csrf_protect
    def logout(self) -> Response:
        session = request_session()
        session.controller.logout()
        return session.redirect_target(get_container().config.routes.landing)

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("auth", __name__)
        bp.add_url_rule("/", view_func=self.landing, methods=["GET"])
        bp.add_url_rule("/auth/login", view_func=self.login, methods=["POST"])
        bp.add_url_rule("/auth/signup", view_func=self.signup, methods=["POST"])
        bp.add_url_rule("/auth/logout", view_func=self.logout, methods=["POST"])
        return bp
