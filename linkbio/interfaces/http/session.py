# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Per-request wiring of the session controller into Flask.

Every request gets its own cookie jar, session store and controller. Queued
cookie writes are applied to whatever response the view returns.
"""

from __future__ import annotations

from dataclasses import dataclass

from flask import Flask, current_app, flash, g, redirect, request
from werkzeug.wrappers import Response

from linkbio.application.links import LinkManager
from linkbio.application.session import SessionController, SessionStore
from linkbio.domain.session import SessionAction, SessionState
from linkbio.infrastructure.container import Container
from linkbio.infrastructure.tokens import RequestCookieJar
from linkbio.shared.errors import ApiRequestError, AppError
from linkbio.shared.logging import set_user_id

_EXTENSION_KEY = "linkbio.container"

_ERROR_MESSAGES = {
    "invalid_session": "Could not load your profile, please sign in again",
    "session_expired": "Your session has expired, please sign in again",
    "rate_limited": "Too many attempts, try again in a minute",
}


def error_message(exc: AppError) -> str:
    if isinstance(exc, ApiRequestError):
        return exc.message
    if exc.context and exc.context.get("message"):
        return str(exc.context["message"])
    return _ERROR_MESSAGES.get(exc.code, exc.code)


class FlaskNavigator:
    """Records the redirect the controller asked for; the view issues it."""

    def __init__(self, current_path: str) -> None:
        self._current_path = current_path
        self.target: str | None = None

    @property
    def current_path(self) -> str:
        return self._current_path

    def replace(self, path: str) -> None:
        self.target = path
        self._current_path = path


class FlashNotifier:

    def success(self, message: str) -> None:
        flash(message, "success")

    def error(self, message: str) -> None:
        flash(message, "error")


@dataclass(slots=True)
class RequestSession:
    jar: RequestCookieJar
    store: SessionStore
    navigator: FlaskNavigator
    notifier: FlashNotifier
    controller: SessionController

    @property
    def state(self) -> SessionState:
        return self.store.get_state()

    def redirect_target(self, default: str) -> Response:
        return redirect(self.navigator.target or default)


def get_container() -> Container:
    return current_app.extensions[_EXTENSION_KEY]


def request_session() -> RequestSession:
    existing = getattr(g, "linkbio_session", None)
    if existing is not None:
        return existing

    container = get_container()
    jar = container.cookie_jar(request.cookies)
    store = SessionStore()
    navigator = FlaskNavigator(request.path)
    notifier = FlashNotifier()
    controller = container.session_controller(
        tokens=container.token_store(jar),
        store=store,
        navigator=navigator,
        notifier=notifier,
    )

    def _track_user(state: SessionState, action: SessionAction) -> None:
        g.user_id = state.user.id if state.user else None
        set_user_id(g.user_id)

    store.subscribe(_track_user)

    session = RequestSession(
        jar=jar,
        store=store,
        navigator=navigator,
        notifier=notifier,
        controller=controller,
    )
    g.linkbio_session = session
    return session


def link_manager(session: RequestSession) -> LinkManager:
    return get_container().link_manager(session.controller, session.notifier)


def configure_request_session(app: Flask, container: Container) -> None:
    app.extensions[_EXTENSION_KEY] = container

    @app.after_request
    def _apply_cookie_writes(resp):
        session = getattr(g, "linkbio_session", None)
        if session is not None and session.jar.dirty:
            session.jar.apply(resp)
        return resp


__all__ = [
    "FlashNotifier",
    "FlaskNavigator",
    "RequestSession",
    "configure_request_session",
    "error_message",
    "get_container",
    "link_manager",
    "request_session",
]
