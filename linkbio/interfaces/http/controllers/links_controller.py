# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus
from typing import Any

from flask import Blueprint, Response, flash, redirect, render_template, request
from pydantic import ValidationError

from linkbio.application.links import LinkManager
from linkbio.domain.exceptions import InvariantViolation
from linkbio.interfaces.http.dto import LinkForm
from linkbio.interfaces.http.session import (RequestSession, get_container,
                                             link_manager, request_session)
from linkbio.shared.errors.validation import field_messages
from linkbio.shared.logging import logger
from linkbio.shared.middleware.csrf import csrf_protect
from linkbio.shared.utils import run_async

LINK_MISSING = "That link no longer exists"


def _dashboard_path() -> str:
    return get_container().config.routes.dashboard


def _render_dashboard(
    session: RequestSession,
    manager: LinkManager,
    *,
    values: dict[str, Any] | None = None,
    errors: dict[str, str] | None = None,
    status: int = HTTPStatus.OK,
) -> tuple[str, int]:
    page = render_template(
        "dashboard.html",
        user=session.state.user,
        links=manager.links,
        editing_index=manager.editing_index,
        values=values or {},
        errors=errors or {},
    )
    return page, status


def _resume_edit(manager: LinkManager, index: int, link_id: str | None) -> bool:
    """Select the record at ``index`` only if it is still the one the form was opened for."""
    try:
        manager.begin_edit(index)
    except InvariantViolation:
        return False
    if link_id is None or manager.editing.id != link_id:
        manager.cancel_edit()
        return False
    return True


class LinksController:

    def _restore(self) -> RequestSession:
        session = request_session()
        run_async(session.controller.restore_session())
        return session

    def _leave(self, session: RequestSession) -> Response:
        return session.redirect_target(get_container().config.routes.landing)

    def dashboard(self) -> Response | tuple[str, int]:
        session = self._restore()
        if not session.state.is_authenticated:
            return self._leave(session)

        manager = link_manager(session)
        run_async(manager.load())

        values: dict[str, Any] = {}
        edit = request.args.get("edit", type=int)
        if edit is not None:
            try:
                draft = manager.begin_edit(edit)
            except InvariantViolation:
                flash(LINK_MISSING, "error")
            else:
                values = {"title": draft.title, "url": draft.url}
        return _render_dashboard(session, manager, values=values)

    @csrf_protect
    def save(self) -> Response | tuple[str, int]:
        session = self._restore()
        if not session.state.is_authenticated:
            return self._leave(session)

        manager = link_manager(session)
        run_async(manager.load())

        try:
            form = LinkForm.model_validate(request.form.to_dict())
        except ValidationError as exc:
            raw_index = request.form.get("editing_index", type=int)
            if raw_index is not None:
                _resume_edit(manager, raw_index, request.form.get("editing_id"))
            return _render_dashboard(
                session,
                manager,
                values={k: v for k, v in request.form.items() if k in ("title", "url")},
                errors=field_messages(exc),
                status=HTTPStatus.UNPROCESSABLE_ENTITY,
            )

        if form.editing_index is not None:
            if not _resume_edit(manager, form.editing_index, form.editing_id):
                logger.info(
                    f"links.save: stale edit index={form.editing_index} id={form.editing_id}"
                )
                flash(LINK_MISSING, "error")
                return redirect(_dashboard_path())

        saved = run_async(manager.submit(form.to_draft()))
        if saved is None and form.editing_index is not None:
            return redirect(f"{_dashboard_path()}?edit={form.editing_index}")
        return redirect(_dashboard_path())

    @csrf_protect
    def delete(self, link_id: str) -> Response:
        session = self._restore()
        if not session.state.is_authenticated:
            return self._leave(session)

        run_async(link_manager(session).delete(link_id))
        return redirect(_dashboard_path())

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("links", __name__, url_prefix="/dash")
        bp.add_url_rule("", view_func=self.dashboard, methods=["GET"])
        bp.add_url_rule("/links", view_func=self.save, methods=["POST"])
        bp.add_url_rule("/links/<link_id>/delete", view_func=self.delete, methods=["POST"])
        return bp
