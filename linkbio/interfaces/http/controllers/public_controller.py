# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, jsonify, redirect, render_template

from linkbio.interfaces.http.session import get_container
from linkbio.shared.errors import ApiRequestError
from linkbio.shared.logging import logger
from linkbio.shared.utils import run_async


class PublicController:
    """Pages served without a session."""

    def profile(self, user_id: str) -> Response | str:
        container = get_container()
        try:
            profile = run_async(container.link_api.public_profile(user_id))
        except ApiRequestError as exc:
            logger.info(f"public.profile: unavailable user_id={user_id} code={exc.code}")
            return redirect(container.config.routes.landing)
        return render_template("public_profile.html", profile=profile)

    def health(self) -> Response:
        return jsonify({"status": "ok"})

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("public", __name__)
        bp.add_url_rule("/user/<user_id>", view_func=self.profile, methods=["GET"])
        bp.add_url_rule("/health", view_func=self.health, methods=["GET"])
        return bp
