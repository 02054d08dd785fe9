# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from flask import Flask

from linkbio.infrastructure.container import Container
from linkbio.interfaces.http.controllers import (AuthController,
                                                 LinksController,
                                                 PublicController)
from linkbio.interfaces.http.session import configure_request_session
from linkbio.shared.logging import get_correlation_id, logger, setup_logging
from linkbio.shared.middleware.csrf import configure_csrf
from linkbio.shared.middleware.error_handler import configure_error_handling
from linkbio.shared.middleware.request_logger import configure_request_logging


def create_app(container: Container | None = None) -> Flask:
    container = container or Container()
    config = container.config
    setup_logging(debug_mode=config.debug_logging)

    app = Flask(__name__, template_folder="interfaces/http/templates")
    configure_error_handling(app)
    configure_csrf(app)

    configure_request_logging(app)
    configure_request_session(app, container)

    app.config.update(SECRET_KEY=config.secret_key)

    app.register_blueprint(AuthController().as_blueprint())
    app.register_blueprint(LinksController().as_blueprint())
    app.register_blueprint(PublicController().as_blueprint())

    @app.context_processor
    def _inject_routes() -> dict[str, object]:
        return {
            "routes": config.routes,
            "restore_delay_ms": config.routes.restore_delay_ms,
        }

    @app.after_request
    def _add_security_headers(resp):
        resp.headers.setdefault("X-Request-ID", get_correlation_id())

        resp.headers.setdefault("X-Frame-Options", "DENY")

        resp.headers.setdefault("Referrer-Policy", "no-referrer")

        resp.headers.setdefault("X-Content-Type-Options", "nosniff")

        resp.headers.setdefault("Cross-Origin-Opener-Policy", "same-origin")

        resp.headers.setdefault(
            "Permissions-Policy",
            "geolocation=(), microphone=(), camera=(), payment=(), usb=()",
        )

        # pages carry per-user tokens in Set-Cookie
        resp.headers.setdefault("Cache-Control", "no-store")

        if config.security.enable_hsts:
            resp.headers.setdefault(
                "Strict-Transport-Security",
                "max-age=31536000; includeSubDomains; preload",
            )

        return resp

    logger.info(
        f"Flask app initialized api={config.api.base_url} "
        f"token_strategy={config.tokens.strategy}"
    )
    return app


if __name__ == "__main__":
    create_app().run(host="0.0.0.0", port=5000, debug=True)
