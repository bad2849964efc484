# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from flask import Flask
from flask_cors import CORS

from verdict.infrastructure.container import Container
from verdict.infrastructure.db import init_db
from verdict.interfaces.http.controllers.misc_controller import MiscController
from verdict.shared.config import load_config
from verdict.shared.logging import logger, setup_logging
from verdict.shared.middleware.error_handler import configure_error_handling
from verdict.shared.middleware.request_logger import configure_request_logging

_config = load_config()


def create_app(container: Container | None = None) -> Flask:
    setup_logging(debug_mode=_config.debug_logging)
    init_db()

    container = container or Container(_config)

    app = Flask(__name__)
    configure_error_handling(app)
    configure_request_logging(app)

    app.config.update(SECRET_KEY=_config.secret_key)

    CORS(
        app,
        resources={r"/*": {"origins": _config.security.allowed_origins}},
        allow_headers=["Authorization", "Content-Type"],
    )
    app.register_blueprint(MiscController().as_blueprint())
    app.register_blueprint(container.auth_controller.as_blueprint())

    @app.after_request
    def _add_security_headers(resp):
        resp.headers.setdefault("X-Frame-Options", "DENY")
        resp.headers.setdefault("Referrer-Policy", "no-referrer")
        resp.headers.setdefault("X-Content-Type-Options", "nosniff")
        resp.headers.setdefault("Cache-Control", "no-store")

        if _config.security.enable_hsts:
            resp.headers.setdefault(
                "Strict-Transport-Security",
                "max-age=31536000; includeSubDomains; preload",
            )

        return resp

    logger.info("Flask app initialized")
    return app


if __name__ == "__main__":
    create_app().run(host="0.0.0.0", port=5000, debug=True)
