# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Flask
from flask_cors import CORS

from staffdesk.container import Container
from staffdesk.infrastructure.admin_setup import setup_admin_user
from staffdesk.infrastructure.db import init_db
from staffdesk.interfaces.http.guards import SESSION_COOKIE_CONFIG_KEY
from staffdesk.shared.config import AppConfig, load_config
from staffdesk.shared.logging import logger, setup_logging
from staffdesk.shared.middleware.error_handler import configure_error_handling
from staffdesk.shared.middleware.rate_limit import (
    RATE_LIMIT_ENABLED,
    RATE_LIMIT_REQUESTS,
    RATE_LIMIT_WINDOW,
    TRUST_PROXY_HEADERS,
)
from staffdesk.shared.middleware.request_logger import configure_request_logging


def create_app(config: AppConfig | None = None, container: Container | None = None) -> Flask:
    if container is None:
        container = Container(config or load_config())
    config = container.config

    setup_logging("DEBUG" if config.debug_logging else config.log_level, config.log_file)
    init_db(container.engine)
    setup_admin_user(container.seed_admin_use_case, config.admin)

    app = Flask(__name__)
    configure_error_handling(app, debug_mode=config.debug_logging)
    configure_request_logging(
        app,
        debug_mode=config.debug_logging,
        metrics_enabled=config.observability.metrics_enabled,
    )

    security = config.security
    app.config.update(
        {
            SESSION_COOKIE_CONFIG_KEY: config.session.cookie_name,
            RATE_LIMIT_ENABLED: security.enable_rate_limit,
            RATE_LIMIT_REQUESTS: security.rate_limit_requests,
            RATE_LIMIT_WINDOW: security.rate_limit_window,
            TRUST_PROXY_HEADERS: security.trust_proxy_headers,
        }
    )
    app.extensions["staffdesk.container"] = container

    cors_kwargs: dict[str, object] = {
        "resources": {r"/api/*": {"origins": security.allowed_origins}}
    }
    if any(o != "*" for o in security.allowed_origins):
        cors_kwargs["supports_credentials"] = True
    CORS(app, **cors_kwargs)

    app.register_blueprint(container.misc_controller.as_blueprint())
    app.register_blueprint(container.auth_controller.as_blueprint())
    app.register_blueprint(container.employees_controller.as_blueprint())

    @app.after_request
    def _add_security_headers(resp):
        resp.headers.setdefault("X-Frame-Options", "DENY")

        resp.headers.setdefault("Referrer-Policy", "no-referrer")

        resp.headers.setdefault("X-Content-Type-Options", "nosniff")

        resp.headers.setdefault(
            "Permissions-Policy",
            "geolocation=(), microphone=(), camera=(), payment=(), usb=()",
        )

        if security.enable_hsts:
            resp.headers.setdefault(
                "Strict-Transport-Security",
                "max-age=31536000; includeSubDomains",
            )

        return resp

    logger.info(f"Flask app initialized (env={config.app_env})")
    return app


def main() -> None:
    config = load_config()
    app = create_app(config)
    app.run(host="0.0.0.0", port=config.port, debug=config.debug_logging)


if __name__ == "__main__":
    main()
