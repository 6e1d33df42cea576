# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

import sys

from flask import Flask
from flask_cors import CORS
from pydantic import ValidationError
from werkzeug.middleware.proxy_fix import ProxyFix

from todo_api.infrastructure.container import Container
from todo_api.shared.config import AppConfig, load_config
from todo_api.shared.errors import InfrastructureError
from todo_api.shared.logging import logger, setup_logging
from todo_api.shared.middleware.error_handler import configure_error_handling
from todo_api.shared.middleware.request_logger import configure_request_logging

CONTAINER_KEY = "todo_api.container"


def create_app(config: AppConfig | None = None) -> Flask:
    config = config or load_config()
    setup_logging(config.log_level, config.log_file)
    for warning in config.security_warnings():
        logger.warning(f"config: {warning}")

    container = Container(config)
    container.database.ping()
    container.database.init_schema()

    app = Flask(__name__)
    if config.security.trusted_proxy_count:
        app.wsgi_app = ProxyFix(  # type: ignore[method-assign]
            app.wsgi_app, x_for=config.security.trusted_proxy_count
        )
    app.extensions[CONTAINER_KEY] = container
    configure_error_handling(
        app,
        expose_details=config.expose_error_details,
        debug_mode=config.debug_logging,
    )
    configure_request_logging(app, debug_mode=config.debug_logging)

    CORS(
        app,
        origins=config.security.allowed_origins,
        supports_credentials="*" not in config.security.allowed_origins,
    )
    app.register_blueprint(container.auth_controller.as_blueprint())
    app.register_blueprint(container.todos_controller.as_blueprint())

    @app.after_request
    def _add_security_headers(resp):
        resp.headers.setdefault("X-Frame-Options", "DENY")

        resp.headers.setdefault("Referrer-Policy", "no-referrer")

        resp.headers.setdefault("X-Content-Type-Options", "nosniff")

        if config.security.enable_hsts:
            resp.headers.setdefault(
                "Strict-Transport-Security",
                "max-age=31536000; includeSubDomains",
            )

        return resp

    logger.info("Flask app initialized")
    return app


def main() -> None:
    try:
        config = load_config()
    except ValidationError as exc:
        setup_logging()
        logger.error(f"startup: invalid configuration\n{exc}")
        sys.exit(1)

    try:
        app = create_app(config)
    except InfrastructureError as exc:
        logger.error(f"startup: {exc.message or exc.code}, aborting")
        sys.exit(1)

    logger.info(f"Server is running on http://{config.host}:{config.port}")
    app.run(host=config.host, port=config.port)


if __name__ == "__main__":
    main()
