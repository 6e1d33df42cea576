# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from flask import Flask, Response, g, jsonify, request
from werkzeug.exceptions import HTTPException

from todo_api.shared.logging import logger

from .base import AppError


def client_address() -> str:
    # Socket peer; behind a reverse proxy ProxyFix rewrites it from X-Forwarded-For.
    return request.remote_addr or "unknown"


def handle_app_error(
    error: AppError, *, expose_details: bool = False
) -> tuple[Response, HTTPStatus]:
    include_context = expose_details or error.status < HTTPStatus.INTERNAL_SERVER_ERROR
    response = jsonify(error.to_dict(include_context=include_context))
    return response, error.status


def register_error_handler(
    app: Flask,
    *,
    expose_details: bool = False,
    debug_mode: bool = False,
    default_status: HTTPStatus = HTTPStatus.INTERNAL_SERVER_ERROR,
) -> None:
    @app.errorhandler(AppError)
    def _handle_app_error(exc: AppError):
        if exc.status >= HTTPStatus.INTERNAL_SERVER_ERROR:
            logger.error(f"Handled error {exc.code} on {request.method} {request.path}")
        else:
            logger.info(
                f"Handled application error {exc.code} on {request.method} {request.path}"
            )
        return handle_app_error(exc, expose_details=expose_details)

    @app.errorhandler(HTTPException)
    def _handle_http(exc: HTTPException):
        return exc

    @app.errorhandler(Exception)
    def _handle_unexpected(exc: Exception):
        user_id = getattr(g, "user_id", None)

        if debug_mode:
            logger.exception(
                f"Unhandled exception: {request.method} {request.path} "
                f"from {client_address()}, user={user_id}, "
                f"query={dict(request.args)}, body_size={len(request.data)}"
            )
        else:
            logger.error(f"Error: {type(exc).__name__} on {request.method} {request.path}")

        response = jsonify({"error": "internal_error"})
        return response, default_status
