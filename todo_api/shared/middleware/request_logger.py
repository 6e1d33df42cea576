# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import hashlib
import secrets
import time
from collections.abc import Iterable, Mapping

from flask import Flask, Response, g, request

from todo_api.shared.logging import clear_correlation_id, logger, set_correlation_id

from .pipeline import client_address

REQUEST_ID_HEADER = "X-Request-ID"

_SECRET_HEADERS = frozenset({"authorization", "cookie", "set-cookie", "x-api-key"})
_SECRET_PARAM_HINTS = ("password", "token", "secret", "key", "auth")


def _fingerprint(value: str) -> str:
    return f"<hashed:{hashlib.sha256(value.encode()).hexdigest()[:8]}>"


def _safe_headers(headers: Iterable[tuple[str, str]]) -> dict[str, str]:
    return {
        key: _fingerprint(value) if key.lower() in _SECRET_HEADERS else value
        for key, value in headers
    }


def _safe_params(params: Mapping[str, str]) -> dict[str, str]:
    return {
        key: "<redacted>" if any(hint in key.lower() for hint in _SECRET_PARAM_HINTS) else value
        for key, value in params.items()
    }


def _elapsed_ms() -> float:
    started = getattr(g, "request_started_at", None)
    if started is None:
        return 0.0
    return (time.perf_counter() - started) * 1000


def configure_request_logging(app: Flask, *, debug_mode: bool = False) -> None:
    """Log every request with a correlation id echoed in ``X-Request-ID``.

    ``debug_mode`` adds headers, query parameters and the caller's user id,
    with credentials fingerprinted rather than logged.
    """

    @app.before_request
    def _open() -> None:
        correlation_id = request.headers.get(REQUEST_ID_HEADER) or secrets.token_urlsafe(8)
        set_correlation_id(correlation_id)
        g.correlation_id = correlation_id
        g.request_started_at = time.perf_counter()

        line = f"--> {request.method} {request.path} from {client_address()}"
        if debug_mode:
            line += (
                f" query={_safe_params(request.args)}"
                f" headers={_safe_headers(request.headers.items())}"
                f" body_size={request.content_length or 0}"
            )
        logger.info(line)

    @app.after_request
    def _close(response: Response) -> Response:
        line = (
            f"<-- {request.method} {request.path} "
            f"status={response.status_code} dt_ms={_elapsed_ms():.0f}"
        )
        if debug_mode:
            line += f" user={getattr(g, 'user_id', None)}"
        logger.info(line)
        response.headers.setdefault(REQUEST_ID_HEADER, getattr(g, "correlation_id", "-"))
        return response

    @app.teardown_request
    def _teardown(exc: BaseException | None) -> None:
        if exc is not None:
            if debug_mode:
                logger.opt(exception=exc).error(
                    f"request failed: {request.method} {request.path} "
                    f"user={getattr(g, 'user_id', None)}"
                )
            else:
                logger.error(f"request failed: {type(exc).__name__} on {request.path}")
        clear_correlation_id()


__all__ = ["REQUEST_ID_HEADER", "configure_request_logging"]
