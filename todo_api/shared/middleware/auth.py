# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Response, g, request

from todo_api.domain.users.exceptions import InvalidTokenError
from todo_api.domain.users.repositories import TokenService
from todo_api.shared.errors import ForbiddenError, UnauthorizedError
from todo_api.shared.logging import logger

from .pipeline import RequestContext, Stage, short_circuit

REFRESH_COOKIE = "refreshToken"


def _bearer_token() -> str:
    auth = request.headers.get("Authorization", "")
    if auth.startswith("Bearer "):
        return auth[7:].strip()
    return ""


def require_access_token(tokens: TokenService) -> Stage:
    def stage(ctx: RequestContext) -> RequestContext | Response:
        token = _bearer_token()
        if not token:
            logger.warning(
                f"No bearer token on {request.method} {request.path} from {ctx.client_address}"
            )
            return short_circuit(UnauthorizedError())

        try:
            user_id = tokens.verify_access_token(token)
        except InvalidTokenError as exc:
            logger.warning(
                f"Auth failed ({exc.context or 'invalid'}) on {request.method} {request.path}"
            )
            return short_circuit(ForbiddenError("invalid_token", message="Invalid token"))

        ctx.user_id = user_id
        g.user_id = user_id
        logger.debug(f"Auth OK: user={user_id} {request.method} {request.path}")
        return ctx

    return stage


def require_refresh_cookie(cookie_name: str = REFRESH_COOKIE) -> Stage:
    def stage(ctx: RequestContext) -> RequestContext | Response:
        token = request.cookies.get(cookie_name, "")
        if not token:
            return short_circuit(
                UnauthorizedError("missing_refresh_token", message="Missing refresh token")
            )
        ctx.refresh_token = token
        return ctx

    return stage


__all__ = ["REFRESH_COOKIE", "require_access_token", "require_refresh_cookie"]
