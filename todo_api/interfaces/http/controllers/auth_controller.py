# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, jsonify
from pydantic import ValidationError

from todo_api.application.use_cases.users.login_user import LoginUserUseCase
from todo_api.application.use_cases.users.refresh_token import RefreshAccessTokenUseCase
from todo_api.application.use_cases.users.register_user import RegisterUserUseCase
from todo_api.interfaces.http.dto.auth import (
    AccessTokenDTO,
    CredentialsRequestDTO,
    MessageDTO,
)
from todo_api.shared.config import SecurityConfig
from todo_api.shared.errors import (
    AppError,
    ForbiddenError,
    InfrastructureError,
    UnauthorizedError,
)
from todo_api.shared.errors.validation import raise_validation_error
from todo_api.shared.logging import logger
from todo_api.shared.middleware.auth import REFRESH_COOKIE, require_refresh_cookie
from todo_api.shared.middleware.pipeline import Pipeline, RequestContext, parse_json


def _credentials(ctx: RequestContext) -> CredentialsRequestDTO:
    try:
        return CredentialsRequestDTO.model_validate(ctx.body)
    except ValidationError as exc:
        raise_validation_error(exc)


class AuthController:
    def __init__(
        self,
        *,
        register_use_case: RegisterUserUseCase,
        login_use_case: LoginUserUseCase,
        refresh_use_case: RefreshAccessTokenUseCase,
        security: SecurityConfig,
    ) -> None:
        self._register_use_case = register_use_case
        self._login_use_case = login_use_case
        self._refresh_use_case = refresh_use_case
        self._security = security

    def signup(self, ctx: RequestContext) -> tuple[Response, int]:
        dto = _credentials(ctx)
        try:
            self._register_use_case.execute(dto.username, dto.password)
        except AppError:
            raise
        except Exception as exc:
            logger.exception("auth.signup: err")
            raise InfrastructureError(
                code="signup_failed",
                message="Error creating user",
                context={"detail": str(exc)},
            ) from exc

        return jsonify(MessageDTO(message="User created").model_dump()), 201

    def signin(self, ctx: RequestContext) -> tuple[Response, int]:
        dto = _credentials(ctx)
        try:
            issued = self._login_use_case.execute(dto.username, dto.password)
        except AppError:
            raise
        except Exception as exc:
            logger.exception("auth.signin: err")
            raise InfrastructureError(
                code="signin_failed",
                message="Error signing in",
                context={"detail": str(exc)},
            ) from exc

        payload = AccessTokenDTO(access_token=issued.access_token).model_dump(by_alias=True)
        response = jsonify(payload)
        response.set_cookie(
            REFRESH_COOKIE,
            issued.refresh_token,
            httponly=True,
            samesite=self._security.cookie_samesite,
            secure=self._security.cookie_secure,
        )
        return response, 200

    def refresh(self, ctx: RequestContext) -> tuple[Response, int]:
        if ctx.refresh_token is None:
            raise UnauthorizedError("missing_refresh_token", message="Missing refresh token")
        try:
            access_token = self._refresh_use_case.execute(ctx.refresh_token)
        except AppError:
            raise
        except Exception as exc:
            logger.exception("auth.refresh: err")
            raise ForbiddenError("refresh_failed", message="Error refreshing token") from exc

        payload = AccessTokenDTO(access_token=access_token).model_dump(by_alias=True)
        return jsonify(payload), 200

    def as_blueprint(self) -> Blueprint:
        public = Pipeline(parse_json)
        with_refresh_cookie = Pipeline(require_refresh_cookie(REFRESH_COOKIE))

        bp = Blueprint("auth", __name__)
        bp.add_url_rule("/signup", view_func=public(self.signup), methods=["POST"])
        bp.add_url_rule("/signin", view_func=public(self.signin), methods=["POST"])
        bp.add_url_rule("/token", view_func=with_refresh_cookie(self.refresh), methods=["POST"])
        return bp
