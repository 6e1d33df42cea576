# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from todo_api.shared.errors.base import DomainError


class UserAlreadyExistsError(DomainError):
    # Conflict; reported as 400 to keep the wire contract of existing clients
    code = "user_already_exists"
    status = HTTPStatus.BAD_REQUEST
    message = "User already exists"


class InvalidCredentialsError(DomainError):
    code = "invalid_credentials"
    status = HTTPStatus.UNAUTHORIZED
    message = "Invalid credentials"


class InvalidTokenError(DomainError):
    code = "invalid_token"
    status = HTTPStatus.FORBIDDEN
    message = "Invalid token"


class InvalidRefreshTokenError(DomainError):
    code = "invalid_refresh_token"
    status = HTTPStatus.FORBIDDEN
    message = "Invalid refresh token"
