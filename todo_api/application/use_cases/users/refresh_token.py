# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import secrets

from todo_api.domain.users.exceptions import InvalidRefreshTokenError, InvalidTokenError
from todo_api.domain.users.repositories import TokenService, UserRepository
from todo_api.shared.logging import logger


class RefreshAccessTokenUseCase:
    def __init__(self, *, users: UserRepository, tokens: TokenService) -> None:
        self._users = users
        self._tokens = tokens

    def execute(self, refresh_token: str) -> str:
        try:
            user_id = self._tokens.verify_refresh_token(refresh_token)
        except InvalidTokenError as exc:
            logger.info("auth.refresh: bad signature")
            raise InvalidRefreshTokenError() from exc

        user = self._users.find_by_id(user_id)
        if user is None or user.refresh_token is None:
            logger.info(f"auth.refresh: no active session user_id={user_id}")
            raise InvalidRefreshTokenError()
        if not secrets.compare_digest(user.refresh_token, refresh_token):
            logger.info(f"auth.refresh: superseded token user_id={user_id}")
            raise InvalidRefreshTokenError()

        logger.info(f"auth.refresh: ok user_id={user_id}")
        return self._tokens.issue_access_token(user)
