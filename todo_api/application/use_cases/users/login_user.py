# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from todo_api.domain.users.entities import IssuedTokens
from todo_api.domain.users.exceptions import InvalidCredentialsError
from todo_api.domain.users.repositories import PasswordHasher, TokenService, UserRepository
from todo_api.shared.logging import logger


class LoginUserUseCase:
    """Exchange a username/password pair for an access and a refresh token.

    The refresh token is written onto the user record, replacing whatever was
    stored before, so only the most recent sign-in can refresh. Unknown users
    and wrong passwords fail with the same :class:`InvalidCredentialsError`.
    """

    def __init__(
        self,
        *,
        users: UserRepository,
        tokens: TokenService,
        password_hasher: PasswordHasher,
    ) -> None:
        self._users = users
        self._tokens = tokens
        self._password_hasher = password_hasher

    def execute(self, username: str, password: str) -> IssuedTokens:
        user = self._users.find_by_username(username)
        if user is None or not self._password_hasher.verify(password, user.password_hash):
            logger.info("auth.signin: rejected")
            raise InvalidCredentialsError()

        access_token = self._tokens.issue_access_token(user)
        refresh_token = self._tokens.issue_refresh_token(user)
        self._users.set_refresh_token(user.id, refresh_token)

        logger.info(f"auth.signin: ok user_id={user.id}")
        return IssuedTokens(access_token=access_token, refresh_token=refresh_token)
