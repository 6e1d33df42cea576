# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import UTC, datetime

from todo_api.domain.users.entities import User
from todo_api.domain.users.exceptions import UserAlreadyExistsError
from todo_api.domain.users.repositories import PasswordHasher, UserRepository
from todo_api.shared.logging import logger


class RegisterUserUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        password_hasher: PasswordHasher,
    ) -> None:
        self._users = users
        self._password_hasher = password_hasher

    def execute(self, username: str, password: str) -> User:
        existing = self._users.find_by_username(username)
        if existing:
            logger.info(f"auth.signup: duplicate username={username}")
            raise UserAlreadyExistsError()
        hashed = self._password_hasher.hash(password)
        user = User(
            id=0,
            username=username,
            password_hash=hashed,
            refresh_token=None,
            created_at=datetime.now(UTC),
        )
        persisted = self._users.add(user)
        logger.info(f"auth.signup: ok user_id={persisted.id}")
        return persisted
