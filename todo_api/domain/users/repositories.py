# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Protocol

from .entities import User


class UserRepository(Protocol):
    def find_by_username(self, username: str) -> User | None: ...
    def find_by_id(self, user_id: int) -> User | None: ...
    def add(self, user: User) -> User: ...
    def set_refresh_token(self, user_id: int, token: str | None) -> None: ...


class PasswordHasher(Protocol):
    def hash(self, password: str) -> str: ...
    def verify(self, password: str, hashed: str) -> bool: ...


class TokenService(Protocol):
    def issue_access_token(self, user: User) -> str: ...
    def issue_refresh_token(self, user: User) -> str: ...
    def verify_access_token(self, token: str) -> int: ...
    def verify_refresh_token(self, token: str) -> int: ...
