# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from werkzeug.security import check_password_hash, generate_password_hash

from todo_api.domain.users.repositories import PasswordHasher


class WerkzeugPasswordHasher(PasswordHasher):
    """Salted one-way password digests stored on ``users.password``.

    ``method`` is any werkzeug method string (``scrypt``, ``pbkdf2:sha256:600000``).
    Digests embed their method, so verifying rows written under an older
    method keeps working after the setting changes.
    """

    def __init__(self, *, method: str = "scrypt", salt_length: int = 16) -> None:
        self._method = method
        self._salt_length = salt_length

    def hash(self, password: str) -> str:
        return generate_password_hash(
            password, method=self._method, salt_length=self._salt_length
        )

    def verify(self, password: str, hashed: str) -> bool:
        if not hashed:
            return False
        return check_password_hash(hashed, password)
