# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Signed access and refresh tokens.

Access tokens embed the user id and expire after ``access_ttl_seconds``.
Refresh tokens embed the user id and carry no expiry; they stay valid until a
later sign-in overwrites the copy stored on the user record. The two kinds
are signed with different secrets, so neither can be passed off as the other.
"""

from __future__ import annotations

import secrets
from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from typing import Any

import jwt

from todo_api.domain.users.entities import User
from todo_api.domain.users.exceptions import InvalidTokenError
from todo_api.domain.users.repositories import TokenService
from todo_api.shared.config import TokenConfig
from todo_api.shared.logging import logger


def _utcnow() -> datetime:
    return datetime.now(UTC)


class JwtTokenService(TokenService):
    def __init__(
        self,
        config: TokenConfig,
        *,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._access_secret = config.access_secret
        self._refresh_secret = config.refresh_secret
        self._algorithm = config.algorithm
        self._access_ttl = timedelta(seconds=config.access_ttl_seconds)
        self._clock = clock

    def _claims(self, user: User) -> dict[str, Any]:
        return {
            "id": user.id,
            "iat": self._clock(),
            "jti": secrets.token_urlsafe(12),
        }

    def issue_access_token(self, user: User) -> str:
        claims = self._claims(user)
        claims["exp"] = claims["iat"] + self._access_ttl
        return jwt.encode(claims, self._access_secret, algorithm=self._algorithm)

    def issue_refresh_token(self, user: User) -> str:
        return jwt.encode(self._claims(user), self._refresh_secret, algorithm=self._algorithm)

    def verify_access_token(self, token: str) -> int:
        return self._decode(token, self._access_secret, required=["id", "exp"])

    def verify_refresh_token(self, token: str) -> int:
        return self._decode(token, self._refresh_secret, required=["id"])

    def _decode(self, token: str, secret: str, *, required: list[str]) -> int:
        try:
            payload = jwt.decode(
                token,
                secret,
                algorithms=[self._algorithm],
                options={"require": required},
            )
        except jwt.ExpiredSignatureError as exc:
            raise InvalidTokenError(context={"reason": "expired"}) from exc
        except jwt.PyJWTError as exc:
            logger.debug(f"tokens: rejected ({type(exc).__name__})")
            raise InvalidTokenError(context={"reason": "invalid"}) from exc

        user_id = payload.get("id")
        if not isinstance(user_id, int) or isinstance(user_id, bool):
            raise InvalidTokenError(context={"reason": "invalid"})
        return user_id
