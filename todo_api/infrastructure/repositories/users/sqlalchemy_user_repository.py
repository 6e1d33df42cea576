# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import UTC

from sqlalchemy.exc import IntegrityError

from todo_api.domain.users.entities import User as DomainUser
from todo_api.domain.users.exceptions import UserAlreadyExistsError
from todo_api.domain.users.repositories import UserRepository
from todo_api.infrastructure.db import Database
from todo_api.infrastructure.db.models import User


def _to_domain(row: User) -> DomainUser:
    created_at = row.created_at
    if created_at is not None and created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=UTC)
    return DomainUser(
        id=row.id,
        username=row.username,
        password_hash=row.password_hash,
        refresh_token=row.refresh_token,
        created_at=created_at,
    )


class SqlAlchemyUserRepository(UserRepository):
    def __init__(self, database: Database) -> None:
        self._database = database

    def find_by_username(self, username: str) -> DomainUser | None:
        with self._database.session_scope() as session:
            row = session.query(User).filter(User.username == username).first()
            return _to_domain(row) if row else None

    def find_by_id(self, user_id: int) -> DomainUser | None:
        with self._database.session_scope() as session:
            row = session.get(User, user_id)
            return _to_domain(row) if row else None

    def add(self, user: DomainUser) -> DomainUser:
        with self._database.session_scope() as session:
            row = User(
                username=user.username,
                password_hash=user.password_hash,
                refresh_token=user.refresh_token,
            )
            if user.created_at is not None:
                row.created_at = user.created_at
            session.add(row)
            try:
                session.flush()
            except IntegrityError as exc:
                raise UserAlreadyExistsError() from exc
            session.refresh(row)
            return _to_domain(row)

    def set_refresh_token(self, user_id: int, token: str | None) -> None:
        with self._database.session_scope() as session:
            session.query(User).filter(User.id == user_id).update(
                {User.refresh_token: token}, synchronize_session=False
            )
