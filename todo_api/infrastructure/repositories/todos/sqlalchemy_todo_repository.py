# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Sequence
from datetime import UTC, datetime

from todo_api.domain.todos.entities import Todo as DomainTodo
from todo_api.domain.todos.repositories import TodoRepository
from todo_api.infrastructure.db import Database
from todo_api.infrastructure.db.models import Todo


def _to_domain(row: Todo) -> DomainTodo:
    created_at = row.created_at
    if created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=UTC)
    return DomainTodo(
        id=row.id,
        user_id=row.user_id,
        content=row.content,
        created_at=created_at,
    )


class SqlAlchemyTodoRepository(TodoRepository):
    """Todo store; every lookup is scoped by the owning user id."""

    def __init__(self, database: Database) -> None:
        self._database = database

    def list_for_user(self, user_id: int) -> Sequence[DomainTodo]:
        with self._database.session_scope() as session:
            rows = (
                session.query(Todo)
                .filter(Todo.user_id == user_id)
                .order_by(Todo.id.asc())
                .all()
            )
            return [_to_domain(row) for row in rows]

    def add(self, user_id: int, content: str) -> DomainTodo:
        with self._database.session_scope() as session:
            row = Todo(user_id=user_id, content=content, created_at=datetime.now(UTC))
            session.add(row)
            session.flush()
            session.refresh(row)
            return _to_domain(row)

    def update_content(self, todo_id: int, user_id: int, content: str) -> DomainTodo | None:
        with self._database.session_scope() as session:
            row = (
                session.query(Todo)
                .filter(Todo.id == todo_id, Todo.user_id == user_id)
                .with_for_update()
                .first()
            )
            if row is None:
                return None
            row.content = content
            session.flush()
            return _to_domain(row)

    def delete(self, todo_id: int, user_id: int) -> bool:
        with self._database.session_scope() as session:
            deleted = (
                session.query(Todo)
                .filter(Todo.id == todo_id, Todo.user_id == user_id)
                .delete(synchronize_session=False)
            )
            return deleted > 0
