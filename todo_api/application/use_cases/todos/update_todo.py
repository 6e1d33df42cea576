# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from todo_api.domain.todos.entities import Todo, ensure_content
from todo_api.domain.todos.exceptions import TodoNotFoundError
from todo_api.domain.todos.repositories import TodoRepository
from todo_api.shared.logging import logger


class UpdateTodoUseCase:
    def __init__(self, *, todos: TodoRepository) -> None:
        self._todos = todos

    def execute(self, user_id: int, todo_id: int, content: str) -> Todo:
        # Someone else's todo is reported exactly like a missing one.
        updated = self._todos.update_content(todo_id, user_id, ensure_content(content))
        if updated is None:
            logger.info(f"todos.update: not_found (user_id={user_id}, todo_id={todo_id})")
            raise TodoNotFoundError(context={"todo_id": todo_id})
        logger.info(f"todos.update: ok (user_id={user_id}, todo_id={todo_id})")
        return updated
