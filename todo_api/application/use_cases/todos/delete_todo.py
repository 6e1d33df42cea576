# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from todo_api.domain.todos.exceptions import TodoNotFoundError
from todo_api.domain.todos.repositories import TodoRepository
from todo_api.shared.logging import logger


class DeleteTodoUseCase:
    def __init__(self, *, todos: TodoRepository) -> None:
        self._todos = todos

    def execute(self, user_id: int, todo_id: int) -> None:
        if not self._todos.delete(todo_id, user_id):
            logger.info(f"todos.delete: not_found (user_id={user_id}, todo_id={todo_id})")
            raise TodoNotFoundError(context={"todo_id": todo_id})
        logger.info(f"todos.delete: ok (user_id={user_id}, todo_id={todo_id})")
