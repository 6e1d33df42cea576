# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from todo_api.domain.todos.entities import Todo, ensure_content
from todo_api.domain.todos.repositories import TodoRepository
from todo_api.shared.logging import logger


class CreateTodoUseCase:
    def __init__(self, *, todos: TodoRepository) -> None:
        self._todos = todos

    def execute(self, user_id: int, content: str) -> Todo:
        todo = self._todos.add(user_id, ensure_content(content))
        logger.info(f"todos.create: ok (user_id={user_id}, todo_id={todo.id})")
        return todo
