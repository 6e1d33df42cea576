# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Sequence

from todo_api.domain.todos.entities import Todo
from todo_api.domain.todos.repositories import TodoRepository


class ListTodosUseCase:
    def __init__(self, *, todos: TodoRepository) -> None:
        self._todos = todos

    def execute(self, user_id: int) -> Sequence[Todo]:
        return self._todos.list_for_user(user_id)
