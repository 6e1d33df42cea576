# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .use_cases.todos.create_todo import CreateTodoUseCase
from .use_cases.todos.delete_todo import DeleteTodoUseCase
from .use_cases.todos.list_todos import ListTodosUseCase
from .use_cases.todos.update_todo import UpdateTodoUseCase
from .use_cases.users.login_user import LoginUserUseCase
from .use_cases.users.refresh_token import RefreshAccessTokenUseCase
from .use_cases.users.register_user import RegisterUserUseCase

__all__ = [
    "CreateTodoUseCase",
    "DeleteTodoUseCase",
    "ListTodosUseCase",
    "LoginUserUseCase",
    "RefreshAccessTokenUseCase",
    "RegisterUserUseCase",
    "UpdateTodoUseCase",
]
