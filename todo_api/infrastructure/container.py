# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from functools import cached_property

from todo_api.application.services.password_hashing import WerkzeugPasswordHasher
from todo_api.application.use_cases.todos.create_todo import CreateTodoUseCase
from todo_api.application.use_cases.todos.delete_todo import DeleteTodoUseCase
from todo_api.application.use_cases.todos.list_todos import ListTodosUseCase
from todo_api.application.use_cases.todos.update_todo import UpdateTodoUseCase
from todo_api.application.use_cases.users.login_user import LoginUserUseCase
from todo_api.application.use_cases.users.refresh_token import RefreshAccessTokenUseCase
from todo_api.application.use_cases.users.register_user import RegisterUserUseCase
from todo_api.infrastructure.auth import JwtTokenService
from todo_api.infrastructure.db import Database
from todo_api.infrastructure.repositories.todos.sqlalchemy_todo_repository import (
    SqlAlchemyTodoRepository,
)
from todo_api.infrastructure.repositories.users.sqlalchemy_user_repository import (
    SqlAlchemyUserRepository,
)
from todo_api.interfaces.http.controllers.auth_controller import AuthController
from todo_api.interfaces.http.controllers.todos_controller import TodosController
from todo_api.shared.config import AppConfig
from todo_api.shared.middleware.rate_limit import FixedWindowRateLimiter


class Container:
    def __init__(self, config: AppConfig) -> None:
        self.config = config

    @cached_property
    def database(self) -> Database:
        return Database(self.config.database)

    @cached_property
    def token_service(self) -> JwtTokenService:
        return JwtTokenService(self.config.tokens)

    @cached_property
    def password_hasher(self) -> WerkzeugPasswordHasher:
        return WerkzeugPasswordHasher(method=self.config.security.password_hash_method)

    @cached_property
    def user_repository(self) -> SqlAlchemyUserRepository:
        return SqlAlchemyUserRepository(self.database)

    @cached_property
    def todo_repository(self) -> SqlAlchemyTodoRepository:
        return SqlAlchemyTodoRepository(self.database)

    @cached_property
    def todo_creation_limiter(self) -> FixedWindowRateLimiter:
        return FixedWindowRateLimiter(
            self.config.security.rate_limit_requests,
            self.config.security.rate_limit_window,
        )

    # Session use cases

    @cached_property
    def register_user_use_case(self) -> RegisterUserUseCase:
        return RegisterUserUseCase(
            users=self.user_repository,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def login_user_use_case(self) -> LoginUserUseCase:
        return LoginUserUseCase(
            users=self.user_repository,
            tokens=self.token_service,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def refresh_access_token_use_case(self) -> RefreshAccessTokenUseCase:
        return RefreshAccessTokenUseCase(users=self.user_repository, tokens=self.token_service)

    # Todo use cases

    @cached_property
    def list_todos_use_case(self) -> ListTodosUseCase:
        return ListTodosUseCase(todos=self.todo_repository)

    @cached_property
    def create_todo_use_case(self) -> CreateTodoUseCase:
        return CreateTodoUseCase(todos=self.todo_repository)

    @cached_property
    def update_todo_use_case(self) -> UpdateTodoUseCase:
        return UpdateTodoUseCase(todos=self.todo_repository)

    @cached_property
    def delete_todo_use_case(self) -> DeleteTodoUseCase:
        return DeleteTodoUseCase(todos=self.todo_repository)

    # Controllers

    @cached_property
    def auth_controller(self) -> AuthController:
        return AuthController(
            register_use_case=self.register_user_use_case,
            login_use_case=self.login_user_use_case,
            refresh_use_case=self.refresh_access_token_use_case,
            security=self.config.security,
        )

    @cached_property
    def todos_controller(self) -> TodosController:
        return TodosController(
            list_use_case=self.list_todos_use_case,
            create_use_case=self.create_todo_use_case,
            update_use_case=self.update_todo_use_case,
            delete_use_case=self.delete_todo_use_case,
            tokens=self.token_service,
            limiter=self.todo_creation_limiter,
            rate_limit_enabled=self.config.security.enable_rate_limit,
        )
