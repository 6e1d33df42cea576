# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig


from __future__ import annotations

from time import perf_counter

from flask import Blueprint, Response, jsonify
from pydantic import ValidationError

from todo_api.application.use_cases.todos.create_todo import CreateTodoUseCase
from todo_api.application.use_cases.todos.delete_todo import DeleteTodoUseCase
from todo_api.application.use_cases.todos.list_todos import ListTodosUseCase
from todo_api.application.use_cases.todos.update_todo import UpdateTodoUseCase
from todo_api.domain.todos.exceptions import TodoNotFoundError
from todo_api.domain.users.repositories import TokenService
from todo_api.interfaces.http.dto.auth import MessageDTO
from todo_api.interfaces.http.dto.todos import TodoContentRequestDTO, TodoDTO
from todo_api.shared.errors import AppError, InfrastructureError, UnauthorizedError
from todo_api.shared.errors.validation import raise_validation_error
from todo_api.shared.logging import logger
from todo_api.shared.middleware.auth import require_access_token
from todo_api.shared.middleware.pipeline import Pipeline, RequestContext, parse_json
from todo_api.shared.middleware.rate_limit import FixedWindowRateLimiter, rate_limited


def _content(ctx: RequestContext) -> str:
    try:
        return TodoContentRequestDTO.model_validate(ctx.body).content
    except ValidationError as exc:
        raise_validation_error(exc, code="missing_content", message="Missing content")


def _todo_id(ctx: RequestContext) -> int:
    raw = str(ctx.path_args.get("todo_id", ""))
    if not (raw.isascii() and raw.isdigit()) or len(raw) > 18:
        raise TodoNotFoundError(context={"todo_id": raw})
    return int(raw)


def _owner(ctx: RequestContext) -> int:
    if ctx.user_id is None:
        raise UnauthorizedError()
    return ctx.user_id


class TodosController:
    def __init__(
        self,
        *,
        list_use_case: ListTodosUseCase,
        create_use_case: CreateTodoUseCase,
        update_use_case: UpdateTodoUseCase,
        delete_use_case: DeleteTodoUseCase,
        tokens: TokenService,
        limiter: FixedWindowRateLimiter,
        rate_limit_enabled: bool = True,
    ) -> None:
        self._list_use_case = list_use_case
        self._create_use_case = create_use_case
        self._update_use_case = update_use_case
        self._delete_use_case = delete_use_case
        self._tokens = tokens
        self._limiter = limiter
        self._rate_limit_enabled = rate_limit_enabled

    def as_blueprint(self) -> Blueprint:
        authed = Pipeline(parse_json, require_access_token(self._tokens))
        throttled = authed.then(rate_limited(self._limiter, enabled=self._rate_limit_enabled))

        bp = Blueprint("todos", __name__, url_prefix="/todos")
        bp.add_url_rule("", view_func=authed(self.list_todos), methods=["GET"])
        bp.add_url_rule("", view_func=throttled(self.create), methods=["POST"])
        bp.add_url_rule("/<todo_id>", view_func=authed(self.update), methods=["PUT"])
        bp.add_url_rule("/<todo_id>", view_func=authed(self.delete), methods=["DELETE"])
        return bp

    def list_todos(self, ctx: RequestContext) -> tuple[Response, int]:
        t0 = perf_counter()
        user_id = _owner(ctx)
        try:
            items = self._list_use_case.execute(user_id)
        except Exception as exc:
            logger.exception(f"todos.list: err (user_id={user_id})")
            raise InfrastructureError(
                code="todos_list_failed",
                message="Error fetching todos",
                context={"detail": str(exc)},
            ) from exc

        dt = (perf_counter() - t0) * 1000
        logger.info(f"todos.list: ok (user_id={user_id}, n={len(items)}, dt_ms={dt:.0f})")
        return jsonify([TodoDTO.from_entity(todo).to_json() for todo in items]), 200

    def create(self, ctx: RequestContext) -> tuple[Response, int]:
        user_id = _owner(ctx)
        content = _content(ctx)
        try:
            todo = self._create_use_case.execute(user_id, content)
        except AppError:
            raise
        except Exception as exc:
            logger.exception(f"todos.create: err (user_id={user_id})")
            raise InfrastructureError(
                code="todo_create_failed",
                message="Error creating todo",
                context={"detail": str(exc)},
            ) from exc

        return jsonify(TodoDTO.from_entity(todo).to_json()), 201

    def update(self, ctx: RequestContext) -> tuple[Response, int]:
        user_id = _owner(ctx)
        content = _content(ctx)
        todo_id = _todo_id(ctx)
        try:
            todo = self._update_use_case.execute(user_id, todo_id, content)
        except AppError:
            raise
        except Exception as exc:
            logger.exception(f"todos.update: err (user_id={user_id}, todo_id={todo_id})")
            raise InfrastructureError(
                code="todo_update_failed",
                message="Error updating todo",
                context={"detail": str(exc)},
            ) from exc

        return jsonify(TodoDTO.from_entity(todo).to_json()), 200

    def delete(self, ctx: RequestContext) -> tuple[Response, int]:
        user_id = _owner(ctx)
        todo_id = _todo_id(ctx)
        try:
            self._delete_use_case.execute(user_id, todo_id)
        except AppError:
            raise
        except Exception as exc:
            logger.exception(f"todos.delete: err (user_id={user_id}, todo_id={todo_id})")
            raise InfrastructureError(
                code="todo_delete_failed",
                message="Error deleting todo",
                context={"detail": str(exc)},
            ) from exc

        return jsonify(MessageDTO(message="Todo deleted").model_dump()), 200
