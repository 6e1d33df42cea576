# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Ordered request-processing stages.

A stage receives the :class:`RequestContext` built for the current request and
either returns it (possibly enriched) or returns a :class:`flask.Response`,
which stops the pipeline and is sent to the client as is. The handler at the
end of a pipeline only ever sees a context that passed every stage.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from functools import wraps
from typing import Any, TypeAlias

from flask import Response, request
from flask.typing import ResponseReturnValue

from todo_api.shared.errors import AppError, handle_app_error
from todo_api.shared.errors.http import client_address


@dataclass(slots=True)
class RequestContext:
    path_args: dict[str, Any] = field(default_factory=dict)
    body: dict[str, Any] = field(default_factory=dict)
    client_address: str = "unknown"
    user_id: int | None = None
    refresh_token: str | None = None


Stage: TypeAlias = Callable[[RequestContext], "RequestContext | Response"]
Handler: TypeAlias = Callable[[RequestContext], ResponseReturnValue]


def short_circuit(error: AppError) -> Response:
    response, status = handle_app_error(error)
    response.status_code = int(status)
    return response


def parse_json(ctx: RequestContext) -> RequestContext:
    payload = request.get_json(silent=True)
    ctx.body = payload if isinstance(payload, dict) else {}
    return ctx


class Pipeline:
    def __init__(self, *stages: Stage) -> None:
        self._stages: tuple[Stage, ...] = stages

    @property
    def stages(self) -> tuple[Stage, ...]:
        return self._stages

    def then(self, *stages: Stage) -> Pipeline:
        return Pipeline(*self._stages, *stages)

    def run(self, ctx: RequestContext) -> RequestContext | Response:
        for stage in self._stages:
            result = stage(ctx)
            if isinstance(result, Response):
                return result
            ctx = result
        return ctx

    def __call__(self, handler: Handler) -> Callable[..., ResponseReturnValue]:
        @wraps(handler)
        def view(**path_args: Any) -> ResponseReturnValue:
            ctx = RequestContext(path_args=path_args, client_address=client_address())
            result = self.run(ctx)
            if isinstance(result, Response):
                return result
            return handler(result)

        return view


__all__ = [
    "Handler",
    "Pipeline",
    "RequestContext",
    "Stage",
    "client_address",
    "parse_json",
    "short_circuit",
]
