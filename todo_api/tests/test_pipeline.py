from __future__ import annotations

from unittest.mock import MagicMock

import pytest
from flask import Flask, Response, jsonify

from todo_api.domain.users.exceptions import InvalidTokenError
from todo_api.shared.errors import UnauthorizedError
from todo_api.shared.middleware.auth import require_access_token, require_refresh_cookie
from todo_api.shared.middleware.pipeline import (
    Pipeline,
    RequestContext,
    parse_json,
    short_circuit,
)


@pytest.fixture()
def flask_app() -> Flask:
    return Flask(__name__)


def test_stages_run_in_order_before_handler(flask_app: Flask) -> None:
    calls: list[str] = []

    def first(ctx: RequestContext) -> RequestContext:
        calls.append("first")
        return ctx

    def second(ctx: RequestContext) -> RequestContext:
        calls.append("second")
        ctx.user_id = 5
        return ctx

    def handler(ctx: RequestContext):
        calls.append("handler")
        return jsonify({"user_id": ctx.user_id, "item": ctx.path_args["item"]}), 200

    flask_app.add_url_rule("/items/<item>", view_func=Pipeline(first, second)(handler))

    response = flask_app.test_client().get("/items/abc")

    assert calls == ["first", "second", "handler"]
    assert response.get_json() == {"user_id": 5, "item": "abc"}


def test_short_circuit_skips_later_stages(flask_app: Flask) -> None:
    later = MagicMock()
    handled: list[RequestContext] = []

    def deny(ctx: RequestContext) -> Response:
        return short_circuit(UnauthorizedError())

    def handler(ctx: RequestContext):
        handled.append(ctx)
        return "", 204

    pipeline = Pipeline(deny).then(later)
    flask_app.add_url_rule("/guarded", view_func=pipeline(handler))

    response = flask_app.test_client().get("/guarded")

    assert response.status_code == 401
    assert response.get_json() == {"error": "unauthorized", "message": "Unauthorized"}
    later.assert_not_called()
    assert handled == []


def test_then_returns_extended_copy() -> None:
    base = Pipeline(parse_json)
    extended = base.then(parse_json)

    assert len(base.stages) == 1
    assert len(extended.stages) == 2


def test_parse_json_tolerates_non_object_bodies(flask_app: Flask) -> None:
    with flask_app.test_request_context("/", method="POST", json=["not", "an", "object"]):
        assert parse_json(RequestContext()).body == {}
    with flask_app.test_request_context("/", method="POST", data="{broken"):
        assert parse_json(RequestContext()).body == {}
    with flask_app.test_request_context("/", method="POST", json={"content": "x"}):
        assert parse_json(RequestContext()).body == {"content": "x"}


def test_client_address_ignores_forwarded_header(flask_app: Flask) -> None:
    seen: dict[str, str] = {}

    def handler(ctx: RequestContext):
        seen["addr"] = ctx.client_address
        return "", 204

    flask_app.add_url_rule("/", view_func=Pipeline()(handler))
    flask_app.test_client().get(
        "/",
        headers={"X-Forwarded-For": "203.0.113.9"},
        environ_base={"REMOTE_ADDR": "198.51.100.7"},
    )

    assert seen["addr"] == "198.51.100.7"


@pytest.mark.parametrize(
    ("headers", "status"),
    [
        ({}, 401),
        ({"Authorization": "Token abc"}, 401),
        ({"Authorization": "Bearer bad"}, 403),
    ],
)
def test_access_token_stage_rejections(
    flask_app: Flask, headers: dict[str, str], status: int
) -> None:
    tokens = MagicMock()
    tokens.verify_access_token.side_effect = InvalidTokenError()
    stage = require_access_token(tokens)

    with flask_app.test_request_context("/todos", headers=headers):
        result = stage(RequestContext())

    assert isinstance(result, Response)
    assert result.status_code == status


def test_access_token_stage_sets_user(flask_app: Flask) -> None:
    tokens = MagicMock()
    tokens.verify_access_token.return_value = 9
    stage = require_access_token(tokens)

    with flask_app.test_request_context("/todos", headers={"Authorization": "Bearer good"}):
        result = stage(RequestContext())

    assert isinstance(result, RequestContext)
    assert result.user_id == 9
    tokens.verify_access_token.assert_called_once_with("good")


def test_refresh_cookie_stage(flask_app: Flask) -> None:
    stage = require_refresh_cookie("refreshToken")

    with flask_app.test_request_context("/token", method="POST"):
        missing = stage(RequestContext())
    with flask_app.test_request_context(
        "/token", method="POST", headers={"Cookie": "refreshToken=abc"}
    ):
        present = stage(RequestContext())

    assert isinstance(missing, Response)
    assert missing.status_code == 401
    assert missing.get_json()["error"] == "missing_refresh_token"
    assert isinstance(present, RequestContext)
    assert present.refresh_token == "abc"
