from __future__ import annotations

from typing import cast
from unittest.mock import MagicMock

import pytest
from flask import Flask

from todo_api.application.use_cases.users.login_user import LoginUserUseCase
from todo_api.domain.users.entities import IssuedTokens
from todo_api.domain.users.exceptions import InvalidRefreshTokenError, UserAlreadyExistsError
from todo_api.interfaces.http.controllers.auth_controller import AuthController
from todo_api.shared.config import SecurityConfig
from todo_api.shared.errors import UnauthorizedError
from todo_api.shared.middleware.error_handler import configure_error_handling
from todo_api.shared.middleware.pipeline import RequestContext


@pytest.fixture()
def flask_app() -> Flask:
    app = Flask(__name__)
    configure_error_handling(app)
    return app


def _controller(**use_cases: object) -> AuthController:
    return AuthController(
        register_use_case=use_cases.get("register", MagicMock()),  # type: ignore[arg-type]
        login_use_case=use_cases.get("login", MagicMock()),  # type: ignore[arg-type]
        refresh_use_case=use_cases.get("refresh", MagicMock()),  # type: ignore[arg-type]
        security=SecurityConfig(cookie_secure=True, cookie_samesite="Strict"),
    )


def test_signin_sets_http_only_refresh_cookie(flask_app: Flask) -> None:
    login_called: dict[str, tuple[str, str]] = {}

    class StubLogin:
        def execute(self, username: str, password: str) -> IssuedTokens:
            login_called["args"] = (username, password)
            return IssuedTokens(access_token="access123", refresh_token="refresh123")

    controller = _controller(login=cast(LoginUserUseCase, StubLogin()))
    flask_app.register_blueprint(controller.as_blueprint())

    with flask_app.test_client() as client:
        response = client.post("/signin", json={"username": "alice", "password": "secret123"})

    assert response.status_code == 200
    assert login_called["args"] == ("alice", "secret123")
    assert response.get_json() == {"accessToken": "access123"}
    cookie = response.headers["Set-Cookie"]
    assert cookie.startswith("refreshToken=refresh123")
    assert "HttpOnly" in cookie
    assert "Secure" in cookie
    assert "SameSite=Strict" in cookie


def test_signup_returns_201(flask_app: Flask) -> None:
    register = MagicMock()
    flask_app.register_blueprint(_controller(register=register).as_blueprint())

    with flask_app.test_client() as client:
        response = client.post("/signup", json={"username": "alice", "password": "secret123"})

    assert response.status_code == 201
    assert response.get_json() == {"message": "User created"}
    register.execute.assert_called_once_with("alice", "secret123")


@pytest.mark.parametrize(
    "body",
    [
        {},
        {"username": "alice"},
        {"password": "secret123"},
        {"username": "", "password": "secret123"},
        {"username": "alice", "password": ""},
    ],
)
def test_signup_missing_fields_returns_400(flask_app: Flask, body: dict[str, str]) -> None:
    register = MagicMock()
    flask_app.register_blueprint(_controller(register=register).as_blueprint())

    with flask_app.test_client() as client:
        response = client.post("/signup", json=body)

    assert response.status_code == 400
    payload = response.get_json()
    assert payload["error"] == "missing_fields"
    assert payload["message"] == "Missing fields"
    register.execute.assert_not_called()


def test_signup_duplicate_returns_400(flask_app: Flask) -> None:
    register = MagicMock()
    register.execute.side_effect = UserAlreadyExistsError()
    flask_app.register_blueprint(_controller(register=register).as_blueprint())

    with flask_app.test_client() as client:
        response = client.post("/signup", json={"username": "alice", "password": "secret123"})

    assert response.status_code == 400
    assert response.get_json() == {"error": "user_already_exists", "message": "User already exists"}


def test_signup_store_failure_hides_detail(flask_app: Flask) -> None:
    register = MagicMock()
    register.execute.side_effect = RuntimeError("disk on fire")
    flask_app.register_blueprint(_controller(register=register).as_blueprint())

    with flask_app.test_client() as client:
        response = client.post("/signup", json={"username": "alice", "password": "secret123"})

    assert response.status_code == 500
    assert response.get_json() == {"error": "signup_failed", "message": "Error creating user"}


def test_store_failure_detail_exposed_when_enabled() -> None:
    app = Flask(__name__)
    configure_error_handling(app, expose_details=True)
    login = MagicMock()
    login.execute.side_effect = RuntimeError("disk on fire")
    app.register_blueprint(_controller(login=login).as_blueprint())

    with app.test_client() as client:
        response = client.post("/signin", json={"username": "alice", "password": "secret123"})

    assert response.status_code == 500
    assert response.get_json()["context"] == {"detail": "disk on fire"}


def test_refresh_without_cookie_returns_401(flask_app: Flask) -> None:
    refresh = MagicMock()
    flask_app.register_blueprint(_controller(refresh=refresh).as_blueprint())

    with flask_app.test_client() as client:
        response = client.post("/token")

    assert response.status_code == 401
    refresh.execute.assert_not_called()


def test_refresh_with_cookie(flask_app: Flask) -> None:
    refresh = MagicMock()
    refresh.execute.return_value = "fresh-access"
    flask_app.register_blueprint(_controller(refresh=refresh).as_blueprint())

    with flask_app.test_client() as client:
        client.set_cookie("refreshToken", "refresh123")
        response = client.post("/token")

    assert response.status_code == 200
    assert response.get_json() == {"accessToken": "fresh-access"}
    refresh.execute.assert_called_once_with("refresh123")


def test_refresh_rejected_returns_403(flask_app: Flask) -> None:
    refresh = MagicMock()
    refresh.execute.side_effect = InvalidRefreshTokenError()
    flask_app.register_blueprint(_controller(refresh=refresh).as_blueprint())

    with flask_app.test_client() as client:
        client.set_cookie("refreshToken", "stale")
        response = client.post("/token")

    assert response.status_code == 403
    assert response.get_json()["error"] == "invalid_refresh_token"


def test_refresh_store_failure_returns_403(flask_app: Flask) -> None:
    refresh = MagicMock()
    refresh.execute.side_effect = RuntimeError("db down")
    flask_app.register_blueprint(_controller(refresh=refresh).as_blueprint())

    with flask_app.test_client() as client:
        client.set_cookie("refreshToken", "refresh123")
        response = client.post("/token")

    assert response.status_code == 403
    assert response.get_json() == {"error": "refresh_failed", "message": "Error refreshing token"}


def test_refresh_called_without_cookie_context_is_unauthorized(flask_app: Flask) -> None:
    refresh = MagicMock()
    controller = _controller(refresh=refresh)

    with flask_app.test_request_context("/token", method="POST"):
        with pytest.raises(UnauthorizedError):
            controller.refresh(RequestContext())

    refresh.execute.assert_not_called()


@pytest.mark.parametrize("field", ["username", "password"])
def test_signup_over_long_field_returns_field_too_long(flask_app: Flask, field: str) -> None:
    register = MagicMock()
    flask_app.register_blueprint(_controller(register=register).as_blueprint())
    body = {"username": "alice", "password": "secret123", field: "x" * 300}

    with flask_app.test_client() as client:
        response = client.post("/signup", json=body)

    assert response.status_code == 400
    payload = response.get_json()
    assert payload["error"] == "field_too_long"
    assert payload["message"] == "Field too long"
    assert payload["context"]["fields"] == [field]
    register.execute.assert_not_called()


def test_missing_field_wins_over_over_long_field(flask_app: Flask) -> None:
    flask_app.register_blueprint(_controller().as_blueprint())

    with flask_app.test_client() as client:
        response = client.post("/signup", json={"username": "a" * 65})

    assert response.status_code == 400
    assert response.get_json()["error"] == "missing_fields"
