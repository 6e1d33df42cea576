from __future__ import annotations

from typing import Any

from flask.testing import FlaskClient

from todo_api.shared.config import AppConfig, DatabaseConfig, SecurityConfig, TokenConfig

ACCESS_SECRET = "access-secret-for-tests-0123456789abcdef"
REFRESH_SECRET = "refresh-secret-for-tests-0123456789abcdef"


def make_config(**security: Any) -> AppConfig:
    return AppConfig(
        app_env="test",
        database=DatabaseConfig(url="sqlite://"),
        tokens=TokenConfig(access_secret=ACCESS_SECRET, refresh_secret=REFRESH_SECRET),
        security=SecurityConfig(**security),
    )


class ApiClient:
    def __init__(self, client: FlaskClient) -> None:
        self.client = client

    def signup(self, username: str = "alice", password: str = "secret123"):
        return self.client.post("/signup", json={"username": username, "password": password})

    def signin(self, username: str = "alice", password: str = "secret123"):
        return self.client.post("/signin", json={"username": username, "password": password})

    def register_and_sign_in(self, username: str = "alice", password: str = "secret123") -> str:
        assert self.signup(username, password).status_code == 201
        response = self.signin(username, password)
        assert response.status_code == 200
        return response.get_json()["accessToken"]

    @staticmethod
    def bearer(token: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {token}"}

    def list_todos(self, token: str):
        return self.client.get("/todos", headers=self.bearer(token))

    def create_todo(
        self,
        token: str,
        content: str | None,
        *,
        remote_addr: str = "127.0.0.1",
        **headers: str,
    ):
        body = {} if content is None else {"content": content}
        return self.client.post(
            "/todos",
            json=body,
            headers={**self.bearer(token), **headers},
            environ_base={"REMOTE_ADDR": remote_addr},
        )

    def update_todo(self, token: str, todo_id: int | str, content: str | None):
        body = {} if content is None else {"content": content}
        return self.client.put(f"/todos/{todo_id}", json=body, headers=self.bearer(token))

    def delete_todo(self, token: str, todo_id: int | str):
        return self.client.delete(f"/todos/{todo_id}", headers=self.bearer(token))
