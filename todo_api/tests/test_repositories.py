from __future__ import annotations

from collections.abc import Iterator
from datetime import UTC, datetime

import pytest
from loguru import logger

from todo_api.domain.users.entities import User
from todo_api.domain.users.exceptions import UserAlreadyExistsError
from todo_api.infrastructure.db import Database
from todo_api.infrastructure.repositories.todos.sqlalchemy_todo_repository import (
    SqlAlchemyTodoRepository,
)
from todo_api.infrastructure.repositories.users.sqlalchemy_user_repository import (
    SqlAlchemyUserRepository,
)
from todo_api.shared.config import DatabaseConfig


@pytest.fixture()
def database() -> Iterator[Database]:
    db = Database(DatabaseConfig(url="sqlite://"))
    db.init_schema()
    yield db
    db.dispose()


def _new_user(username: str) -> User:
    return User(id=0, username=username, password_hash="hash", created_at=datetime.now(UTC))


def test_user_repository_round_trip(database: Database) -> None:
    users = SqlAlchemyUserRepository(database)

    added = users.add(_new_user("alice"))
    users.set_refresh_token(added.id, "refresh-1")

    found = users.find_by_id(added.id)
    assert found is not None
    assert found.username == "alice"
    assert found.refresh_token == "refresh-1"
    assert found.created_at is not None and found.created_at.tzinfo is not None
    assert users.find_by_username("alice") == found
    assert users.find_by_username("bob") is None
    assert users.find_by_id(999) is None


def test_user_repository_unique_username(database: Database) -> None:
    users = SqlAlchemyUserRepository(database)
    users.add(_new_user("alice"))

    with pytest.raises(UserAlreadyExistsError):
        users.add(_new_user("alice"))


def test_duplicate_username_rolls_back_without_error_trace(database: Database) -> None:
    users = SqlAlchemyUserRepository(database)
    users.add(_new_user("alice"))
    records: list[dict] = []
    sink_id = logger.add(lambda message: records.append(message.record), level="DEBUG")

    try:
        with pytest.raises(UserAlreadyExistsError):
            users.add(_new_user("alice"))
    finally:
        logger.remove(sink_id)

    assert any("rolling back" in record["message"] for record in records)
    assert all(record["exception"] is None for record in records)
    assert all(record["level"].name != "ERROR" for record in records)
    assert users.find_by_username("alice") is not None


def test_todo_repository_scopes_by_owner(database: Database) -> None:
    users = SqlAlchemyUserRepository(database)
    todos = SqlAlchemyTodoRepository(database)
    alice = users.add(_new_user("alice"))
    bob = users.add(_new_user("bob"))

    first = todos.add(alice.id, "buy milk")
    second = todos.add(alice.id, "call mom")
    todos.add(bob.id, "walk dog")

    assert [t.id for t in todos.list_for_user(alice.id)] == [first.id, second.id]
    assert todos.update_content(first.id, bob.id, "hijacked") is None
    assert todos.delete(first.id, bob.id) is False

    updated = todos.update_content(first.id, alice.id, "buy oat milk")
    assert updated is not None
    assert updated.content == "buy oat milk"
    assert updated.created_at == first.created_at

    assert todos.delete(first.id, alice.id) is True
    assert [t.content for t in todos.list_for_user(alice.id)] == ["call mom"]


def test_ping_succeeds_for_reachable_database(database: Database) -> None:
    database.ping()
