from __future__ import annotations

from collections.abc import Iterator

import pytest
from flask import Flask

from todo_api.app import CONTAINER_KEY, create_app
from todo_api.infrastructure.container import Container
from todo_api.shared.config import AppConfig

from .support import ApiClient, make_config


@pytest.fixture()
def config() -> AppConfig:
    return make_config()


@pytest.fixture()
def app(config: AppConfig) -> Iterator[Flask]:
    flask_app = create_app(config)
    yield flask_app
    flask_app.extensions[CONTAINER_KEY].database.dispose()


@pytest.fixture()
def container(app: Flask) -> Container:
    return app.extensions[CONTAINER_KEY]


@pytest.fixture()
def api(app: Flask) -> ApiClient:
    return ApiClient(app.test_client())


@pytest.fixture()
def other_api(app: Flask) -> ApiClient:
    return ApiClient(app.test_client())
