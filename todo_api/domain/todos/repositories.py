# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from .entities import Todo


class TodoRepository(Protocol):
    def list_for_user(self, user_id: int) -> Sequence[Todo]: ...
    def add(self, user_id: int, content: str) -> Todo: ...
    def update_content(self, todo_id: int, user_id: int, content: str) -> Todo | None: ...
    def delete(self, todo_id: int, user_id: int) -> bool: ...
