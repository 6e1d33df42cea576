# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from todo_api.domain.exceptions import InvariantViolation


def ensure_content(content: str) -> str:
    if not content:
        raise InvariantViolation("must not be empty", field="content")
    return content


@dataclass(slots=True, frozen=True)
class Todo:
    """A to-do item; ``user_id`` is fixed by whoever created it."""

    id: int
    user_id: int
    content: str
    created_at: datetime

    def __post_init__(self) -> None:
        ensure_content(self.content)
