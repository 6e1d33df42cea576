# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .exceptions import InvariantViolation
from .todos.entities import Todo
from .users.entities import IssuedTokens, User

__all__ = [
    "InvariantViolation",
    "IssuedTokens",
    "Todo",
    "User",
]
