# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from todo_api.shared.errors.base import DomainError


class TodoNotFoundError(DomainError):
    code = "todo_not_found"
    status = HTTPStatus.NOT_FOUND
    message = "Todo not found"
