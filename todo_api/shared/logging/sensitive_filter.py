# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import re
from typing import Any

_REDACTED = "***REDACTED***"

_RULES: list[tuple[re.Pattern[str], str]] = [
    # header.payload.signature
    (re.compile(r"\beyJ[\w\-]+\.[\w\-]+\.[\w\-]+"), "***JWT***"),
    (re.compile(r"(bearer\s+)([\w\-.]{20,})", re.IGNORECASE), rf"\1{_REDACTED}"),
    (
        re.compile(r"(authorization\s*:\s*['\"]?)([^'\"]{10,})(['\"]?)", re.IGNORECASE),
        rf"\1{_REDACTED}\3",
    ),
    # accessToken=..., refresh_token: ..., and the refreshToken cookie
    (
        re.compile(r"((?:access|refresh)_?token\s*[:=]\s*['\"]?)([\w\-.]{20,})(['\"]?)", re.IGNORECASE),
        rf"\1{_REDACTED}\3",
    ),
    (
        re.compile(r"(secret\s*[:=]\s*['\"]?)([^'\"\s]{6,})(['\"]?)", re.IGNORECASE),
        rf"\1{_REDACTED}\3",
    ),
    (
        re.compile(r"(password\s*[:=]\s*['\"]?)([^'\"\s,]+)(['\"]?)", re.IGNORECASE),
        rf"\1{_REDACTED}\3",
    ),
    (
        re.compile(r"((?:postgres(?:ql)?|mysql|mariadb)(?:\+\w+)?://[^:/@\s]+):([^@\s]+)@"),
        rf"\1:{_REDACTED}@",
    ),
]


def sanitize_message(message: str) -> str:
    for pattern, replacement in _RULES:
        message = pattern.sub(replacement, message)
    return message


def sanitize_record(record: dict[str, Any]) -> bool:
    """Loguru sink filter; rewrites the message in place and never drops it."""
    record["message"] = sanitize_message(record["message"])
    return True
