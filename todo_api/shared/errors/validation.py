# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Any, NoReturn

from pydantic import ValidationError as PydanticValidationError

from .base import BadRequestError


def format_pydantic_errors(exc: PydanticValidationError) -> dict[str, Any]:
    errors_list = []
    fields_set = set()

    for error in exc.errors(include_url=False, include_input=False):
        loc = error.get("loc", ())
        field_path = ".".join(str(part) for part in loc if part is not None)

        if field_path:
            fields_set.add(field_path)

        errors_list.append(
            {
                "field": field_path or "unknown",
                "type": error.get("type", "value_error"),
            }
        )

    return {
        "fields": sorted(fields_set),
        "errors": errors_list,
    }


def raise_validation_error(
    exc: PydanticValidationError,
    *,
    code: str = "missing_fields",
    message: str = "Missing fields",
) -> NoReturn:
    """Raise a 400 for ``exc``; fields that are only too long get ``field_too_long``."""
    context = format_pydantic_errors(exc)
    error_types = {error["type"] for error in context["errors"]}
    if error_types == {"string_too_long"}:
        raise BadRequestError(
            "field_too_long", message="Field too long", context=context
        ) from exc
    raise BadRequestError(code, message=message, context=context) from exc


__all__ = [
    "format_pydantic_errors",
    "raise_validation_error",
]
