from .base import (
    AppError,
    BadRequestError,
    DomainError,
    ForbiddenError,
    InfrastructureError,
    TooManyRequestsError,
    UnauthorizedError,
)
from .http import handle_app_error, register_error_handler

__all__ = [
    "AppError",
    "BadRequestError",
    "DomainError",
    "ForbiddenError",
    "InfrastructureError",
    "TooManyRequestsError",
    "UnauthorizedError",
    "handle_app_error",
    "register_error_handler",
]
