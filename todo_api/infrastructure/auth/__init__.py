# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .jwt_tokens import JwtTokenService

__all__ = ["JwtTokenService"]
