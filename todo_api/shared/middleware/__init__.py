# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .pipeline import Pipeline, RequestContext, parse_json, short_circuit
from .rate_limit import FixedWindowRateLimiter, rate_limited

__all__ = [
    "FixedWindowRateLimiter",
    "Pipeline",
    "RequestContext",
    "parse_json",
    "rate_limited",
    "short_circuit",
]
