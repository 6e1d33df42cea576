# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass
from threading import Lock

from flask import Response, request

from todo_api.shared.errors import TooManyRequestsError
from todo_api.shared.logging import logger

from .pipeline import RequestContext, Stage, short_circuit


@dataclass
class Window:
    started_at: float
    count: int = 0


class FixedWindowRateLimiter:
    def __init__(
        self,
        limit: int,
        window_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._limit = max(1, int(limit))
        self._window = max(0.1, float(window_seconds))
        self._clock = clock
        self._windows: dict[str, Window] = {}
        self._lock = Lock()
        self._last_sweep = clock()

    @property
    def limit(self) -> int:
        return self._limit

    def allow(self, key: str) -> bool:
        with self._lock:
            now = self._clock()
            self._sweep(now)
            window = self._windows.get(key)
            if window is None or now - window.started_at >= self._window:
                window = Window(started_at=now)
                self._windows[key] = window
            if window.count >= self._limit:
                return False
            window.count += 1
            return True

    def retry_after(self, key: str) -> float:
        with self._lock:
            window = self._windows.get(key)
            if window is None:
                return 0.0
            return max(0.0, self._window - (self._clock() - window.started_at))

    def reset(self) -> None:
        with self._lock:
            self._windows.clear()

    def _sweep(self, now: float) -> None:
        if now - self._last_sweep < self._window:
            return
        expired = [
            key
            for key, window in self._windows.items()
            if now - window.started_at >= self._window
        ]
        for key in expired:
            del self._windows[key]
        self._last_sweep = now


def rate_limited(limiter: FixedWindowRateLimiter, *, enabled: bool = True) -> Stage:
    def stage(ctx: RequestContext) -> RequestContext | Response:
        if not enabled:
            return ctx
        if limiter.allow(ctx.client_address):
            return ctx
        logger.warning(
            f"rate_limit: rejected {request.method} {request.path} addr={ctx.client_address}"
        )
        return short_circuit(TooManyRequestsError(limiter.retry_after(ctx.client_address)))

    return stage


__all__ = ["FixedWindowRateLimiter", "rate_limited"]
