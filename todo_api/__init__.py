# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Authenticated to-do list API."""

__version__ = "1.0.0"
