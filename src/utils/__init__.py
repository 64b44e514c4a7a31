# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Utility functions and helpers for LearnPath.

This package contains cross-cutting utilities:
- logging: Structured logging with structlog
- datetime: Timezone-aware datetime operations
- numbers: Half-up rounding for user-facing percentages
"""

from src.utils.datetime import ensure_utc, month_key, time_since, utc_now
from src.utils.logging import bind_context, clear_context, get_logger, setup_logging
from src.utils.numbers import percentage, round_half_up

__all__ = [
    # Logging
    "setup_logging",
    "get_logger",
    "bind_context",
    "clear_context",
    # Datetime
    "utc_now",
    "ensure_utc",
    "time_since",
    "month_key",
    # Numbers
    "round_half_up",
    "percentage",
]
