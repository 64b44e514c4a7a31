# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Configuration package for LearnPath.

Settings are Pydantic-based and loaded from environment variables.

Example:
    >>> from src.core.config import get_settings
    >>> settings = get_settings()
    >>> print(settings.progression.recent_badge_days)
    7
"""

from src.core.config.settings import (
    APISettings,
    CORSSettings,
    DatabaseSettings,
    ProgressionSettings,
    Settings,
    clear_settings_cache,
    get_settings,
)

__all__ = [
    # Settings
    "Settings",
    "get_settings",
    "clear_settings_cache",
    # Subsettings
    "DatabaseSettings",
    "CORSSettings",
    "APISettings",
    "ProgressionSettings",
]
