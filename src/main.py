# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""ASGI entry point.

Usage:
    uvicorn src.main:app
    learnpath-api
"""

import uvicorn

from src.api.app import create_app
from src.core.config import get_settings

app = create_app()


def run() -> None:
    """Serve the API on the configured host and port."""
    settings = get_settings()
    uvicorn.run(
        "src.main:app",
        host=settings.api.host,
        port=settings.api.port,
        reload=settings.is_development,
        log_config=None,
    )
