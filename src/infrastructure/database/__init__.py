# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Database infrastructure.

SQLAlchemy async connection management, ORM models and the SQL
implementations of the domain repositories.

Example:
    from src.infrastructure.database import get_session
    from src.infrastructure.database.repositories import SqlLessonRepository

    async with get_session() as session:
        lesson = await SqlLessonRepository(session).find_by_id("l1")
"""

from src.infrastructure.database.connection import (
    DatabaseError,
    check_database_connection,
    close_database,
    get_engine,
    get_session,
    get_sessionmaker,
    init_database,
)

__all__ = [
    "DatabaseError",
    "check_database_connection",
    "close_database",
    "get_engine",
    "get_session",
    "get_sessionmaker",
    "init_database",
]
