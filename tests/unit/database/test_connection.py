# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for database connection management."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from sqlalchemy.exc import OperationalError

from src.infrastructure.database import connection
from src.infrastructure.database.connection import (
    DatabaseError,
    check_database_connection,
    get_engine,
    get_session,
)


@pytest.fixture
def uninitialized():
    """Ensure no engine is configured."""
    with patch.object(connection, "_engine", None), patch.object(connection, "_sessionmaker", None):
        yield


def make_sessionmaker(session):
    """Build a sessionmaker double yielding the given session."""
    context = MagicMock()
    context.__aenter__ = AsyncMock(return_value=session)
    context.__aexit__ = AsyncMock(return_value=False)
    return MagicMock(return_value=context)


class TestDatabaseError:
    """Tests for DatabaseError."""

    def test_str_includes_original_error(self):
        """Verify the original error is appended."""
        error = DatabaseError("Database operation failed", ValueError("boom"))

        assert str(error) == "Database operation failed: boom"
        assert DatabaseError("plain").message == "plain"


class TestUninitialized:
    """Tests before init_database() is called."""

    def test_get_engine_raises(self, uninitialized):
        """Verify engine access requires initialization."""
        with pytest.raises(DatabaseError):
            get_engine()

    @pytest.mark.asyncio
    async def test_check_connection_is_false(self, uninitialized):
        """Verify the health probe reports an uninitialized database as down."""
        assert await check_database_connection() is False


class TestGetSession:
    """Tests for the get_session context manager."""

    @pytest.mark.asyncio
    async def test_commits_on_success(self):
        """Verify the session is committed after the block."""
        session = AsyncMock()
        with patch.object(connection, "_sessionmaker", make_sessionmaker(session)):
            async with get_session() as db:
                assert db is session

        session.commit.assert_awaited_once()
        session.rollback.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_wraps_sqlalchemy_errors(self):
        """Verify SQLAlchemy errors roll back and become DatabaseError."""
        session = AsyncMock()
        with patch.object(connection, "_sessionmaker", make_sessionmaker(session)):
            with pytest.raises(DatabaseError):
                async with get_session():
                    raise OperationalError("SELECT 1", {}, Exception("gone"))

        session.rollback.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_other_errors_propagate(self):
        """Verify other errors roll back and propagate unchanged."""
        session = AsyncMock()
        with patch.object(connection, "_sessionmaker", make_sessionmaker(session)):
            with pytest.raises(KeyError):
                async with get_session():
                    raise KeyError("lesson")

        session.rollback.assert_awaited_once()
