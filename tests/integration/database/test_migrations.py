# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Integration tests for database migrations.

Runs the revision scripts against an in-memory SQLite database through
alembic's Operations API.
"""

import importlib

import pytest
from alembic.operations import Operations
from alembic.runtime.migration import MigrationContext
from sqlalchemy import create_engine, inspect

from src.infrastructure.database.models import Base

INITIAL_SCHEMA = "src.infrastructure.database.migrations.versions.001_initial_schema"


@pytest.fixture
def connection():
    """Provide a connection to a fresh in-memory database."""
    engine = create_engine("sqlite://")
    with engine.connect() as conn:
        yield conn
    engine.dispose()


def run_revision(connection, step: str) -> None:
    """Run upgrade() or downgrade() of the initial revision."""
    migration = importlib.import_module(INITIAL_SCHEMA)
    context = MigrationContext.configure(connection)
    with Operations.context(context):
        getattr(migration, step)()


class TestInitialSchema:
    """Tests for the initial schema revision."""

    def test_revision_metadata(self):
        """Verify the revision is the root of the history."""
        migration = importlib.import_module(INITIAL_SCHEMA)

        assert migration.revision == "001_initial"
        assert migration.down_revision is None

    def test_upgrade_creates_model_tables(self, connection):
        """Verify every ORM table is created by the migration."""
        run_revision(connection, "upgrade")

        tables = set(inspect(connection).get_table_names())

        assert set(Base.metadata.tables) <= tables

    def test_upgrade_matches_model_columns(self, connection):
        """Verify migration columns match the ORM columns."""
        run_revision(connection, "upgrade")
        inspector = inspect(connection)

        for name, table in Base.metadata.tables.items():
            columns = {column["name"] for column in inspector.get_columns(name)}
            assert columns == set(table.columns.keys()), f"Column mismatch in {name}"

    def test_upgrade_creates_lookup_indexes(self, connection):
        """Verify composite lookup indexes exist."""
        run_revision(connection, "upgrade")
        inspector = inspect(connection)

        progress_indexes = {index["name"] for index in inspector.get_indexes("lesson_progress")}
        award_indexes = {index["name"] for index in inspector.get_indexes("student_badges")}

        assert "ix_lesson_progress_user_institution" in progress_indexes
        assert "ix_student_badges_badge_institution" in award_indexes

    def test_downgrade_drops_tables(self, connection):
        """Verify downgrade removes every table."""
        run_revision(connection, "upgrade")
        run_revision(connection, "downgrade")

        tables = set(inspect(connection).get_table_names())

        assert not tables & set(Base.metadata.tables)
