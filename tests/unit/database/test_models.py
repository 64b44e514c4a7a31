# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for database models.

Tests table definitions, constraints and defaults.
"""

from src.infrastructure.database.models import (
    Base,
    BadgeRow,
    LessonProgressRow,
    LessonRow,
    ModuleRow,
    StudentBadgeRow,
)
from src.infrastructure.database.models.base import IdMixin, TimestampMixin, new_id


class TestBase:
    """Test base model functionality."""

    def test_base_inherits_declarative_base(self):
        """Verify Base is a declarative base."""
        assert hasattr(Base, "metadata")
        assert hasattr(Base, "registry")

    def test_mixins_have_columns(self):
        """Verify mixins provide id and timestamps."""
        assert hasattr(IdMixin, "id")
        assert hasattr(TimestampMixin, "created_at")
        assert hasattr(TimestampMixin, "updated_at")

    def test_new_id_is_unique_uuid(self):
        """Verify generated ids are distinct UUID strings."""
        first, second = new_id(), new_id()

        assert first != second
        assert len(first) == 36

    def test_all_tables_registered(self):
        """Verify every table is registered on the metadata."""
        assert set(Base.metadata.tables) == {
            "institutions",
            "courses",
            "course_modules",
            "lessons",
            "lesson_progress",
            "enrollments",
            "questionnaire_submissions",
            "certificates",
            "login_events",
            "badges",
            "student_badges",
        }


class TestContentModels:
    """Test content table definitions."""

    def test_ordering_columns(self):
        """Verify modules and lessons carry a sort order."""
        assert "sort_order" in ModuleRow.__table__.columns
        assert "sort_order" in LessonRow.__table__.columns

    def test_lesson_progress_unique_per_user_and_lesson(self):
        """Verify one progress record per user and lesson."""
        constraints = {
            tuple(column.name for column in constraint.columns)
            for constraint in LessonProgressRow.__table__.constraints
            if constraint.name == "uq_lesson_progress_user_lesson"
        }

        assert constraints == {("user_id", "lesson_id")}

    def test_lesson_progress_indexed_by_user_and_institution(self):
        """Verify the counter lookup index exists."""
        indexes = {index.name for index in LessonProgressRow.__table__.indexes}

        assert "ix_lesson_progress_user_institution" in indexes


class TestBadgeModels:
    """Test badge table definitions."""

    def test_award_unique_per_user_badge_institution(self):
        """Verify a badge is awarded once per user and institution."""
        names = {constraint.name for constraint in StudentBadgeRow.__table__.constraints}

        assert "uq_student_badges_award" in names

    def test_award_references_badge(self):
        """Verify awards reference badges."""
        targets = {fk.target_fullname for fk in StudentBadgeRow.__table__.foreign_keys}

        assert "badges.id" in targets
        assert "institutions.id" in targets

    def test_badge_columns(self):
        """Verify badge criteria columns."""
        columns = set(BadgeRow.__table__.columns.keys())

        assert {"criteria_type", "criteria_value", "icon_url"} <= columns
