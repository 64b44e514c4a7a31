# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Initial schema.

Revision ID: 001_initial
Revises: None
Create Date: 2025-01-15

Creates the content, progress, enrollment and badge tables mirrored by
the models in src/infrastructure/database/models/.
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _id_column() -> sa.Column:
    return sa.Column("id", sa.String(36), primary_key=True)


def _timestamp_columns() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
    ]


def _fk(column: str, target: str, **kwargs) -> sa.Column:
    return sa.Column(
        column,
        sa.String(36),
        sa.ForeignKey(target, ondelete="CASCADE"),
        nullable=False,
        **kwargs,
    )


def upgrade() -> None:
    """Create all tables."""
    # ==========================================================================
    # Content
    # ==========================================================================
    op.create_table(
        "institutions",
        _id_column(),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column(
            "require_sequential_progress",
            sa.Boolean,
            nullable=False,
            server_default=sa.false(),
        ),
        sa.Column("allow_skip_lesson", sa.Boolean, nullable=False, server_default=sa.false()),
        *_timestamp_columns(),
    )

    op.create_table(
        "courses",
        _id_column(),
        _fk("institution_id", "institutions.id", index=True),
        sa.Column("title", sa.String(255), nullable=False),
        *_timestamp_columns(),
    )

    op.create_table(
        "course_modules",
        _id_column(),
        _fk("course_id", "courses.id", index=True),
        sa.Column("title", sa.String(255), nullable=False, server_default=""),
        sa.Column("sort_order", sa.Integer, nullable=False, server_default="0"),
        *_timestamp_columns(),
    )

    op.create_table(
        "lessons",
        _id_column(),
        _fk("module_id", "course_modules.id", index=True),
        sa.Column("title", sa.String(255), nullable=False, server_default=""),
        sa.Column("sort_order", sa.Integer, nullable=False, server_default="0"),
        *_timestamp_columns(),
    )

    op.create_table(
        "lesson_progress",
        _id_column(),
        sa.Column("user_id", sa.String(36), nullable=False),
        _fk("lesson_id", "lessons.id"),
        _fk("institution_id", "institutions.id"),
        sa.Column("status", sa.String(20), nullable=False, server_default="in_progress"),
        sa.Column("progress_percentage", sa.Float, nullable=False, server_default="0"),
        sa.Column("started_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("completed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("last_accessed_at", sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint("user_id", "lesson_id", name="uq_lesson_progress_user_lesson"),
        sa.CheckConstraint(
            "status IN ('not_started', 'in_progress', 'completed')",
            name="valid_lesson_progress_status",
        ),
    )
    op.create_index(
        "ix_lesson_progress_user_institution",
        "lesson_progress",
        ["user_id", "institution_id"],
    )

    # ==========================================================================
    # Enrollment and counter sources
    # ==========================================================================
    op.create_table(
        "enrollments",
        _id_column(),
        sa.Column("user_id", sa.String(36), nullable=False, index=True),
        _fk("course_id", "courses.id"),
        _fk("institution_id", "institutions.id", index=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="active"),
        *_timestamp_columns(),
        sa.CheckConstraint(
            "status IN ('active', 'completed', 'cancelled')",
            name="valid_enrollment_status",
        ),
    )

    op.create_table(
        "questionnaire_submissions",
        _id_column(),
        sa.Column("user_id", sa.String(36), nullable=False, index=True),
        sa.Column("questionnaire_id", sa.String(36), nullable=False),
        _fk("institution_id", "institutions.id"),
        sa.Column("passed", sa.Boolean, nullable=False, server_default=sa.false()),
        *_timestamp_columns(),
    )

    op.create_table(
        "certificates",
        _id_column(),
        sa.Column("user_id", sa.String(36), nullable=False, index=True),
        _fk("course_id", "courses.id"),
        _fk("institution_id", "institutions.id"),
        sa.Column("issued_at", sa.DateTime(timezone=True), nullable=False),
    )

    op.create_table(
        "login_events",
        _id_column(),
        sa.Column("user_id", sa.String(36), nullable=False),
        _fk("institution_id", "institutions.id"),
        sa.Column("logged_in_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index(
        "ix_login_events_user_institution",
        "login_events",
        ["user_id", "institution_id"],
    )

    # ==========================================================================
    # Badges
    # ==========================================================================
    op.create_table(
        "badges",
        _id_column(),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text, nullable=False),
        sa.Column("icon_url", sa.String(500), nullable=False),
        sa.Column("criteria_type", sa.String(40), nullable=False),
        sa.Column("criteria_value", sa.Integer, nullable=False),
        *_timestamp_columns(),
        sa.CheckConstraint("criteria_value > 0", name="positive_badge_criteria_value"),
    )

    op.create_table(
        "student_badges",
        _id_column(),
        sa.Column("user_id", sa.String(36), nullable=False),
        _fk("badge_id", "badges.id"),
        _fk("institution_id", "institutions.id"),
        sa.Column("awarded_at", sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint(
            "user_id", "badge_id", "institution_id", name="uq_student_badges_award"
        ),
    )
    op.create_index(
        "ix_student_badges_badge_institution",
        "student_badges",
        ["badge_id", "institution_id"],
    )


def downgrade() -> None:
    """Drop all tables in reverse dependency order."""
    op.drop_index("ix_student_badges_badge_institution", table_name="student_badges")
    op.drop_table("student_badges")
    op.drop_table("badges")
    op.drop_index("ix_login_events_user_institution", table_name="login_events")
    op.drop_table("login_events")
    op.drop_table("certificates")
    op.drop_table("questionnaire_submissions")
    op.drop_table("enrollments")
    op.drop_index("ix_lesson_progress_user_institution", table_name="lesson_progress")
    op.drop_table("lesson_progress")
    op.drop_table("lessons")
    op.drop_table("course_modules")
    op.drop_table("courses")
    op.drop_table("institutions")
