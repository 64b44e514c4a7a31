# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Badge definition and award tables."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.database.models.base import Base, IdMixin, TimestampMixin


class BadgeRow(IdMixin, TimestampMixin, Base):
    __tablename__ = "badges"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    icon_url: Mapped[str] = mapped_column(String(500), nullable=False)
    criteria_type: Mapped[str] = mapped_column(String(40), nullable=False)
    criteria_value: Mapped[int] = mapped_column(Integer, nullable=False)


class StudentBadgeRow(IdMixin, Base):
    __tablename__ = "student_badges"

    user_id: Mapped[str] = mapped_column(String(36), nullable=False)
    badge_id: Mapped[str] = mapped_column(
        ForeignKey("badges.id", ondelete="CASCADE"), nullable=False
    )
    institution_id: Mapped[str] = mapped_column(
        ForeignKey("institutions.id", ondelete="CASCADE"), nullable=False
    )
    awarded_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    __table_args__ = (
        UniqueConstraint(
            "user_id", "badge_id", "institution_id", name="uq_student_badges_award"
        ),
        Index("ix_student_badges_badge_institution", "badge_id", "institution_id"),
    )
