# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""SQL repositories for badge definitions and awards."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.domains.badge.entities import Badge, StudentBadge
from src.infrastructure.database.models import badge as orm
from src.utils.datetime import ensure_utc


def _to_student_badge(row: orm.StudentBadgeRow) -> StudentBadge:
    return StudentBadge(
        id=row.id,
        user_id=row.user_id,
        badge_id=row.badge_id,
        institution_id=row.institution_id,
        awarded_at=ensure_utc(row.awarded_at),
    )


class SqlBadgeRepository:
    """Badge catalog backed by the badges table."""

    def __init__(self, db: AsyncSession) -> None:
        self._db = db

    async def list_all(self) -> list[Badge]:
        result = await self._db.execute(select(orm.BadgeRow).order_by(orm.BadgeRow.name))
        return [
            Badge(
                id=row.id,
                name=row.name,
                description=row.description,
                icon_url=row.icon_url,
                criteria_type=row.criteria_type,
                criteria_value=row.criteria_value,
            )
            for row in result.scalars().all()
        ]


class SqlStudentBadgeRepository:
    """Award lookup backed by the student_badges table."""

    def __init__(self, db: AsyncSession) -> None:
        self._db = db

    async def find_by_user(self, user_id: str, institution_id: str) -> list[StudentBadge]:
        result = await self._db.execute(
            select(orm.StudentBadgeRow).where(
                orm.StudentBadgeRow.user_id == user_id,
                orm.StudentBadgeRow.institution_id == institution_id,
            )
        )
        return [_to_student_badge(row) for row in result.scalars().all()]

    async def find_by_badge(self, badge_id: str, institution_id: str) -> list[StudentBadge]:
        result = await self._db.execute(
            select(orm.StudentBadgeRow).where(
                orm.StudentBadgeRow.badge_id == badge_id,
                orm.StudentBadgeRow.institution_id == institution_id,
            )
        )
        return [_to_student_badge(row) for row in result.scalars().all()]
