# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""SQL repositories for institutions, course outline and lesson progress.

Each repository wraps an AsyncSession and maps ORM rows to the frozen
domain dataclasses. Sessions are not safe for concurrent use, so callers
await one query at a time.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.domains.content.models import (
    Institution,
    Lesson,
    LessonProgress,
    LessonProgressStatus,
    Module,
    NavigationSettings,
)
from src.infrastructure.database.models import content as orm
from src.utils.datetime import ensure_utc


def _to_institution(row: orm.InstitutionRow) -> Institution:
    return Institution(
        id=row.id,
        name=row.name,
        settings=NavigationSettings(
            require_sequential_progress=row.require_sequential_progress,
            allow_skip_lesson=row.allow_skip_lesson,
        ),
    )


def _to_lesson(row: orm.LessonRow) -> Lesson:
    return Lesson(id=row.id, module_id=row.module_id, order=row.sort_order, title=row.title)


def _to_progress(row: orm.LessonProgressRow) -> LessonProgress:
    return LessonProgress(
        id=row.id,
        user_id=row.user_id,
        lesson_id=row.lesson_id,
        institution_id=row.institution_id,
        status=LessonProgressStatus(row.status),
        progress_percentage=row.progress_percentage,
        started_at=ensure_utc(row.started_at),
        completed_at=ensure_utc(row.completed_at),
        last_accessed_at=ensure_utc(row.last_accessed_at),
    )


class SqlInstitutionRepository:
    """Institution lookup backed by the institutions table."""

    def __init__(self, db: AsyncSession) -> None:
        self._db = db

    async def find_by_id(self, institution_id: str) -> Institution | None:
        row = await self._db.get(orm.InstitutionRow, institution_id)
        return _to_institution(row) if row else None


class SqlModuleRepository:
    """Module lookup backed by the course_modules table."""

    def __init__(self, db: AsyncSession) -> None:
        self._db = db

    async def list_by_course(self, course_id: str) -> list[Module]:
        result = await self._db.execute(
            select(orm.ModuleRow).where(orm.ModuleRow.course_id == course_id)
        )
        return [
            Module(id=row.id, course_id=row.course_id, order=row.sort_order, title=row.title)
            for row in result.scalars().all()
        ]


class SqlLessonRepository:
    """Lesson lookup backed by the lessons table."""

    def __init__(self, db: AsyncSession) -> None:
        self._db = db

    async def list_by_module(self, module_id: str) -> list[Lesson]:
        result = await self._db.execute(
            select(orm.LessonRow).where(orm.LessonRow.module_id == module_id)
        )
        return [_to_lesson(row) for row in result.scalars().all()]

    async def find_by_id(self, lesson_id: str) -> Lesson | None:
        row = await self._db.get(orm.LessonRow, lesson_id)
        return _to_lesson(row) if row else None


class SqlLessonProgressRepository:
    """Lesson progress store backed by the lesson_progress table."""

    def __init__(self, db: AsyncSession) -> None:
        self._db = db

    async def find_by_user_and_lesson(
        self, user_id: str, lesson_id: str
    ) -> LessonProgress | None:
        result = await self._db.execute(
            select(orm.LessonProgressRow).where(
                orm.LessonProgressRow.user_id == user_id,
                orm.LessonProgressRow.lesson_id == lesson_id,
            )
        )
        row = result.scalar_one_or_none()
        return _to_progress(row) if row else None

    async def find_by_user_and_institution(
        self, user_id: str, institution_id: str
    ) -> list[LessonProgress]:
        result = await self._db.execute(
            select(orm.LessonProgressRow).where(
                orm.LessonProgressRow.user_id == user_id,
                orm.LessonProgressRow.institution_id == institution_id,
            )
        )
        return [_to_progress(row) for row in result.scalars().all()]

    async def save(self, progress: LessonProgress) -> LessonProgress:
        """Insert or update a progress record and flush it."""
        row = await self._db.get(orm.LessonProgressRow, progress.id)
        if row is None:
            row = orm.LessonProgressRow(
                id=progress.id,
                user_id=progress.user_id,
                lesson_id=progress.lesson_id,
                institution_id=progress.institution_id,
            )
            self._db.add(row)

        row.status = progress.status.value
        row.progress_percentage = progress.progress_percentage
        row.started_at = progress.started_at
        row.completed_at = progress.completed_at
        row.last_accessed_at = progress.last_accessed_at

        await self._db.flush()
        return progress
