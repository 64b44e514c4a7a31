# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""FastAPI dependency injection definitions.

This module provides dependency functions for FastAPI endpoints:
- Database sessions
- Service instances wired to the SQL repositories and settings

Every service dependency shares the request's session, so one request
runs its queries one after another on a single connection.

Example:
    @router.get("/lessons/{lesson_id}/access")
    async def check_access(
        service: LessonAccessService = Depends(get_lesson_access_service),
    ):
        ...
"""

from typing import AsyncGenerator

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.config import get_settings
from src.domains.badge import (
    BadgeProgressEngine,
    CriterionCounters,
    StudentBadgesReportService,
)
from src.domains.content import (
    CourseProgressService,
    LessonAccessService,
    LessonProgressService,
)
from src.infrastructure.database.connection import (
    close_database,
    get_session,
    init_database,
)
from src.infrastructure.database.repositories import (
    SqlBadgeRepository,
    SqlCertificateRepository,
    SqlEnrollmentRepository,
    SqlInstitutionRepository,
    SqlLessonProgressRepository,
    SqlLessonRepository,
    SqlLoginHistoryRepository,
    SqlModuleRepository,
    SqlQuestionnaireSubmissionRepository,
    SqlStudentBadgeRepository,
)


async def init_db() -> None:
    """Initialize the database connection pool."""
    await init_database(get_settings())


async def close_db() -> None:
    """Close the database connection pool."""
    await close_database()


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Get a database session committed at the end of the request.

    Yields:
        AsyncSession for the request.
    """
    async with get_session() as session:
        yield session


# =========================================================================
# Service Dependencies
# =========================================================================


def get_lesson_access_service(db: AsyncSession = Depends(get_db)) -> LessonAccessService:
    """Get lesson access service instance."""
    return LessonAccessService(
        institutions=SqlInstitutionRepository(db),
        progress=SqlLessonProgressRepository(db),
        modules=SqlModuleRepository(db),
        lessons=SqlLessonRepository(db),
        access_error_message=get_settings().progression.access_check_error_message,
    )


def get_lesson_progress_service(db: AsyncSession = Depends(get_db)) -> LessonProgressService:
    """Get lesson progress service instance."""
    return LessonProgressService(
        progress=SqlLessonProgressRepository(db),
        lessons=SqlLessonRepository(db),
    )


def get_course_progress_service(db: AsyncSession = Depends(get_db)) -> CourseProgressService:
    """Get course progress service instance."""
    return CourseProgressService(
        progress=SqlLessonProgressRepository(db),
        modules=SqlModuleRepository(db),
        lessons=SqlLessonRepository(db),
    )


def get_badges_report_service(
    db: AsyncSession = Depends(get_db),
) -> StudentBadgesReportService:
    """Get student badges report service instance.

    Args:
        db: Database session shared by every repository.

    Returns:
        Report service with a badge engine counting every criteria type.
    """
    settings = get_settings()
    awards = SqlStudentBadgeRepository(db)
    enrollments = SqlEnrollmentRepository(db)

    counters = CriterionCounters(
        enrollments=enrollments,
        submissions=SqlQuestionnaireSubmissionRepository(db),
        lesson_progress=SqlLessonProgressRepository(db),
        certificates=SqlCertificateRepository(db),
        logins=SqlLoginHistoryRepository(db),
    )
    engine = BadgeProgressEngine(
        counters,
        earned_badges=awards,
        enrollments=enrollments,
        isolate=db.begin_nested,
    )

    return StudentBadgesReportService(
        catalog=SqlBadgeRepository(db),
        earned_badges=awards,
        engine=engine,
        recommendation_limit=settings.progression.report_recommendation_limit,
        showcase_limit=settings.progression.report_showcase_limit,
        recent_badge_days=settings.progression.recent_badge_days,
    )
