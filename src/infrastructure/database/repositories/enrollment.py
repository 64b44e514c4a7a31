# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""SQL repositories feeding the badge criterion counters."""

from datetime import date

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.domains.content.models import (
    Certificate,
    Enrollment,
    EnrollmentStatus,
    QuestionnaireSubmission,
)
from src.infrastructure.database.models import enrollment as orm
from src.utils.datetime import ensure_utc


def _to_enrollment(row: orm.EnrollmentRow) -> Enrollment:
    return Enrollment(
        id=row.id,
        user_id=row.user_id,
        course_id=row.course_id,
        institution_id=row.institution_id,
        status=EnrollmentStatus(row.status),
    )


class SqlEnrollmentRepository:
    def __init__(self, db: AsyncSession) -> None:
        self._db = db

    async def list_by_user(self, user_id: str) -> list[Enrollment]:
        result = await self._db.execute(
            select(orm.EnrollmentRow).where(orm.EnrollmentRow.user_id == user_id)
        )
        return [_to_enrollment(row) for row in result.scalars().all()]

    async def list_by_institution(self, institution_id: str) -> list[Enrollment]:
        result = await self._db.execute(
            select(orm.EnrollmentRow).where(orm.EnrollmentRow.institution_id == institution_id)
        )
        return [_to_enrollment(row) for row in result.scalars().all()]


class SqlQuestionnaireSubmissionRepository:
    def __init__(self, db: AsyncSession) -> None:
        self._db = db

    async def list_by_user(self, user_id: str) -> list[QuestionnaireSubmission]:
        result = await self._db.execute(
            select(orm.QuestionnaireSubmissionRow).where(
                orm.QuestionnaireSubmissionRow.user_id == user_id
            )
        )
        return [
            QuestionnaireSubmission(
                id=row.id,
                user_id=row.user_id,
                questionnaire_id=row.questionnaire_id,
                institution_id=row.institution_id,
                passed=row.passed,
            )
            for row in result.scalars().all()
        ]


class SqlCertificateRepository:
    def __init__(self, db: AsyncSession) -> None:
        self._db = db

    async def list_by_user(self, user_id: str) -> list[Certificate]:
        result = await self._db.execute(
            select(orm.CertificateRow).where(orm.CertificateRow.user_id == user_id)
        )
        return [
            Certificate(
                id=row.id,
                user_id=row.user_id,
                course_id=row.course_id,
                institution_id=row.institution_id,
                issued_at=ensure_utc(row.issued_at),
            )
            for row in result.scalars().all()
        ]


class SqlLoginHistoryRepository:
    """Login history backed by the login_events table."""

    def __init__(self, db: AsyncSession) -> None:
        self._db = db

    async def list_login_days(self, user_id: str, institution_id: str) -> list[date]:
        """Return the distinct UTC days on which the user logged in."""
        result = await self._db.execute(
            select(orm.LoginEventRow.logged_in_at).where(
                orm.LoginEventRow.user_id == user_id,
                orm.LoginEventRow.institution_id == institution_id,
            )
        )
        return sorted({ensure_utc(logged_in_at).date() for logged_in_at in result.scalars().all()})
