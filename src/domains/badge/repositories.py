# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Collaborator interfaces for the badge domain.

The badge engine reads from several unrelated sources (badge catalog,
awards, enrollments, questionnaire submissions, lesson progress,
certificates, login history). Each source is reached through one of these
protocols so the engine never depends on storage.
"""

from datetime import date
from typing import Protocol

from src.domains.badge.entities import Badge, StudentBadge
from src.domains.content.models import (
    Certificate,
    Enrollment,
    LessonProgress,
    QuestionnaireSubmission,
)


class BadgeCatalog(Protocol):
    """Read access to badge definitions."""

    async def list_all(self) -> list[Badge]: ...


class EarnedBadgeLookup(Protocol):
    """Read access to awarded badges."""

    async def find_by_user(self, user_id: str, institution_id: str) -> list[StudentBadge]: ...

    async def find_by_badge(self, badge_id: str, institution_id: str) -> list[StudentBadge]: ...


class EnrollmentCounter(Protocol):
    """Read access to enrollments."""

    async def list_by_user(self, user_id: str) -> list[Enrollment]: ...

    async def list_by_institution(self, institution_id: str) -> list[Enrollment]: ...


class SubmissionCounter(Protocol):
    """Read access to questionnaire submissions."""

    async def list_by_user(self, user_id: str) -> list[QuestionnaireSubmission]: ...


class LessonCompletionCounter(Protocol):
    """Read access to a user's lesson progress within an institution."""

    async def find_by_user_and_institution(
        self, user_id: str, institution_id: str
    ) -> list[LessonProgress]: ...


class CertificateCounter(Protocol):
    """Read access to issued certificates."""

    async def list_by_user(self, user_id: str) -> list[Certificate]: ...


class LoginHistoryLookup(Protocol):
    """Read access to the days a user logged in."""

    async def list_login_days(self, user_id: str, institution_id: str) -> list[date]: ...
