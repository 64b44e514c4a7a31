# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Criterion counters for badge progress.

Each badge criteria type has one counter that measures how far a user got
in an institution:

- COURSE_COMPLETION: completed enrollments
- QUESTIONNAIRE_COMPLETION: passed questionnaire submissions
- LESSON_COMPLETION: completed lesson progress records
- CERTIFICATE_ACHIEVED: issued certificates (0 without a certificate source)
- DAILY_LOGIN: longest run of consecutive login days (0 without a login
  history source)

Counters query external collaborators and may raise; callers decide how to
isolate failures.
"""

from collections.abc import Awaitable, Callable
from datetime import date, timedelta

from src.domains.badge.entities import Badge, BadgeCriteriaType
from src.domains.badge.repositories import (
    CertificateCounter,
    EnrollmentCounter,
    LessonCompletionCounter,
    LoginHistoryLookup,
    SubmissionCounter,
)
from src.domains.content.models import EnrollmentStatus

Counter = Callable[[str, str], Awaitable[int]]


class CriterionCounters:
    """Dispatches a badge to the counter for its criteria type."""

    def __init__(
        self,
        enrollments: EnrollmentCounter,
        submissions: SubmissionCounter,
        lesson_progress: LessonCompletionCounter,
        certificates: CertificateCounter | None = None,
        logins: LoginHistoryLookup | None = None,
    ) -> None:
        """Initialize the counters.

        Args:
            enrollments: Enrollment source.
            submissions: Questionnaire submission source.
            lesson_progress: Lesson progress source.
            certificates: Optional certificate source.
            logins: Optional login history source.
        """
        self._enrollments = enrollments
        self._submissions = submissions
        self._lesson_progress = lesson_progress
        self._certificates = certificates
        self._logins = logins
        self._counters: dict[BadgeCriteriaType, Counter] = {
            BadgeCriteriaType.COURSE_COMPLETION: self.count_completed_courses,
            BadgeCriteriaType.QUESTIONNAIRE_COMPLETION: self.count_passed_questionnaires,
            BadgeCriteriaType.LESSON_COMPLETION: self.count_completed_lessons,
            BadgeCriteriaType.CERTIFICATE_ACHIEVED: self.count_certificates,
            BadgeCriteriaType.DAILY_LOGIN: self.count_login_days,
        }

    async def count(self, badge: Badge, user_id: str, institution_id: str) -> int:
        """Measure a user's progress toward a badge.

        Args:
            badge: Badge whose criteria type selects the counter.
            user_id: Learner identifier.
            institution_id: Institution to count within.

        Returns:
            Number of qualifying actions; 0 for an unknown criteria type.
        """
        counter = self._counters.get(badge.criteria_type)
        if counter is None:
            return 0
        return await counter(user_id, institution_id)

    async def count_completed_courses(self, user_id: str, institution_id: str) -> int:
        enrollments = await self._enrollments.list_by_user(user_id)
        return sum(
            1
            for enrollment in enrollments
            if enrollment.status == EnrollmentStatus.COMPLETED
            and enrollment.institution_id == institution_id
        )

    async def count_passed_questionnaires(self, user_id: str, institution_id: str) -> int:
        submissions = await self._submissions.list_by_user(user_id)
        return sum(
            1
            for submission in submissions
            if submission.passed and submission.institution_id == institution_id
        )

    async def count_completed_lessons(self, user_id: str, institution_id: str) -> int:
        records = await self._lesson_progress.find_by_user_and_institution(
            user_id, institution_id
        )
        return sum(1 for record in records if record.is_completed())

    async def count_certificates(self, user_id: str, institution_id: str) -> int:
        if self._certificates is None:
            return 0
        certificates = await self._certificates.list_by_user(user_id)
        return sum(1 for certificate in certificates if certificate.institution_id == institution_id)

    async def count_login_days(self, user_id: str, institution_id: str) -> int:
        if self._logins is None:
            return 0
        days = sorted(set(await self._logins.list_login_days(user_id, institution_id)))
        return longest_streak(days)


def longest_streak(days: list[date]) -> int:
    """Return the length of the longest run of consecutive days.

    Args:
        days: Distinct days in ascending order.
    """
    longest = 0
    current = 0
    previous: date | None = None
    for day in days:
        if previous is not None and day - previous == timedelta(days=1):
            current += 1
        else:
            current = 1
        longest = max(longest, current)
        previous = day
    return longest
