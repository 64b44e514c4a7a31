# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for badge criterion counters."""

from datetime import date, datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.domains.badge.counters import CriterionCounters, longest_streak
from src.domains.badge.entities import BadgeCriteriaType
from src.domains.content.models import (
    Certificate,
    EnrollmentStatus,
    LessonProgressStatus,
    QuestionnaireSubmission,
)
from tests.factories import ContentStore, make_badge, make_enrollment


@pytest.fixture
def submissions():
    """Create submission source with passed and failed submissions."""
    repo = MagicMock()
    repo.list_by_user = AsyncMock(
        return_value=[
            QuestionnaireSubmission(id="s1", user_id="user-1", questionnaire_id="q1",
                                    institution_id="inst-1", passed=True),
            QuestionnaireSubmission(id="s2", user_id="user-1", questionnaire_id="q2",
                                    institution_id="inst-1", passed=False),
            QuestionnaireSubmission(id="s3", user_id="user-1", questionnaire_id="q3",
                                    institution_id="inst-2", passed=True),
        ]
    )
    return repo


@pytest.fixture
def lesson_store():
    """Create lesson progress source with two completed lessons in inst-1."""
    store = ContentStore()
    store.add_progress("l1")
    store.add_progress("l2")
    store.add_progress("l3", status=LessonProgressStatus.IN_PROGRESS)
    store.add_progress("l4", institution_id="inst-2")
    return store


@pytest.fixture
def counters(mock_enrollments, submissions, lesson_store):
    """Create counters without certificate or login sources."""
    mock_enrollments.list_by_user.return_value = [
        make_enrollment("user-1", EnrollmentStatus.COMPLETED, course_id="c1"),
        make_enrollment("user-1", EnrollmentStatus.COMPLETED, course_id="c2"),
        make_enrollment("user-1", EnrollmentStatus.ACTIVE, course_id="c3"),
        make_enrollment("user-1", EnrollmentStatus.COMPLETED, institution_id="inst-2", course_id="c4"),
    ]
    return CriterionCounters(
        enrollments=mock_enrollments,
        submissions=submissions,
        lesson_progress=lesson_store.progress,
    )


async def count(counters: CriterionCounters, criteria_type: BadgeCriteriaType) -> int:
    return await counters.count(make_badge(criteria_type=criteria_type), "user-1", "inst-1")


class TestCriterionCounters:
    """Tests for CriterionCounters dispatch."""

    @pytest.mark.asyncio
    async def test_completed_courses_in_institution(self, counters):
        """Test only completed enrollments of the institution count."""
        assert await count(counters, BadgeCriteriaType.COURSE_COMPLETION) == 2

    @pytest.mark.asyncio
    async def test_passed_questionnaires_in_institution(self, counters):
        """Test only passed submissions of the institution count."""
        assert await count(counters, BadgeCriteriaType.QUESTIONNAIRE_COMPLETION) == 1

    @pytest.mark.asyncio
    async def test_completed_lessons_in_institution(self, counters, lesson_store):
        """Test completed lesson records in the institution count."""
        assert await count(counters, BadgeCriteriaType.LESSON_COMPLETION) == 2
        lesson_store.progress.find_by_user_and_institution.assert_awaited_once_with(
            "user-1", "inst-1"
        )

    @pytest.mark.asyncio
    async def test_certificates_without_source_is_zero(self, counters):
        """Test certificate badges count 0 without a certificate source."""
        assert await count(counters, BadgeCriteriaType.CERTIFICATE_ACHIEVED) == 0

    @pytest.mark.asyncio
    async def test_login_days_without_source_is_zero(self, counters):
        """Test login badges count 0 without a login history source."""
        assert await count(counters, BadgeCriteriaType.DAILY_LOGIN) == 0

    @pytest.mark.asyncio
    async def test_certificates_with_source(self, mock_enrollments, submissions, lesson_store):
        """Test certificates of the institution are counted."""
        certificates = MagicMock()
        certificates.list_by_user = AsyncMock(
            return_value=[
                Certificate(id="c1", user_id="user-1", course_id="c1", institution_id="inst-1",
                            issued_at=datetime(2025, 1, 1, tzinfo=timezone.utc)),
                Certificate(id="c2", user_id="user-1", course_id="c2", institution_id="inst-2",
                            issued_at=datetime(2025, 1, 2, tzinfo=timezone.utc)),
            ]
        )
        counters = CriterionCounters(
            mock_enrollments, submissions, lesson_store.progress, certificates=certificates
        )

        assert await count(counters, BadgeCriteriaType.CERTIFICATE_ACHIEVED) == 1

    @pytest.mark.asyncio
    async def test_login_days_are_distinct(self, mock_enrollments, submissions, lesson_store):
        """Test repeated login days count once."""
        logins = MagicMock()
        logins.list_login_days = AsyncMock(
            return_value=[date(2025, 1, 1), date(2025, 1, 1), date(2025, 1, 2)]
        )
        counters = CriterionCounters(
            mock_enrollments, submissions, lesson_store.progress, logins=logins
        )

        assert await count(counters, BadgeCriteriaType.DAILY_LOGIN) == 2
        logins.list_login_days.assert_awaited_once_with("user-1", "inst-1")

    @pytest.mark.asyncio
    async def test_login_days_with_gaps_do_not_form_a_streak(
        self, mock_enrollments, submissions, lesson_store
    ):
        """Test scattered logins count as a streak of one day."""
        logins = MagicMock()
        logins.list_login_days = AsyncMock(
            return_value=[date(2025, 1, 1), date(2025, 1, 10), date(2025, 2, 20)]
        )
        counters = CriterionCounters(
            mock_enrollments, submissions, lesson_store.progress, logins=logins
        )
        badge = make_badge(criteria_type=BadgeCriteriaType.DAILY_LOGIN, criteria_value=3)

        progress = await counters.count(badge, "user-1", "inst-1")

        assert progress == 1
        assert not badge.is_criteria_met(progress)

    @pytest.mark.asyncio
    async def test_login_days_use_longest_streak(
        self, mock_enrollments, submissions, lesson_store
    ):
        """Test the longest consecutive run is counted."""
        logins = MagicMock()
        logins.list_login_days = AsyncMock(
            return_value=[
                date(2025, 1, 1), date(2025, 1, 2), date(2025, 1, 3),
                date(2025, 1, 5), date(2025, 1, 6),
            ]
        )
        counters = CriterionCounters(
            mock_enrollments, submissions, lesson_store.progress, logins=logins
        )

        assert await count(counters, BadgeCriteriaType.DAILY_LOGIN) == 3

    @pytest.mark.asyncio
    async def test_counter_errors_propagate(self, counters, submissions):
        """Test counters leave failure handling to the caller."""
        submissions.list_by_user.side_effect = RuntimeError("boom")

        with pytest.raises(RuntimeError):
            await count(counters, BadgeCriteriaType.QUESTIONNAIRE_COMPLETION)


class TestLongestStreak:
    """Tests for longest_streak."""

    def test_empty(self):
        """Test no days is a streak of zero."""
        assert longest_streak([]) == 0

    def test_streak_across_month_boundary(self):
        """Test consecutive days spanning months are one run."""
        days = [date(2025, 1, 30), date(2025, 1, 31), date(2025, 2, 1)]
        assert longest_streak(days) == 3
