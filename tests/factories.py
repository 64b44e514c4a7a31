# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Test data builders and repository doubles.

Repository doubles are MagicMocks whose async methods are AsyncMocks
answering from in-memory collections, so tests can both arrange data and
assert on calls.
"""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

from src.domains.badge.entities import Badge, BadgeCriteriaType, StudentBadge
from src.domains.content.models import (
    Enrollment,
    EnrollmentStatus,
    Institution,
    Lesson,
    LessonProgress,
    LessonProgressStatus,
    Module,
    NavigationSettings,
)


class ContentStore:
    """In-memory institutions, course outline and lesson progress.

    Exposes ``institutions``, ``modules``, ``lessons`` and ``progress``
    repository doubles satisfying the content domain protocols.
    """

    def __init__(self) -> None:
        self._institutions: dict[str, Institution] = {}
        self._modules: list[Module] = []
        self._lessons: list[Lesson] = []
        self._progress: dict[tuple[str, str], LessonProgress] = {}

        self.institutions = MagicMock()
        self.institutions.find_by_id = AsyncMock(side_effect=self._institutions.get)

        self.modules = MagicMock()
        self.modules.list_by_course = AsyncMock(
            side_effect=lambda course_id: [m for m in self._modules if m.course_id == course_id]
        )

        self.lessons = MagicMock()
        self.lessons.list_by_module = AsyncMock(
            side_effect=lambda module_id: [
                lesson for lesson in self._lessons if lesson.module_id == module_id
            ]
        )
        self.lessons.find_by_id = AsyncMock(
            side_effect=lambda lesson_id: next(
                (lesson for lesson in self._lessons if lesson.id == lesson_id), None
            )
        )

        self.progress = MagicMock()
        self.progress.find_by_user_and_lesson = AsyncMock(
            side_effect=lambda user_id, lesson_id: self._progress.get((user_id, lesson_id))
        )
        self.progress.find_by_user_and_institution = AsyncMock(
            side_effect=lambda user_id, institution_id: [
                record
                for record in self._progress.values()
                if record.user_id == user_id and record.institution_id == institution_id
            ]
        )
        self.progress.save = AsyncMock(side_effect=self._save)

    def _save(self, record: LessonProgress) -> LessonProgress:
        self._progress[(record.user_id, record.lesson_id)] = record
        return record

    def add_institution(
        self,
        institution_id: str = "inst-1",
        sequential: bool = False,
        allow_skip: bool = False,
    ) -> Institution:
        institution = Institution(
            id=institution_id,
            name=f"Institution {institution_id}",
            settings=NavigationSettings(
                require_sequential_progress=sequential,
                allow_skip_lesson=allow_skip,
            ),
        )
        self._institutions[institution_id] = institution
        return institution

    def add_module(self, module_id: str, order: int, course_id: str = "course-1") -> Module:
        module = Module(id=module_id, course_id=course_id, order=order)
        self._modules.append(module)
        return module

    def add_lesson(self, lesson_id: str, module_id: str, order: int) -> Lesson:
        lesson = Lesson(id=lesson_id, module_id=module_id, order=order)
        self._lessons.append(lesson)
        return lesson

    def add_progress(
        self,
        lesson_id: str,
        user_id: str = "user-1",
        status: LessonProgressStatus = LessonProgressStatus.COMPLETED,
        progress_percentage: float | None = None,
        institution_id: str = "inst-1",
    ) -> LessonProgress:
        if progress_percentage is None:
            progress_percentage = 100.0 if status == LessonProgressStatus.COMPLETED else 0.0
        record = LessonProgress(
            id=f"progress-{user_id}-{lesson_id}",
            user_id=user_id,
            lesson_id=lesson_id,
            institution_id=institution_id,
            status=status,
            progress_percentage=progress_percentage,
        )
        self._progress[(user_id, lesson_id)] = record
        return record



def make_badge(
    badge_id: str = "badge-1",
    criteria_type: BadgeCriteriaType | str = BadgeCriteriaType.LESSON_COMPLETION,
    criteria_value: int = 5,
    name: str | None = None,
) -> Badge:
    """Build a valid badge."""
    return Badge(
        id=badge_id,
        name=name or f"Badge {badge_id}",
        description="Earned by making progress",
        icon_url=f"https://cdn.example.com/badges/{badge_id}.png",
        criteria_type=criteria_type,
        criteria_value=criteria_value,
    )


def make_award(
    badge_id: str,
    user_id: str = "user-1",
    institution_id: str = "inst-1",
    awarded_at: datetime | None = None,
) -> StudentBadge:
    """Build a badge award."""
    return StudentBadge(
        id=f"award-{user_id}-{badge_id}",
        user_id=user_id,
        badge_id=badge_id,
        institution_id=institution_id,
        awarded_at=awarded_at or datetime(2025, 3, 10, tzinfo=timezone.utc),
    )


def make_enrollment(
    user_id: str,
    status: EnrollmentStatus = EnrollmentStatus.ACTIVE,
    institution_id: str = "inst-1",
    course_id: str = "course-1",
) -> Enrollment:
    """Build an enrollment."""
    return Enrollment(
        id=f"enrollment-{user_id}-{course_id}",
        user_id=user_id,
        course_id=course_id,
        institution_id=institution_id,
        status=status,
    )
