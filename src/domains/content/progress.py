# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Lesson and course progress services.

This module provides:
- LessonProgressService: start (create-or-touch) and complete a user's
  progress record for a lesson
- CourseProgressService: per-course completion statistics for a user
"""

import logging
from dataclasses import dataclass
from uuid import uuid4

from src.domains.content.models import LessonProgress, LessonProgressStatus
from src.domains.content.outline import CourseOrdering
from src.domains.content.repositories import (
    LessonLookup,
    LessonProgressLookup,
    LessonProgressStore,
    ModuleLookup,
)
from src.domains.exceptions import NotFoundError, require_ids
from src.utils.numbers import round_half_up

logger = logging.getLogger(__name__)


class CourseNotFoundError(NotFoundError):
    """Raised when a course has no modules to report on."""

    def __init__(self, course_id: str):
        super().__init__("course", course_id)


class LessonProgressNotFoundError(NotFoundError):
    """Raised when completing a lesson that was never started."""

    def __init__(self, user_id: str, lesson_id: str):
        super().__init__(
            "lesson progress",
            lesson_id,
            f"Lesson progress not found for user {user_id} and lesson {lesson_id}. "
            "Please start the lesson first.",
        )


@dataclass(frozen=True)
class StartLessonResult:
    """Outcome of starting a lesson."""

    progress: LessonProgress
    is_new: bool


@dataclass(frozen=True)
class CompleteLessonResult:
    """Outcome of completing a lesson."""

    progress: LessonProgress
    was_already_completed: bool


@dataclass(frozen=True)
class CourseProgress:
    """Completion statistics of one user in one course.

    Attributes:
        course_id: Course identifier.
        progress_percentage: Average lesson progress (0-100).
        total_lessons: Number of lessons in the course.
        completed_lessons: Lessons with a completed record.
        in_progress_lessons: Lessons started but not completed.
        not_started_lessons: Lessons without a record.
        next_lesson_id: First lesson in course order not yet completed.
    """

    course_id: str
    progress_percentage: int
    total_lessons: int
    completed_lessons: int
    in_progress_lessons: int
    not_started_lessons: int
    next_lesson_id: str | None = None


class LessonProgressService:
    """Creates and completes lesson progress records."""

    def __init__(self, progress: LessonProgressStore, lessons: LessonLookup) -> None:
        self._progress = progress
        self._lessons = lessons

    async def start_lesson(
        self,
        user_id: str,
        lesson_id: str,
        institution_id: str,
    ) -> StartLessonResult:
        """Start a lesson, or record a new access if it was already started.

        Args:
            user_id: Learner identifier.
            lesson_id: Lesson to start.
            institution_id: Institution the lesson is taken in.

        Returns:
            The saved progress record and whether it was created.

        Raises:
            InvalidArgumentError: If any identifier is missing or blank.
            NotFoundError: If the lesson does not exist.
        """
        require_ids(user_id=user_id, lesson_id=lesson_id, institution_id=institution_id)

        existing = await self._progress.find_by_user_and_lesson(user_id, lesson_id)
        if existing is not None:
            existing.touch()
            saved = await self._progress.save(existing)
            return StartLessonResult(progress=saved, is_new=False)

        lesson = await self._lessons.find_by_id(lesson_id)
        if lesson is None:
            raise NotFoundError("lesson", lesson_id)

        progress = LessonProgress(
            id=str(uuid4()),
            user_id=user_id,
            lesson_id=lesson_id,
            institution_id=institution_id,
        )
        saved = await self._progress.save(progress)

        logger.info("Started lesson: user=%s, lesson=%s", user_id, lesson_id)

        return StartLessonResult(progress=saved, is_new=True)

    async def complete_lesson(self, user_id: str, lesson_id: str) -> CompleteLessonResult:
        """Force-complete a started lesson.

        Raises:
            InvalidArgumentError: If any identifier is missing or blank.
            LessonProgressNotFoundError: If the lesson was never started.
        """
        require_ids(user_id=user_id, lesson_id=lesson_id)

        progress = await self._progress.find_by_user_and_lesson(user_id, lesson_id)
        if progress is None:
            raise LessonProgressNotFoundError(user_id, lesson_id)

        was_already_completed = progress.is_completed()
        progress.mark_completed()
        saved = await self._progress.save(progress)

        logger.info(
            "Completed lesson: user=%s, lesson=%s, already_completed=%s",
            user_id,
            lesson_id,
            was_already_completed,
        )

        return CompleteLessonResult(progress=saved, was_already_completed=was_already_completed)


class CourseProgressService:
    """Computes a user's progress through a course."""

    def __init__(
        self,
        progress: LessonProgressLookup,
        modules: ModuleLookup,
        lessons: LessonLookup,
    ) -> None:
        self._progress = progress
        self._ordering = CourseOrdering(modules, lessons)

    async def get_course_progress(
        self,
        user_id: str,
        course_id: str,
        institution_id: str,
    ) -> CourseProgress:
        """Summarize lesson completion for a user in a course.

        Completed lessons count 100, in-progress lessons count their own
        percentage and untouched lessons count 0.

        Raises:
            InvalidArgumentError: If any identifier is missing or blank.
            CourseNotFoundError: If the course has no modules.
        """
        require_ids(course_id=course_id, user_id=user_id, institution_id=institution_id)

        modules = await self._ordering.ordered_modules(course_id)
        if not modules:
            raise CourseNotFoundError(course_id)

        lessons = await self._ordering.lessons_of(modules)
        if not lessons:
            return CourseProgress(
                course_id=course_id,
                progress_percentage=0,
                total_lessons=0,
                completed_lessons=0,
                in_progress_lessons=0,
                not_started_lessons=0,
            )

        completed = in_progress = not_started = 0
        total_progress = 0.0
        next_lesson_id: str | None = None

        for lesson in lessons:
            record = await self._progress.find_by_user_and_lesson(user_id, lesson.id)
            status = record.status if record else LessonProgressStatus.NOT_STARTED

            if status == LessonProgressStatus.COMPLETED:
                completed += 1
                total_progress += 100
                continue

            if next_lesson_id is None:
                next_lesson_id = lesson.id

            if status == LessonProgressStatus.IN_PROGRESS:
                in_progress += 1
                total_progress += record.progress_percentage
            else:
                not_started += 1

        return CourseProgress(
            course_id=course_id,
            progress_percentage=int(round_half_up(total_progress / len(lessons))),
            total_lessons=len(lessons),
            completed_lessons=completed,
            in_progress_lessons=in_progress,
            not_started_lessons=not_started,
            next_lesson_id=next_lesson_id,
        )
