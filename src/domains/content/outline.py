# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Course ordering and lesson completion helpers.

CourseOrdering turns the unordered module and lesson listings returned by
repositories into the course's total lesson order: modules by ``order``,
then lessons by ``order`` inside each module. Sorting is stable, so ties
keep the order the repository returned.

CompletionOracle answers whether a user has completed a lesson.
"""

from dataclasses import dataclass

from src.domains.content.models import Lesson, Module
from src.domains.content.repositories import (
    LessonLookup,
    LessonProgressLookup,
    ModuleLookup,
)
from src.domains.exceptions import NotFoundError


class LessonNotInCourseError(NotFoundError):
    """Raised when a lesson is absent from its course's module listing."""

    def __init__(self, lesson_id: str, course_id: str):
        super().__init__(
            "lesson",
            lesson_id,
            f"Lesson {lesson_id} not found in course {course_id}",
        )
        self.course_id = course_id


@dataclass(frozen=True)
class LessonPosition:
    """Location of a lesson inside its course's total order.

    Attributes:
        module_index: Index of the lesson's module among the sorted modules.
        lesson_index: Index of the lesson among its module's sorted lessons.
        lessons_by_module: Sorted lessons of every module up to and
            including the lesson's module, in module order.
    """

    module_index: int
    lesson_index: int
    lessons_by_module: tuple[tuple[Lesson, ...], ...]

    @property
    def is_course_entry_point(self) -> bool:
        """Whether this is the first lesson of the first module."""
        return self.module_index == 0 and self.lesson_index == 0

    def preceding_lessons(self) -> list[Lesson]:
        """Return every lesson that comes before this one, in course order."""
        preceding: list[Lesson] = []
        for lessons in self.lessons_by_module[: self.module_index]:
            preceding.extend(lessons)
        preceding.extend(self.lessons_by_module[self.module_index][: self.lesson_index])
        return preceding


class CourseOrdering:
    """Provides modules and lessons of a course in course order."""

    def __init__(self, modules: ModuleLookup, lessons: LessonLookup) -> None:
        self._modules = modules
        self._lessons = lessons

    async def ordered_modules(self, course_id: str) -> list[Module]:
        """List a course's modules sorted by order."""
        modules = await self._modules.list_by_course(course_id)
        return sorted(modules, key=lambda module: module.order)

    async def ordered_lessons(self, module_id: str) -> list[Lesson]:
        """List a module's lessons sorted by order."""
        lessons = await self._lessons.list_by_module(module_id)
        return sorted(lessons, key=lambda lesson: lesson.order)

    async def lessons_of(self, modules: list[Module]) -> list[Lesson]:
        """List the lessons of already ordered modules in total course order."""
        ordered: list[Lesson] = []
        for module in modules:
            ordered.extend(await self.ordered_lessons(module.id))
        return ordered

    async def locate_lesson(self, course_id: str, lesson_id: str) -> LessonPosition:
        """Find a lesson's position in its course.

        Modules are walked in order and their lessons fetched one module at
        a time, stopping at the module that contains the lesson.

        Args:
            course_id: Course to search.
            lesson_id: Lesson to locate.

        Returns:
            Position of the lesson with the lessons seen so far.

        Raises:
            LessonNotInCourseError: If no module of the course holds the lesson.
        """
        seen: list[tuple[Lesson, ...]] = []
        for module_index, module in enumerate(await self.ordered_modules(course_id)):
            lessons = tuple(await self.ordered_lessons(module.id))
            seen.append(lessons)
            for lesson_index, lesson in enumerate(lessons):
                if lesson.id == lesson_id:
                    return LessonPosition(
                        module_index=module_index,
                        lesson_index=lesson_index,
                        lessons_by_module=tuple(seen),
                    )
        raise LessonNotInCourseError(lesson_id, course_id)


class CompletionOracle:
    """Answers lesson completion questions for a user."""

    def __init__(self, progress: LessonProgressLookup) -> None:
        self._progress = progress

    async def is_completed(self, user_id: str, lesson_id: str) -> bool:
        """Check whether the user has completed the lesson."""
        record = await self._progress.find_by_user_and_lesson(user_id, lesson_id)
        return record is not None and record.is_completed()

    async def incomplete_lessons(self, user_id: str, lessons: list[Lesson]) -> list[str]:
        """Return ids of the given lessons the user has not completed, in order."""
        incomplete: list[str] = []
        for lesson in lessons:
            if not await self.is_completed(user_id, lesson.id):
                incomplete.append(lesson.id)
        return incomplete
