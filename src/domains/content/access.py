# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Lesson access gate.

LessonAccessService decides whether a user may open a lesson under the
institution's navigation policy:

- A lesson the user already started (or completed) is always accessible.
- Without sequential progress, every lesson is accessible.
- With sequential progress, the first lesson of the first module is always
  accessible; any other lesson requires every preceding lesson in course
  order to be completed. If the institution allows skipping, incomplete
  prerequisites yield a skippable grant instead of a denial.

The sequential check fails closed: any error while computing it becomes a
denial with a fixed reason, never an exception and never a grant.

Usage:
    service = LessonAccessService(
        institutions=institution_repo,
        progress=lesson_progress_repo,
        modules=module_repo,
        lessons=lesson_repo,
    )
    result = await service.can_access_lesson(
        user_id="u1", lesson_id="l2", course_id="c1", institution_id="i1"
    )
"""

import logging
from dataclasses import dataclass

from src.domains.content.outline import CompletionOracle, CourseOrdering
from src.domains.content.repositories import (
    InstitutionLookup,
    LessonLookup,
    LessonProgressLookup,
    ModuleLookup,
)
from src.domains.exceptions import NotFoundError, require_ids

logger = logging.getLogger(__name__)

DEFAULT_ACCESS_ERROR_MESSAGE = "Unable to verify access to this lesson"


@dataclass(frozen=True)
class LessonAccessResult:
    """Outcome of a lesson access check.

    Attributes:
        can_access: Whether the lesson may be opened.
        has_started: Whether the user already has a progress record.
        is_completed: Whether that record is completed.
        reason: User-facing explanation, set only for fail-closed denials.
        is_skippable: Set by the sequential check; True when access is
            granted despite incomplete prerequisites.
    """

    can_access: bool
    has_started: bool = False
    is_completed: bool = False
    reason: str | None = None
    is_skippable: bool | None = None


@dataclass(frozen=True)
class SequentialAccessDecision:
    """Result of the sequential eligibility check.

    Either a decision (``reason`` is None) or a denial carrying the
    reason the check could not be completed.
    """

    can_access: bool
    is_skippable: bool = False
    reason: str | None = None

    @classmethod
    def denied_with_reason(cls, reason: str) -> "SequentialAccessDecision":
        """Build the fail-closed denial."""
        return cls(can_access=False, is_skippable=False, reason=reason)


class LessonAccessService:
    """Decides lesson access from institution policy and prior completions.

    Attributes:
        access_error_message: Reason reported when the sequential check fails.
    """

    def __init__(
        self,
        institutions: InstitutionLookup,
        progress: LessonProgressLookup,
        modules: ModuleLookup,
        lessons: LessonLookup,
        access_error_message: str = DEFAULT_ACCESS_ERROR_MESSAGE,
    ) -> None:
        """Initialize the access gate.

        Args:
            institutions: Institution lookup for navigation settings.
            progress: Lesson progress lookup.
            modules: Module listing per course.
            lessons: Lesson listing per module.
            access_error_message: Reason used for fail-closed denials.
        """
        self._institutions = institutions
        self._progress = progress
        self._ordering = CourseOrdering(modules, lessons)
        self._completion = CompletionOracle(progress)
        self.access_error_message = access_error_message

    async def can_access_lesson(
        self,
        user_id: str,
        lesson_id: str,
        course_id: str,
        institution_id: str,
    ) -> LessonAccessResult:
        """Check whether a user may open a lesson.

        Args:
            user_id: Learner identifier.
            lesson_id: Lesson to open.
            course_id: Course the lesson belongs to.
            institution_id: Institution whose policy applies.

        Returns:
            Access decision with the lesson's started/completed state.

        Raises:
            InvalidArgumentError: If any identifier is missing or blank.
            NotFoundError: If the institution does not exist.
        """
        require_ids(
            user_id=user_id,
            lesson_id=lesson_id,
            institution_id=institution_id,
            course_id=course_id,
        )

        institution = await self._institutions.find_by_id(institution_id)
        if institution is None:
            raise NotFoundError("institution", institution_id)

        settings = institution.settings

        current = await self._progress.find_by_user_and_lesson(user_id, lesson_id)
        if current is not None:
            return LessonAccessResult(
                can_access=True,
                has_started=True,
                is_completed=current.is_completed(),
            )

        if not settings.require_sequential_progress:
            return LessonAccessResult(can_access=True)

        decision = await self._check_sequential_access(
            user_id=user_id,
            lesson_id=lesson_id,
            course_id=course_id,
            allow_skip=settings.allow_skip_lesson,
        )

        return LessonAccessResult(
            can_access=decision.can_access,
            reason=decision.reason,
            is_skippable=decision.is_skippable,
        )

    async def _check_sequential_access(
        self,
        user_id: str,
        lesson_id: str,
        course_id: str,
        allow_skip: bool,
    ) -> SequentialAccessDecision:
        """Evaluate sequential eligibility of a never-visited lesson.

        Never raises: failures, including a lesson missing from its course,
        produce a denial with ``access_error_message``.
        """
        try:
            position = await self._ordering.locate_lesson(course_id, lesson_id)

            if position.is_course_entry_point:
                return SequentialAccessDecision(can_access=True)

            incomplete = await self._completion.incomplete_lessons(
                user_id, position.preceding_lessons()
            )
            if not incomplete:
                return SequentialAccessDecision(can_access=True)

            logger.debug(
                "Lesson %s has %d incomplete prerequisites for user %s (skip allowed: %s)",
                lesson_id,
                len(incomplete),
                user_id,
                allow_skip,
            )
            if allow_skip:
                return SequentialAccessDecision(can_access=True, is_skippable=True)
            return SequentialAccessDecision(can_access=False)
        except Exception:
            logger.exception(
                "Error checking sequential access: user=%s, lesson=%s, course=%s",
                user_id,
                lesson_id,
                course_id,
            )
            return SequentialAccessDecision.denied_with_reason(self.access_error_message)
