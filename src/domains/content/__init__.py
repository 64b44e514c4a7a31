# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Content domain package.

This package provides course content progression functionality including:
- Course ordering of modules and lessons
- Sequential lesson access gating
- Lesson progress start/complete
- Course progress summaries
"""

from src.domains.content.access import (
    LessonAccessResult,
    LessonAccessService,
    SequentialAccessDecision,
)
from src.domains.content.outline import (
    CompletionOracle,
    CourseOrdering,
    LessonNotInCourseError,
    LessonPosition,
)
from src.domains.content.progress import (
    CompleteLessonResult,
    CourseProgress,
    CourseNotFoundError,
    CourseProgressService,
    LessonProgressNotFoundError,
    LessonProgressService,
    StartLessonResult,
)

__all__ = [
    "LessonAccessResult",
    "LessonAccessService",
    "SequentialAccessDecision",
    "CompletionOracle",
    "CourseOrdering",
    "LessonNotInCourseError",
    "LessonPosition",
    "CompleteLessonResult",
    "CourseProgress",
    "CourseNotFoundError",
    "CourseProgressService",
    "LessonProgressNotFoundError",
    "LessonProgressService",
    "StartLessonResult",
]
