# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Data models for the content domain.

This module defines the dataclasses and enums the content services work on:
- Institutions and their navigation policy
- Course modules and lessons with their ordering
- Per-user lesson progress records
- Enrollments and questionnaire submissions used by badge counters

Repositories translate storage rows into these models so that services
never depend on ORM classes.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from src.utils.datetime import utc_now


class LessonProgressStatus(str, Enum):
    """Lifecycle status of a user's progress in one lesson."""

    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class EnrollmentStatus(str, Enum):
    """Enrollment status of a user in a course."""

    ACTIVE = "active"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class NavigationSettings:
    """Institution-level lesson navigation policy.

    Attributes:
        require_sequential_progress: When False, lessons are never gated.
        allow_skip_lesson: When True, incomplete prerequisites produce a
            skippable grant instead of a denial.
    """

    require_sequential_progress: bool = False
    allow_skip_lesson: bool = False


@dataclass(frozen=True)
class Institution:
    """Institution owning courses and navigation settings."""

    id: str
    name: str
    settings: NavigationSettings = field(default_factory=NavigationSettings)


@dataclass(frozen=True)
class Module:
    """Course module with its position in the course."""

    id: str
    course_id: str
    order: int
    title: str = ""


@dataclass(frozen=True)
class Lesson:
    """Lesson with its position inside a module."""

    id: str
    module_id: str
    order: int
    title: str = ""


@dataclass
class LessonProgress:
    """A user's progress record for one lesson.

    Attributes:
        id: Record identifier.
        user_id: Learner identifier.
        lesson_id: Lesson identifier.
        institution_id: Institution the lesson was taken in.
        status: Current lifecycle status.
        progress_percentage: Completion percentage (0-100).
        started_at: When the lesson was first opened.
        completed_at: When the lesson was completed, if it was.
        last_accessed_at: Last time the lesson was opened.
    """

    id: str
    user_id: str
    lesson_id: str
    institution_id: str
    status: LessonProgressStatus = LessonProgressStatus.IN_PROGRESS
    progress_percentage: float = 0.0
    started_at: datetime = field(default_factory=utc_now)
    completed_at: datetime | None = None
    last_accessed_at: datetime = field(default_factory=utc_now)

    def is_completed(self) -> bool:
        """Check whether the lesson is completed."""
        return self.status == LessonProgressStatus.COMPLETED

    def touch(self) -> None:
        """Record a new access to the lesson."""
        self.last_accessed_at = utc_now()
        if self.status == LessonProgressStatus.NOT_STARTED:
            self.status = LessonProgressStatus.IN_PROGRESS

    def mark_completed(self) -> None:
        """Force the lesson to completed at 100%."""
        now = utc_now()
        self.status = LessonProgressStatus.COMPLETED
        self.progress_percentage = 100.0
        self.completed_at = now
        self.last_accessed_at = now


@dataclass(frozen=True)
class Enrollment:
    """Enrollment of a user in a course of an institution."""

    id: str
    user_id: str
    course_id: str
    institution_id: str
    status: EnrollmentStatus = EnrollmentStatus.ACTIVE


@dataclass(frozen=True)
class QuestionnaireSubmission:
    """A user's graded questionnaire submission."""

    id: str
    user_id: str
    questionnaire_id: str
    institution_id: str
    passed: bool = False


@dataclass(frozen=True)
class Certificate:
    """Course certificate issued to a user."""

    id: str
    user_id: str
    course_id: str
    institution_id: str
    issued_at: datetime = field(default_factory=utc_now)
