# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Badge entities.

Badge is the definition of something a student can earn ("complete 3
courses"); StudentBadge records that a student earned it. Both validate
their fields when constructed and never change afterwards.
"""

import math
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum

from src.domains.exceptions import EntityValidationError
from src.utils.datetime import ensure_utc, time_since, utc_now
from src.utils.numbers import percentage


class BadgeCriteriaType(str, Enum):
    """Action that counts toward a badge."""

    COURSE_COMPLETION = "COURSE_COMPLETION"
    QUESTIONNAIRE_COMPLETION = "QUESTIONNAIRE_COMPLETION"
    DAILY_LOGIN = "DAILY_LOGIN"
    LESSON_COMPLETION = "LESSON_COMPLETION"
    CERTIFICATE_ACHIEVED = "CERTIFICATE_ACHIEVED"


def _require_text(value: str, label: str) -> None:
    if not isinstance(value, str) or not value.strip():
        raise EntityValidationError(f"{label} cannot be empty")


@dataclass(frozen=True)
class Badge:
    """A badge students can earn by reaching a criterion threshold.

    Attributes:
        id: Badge identifier.
        name: Display name (e.g. "First Course Completed").
        description: What the badge represents.
        icon_url: Image shown for the badge.
        criteria_type: Action that counts toward the badge.
        criteria_value: Number of actions needed to earn it.

    Raises:
        EntityValidationError: If a text field is blank, the criteria type
            is unknown or the criteria value is not positive.
    """

    id: str
    name: str
    description: str
    icon_url: str
    criteria_type: BadgeCriteriaType
    criteria_value: int

    def __post_init__(self) -> None:
        _require_text(self.id, "Badge ID")
        _require_text(self.name, "Badge name")
        _require_text(self.description, "Badge description")
        _require_text(self.icon_url, "Badge icon URL")

        try:
            criteria_type = BadgeCriteriaType(self.criteria_type)
        except ValueError:
            raise EntityValidationError(
                f"Invalid badge criteria type: {self.criteria_type}"
            ) from None
        object.__setattr__(self, "criteria_type", criteria_type)

        if (
            isinstance(self.criteria_value, bool)
            or not isinstance(self.criteria_value, int)
            or self.criteria_value <= 0
        ):
            raise EntityValidationError("Badge criteria value must be greater than zero")

    def is_criteria_met(self, count: int) -> bool:
        """Check whether a count reaches the threshold."""
        return count >= self.criteria_value

    def remaining_count(self, count: int) -> int:
        """Return how many more actions are needed to earn the badge."""
        return max(0, self.criteria_value - count)

    def progress_percentage(self, count: int) -> int:
        """Return progress toward the badge as a 0-100 percentage."""
        if self.is_criteria_met(count):
            return 100
        return min(100, percentage(count, self.criteria_value))


@dataclass(frozen=True)
class StudentBadge:
    """Record of a badge earned by a student in an institution.

    Attributes:
        id: Record identifier.
        user_id: Student who earned the badge.
        badge_id: Badge that was earned.
        institution_id: Institution in which it was earned.
        awarded_at: When it was awarded (defaults to now, UTC).
    """

    id: str
    user_id: str
    badge_id: str
    institution_id: str
    awarded_at: datetime = field(default_factory=utc_now)

    def __post_init__(self) -> None:
        _require_text(self.id, "Student badge ID")
        _require_text(self.user_id, "User ID")
        _require_text(self.badge_id, "Badge ID")
        _require_text(self.institution_id, "Institution ID")
        object.__setattr__(self, "awarded_at", ensure_utc(self.awarded_at))

    def days_since_awarded(self, now: datetime | None = None) -> int:
        """Return whole days since the award, rounded up; 0 for a future award."""
        elapsed = time_since(self.awarded_at, now=now)
        return max(0, math.ceil(elapsed.total_seconds() / 86400))

    def is_recently_awarded(self, days_threshold: int = 7, now: datetime | None = None) -> bool:
        """Check whether the badge was awarded within the last ``days_threshold`` days.

        Awards dated after ``now`` are not recent.
        """
        if time_since(self.awarded_at, now=now) < timedelta(0):
            return False
        return self.days_since_awarded(now=now) <= days_threshold
