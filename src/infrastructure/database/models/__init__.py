# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""SQLAlchemy ORM models.

Importing this package registers every table on Base.metadata.
"""

from src.infrastructure.database.models.badge import BadgeRow, StudentBadgeRow
from src.infrastructure.database.models.base import Base
from src.infrastructure.database.models.content import (
    CourseRow,
    InstitutionRow,
    LessonProgressRow,
    LessonRow,
    ModuleRow,
)
from src.infrastructure.database.models.enrollment import (
    CertificateRow,
    EnrollmentRow,
    LoginEventRow,
    QuestionnaireSubmissionRow,
)

__all__ = [
    "Base",
    "BadgeRow",
    "StudentBadgeRow",
    "CourseRow",
    "InstitutionRow",
    "LessonProgressRow",
    "LessonRow",
    "ModuleRow",
    "CertificateRow",
    "EnrollmentRow",
    "LoginEventRow",
    "QuestionnaireSubmissionRow",
]
