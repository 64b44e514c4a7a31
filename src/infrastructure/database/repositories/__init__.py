# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""SQL implementations of the domain repository protocols."""

from src.infrastructure.database.repositories.badge import (
    SqlBadgeRepository,
    SqlStudentBadgeRepository,
)
from src.infrastructure.database.repositories.content import (
    SqlInstitutionRepository,
    SqlLessonProgressRepository,
    SqlLessonRepository,
    SqlModuleRepository,
)
from src.infrastructure.database.repositories.enrollment import (
    SqlCertificateRepository,
    SqlEnrollmentRepository,
    SqlLoginHistoryRepository,
    SqlQuestionnaireSubmissionRepository,
)

__all__ = [
    "SqlBadgeRepository",
    "SqlStudentBadgeRepository",
    "SqlInstitutionRepository",
    "SqlLessonProgressRepository",
    "SqlLessonRepository",
    "SqlModuleRepository",
    "SqlCertificateRepository",
    "SqlEnrollmentRepository",
    "SqlLoginHistoryRepository",
    "SqlQuestionnaireSubmissionRepository",
]
