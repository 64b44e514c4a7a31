# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Collaborator interfaces for the content domain.

Services depend on these narrow protocols rather than on concrete storage.
The SQLAlchemy implementations live in
``src.infrastructure.database.repositories.content``; tests substitute
``AsyncMock`` doubles.
"""

from typing import Protocol

from src.domains.content.models import Institution, Lesson, LessonProgress, Module


class InstitutionLookup(Protocol):
    """Read access to institutions."""

    async def find_by_id(self, institution_id: str) -> Institution | None: ...


class ModuleLookup(Protocol):
    """Read access to the modules of a course."""

    async def list_by_course(self, course_id: str) -> list[Module]: ...


class LessonLookup(Protocol):
    """Read access to lessons."""

    async def list_by_module(self, module_id: str) -> list[Lesson]: ...

    async def find_by_id(self, lesson_id: str) -> Lesson | None: ...


class LessonProgressLookup(Protocol):
    """Read access to one user's progress on one lesson."""

    async def find_by_user_and_lesson(
        self, user_id: str, lesson_id: str
    ) -> LessonProgress | None: ...


class LessonProgressStore(LessonProgressLookup, Protocol):
    """Read/write access to lesson progress records."""

    async def save(self, progress: LessonProgress) -> LessonProgress: ...
