# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""API v1 routes package.

This package contains all v1 API endpoint definitions.
Each module provides a FastAPI router for a specific domain.

Modules:
    lessons: Lesson access checks and lesson progress start/complete.
    courses: Course progress summaries.
    badges: Student badge reports.
"""

from fastapi import APIRouter

from src.api.v1 import badges, courses, lessons

# Create the main v1 router
router = APIRouter(prefix="/api/v1")

# Include domain routers
router.include_router(lessons.router, prefix="/lessons", tags=["Lessons"])
router.include_router(courses.router, prefix="/courses", tags=["Courses"])
router.include_router(badges.router, prefix="/badges", tags=["Badges"])

__all__ = ["router"]
