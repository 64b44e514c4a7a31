# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Course progress API endpoints.

This module provides endpoints for:
- GET /{course_id}/progress - Get a user's progress through a course

Example:
    GET /api/v1/courses/c1/progress?user_id=u1&institution_id=i1
"""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel, Field

from src.api.dependencies import get_course_progress_service
from src.domains.content import CourseProgressService
from src.domains.exceptions import InvalidArgumentError, NotFoundError

router = APIRouter()


class CourseProgressResponse(BaseModel):
    """Course progress summary."""

    course_id: str
    progress_percentage: int = Field(description="Average lesson progress 0-100")
    total_lessons: int
    completed_lessons: int
    in_progress_lessons: int
    not_started_lessons: int
    next_lesson_id: str | None = Field(
        None, description="First lesson in course order not yet completed"
    )


@router.get(
    "/{course_id}/progress",
    response_model=CourseProgressResponse,
    summary="Get course progress",
    description="Summarize a user's lesson progress across a course.",
)
async def get_course_progress(
    course_id: str,
    user_id: Annotated[str, Query(description="Learner ID")],
    institution_id: Annotated[str, Query(description="Institution ID")],
    service: CourseProgressService = Depends(get_course_progress_service),
) -> CourseProgressResponse:
    """Get a user's progress through a course.

    Raises:
        HTTPException: 400 for a blank identifier, 404 for an unknown course.
    """
    try:
        progress = await service.get_course_progress(
            user_id=user_id,
            course_id=course_id,
            institution_id=institution_id,
        )
    except InvalidArgumentError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)

    return CourseProgressResponse(
        course_id=progress.course_id,
        progress_percentage=progress.progress_percentage,
        total_lessons=progress.total_lessons,
        completed_lessons=progress.completed_lessons,
        in_progress_lessons=progress.in_progress_lessons,
        not_started_lessons=progress.not_started_lessons,
        next_lesson_id=progress.next_lesson_id,
    )
