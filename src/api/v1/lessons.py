# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Lesson access and lesson progress API endpoints.

This module provides endpoints for:
- GET /{lesson_id}/access - Check whether a user may open a lesson
- POST /{lesson_id}/progress/start - Start (or revisit) a lesson
- POST /{lesson_id}/progress/complete - Complete a started lesson

Example:
    GET /api/v1/lessons/l2/access?user_id=u1&course_id=c1&institution_id=i1
"""

from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel, Field

from src.api.dependencies import get_lesson_access_service, get_lesson_progress_service
from src.domains.content import LessonAccessService, LessonProgressService
from src.domains.content.models import LessonProgress
from src.domains.exceptions import InvalidArgumentError, NotFoundError

router = APIRouter()


# ============================================================================
# Request/Response Models
# ============================================================================


class LessonAccessResponse(BaseModel):
    """Lesson access decision."""

    can_access: bool = Field(description="Whether the lesson may be opened")
    has_started: bool = Field(description="Whether the user already started the lesson")
    is_completed: bool = Field(description="Whether the user completed the lesson")
    reason: str | None = Field(None, description="Why access could not be verified")
    is_skippable: bool | None = Field(
        None, description="Access granted although prerequisites are incomplete"
    )


class StartLessonRequest(BaseModel):
    """Start lesson request."""

    user_id: str = Field(description="Learner ID")
    institution_id: str = Field(description="Institution ID")


class CompleteLessonRequest(BaseModel):
    """Complete lesson request."""

    user_id: str = Field(description="Learner ID")


class LessonProgressResponse(BaseModel):
    """Lesson progress record."""

    id: str
    user_id: str
    lesson_id: str
    institution_id: str
    status: str = Field(description="not_started, in_progress or completed")
    progress_percentage: float = Field(description="Completion percentage 0-100")
    started_at: datetime
    completed_at: datetime | None = None
    last_accessed_at: datetime

    @classmethod
    def from_progress(cls, progress: LessonProgress) -> "LessonProgressResponse":
        return cls(
            id=progress.id,
            user_id=progress.user_id,
            lesson_id=progress.lesson_id,
            institution_id=progress.institution_id,
            status=progress.status.value,
            progress_percentage=progress.progress_percentage,
            started_at=progress.started_at,
            completed_at=progress.completed_at,
            last_accessed_at=progress.last_accessed_at,
        )


class StartLessonResponse(BaseModel):
    """Start lesson response."""

    progress: LessonProgressResponse
    is_new: bool = Field(description="Whether a new progress record was created")


class CompleteLessonResponse(BaseModel):
    """Complete lesson response."""

    progress: LessonProgressResponse
    was_already_completed: bool


# ============================================================================
# Endpoints
# ============================================================================


@router.get(
    "/{lesson_id}/access",
    response_model=LessonAccessResponse,
    summary="Check lesson access",
    description="Decide whether a user may open a lesson under the institution's navigation policy.",
)
async def check_lesson_access(
    lesson_id: str,
    user_id: Annotated[str, Query(description="Learner ID")],
    course_id: Annotated[str, Query(description="Course the lesson belongs to")],
    institution_id: Annotated[str, Query(description="Institution ID")],
    service: LessonAccessService = Depends(get_lesson_access_service),
) -> LessonAccessResponse:
    """Check whether a user may open a lesson.

    Raises:
        HTTPException: 400 for a blank identifier, 404 for an unknown institution.
    """
    try:
        result = await service.can_access_lesson(
            user_id=user_id,
            lesson_id=lesson_id,
            course_id=course_id,
            institution_id=institution_id,
        )
    except InvalidArgumentError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)

    return LessonAccessResponse(
        can_access=result.can_access,
        has_started=result.has_started,
        is_completed=result.is_completed,
        reason=result.reason,
        is_skippable=result.is_skippable,
    )


@router.post(
    "/{lesson_id}/progress/start",
    response_model=StartLessonResponse,
    summary="Start lesson",
    description="Create a progress record, or record a new access to a started lesson.",
)
async def start_lesson(
    lesson_id: str,
    data: StartLessonRequest,
    service: LessonProgressService = Depends(get_lesson_progress_service),
) -> StartLessonResponse:
    """Start a lesson.

    Raises:
        HTTPException: 400 for a blank identifier, 404 for an unknown lesson.
    """
    try:
        result = await service.start_lesson(
            user_id=data.user_id,
            lesson_id=lesson_id,
            institution_id=data.institution_id,
        )
    except InvalidArgumentError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)

    return StartLessonResponse(
        progress=LessonProgressResponse.from_progress(result.progress),
        is_new=result.is_new,
    )


@router.post(
    "/{lesson_id}/progress/complete",
    response_model=CompleteLessonResponse,
    summary="Complete lesson",
    description="Mark a started lesson as completed at 100%.",
)
async def complete_lesson(
    lesson_id: str,
    data: CompleteLessonRequest,
    service: LessonProgressService = Depends(get_lesson_progress_service),
) -> CompleteLessonResponse:
    """Complete a lesson.

    Raises:
        HTTPException: 400 for a blank identifier, 404 if the lesson was never started.
    """
    try:
        result = await service.complete_lesson(user_id=data.user_id, lesson_id=lesson_id)
    except InvalidArgumentError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)

    return CompleteLessonResponse(
        progress=LessonProgressResponse.from_progress(result.progress),
        was_already_completed=result.was_already_completed,
    )
