# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Badge report API endpoints.

This module provides endpoints for:
- GET /report - Get a student's badge report

Example:
    GET /api/v1/badges/report?user_id=u1&institution_id=i1&earned_only=true
"""

import logging
from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel, Field

from src.api.dependencies import get_badges_report_service
from src.domains.badge import (
    BadgeCategory,
    BadgeProgress,
    StudentBadgesReport,
    StudentBadgesReportService,
)
from src.domains.exceptions import EntityValidationError, InvalidArgumentError
from src.utils.datetime import ensure_utc

logger = logging.getLogger(__name__)

router = APIRouter()


# ============================================================================
# Response Models
# ============================================================================


class BadgeProgressResponse(BaseModel):
    """A student's progress on one badge."""

    badge_id: str
    name: str
    description: str
    icon_url: str
    criteria_type: str
    category: str
    difficulty: str
    rarity: str
    is_earned: bool
    earned_at: datetime | None = None
    current_progress: int = Field(description="Value of the badge criterion counter")
    required_progress: int = Field(description="Threshold to earn the badge")
    progress_percentage: int = Field(description="Progress 0-100")
    requirement_description: str
    reward_points: int
    reward_title: str
    special_access: str
    earned_by_percentage: float = Field(
        description="Share of enrolled users in the institution holding the badge"
    )
    estimated_time_to_earn_days: int | None = None

    @classmethod
    def from_progress(cls, item: BadgeProgress) -> "BadgeProgressResponse":
        return cls(
            badge_id=item.badge_id,
            name=item.badge.name,
            description=item.badge.description,
            icon_url=item.badge.icon_url,
            criteria_type=item.badge.criteria_type.value,
            category=item.category.value,
            difficulty=item.difficulty.value,
            rarity=item.rarity.value,
            is_earned=item.is_earned,
            earned_at=item.earned_at,
            current_progress=item.current_progress,
            required_progress=item.required_progress,
            progress_percentage=item.progress_percentage,
            requirement_description=item.requirement_description,
            reward_points=item.reward_points,
            reward_title=item.reward_title,
            special_access=item.special_access,
            earned_by_percentage=item.earned_by_percentage,
            estimated_time_to_earn_days=item.estimated_time_to_earn_days,
        )


class OverallStatsResponse(BaseModel):
    total_badges: int
    earned_badges: int
    completion_percentage: int
    total_points: int
    current_level: int
    points_to_next_level: int
    rare_badges_earned: int
    legendary_badges_earned: int
    average_badges_per_month: float
    recently_earned_badges: int


class CategoryStatsResponse(BaseModel):
    category: str
    total_badges: int
    earned_badges: int
    completion_percentage: int
    next_badge: BadgeProgressResponse | None = None


class TimelineEntryResponse(BaseModel):
    period: str = Field(description="Month as YYYY-MM")
    badges_earned: int
    badges: list[BadgeProgressResponse]


class BadgesReportResponse(BaseModel):
    """Student badge report."""

    user_id: str
    institution_id: str
    generated_at: datetime
    badges: list[BadgeProgressResponse]
    overall: OverallStatsResponse
    categories: list[CategoryStatsResponse]
    timeline: list[TimelineEntryResponse]
    recommendations: list[BadgeProgressResponse]
    showcase: list[BadgeProgressResponse]
    featured_badge: BadgeProgressResponse | None = None

    @classmethod
    def from_report(cls, report: StudentBadgesReport) -> "BadgesReportResponse":
        def convert(items: list[BadgeProgress]) -> list[BadgeProgressResponse]:
            return [BadgeProgressResponse.from_progress(item) for item in items]

        overall = report.overall
        return cls(
            user_id=report.user_id,
            institution_id=report.institution_id,
            generated_at=report.generated_at,
            badges=convert(report.badges),
            overall=OverallStatsResponse(
                total_badges=overall.total_badges,
                earned_badges=overall.earned_badges,
                completion_percentage=overall.completion_percentage,
                total_points=overall.total_points,
                current_level=overall.current_level,
                points_to_next_level=overall.points_to_next_level,
                rare_badges_earned=overall.rare_badges_earned,
                legendary_badges_earned=overall.legendary_badges_earned,
                average_badges_per_month=overall.average_badges_per_month,
                recently_earned_badges=overall.recently_earned_badges,
            ),
            categories=[
                CategoryStatsResponse(
                    category=stats.category.value,
                    total_badges=stats.total_badges,
                    earned_badges=stats.earned_badges,
                    completion_percentage=stats.completion_percentage,
                    next_badge=BadgeProgressResponse.from_progress(stats.next_badge)
                    if stats.next_badge
                    else None,
                )
                for stats in report.categories
            ],
            timeline=[
                TimelineEntryResponse(
                    period=entry.period,
                    badges_earned=entry.badges_earned,
                    badges=convert(entry.badges),
                )
                for entry in report.timeline
            ],
            recommendations=convert(report.recommendations),
            showcase=convert(report.showcase),
            featured_badge=BadgeProgressResponse.from_progress(report.featured_badge)
            if report.featured_badge
            else None,
        )


# ============================================================================
# Endpoints
# ============================================================================


@router.get(
    "/report",
    response_model=BadgesReportResponse,
    summary="Get student badge report",
    description="Badge progress, statistics, timeline and recommendations for a student.",
)
async def get_badges_report(
    user_id: Annotated[str, Query(description="Student ID")],
    institution_id: Annotated[str, Query(description="Institution ID")],
    earned_only: Annotated[bool, Query(description="Only list earned badges")] = False,
    category: Annotated[BadgeCategory | None, Query(description="Only list this category")] = None,
    date_from: Annotated[datetime | None, Query(description="Ignore awards before")] = None,
    date_to: Annotated[datetime | None, Query(description="Ignore awards after")] = None,
    service: StudentBadgesReportService = Depends(get_badges_report_service),
) -> BadgesReportResponse:
    """Get a student's badge report.

    Raises:
        HTTPException: 400 for a blank identifier or an inverted date range,
            422 for a malformed stored badge.
    """
    if date_from and date_to and ensure_utc(date_from) > ensure_utc(date_to):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="date_from must not be after date_to",
        )

    try:
        report = await service.generate_report(
            user_id=user_id,
            institution_id=institution_id,
            earned_only=earned_only,
            category=category,
            date_from=date_from,
            date_to=date_to,
        )
    except InvalidArgumentError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    except EntityValidationError as e:
        logger.error("Invalid badge data for user %s: %s", user_id, e)
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=e.message,
        )

    return BadgesReportResponse.from_report(report)
