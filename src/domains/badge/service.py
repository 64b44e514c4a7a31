# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Student badges report service.

Assembles a student's badge report from the badge progress engine:
overall statistics, per-category statistics, a monthly timeline of awards,
recommendations for the next badges to chase, and a showcase of the most
recent awards.

Filters (``earned_only``, ``category``) only narrow the returned badge
list. Statistics are always computed over every badge. The date range
narrows the earned badges before progress is built, so badges awarded
outside it are reported as not earned.
"""

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import datetime

from src.domains.badge.engine import BadgeProgress, BadgeProgressEngine
from src.domains.badge.entities import StudentBadge
from src.domains.badge.repositories import BadgeCatalog, EarnedBadgeLookup
from src.domains.badge.rules import RARE_OR_BETTER, BadgeCategory, BadgeRarity
from src.domains.exceptions import require_ids
from src.utils.datetime import ensure_utc, month_key, utc_now
from src.utils.numbers import percentage, round_half_up

logger = logging.getLogger(__name__)

POINTS_PER_LEVEL = 1000


@dataclass(frozen=True)
class OverallStats:
    """Totals across every badge in the catalog."""

    total_badges: int
    earned_badges: int
    completion_percentage: int
    total_points: int
    current_level: int
    points_to_next_level: int
    rare_badges_earned: int
    legendary_badges_earned: int
    average_badges_per_month: float
    recently_earned_badges: int = 0


@dataclass(frozen=True)
class CategoryStats:
    """Totals for one badge category.

    ``next_badge`` is the not-earned badge of the category with the
    highest progress, if any.
    """

    category: BadgeCategory
    total_badges: int
    earned_badges: int
    completion_percentage: int
    next_badge: BadgeProgress | None = None


@dataclass(frozen=True)
class TimelineEntry:
    """Badges awarded within one calendar month (``YYYY-MM``)."""

    period: str
    badges: list[BadgeProgress] = field(default_factory=list)

    @property
    def badges_earned(self) -> int:
        return len(self.badges)


@dataclass(frozen=True)
class StudentBadgesReport:
    """Complete badge report for one student in one institution."""

    user_id: str
    institution_id: str
    generated_at: datetime
    badges: list[BadgeProgress]
    overall: OverallStats
    categories: list[CategoryStats]
    timeline: list[TimelineEntry]
    recommendations: list[BadgeProgress]
    showcase: list[BadgeProgress]

    @property
    def featured_badge(self) -> BadgeProgress | None:
        return self.showcase[0] if self.showcase else None


class StudentBadgesReportService:
    """Builds badge reports for students."""

    def __init__(
        self,
        catalog: BadgeCatalog,
        earned_badges: EarnedBadgeLookup,
        engine: BadgeProgressEngine,
        recommendation_limit: int = 3,
        showcase_limit: int = 5,
        recent_badge_days: int = 7,
    ) -> None:
        """Initialize the service.

        Args:
            catalog: Source of badge definitions.
            earned_badges: Source of the student's awards.
            engine: Badge progress engine.
            recommendation_limit: Maximum number of recommended badges.
            showcase_limit: Maximum number of showcased badges.
            recent_badge_days: Awards younger than this many days count as recent.
        """
        self._catalog = catalog
        self._earned_badges = earned_badges
        self._engine = engine
        self._recommendation_limit = recommendation_limit
        self._showcase_limit = showcase_limit
        self._recent_badge_days = recent_badge_days

    async def generate_report(
        self,
        user_id: str,
        institution_id: str,
        *,
        earned_only: bool = False,
        category: BadgeCategory | None = None,
        date_from: datetime | None = None,
        date_to: datetime | None = None,
    ) -> StudentBadgesReport:
        """Generate a student's badge report.

        Args:
            user_id: Student identifier.
            institution_id: Institution identifier.
            earned_only: Return only earned badges in ``badges``.
            category: Return only badges of this category in ``badges``.
            date_from: Ignore awards made before this instant.
            date_to: Ignore awards made after this instant.

        Returns:
            The assembled report.

        Raises:
            InvalidArgumentError: If an identifier is missing.
        """
        require_ids(user_id=user_id, institution_id=institution_id)

        all_badges = await self._catalog.list_all()
        awards = await self._earned_badges.find_by_user(user_id, institution_id)
        awards = self._filter_by_date(awards, date_from, date_to)

        progress = await self._engine.build_badge_progress(
            all_badges, awards, user_id=user_id, institution_id=institution_id
        )
        logger.info(
            "Built badge report for user %s: %d badges, %d earned",
            user_id,
            len(progress),
            len(awards),
        )

        filtered = [
            item
            for item in progress
            if (not earned_only or item.is_earned)
            and (category is None or item.category == category)
        ]

        return StudentBadgesReport(
            user_id=user_id,
            institution_id=institution_id,
            generated_at=utc_now(),
            badges=filtered,
            overall=self._overall_stats(progress, awards),
            categories=self._category_stats(progress),
            timeline=self._timeline(progress),
            recommendations=self._recommendations(progress),
            showcase=self._showcase(progress),
        )

    @staticmethod
    def _filter_by_date(
        awards: list[StudentBadge],
        date_from: datetime | None,
        date_to: datetime | None,
    ) -> list[StudentBadge]:
        date_from = ensure_utc(date_from)
        date_to = ensure_utc(date_to)
        return [
            award
            for award in awards
            if (date_from is None or award.awarded_at >= date_from)
            and (date_to is None or award.awarded_at <= date_to)
        ]

    def _overall_stats(
        self, progress: list[BadgeProgress], awards: list[StudentBadge]
    ) -> OverallStats:
        earned = [item for item in progress if item.is_earned]
        total_points = sum(item.reward_points for item in earned)
        current_level = total_points // POINTS_PER_LEVEL + 1
        months_active = max(1, len({month_key(item.earned_at) for item in earned if item.earned_at}))

        return OverallStats(
            total_badges=len(progress),
            earned_badges=len(earned),
            completion_percentage=percentage(len(earned), len(progress)),
            total_points=total_points,
            current_level=current_level,
            points_to_next_level=current_level * POINTS_PER_LEVEL - total_points,
            rare_badges_earned=sum(1 for item in earned if item.rarity in RARE_OR_BETTER),
            legendary_badges_earned=sum(
                1 for item in earned if item.rarity == BadgeRarity.LEGENDARY
            ),
            average_badges_per_month=round_half_up(len(earned) / months_active, 2),
            recently_earned_badges=sum(
                1 for award in awards if award.is_recently_awarded(self._recent_badge_days)
            ),
        )

    @staticmethod
    def _category_stats(progress: list[BadgeProgress]) -> list[CategoryStats]:
        grouped: dict[BadgeCategory, list[BadgeProgress]] = defaultdict(list)
        for item in progress:
            grouped[item.category].append(item)

        stats = []
        for category, items in grouped.items():
            earned = sum(1 for item in items if item.is_earned)
            pending = [item for item in items if not item.is_earned]
            stats.append(
                CategoryStats(
                    category=category,
                    total_badges=len(items),
                    earned_badges=earned,
                    completion_percentage=percentage(earned, len(items)),
                    next_badge=max(pending, key=lambda item: item.progress_percentage)
                    if pending
                    else None,
                )
            )
        return stats

    @staticmethod
    def _timeline(progress: list[BadgeProgress]) -> list[TimelineEntry]:
        by_month: dict[str, list[BadgeProgress]] = defaultdict(list)
        for item in sorted(
            (item for item in progress if item.is_earned and item.earned_at),
            key=lambda item: item.earned_at,
        ):
            by_month[month_key(item.earned_at)].append(item)

        return [TimelineEntry(period=period, badges=by_month[period]) for period in sorted(by_month)]

    def _recommendations(self, progress: list[BadgeProgress]) -> list[BadgeProgress]:
        pending = [item for item in progress if not item.is_earned]
        pending.sort(
            key=lambda item: (
                -item.progress_percentage,
                item.estimated_time_to_earn_days or 0,
            )
        )
        return pending[: self._recommendation_limit]

    def _showcase(self, progress: list[BadgeProgress]) -> list[BadgeProgress]:
        earned = [item for item in progress if item.is_earned and item.earned_at]
        earned.sort(key=lambda item: item.earned_at, reverse=True)
        return earned[: self._showcase_limit]
