# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Badge progress engine.

For one user in one institution, BadgeProgressEngine produces a progress
record per badge definition: whether it is earned, how far the user got,
and the badge's static metadata (difficulty, rarity, rewards, requirement
text, estimated days left).

Badges are evaluated one after another. Every counter and rarity query runs
inside an isolation scope (a savepoint when wired to a database session):
a failing query degrades that badge's number to 0 and the remaining badges
are still computed.

Usage:
    counters = CriterionCounters(enrollments, submissions, lesson_progress)
    engine = BadgeProgressEngine(counters, earned_badges=awards, enrollments=enrollments)
    progress = await engine.build_badge_progress(badges, earned, "u1", "i1")
"""

import logging
from collections.abc import Callable
from contextlib import AbstractAsyncContextManager, nullcontext
from dataclasses import dataclass
from datetime import datetime

from src.domains.badge.counters import CriterionCounters
from src.domains.badge.entities import Badge, StudentBadge
from src.domains.badge.repositories import EarnedBadgeLookup, EnrollmentCounter
from src.domains.badge.rules import (
    BadgeCategory,
    BadgeDifficulty,
    BadgeRarity,
    category_for,
    determine_difficulty,
    determine_rarity,
    estimate_days_to_earn,
    requirement_description,
    reward_points,
    reward_title,
    special_access,
)
from src.utils.numbers import round_half_up

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BadgeProgress:
    """A user's standing on one badge.

    Attributes:
        badge: The badge definition.
        is_earned: Whether the user holds the badge.
        earned_at: When it was awarded, if earned.
        current_progress: Value of the badge's criterion counter.
        progress_percentage: 0-100; always 100 once earned or met.
        difficulty: Difficulty step of the threshold.
        rarity: Rarity of the badge.
        category: Report category.
        requirement_description: What the user must do.
        reward_points: Points the badge is worth.
        reward_title: Title unlocked by the badge.
        special_access: Special access granted by the badge.
        earned_by_percentage: Share of enrolled users holding the badge.
        estimated_time_to_earn_days: Estimated days left, only when not earned.
    """

    badge: Badge
    is_earned: bool
    earned_at: datetime | None
    current_progress: int
    progress_percentage: int
    difficulty: BadgeDifficulty
    rarity: BadgeRarity
    category: BadgeCategory
    requirement_description: str
    reward_points: int
    reward_title: str
    special_access: str
    earned_by_percentage: float
    estimated_time_to_earn_days: int | None = None

    @property
    def badge_id(self) -> str:
        return self.badge.id

    @property
    def required_progress(self) -> int:
        return self.badge.criteria_value


class BadgeProgressEngine:
    """Computes per-badge progress for a user."""

    def __init__(
        self,
        counters: CriterionCounters,
        earned_badges: EarnedBadgeLookup,
        enrollments: EnrollmentCounter,
        isolate: Callable[[], AbstractAsyncContextManager] | None = None,
    ) -> None:
        """Initialize the engine.

        Args:
            counters: Criterion counters, one per criteria type.
            earned_badges: Award lookup used for rarity statistics.
            enrollments: Enrollment source used to count institution users.
            isolate: Factory for the scope each query batch runs in, e.g.
                ``session.begin_nested``. A failure inside the scope must
                leave later queries usable.
        """
        self._counters = counters
        self._earned_badges = earned_badges
        self._enrollments = enrollments
        self._isolate = isolate or nullcontext

    async def build_badge_progress(
        self,
        all_badges: list[Badge],
        earned_badges: list[StudentBadge],
        user_id: str,
        institution_id: str,
    ) -> list[BadgeProgress]:
        """Build one progress record per badge, preserving input order.

        Args:
            all_badges: Badge definitions to evaluate.
            earned_badges: Badges the user holds.
            user_id: Learner identifier.
            institution_id: Institution to evaluate within.

        Returns:
            Progress records in the order of ``all_badges``.
        """
        earned_by_badge = {award.badge_id: award for award in earned_badges}

        results: list[BadgeProgress] = []
        for badge in all_badges:
            award = earned_by_badge.get(badge.id)
            results.append(
                await self._build_one(badge, award, user_id=user_id, institution_id=institution_id)
            )
        return results

    async def _build_one(
        self,
        badge: Badge,
        award: StudentBadge | None,
        user_id: str,
        institution_id: str,
    ) -> BadgeProgress:
        is_earned = award is not None
        current = await self._safe_count(badge, user_id, institution_id)

        return BadgeProgress(
            badge=badge,
            is_earned=is_earned,
            earned_at=award.awarded_at if award else None,
            current_progress=current,
            progress_percentage=100 if is_earned else badge.progress_percentage(current),
            difficulty=determine_difficulty(badge),
            rarity=determine_rarity(badge),
            category=category_for(badge),
            requirement_description=requirement_description(badge),
            reward_points=reward_points(badge),
            reward_title=reward_title(badge),
            special_access=special_access(badge),
            earned_by_percentage=await self.earned_by_percentage(badge.id, institution_id),
            estimated_time_to_earn_days=(
                None if is_earned else estimate_days_to_earn(badge, current)
            ),
        )

    async def _safe_count(self, badge: Badge, user_id: str, institution_id: str) -> int:
        try:
            async with self._isolate():
                return await self._counters.count(badge, user_id, institution_id)
        except Exception as e:
            logger.warning(
                "Criterion counter failed for badge %s (%s): %s",
                badge.id,
                badge.criteria_type.value,
                e,
            )
            return 0

    async def earned_by_percentage(self, badge_id: str, institution_id: str) -> float:
        """Share of the institution's enrolled users who hold a badge.

        Args:
            badge_id: Badge identifier.
            institution_id: Institution identifier.

        Returns:
            Percentage with two decimals, capped at 100. Returns 0 when the
            institution has no enrolled users or when a query fails.
        """
        try:
            async with self._isolate():
                holders = await self._earned_badges.find_by_badge(badge_id, institution_id)
                enrollments = await self._enrollments.list_by_institution(institution_id)

            enrolled_users = {enrollment.user_id for enrollment in enrollments}
            if not enrolled_users:
                return 0.0

            holder_users = {award.user_id for award in holders}
            share = len(holder_users) / len(enrolled_users) * 100
            return min(100.0, round_half_up(share, 2))
        except Exception as e:
            logger.warning(
                "Failed to compute earned-by percentage for badge %s: %s", badge_id, e
            )
            return 0.0
