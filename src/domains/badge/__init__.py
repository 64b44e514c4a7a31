# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Badge domain package.

This package provides badge progress functionality including:
- Badge and student badge entities
- Criterion counters per badge criteria type
- Static badge rules (difficulty, rarity, rewards)
- Badge progress engine
- Student badges report
"""

from src.domains.badge.counters import CriterionCounters
from src.domains.badge.engine import BadgeProgress, BadgeProgressEngine
from src.domains.badge.entities import Badge, BadgeCriteriaType, StudentBadge
from src.domains.badge.rules import BadgeCategory, BadgeDifficulty, BadgeRarity
from src.domains.badge.service import (
    CategoryStats,
    OverallStats,
    StudentBadgesReport,
    StudentBadgesReportService,
    TimelineEntry,
)

__all__ = [
    "CriterionCounters",
    "BadgeProgress",
    "BadgeProgressEngine",
    "Badge",
    "BadgeCriteriaType",
    "StudentBadge",
    "BadgeCategory",
    "BadgeDifficulty",
    "BadgeRarity",
    "CategoryStats",
    "OverallStats",
    "StudentBadgesReport",
    "StudentBadgesReportService",
    "TimelineEntry",
]
