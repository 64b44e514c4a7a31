# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Static badge metadata derived from criteria type and value.

Every function here is a pure lookup on a badge's ``criteria_type`` and
``criteria_value``: difficulty, rarity, category, reward points, reward
title, special access, requirement text and the estimated days left to
earn it. Criteria types are a closed set, so each rule is a table with a
fallback entry rather than a class hierarchy.
"""

from enum import Enum

from src.domains.badge.entities import Badge, BadgeCriteriaType


class BadgeDifficulty(str, Enum):
    """How hard a badge is to earn."""

    EASY = "EASY"
    MEDIUM = "MEDIUM"
    HARD = "HARD"
    LEGENDARY = "LEGENDARY"


class BadgeRarity(str, Enum):
    """How rare a badge is among students."""

    COMMON = "COMMON"
    UNCOMMON = "UNCOMMON"
    RARE = "RARE"
    EPIC = "EPIC"
    LEGENDARY = "LEGENDARY"


class BadgeCategory(str, Enum):
    """Report category a badge belongs to."""

    ACADEMIC = "ACADEMIC"
    ASSESSMENT = "ASSESSMENT"
    LEARNING = "LEARNING"
    ACHIEVEMENT = "ACHIEVEMENT"
    ENGAGEMENT = "ENGAGEMENT"
    GENERAL = "GENERAL"


# Rarities at or above RARE count as "rare" in report statistics
RARE_OR_BETTER = frozenset({BadgeRarity.RARE, BadgeRarity.EPIC, BadgeRarity.LEGENDARY})

BASE_REWARD_POINTS = 100
DEFAULT_DAYS_PER_ACTION = 7

DAYS_PER_ACTION: dict[BadgeCriteriaType, int] = {
    BadgeCriteriaType.COURSE_COMPLETION: 30,
    BadgeCriteriaType.QUESTIONNAIRE_COMPLETION: 2,
    BadgeCriteriaType.LESSON_COMPLETION: 1,
    BadgeCriteriaType.CERTIFICATE_ACHIEVED: 45,
    BadgeCriteriaType.DAILY_LOGIN: 1,
}

CATEGORIES: dict[BadgeCriteriaType, BadgeCategory] = {
    BadgeCriteriaType.COURSE_COMPLETION: BadgeCategory.ACADEMIC,
    BadgeCriteriaType.QUESTIONNAIRE_COMPLETION: BadgeCategory.ASSESSMENT,
    BadgeCriteriaType.LESSON_COMPLETION: BadgeCategory.LEARNING,
    BadgeCriteriaType.CERTIFICATE_ACHIEVED: BadgeCategory.ACHIEVEMENT,
    BadgeCriteriaType.DAILY_LOGIN: BadgeCategory.ENGAGEMENT,
}

REWARD_TITLES: dict[BadgeCriteriaType, str] = {
    BadgeCriteriaType.COURSE_COMPLETION: "Course Master",
    BadgeCriteriaType.QUESTIONNAIRE_COMPLETION: "Assessment Expert",
    BadgeCriteriaType.LESSON_COMPLETION: "Learning Champion",
    BadgeCriteriaType.CERTIFICATE_ACHIEVED: "Achievement Collector",
    BadgeCriteriaType.DAILY_LOGIN: "Dedicated Learner",
}

SPECIAL_ACCESS: dict[BadgeCriteriaType, str] = {
    BadgeCriteriaType.CERTIFICATE_ACHIEVED: "Access to advanced courses",
    BadgeCriteriaType.COURSE_COMPLETION: "Priority support access",
    BadgeCriteriaType.DAILY_LOGIN: "Exclusive content access",
}

# (verb, noun) pairs; the noun is pluralized when the threshold is above one
REQUIREMENT_PHRASES: dict[BadgeCriteriaType, tuple[str, str]] = {
    BadgeCriteriaType.COURSE_COMPLETION: ("Complete", "course"),
    BadgeCriteriaType.QUESTIONNAIRE_COMPLETION: ("Pass", "questionnaire"),
    BadgeCriteriaType.LESSON_COMPLETION: ("Complete", "lesson"),
    BadgeCriteriaType.CERTIFICATE_ACHIEVED: ("Earn", "certificate"),
    BadgeCriteriaType.DAILY_LOGIN: ("Login for", "consecutive day"),
}


def determine_difficulty(badge: Badge) -> BadgeDifficulty:
    """Map the threshold to a difficulty; first matching step wins."""
    if badge.criteria_value <= 1:
        return BadgeDifficulty.EASY
    if badge.criteria_value <= 5:
        return BadgeDifficulty.MEDIUM
    if badge.criteria_value <= 10:
        return BadgeDifficulty.HARD
    return BadgeDifficulty.LEGENDARY


def determine_rarity(badge: Badge) -> BadgeRarity:
    """Map criteria type and threshold to a rarity."""
    if badge.criteria_type == BadgeCriteriaType.DAILY_LOGIN and badge.criteria_value >= 30:
        return BadgeRarity.LEGENDARY
    if badge.criteria_type == BadgeCriteriaType.CERTIFICATE_ACHIEVED and badge.criteria_value >= 5:
        return BadgeRarity.EPIC
    if badge.criteria_value >= 10:
        return BadgeRarity.RARE
    if badge.criteria_value >= 5:
        return BadgeRarity.UNCOMMON
    return BadgeRarity.COMMON


def estimate_days_to_earn(badge: Badge, current_progress: int) -> int:
    """Estimate the days left to earn a badge from the remaining actions."""
    days = DAYS_PER_ACTION.get(badge.criteria_type, DEFAULT_DAYS_PER_ACTION)
    return badge.remaining_count(current_progress) * days


def category_for(badge: Badge) -> BadgeCategory:
    """Return the report category of a badge."""
    return CATEGORIES.get(badge.criteria_type, BadgeCategory.GENERAL)


def reward_points(badge: Badge) -> int:
    """Return the points a badge is worth."""
    value = badge.criteria_value
    if badge.criteria_type == BadgeCriteriaType.CERTIFICATE_ACHIEVED:
        return BASE_REWARD_POINTS * value * 2
    if badge.criteria_type == BadgeCriteriaType.COURSE_COMPLETION:
        return BASE_REWARD_POINTS * value * 3 // 2
    if badge.criteria_type == BadgeCriteriaType.DAILY_LOGIN:
        return BASE_REWARD_POINTS + value * 10
    return BASE_REWARD_POINTS * value


def reward_title(badge: Badge) -> str:
    """Return the title unlocked by a badge."""
    return REWARD_TITLES.get(badge.criteria_type, "Badge Earner")


def special_access(badge: Badge) -> str:
    """Return the special access granted by a badge."""
    return SPECIAL_ACCESS.get(badge.criteria_type, "Recognition in profile")


def requirement_description(badge: Badge) -> str:
    """Describe what a student must do to earn a badge."""
    value = badge.criteria_value
    phrase = REQUIREMENT_PHRASES.get(badge.criteria_type)
    if phrase is None:
        return f"Complete {value} actions"
    verb, noun = phrase
    suffix = "s" if value > 1 else ""
    return f"{verb} {value} {noun}{suffix}"
