# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Pytest configuration and shared fixtures.

This module provides fixtures used across all test types:
- Unit tests
- Integration tests
"""

from collections.abc import Generator
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.core.config import clear_settings_cache
from tests.factories import ContentStore


# =============================================================================
# Environment Fixtures
# =============================================================================


@pytest.fixture
def fresh_settings() -> Generator[None, None, None]:
    """Clear the settings cache before and after a test."""
    clear_settings_cache()
    yield
    clear_settings_cache()


# =============================================================================
# Marker Configuration
# =============================================================================


def pytest_configure(config: pytest.Config) -> None:
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test"
    )


# =============================================================================
# Content Doubles
# =============================================================================


@pytest.fixture
def content_store() -> ContentStore:
    """Provide an empty in-memory content store."""
    return ContentStore()


@pytest.fixture
def two_module_course(content_store: ContentStore) -> ContentStore:
    """Course with modules M1(1) [L1(1), L2(2)] and M2(2) [L3(1), L4(2)].

    Repositories return modules and lessons out of order.
    """
    content_store.add_module("m2", order=2)
    content_store.add_module("m1", order=1)
    content_store.add_lesson("l2", "m1", order=2)
    content_store.add_lesson("l1", "m1", order=1)
    content_store.add_lesson("l4", "m2", order=2)
    content_store.add_lesson("l3", "m2", order=1)
    return content_store


# =============================================================================
# Badge Doubles
# =============================================================================


@pytest.fixture
def mock_enrollments() -> MagicMock:
    """Enrollment source with no enrollments."""
    repo = MagicMock()
    repo.list_by_user = AsyncMock(return_value=[])
    repo.list_by_institution = AsyncMock(return_value=[])
    return repo


@pytest.fixture
def mock_awards() -> MagicMock:
    """Award lookup with no awards."""
    repo = MagicMock()
    repo.find_by_user = AsyncMock(return_value=[])
    repo.find_by_badge = AsyncMock(return_value=[])
    return repo


@pytest.fixture
def mock_counters() -> MagicMock:
    """Criterion counters returning 0 for every badge."""
    counters = MagicMock()
    counters.count = AsyncMock(return_value=0)
    return counters
