# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Integration tests for Badges API endpoints."""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from src.api.dependencies import get_badges_report_service
from src.api.v1 import router as v1_router
from src.domains.badge import BadgeProgressEngine, StudentBadgesReportService
from src.domains.badge.entities import BadgeCriteriaType
from src.domains.exceptions import EntityValidationError
from tests.factories import make_award, make_badge, make_enrollment

PARAMS = {"user_id": "user-1", "institution_id": "inst-1"}


@pytest.fixture
def catalog():
    """Badge catalog with one lesson badge and one course badge."""
    repo = MagicMock()
    repo.list_all = AsyncMock(
        return_value=[
            make_badge("lessons-5", BadgeCriteriaType.LESSON_COMPLETION, 5),
            make_badge("course-1", BadgeCriteriaType.COURSE_COMPLETION, 1),
        ]
    )
    return repo


@pytest.fixture
def app(catalog, mock_awards, mock_enrollments, mock_counters):
    """Create test FastAPI app with an in-memory report service."""
    mock_counters.count.return_value = 2
    mock_awards.find_by_user.return_value = [
        make_award("course-1", awarded_at=datetime(2025, 2, 3, tzinfo=timezone.utc))
    ]
    mock_awards.find_by_badge.return_value = [make_award("course-1")]
    mock_enrollments.list_by_institution.return_value = [
        make_enrollment("user-1"),
        make_enrollment("user-2"),
    ]
    engine = BadgeProgressEngine(
        mock_counters, earned_badges=mock_awards, enrollments=mock_enrollments
    )
    service = StudentBadgesReportService(catalog, mock_awards, engine)

    app = FastAPI()
    app.include_router(v1_router)
    app.dependency_overrides[get_badges_report_service] = lambda: service
    return app


@pytest.fixture
def client(app):
    """Create test client."""
    return TestClient(app)


class TestBadgesReportEndpoint:
    """Tests for GET /api/v1/badges/report."""

    def test_route_registered(self, app):
        """Test that the report route is registered."""
        assert "/api/v1/badges/report" in app.openapi()["paths"]

    def test_full_report(self, client):
        """Test the report carries badges, statistics and showcase."""
        response = client.get("/api/v1/badges/report", params=PARAMS)

        assert response.status_code == 200
        data = response.json()
        assert [badge["badge_id"] for badge in data["badges"]] == ["lessons-5", "course-1"]

        lessons, course = data["badges"]
        assert lessons["is_earned"] is False
        assert lessons["progress_percentage"] == 40
        assert lessons["estimated_time_to_earn_days"] == 3
        assert lessons["category"] == "LEARNING"
        assert course["is_earned"] is True
        assert course["progress_percentage"] == 100
        assert course["earned_by_percentage"] == 50.0

        assert data["overall"]["earned_badges"] == 1
        assert data["overall"]["total_points"] == 150
        assert data["timeline"] == [
            {"period": "2025-02", "badges_earned": 1, "badges": [course]}
        ]
        assert [badge["badge_id"] for badge in data["recommendations"]] == ["lessons-5"]
        assert data["featured_badge"]["badge_id"] == "course-1"

    def test_filters_narrow_badges_only(self, client):
        """Test filters leave statistics untouched."""
        data = client.get(
            "/api/v1/badges/report",
            params={**PARAMS, "earned_only": "true", "category": "LEARNING"},
        ).json()

        assert data["badges"] == []
        assert data["overall"]["total_badges"] == 2
        assert data["overall"]["earned_badges"] == 1

    def test_date_range(self, client):
        """Test awards outside the range are not earned."""
        data = client.get(
            "/api/v1/badges/report",
            params={**PARAMS, "date_from": "2025-03-01T00:00:00Z"},
        ).json()

        assert data["overall"]["earned_badges"] == 0

    def test_inverted_date_range(self, client):
        """Test date_from after date_to returns 400."""
        response = client.get(
            "/api/v1/badges/report",
            params={
                **PARAMS,
                "date_from": "2025-03-01T00:00:00Z",
                "date_to": "2025-02-01T00:00:00Z",
            },
        )

        assert response.status_code == 400

    def test_unknown_category(self, client):
        """Test an unknown category is a validation error."""
        response = client.get("/api/v1/badges/report", params={**PARAMS, "category": "SPORTS"})

        assert response.status_code == 422

    def test_blank_identifier(self, client):
        """Test a blank identifier returns 400."""
        response = client.get("/api/v1/badges/report", params={**PARAMS, "user_id": " "})

        assert response.status_code == 400

    def test_malformed_badge(self, app, client, catalog):
        """Test a badge failing validation returns 422."""
        catalog.list_all.side_effect = EntityValidationError("Invalid badge criteria type: X")

        response = client.get("/api/v1/badges/report", params=PARAMS)

        assert response.status_code == 422
        assert response.json()["detail"] == "Invalid badge criteria type: X"
