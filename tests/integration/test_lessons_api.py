# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Integration tests for Lessons API endpoints."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from src.api.dependencies import get_lesson_access_service, get_lesson_progress_service
from src.api.v1 import router as v1_router
from src.domains.content import LessonAccessService, LessonProgressService
from src.domains.content.models import LessonProgressStatus

ACCESS_PARAMS = {"user_id": "user-1", "course_id": "course-1", "institution_id": "inst-1"}


@pytest.fixture
def app(two_module_course):
    """Create test FastAPI app backed by the in-memory course."""
    store = two_module_course
    app = FastAPI()
    app.include_router(v1_router)
    app.dependency_overrides[get_lesson_access_service] = lambda: LessonAccessService(
        institutions=store.institutions,
        progress=store.progress,
        modules=store.modules,
        lessons=store.lessons,
        access_error_message="Access check unavailable",
    )
    app.dependency_overrides[get_lesson_progress_service] = lambda: LessonProgressService(
        progress=store.progress,
        lessons=store.lessons,
    )
    return app


@pytest.fixture
def client(app):
    """Create test client."""
    return TestClient(app)


class TestLessonsAPIRouting:
    """Tests for lessons API routing."""

    def test_routes_registered(self, app):
        """Test that lesson routes are registered."""
        routes = app.openapi()["paths"]

        assert "/api/v1/lessons/{lesson_id}/access" in routes
        assert "/api/v1/lessons/{lesson_id}/progress/start" in routes
        assert "/api/v1/lessons/{lesson_id}/progress/complete" in routes


class TestLessonAccessEndpoint:
    """Tests for GET /api/v1/lessons/{lesson_id}/access."""

    def test_free_navigation(self, client, two_module_course):
        """Test lessons are open when sequential progress is off."""
        two_module_course.add_institution(sequential=False)

        response = client.get("/api/v1/lessons/l4/access", params=ACCESS_PARAMS)

        assert response.status_code == 200
        data = response.json()
        assert data["can_access"] is True
        assert data["has_started"] is False
        assert data["is_skippable"] is None

    def test_sequential_denial(self, client, two_module_course):
        """Test an incomplete prerequisite blocks the lesson."""
        two_module_course.add_institution(sequential=True)
        two_module_course.add_progress("l1")

        response = client.get("/api/v1/lessons/l3/access", params=ACCESS_PARAMS)

        assert response.status_code == 200
        data = response.json()
        assert data["can_access"] is False
        assert data["is_skippable"] is False
        assert data["reason"] is None

    def test_skippable_grant(self, client, two_module_course):
        """Test skipping is allowed when the institution permits it."""
        two_module_course.add_institution(sequential=True, allow_skip=True)

        response = client.get("/api/v1/lessons/l2/access", params=ACCESS_PARAMS)

        data = response.json()
        assert data["can_access"] is True
        assert data["is_skippable"] is True

    def test_started_lesson(self, client, two_module_course):
        """Test a started lesson is always accessible."""
        two_module_course.add_institution(sequential=True)
        two_module_course.add_progress("l4", status=LessonProgressStatus.IN_PROGRESS)

        data = client.get("/api/v1/lessons/l4/access", params=ACCESS_PARAMS).json()

        assert data["can_access"] is True
        assert data["has_started"] is True
        assert data["is_completed"] is False

    def test_check_failure_fails_closed(self, client, two_module_course):
        """Test an outline failure denies access with the configured reason."""
        two_module_course.add_institution(sequential=True)
        two_module_course.modules.list_by_course.side_effect = RuntimeError("db down")

        data = client.get("/api/v1/lessons/l2/access", params=ACCESS_PARAMS).json()

        assert data["can_access"] is False
        assert data["reason"] == "Access check unavailable"

    def test_unknown_institution(self, client):
        """Test an unknown institution returns 404."""
        response = client.get("/api/v1/lessons/l1/access", params=ACCESS_PARAMS)

        assert response.status_code == 404

    def test_blank_identifier(self, client, two_module_course):
        """Test a blank identifier returns 400."""
        two_module_course.add_institution()

        response = client.get(
            "/api/v1/lessons/l1/access", params={**ACCESS_PARAMS, "user_id": " "}
        )

        assert response.status_code == 400

    def test_missing_query_parameter(self, client):
        """Test a missing query parameter is a validation error."""
        response = client.get("/api/v1/lessons/l1/access", params={"user_id": "user-1"})

        assert response.status_code == 422


class TestLessonProgressEndpoints:
    """Tests for lesson progress endpoints."""

    def test_start_then_complete(self, client):
        """Test starting and completing a lesson."""
        start = client.post(
            "/api/v1/lessons/l1/progress/start",
            json={"user_id": "user-1", "institution_id": "inst-1"},
        )

        assert start.status_code == 200
        assert start.json()["is_new"] is True
        assert start.json()["progress"]["status"] == "in_progress"

        complete = client.post(
            "/api/v1/lessons/l1/progress/complete", json={"user_id": "user-1"}
        )

        assert complete.status_code == 200
        data = complete.json()
        assert data["was_already_completed"] is False
        assert data["progress"]["status"] == "completed"
        assert data["progress"]["progress_percentage"] == 100.0
        assert data["progress"]["completed_at"] is not None

    def test_restart_is_not_new(self, client, two_module_course):
        """Test starting a started lesson reuses its record."""
        two_module_course.add_progress("l1", status=LessonProgressStatus.IN_PROGRESS)

        response = client.post(
            "/api/v1/lessons/l1/progress/start",
            json={"user_id": "user-1", "institution_id": "inst-1"},
        )

        assert response.json()["is_new"] is False
        assert response.json()["progress"]["id"] == "progress-user-1-l1"

    def test_start_unknown_lesson(self, client):
        """Test starting an unknown lesson returns 404."""
        response = client.post(
            "/api/v1/lessons/missing/progress/start",
            json={"user_id": "user-1", "institution_id": "inst-1"},
        )

        assert response.status_code == 404

    def test_complete_unstarted_lesson(self, client):
        """Test completing a lesson that was never started returns 404."""
        response = client.post(
            "/api/v1/lessons/l1/progress/complete", json={"user_id": "user-1"}
        )

        assert response.status_code == 404

    def test_complete_twice(self, client, two_module_course):
        """Test completing a completed lesson reports it."""
        two_module_course.add_progress("l1")

        response = client.post(
            "/api/v1/lessons/l1/progress/complete", json={"user_id": "user-1"}
        )

        assert response.json()["was_already_completed"] is True
