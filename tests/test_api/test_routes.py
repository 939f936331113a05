"""Tests for the HTTP API."""

import logging

import pytest

from awareness_quiz.core.logging_config import RequestIDFilter


@pytest.fixture
def published_quiz_id(client, admin_headers, sample_quiz_payload) -> str:
    """Create and publish a quiz through the API."""
    created = client.post("/api/quizzes", json=sample_quiz_payload, headers=admin_headers)
    quiz_id = created.json()["id"]
    client.post(f"/api/quizzes/{quiz_id}/publish", headers=admin_headers)
    return quiz_id


class TestHealth:
    """Test service endpoints."""

    def test_health(self, client):
        """Test the health check."""
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "ok"

    def test_request_id_echoed(self, client):
        """Test that a given request id comes back on the response."""
        response = client.get("/health", headers={"X-Request-ID": "abc123"})

        assert response.headers["X-Request-ID"] == "abc123"

    def test_request_id_generated(self, client):
        """Test that a request id is generated when missing."""
        assert client.get("/health").headers["X-Request-ID"]

    def test_startup_configures_logging(self, client):
        """Test that starting the app installs the request-id aware handlers."""
        handlers = logging.getLogger().handlers

        assert any(isinstance(f, RequestIDFilter) for h in handlers for f in h.filters)


class TestQuizRoutes:
    """Test quiz administration routes."""

    def test_create_quiz(self, client, admin_headers, sample_quiz_payload):
        """Test that admins can create quizzes."""
        response = client.post("/api/quizzes", json=sample_quiz_payload, headers=admin_headers)

        assert response.status_code == 201
        body = response.json()
        assert body["status"] == "draft"
        assert body["createdBy"] == "admin-1"
        assert body["totalPoints"] == 3
        assert body["questions"][0]["correctAnswer"] == "1"

    def test_create_requires_admin(self, client, employee_headers, sample_quiz_payload):
        """Test that employees cannot create quizzes."""
        response = client.post(
            "/api/quizzes", json=sample_quiz_payload, headers=employee_headers
        )

        assert response.status_code == 403
        assert response.json() == {"error": "Admin access required"}

    def test_create_requires_user(self, client, sample_quiz_payload):
        """Test that anonymous callers are rejected."""
        response = client.post("/api/quizzes", json=sample_quiz_payload)

        assert response.status_code == 401
        assert response.json() == {"error": "Authentication required"}

    def test_create_invalid(self, client, admin_headers):
        """Test that invalid definitions answer 400 with details."""
        response = client.post(
            "/api/quizzes", json={"title": "", "passingScore": 500}, headers=admin_headers
        )

        assert response.status_code == 400
        assert response.json()["error"] == "Validation failed"
        assert response.json()["details"]

    def test_publish_without_questions(self, client, admin_headers):
        """Test that an empty quiz cannot be published."""
        quiz_id = client.post(
            "/api/quizzes", json={"title": "Empty"}, headers=admin_headers
        ).json()["id"]

        response = client.post(f"/api/quizzes/{quiz_id}/publish", headers=admin_headers)

        assert response.status_code == 400
        assert response.json()["error"] == "Cannot publish quiz with no questions"
        assert client.get(f"/api/quizzes/{quiz_id}").json()["status"] == "draft"

    def test_list_and_filter(self, client, published_quiz_id, admin_headers):
        """Test listing quizzes by status."""
        client.post("/api/quizzes", json={"title": "Other"}, headers=admin_headers)

        published = client.get("/api/quizzes", params={"status": "published"}).json()
        everything = client.get("/api/quizzes").json()

        assert [q["id"] for q in published] == [published_quiz_id]
        assert len(everything) == 2

    def test_update_quiz(self, client, published_quiz_id, admin_headers):
        """Test a partial update."""
        response = client.put(
            f"/api/quizzes/{published_quiz_id}",
            json={"passingScore": 90},
            headers=admin_headers,
        )

        assert response.status_code == 200
        assert response.json()["passingScore"] == 90
        assert response.json()["title"] == "Password Hygiene"

    def test_get_missing_quiz(self, client):
        """Test a missing quiz."""
        response = client.get("/api/quizzes/missing")

        assert response.status_code == 404
        assert response.json() == {"error": "Quiz not found"}

    def test_delete_quiz(self, client, published_quiz_id, admin_headers):
        """Test deleting a quiz."""
        response = client.delete(f"/api/quizzes/{published_quiz_id}", headers=admin_headers)

        assert response.status_code == 200
        assert client.get(f"/api/quizzes/{published_quiz_id}").status_code == 404

    def test_duplicate_and_archive(self, client, published_quiz_id, admin_headers):
        """Test duplicating then archiving a quiz."""
        copy = client.post(
            f"/api/quizzes/{published_quiz_id}/duplicate", headers=admin_headers
        )
        archived = client.post(
            f"/api/quizzes/{published_quiz_id}/archive", headers=admin_headers
        )

        assert copy.status_code == 201
        assert copy.json()["title"] == "Password Hygiene (Copy)"
        assert archived.json()["status"] == "archived"

    def test_quiz_summary(self, client, published_quiz_id):
        """Test the static quiz summary."""
        body = client.get(f"/api/quizzes/{published_quiz_id}/stats").json()

        assert body["totalQuestions"] == 2
        assert body["totalPoints"] == 3


class TestAttemptRoutes:
    """Test attempt routes."""

    def test_start_and_submit(self, client, published_quiz_id, employee_headers):
        """Test a full attempt: start, submit, read back."""
        start = client.post(
            f"/api/quiz-attempts/quiz/{published_quiz_id}/start", headers=employee_headers
        )
        assert start.status_code == 201
        attempt_id = start.json()["id"]
        assert start.json()["attemptNumber"] == 1
        assert start.json()["status"] == "in-progress"

        submit = client.post(
            f"/api/quiz-attempts/{attempt_id}/submit",
            json={
                "answers": [
                    {"questionId": "p1", "answer": "1", "timeSpent": 12},
                    {"questionId": "p2", "answer": "true", "timeSpent": 8},
                ]
            },
            headers=employee_headers,
        )

        assert submit.status_code == 200
        results = submit.json()["results"]
        assert results["score"] == 2
        assert results["totalPossible"] == 3
        assert results["percentage"] == 67
        assert results["passed"] is True
        assert submit.json()["attempt"]["status"] == "completed"

        fetched = client.get(f"/api/quiz-attempts/{attempt_id}", headers=employee_headers)
        assert fetched.json()["timeSpent"] == 20

    def test_start_draft_quiz(self, client, admin_headers, employee_headers):
        """Test that drafts cannot be attempted."""
        quiz_id = client.post(
            "/api/quizzes", json={"title": "Draft"}, headers=admin_headers
        ).json()["id"]

        response = client.post(
            f"/api/quiz-attempts/quiz/{quiz_id}/start", headers=employee_headers
        )

        assert response.status_code == 400
        assert response.json() == {"error": "Quiz is not available for attempts"}

    def test_attempt_limit(self, client, published_quiz_id, employee_headers):
        """Test that maxAttempts (2) is enforced."""
        url = f"/api/quiz-attempts/quiz/{published_quiz_id}/start"
        client.post(url, headers=employee_headers)
        client.post(url, headers=employee_headers)

        response = client.post(url, headers=employee_headers)

        assert response.status_code == 400
        assert response.json()["error"] == "Maximum attempts (2) reached for this quiz"

    def test_submit_without_answers(self, client, published_quiz_id, employee_headers):
        """Test that a body without answers is rejected."""
        attempt_id = client.post(
            f"/api/quiz-attempts/quiz/{published_quiz_id}/start", headers=employee_headers
        ).json()["id"]

        response = client.post(
            f"/api/quiz-attempts/{attempt_id}/submit", json={}, headers=employee_headers
        )

        assert response.status_code == 400
        assert response.json()["error"] == "Answers array is required"

    def test_submit_twice(self, client, published_quiz_id, employee_headers):
        """Test that a completed attempt cannot be resubmitted."""
        attempt_id = client.post(
            f"/api/quiz-attempts/quiz/{published_quiz_id}/start", headers=employee_headers
        ).json()["id"]
        url = f"/api/quiz-attempts/{attempt_id}/submit"
        client.post(url, json={"answers": []}, headers=employee_headers)

        response = client.post(url, json={"answers": []}, headers=employee_headers)

        assert response.status_code == 400
        assert response.json()["error"] == "Quiz attempt is not in progress"

    def test_other_user_cannot_read(self, client, published_quiz_id, employee_headers):
        """Test that attempts are private to their owner."""
        attempt_id = client.post(
            f"/api/quiz-attempts/quiz/{published_quiz_id}/start", headers=employee_headers
        ).json()["id"]

        response = client.get(
            f"/api/quiz-attempts/{attempt_id}", headers={"X-User-Id": "user-2"}
        )

        assert response.status_code == 403
        assert response.json() == {"error": "Access denied"}

    def test_list_user_attempts(self, client, published_quiz_id, employee_headers):
        """Test listing the caller's attempts for a quiz."""
        client.post(
            f"/api/quiz-attempts/quiz/{published_quiz_id}/start", headers=employee_headers
        )

        mine = client.get(
            "/api/quiz-attempts/user",
            params={"quizId": published_quiz_id},
            headers=employee_headers,
        ).json()
        theirs = client.get("/api/quiz-attempts/user", headers={"X-User-Id": "user-2"}).json()

        assert len(mine) == 1
        assert theirs == []

    def test_statistics_admin_only(
        self, client, published_quiz_id, employee_headers, admin_headers
    ):
        """Test quiz statistics access and contents."""
        attempt_id = client.post(
            f"/api/quiz-attempts/quiz/{published_quiz_id}/start", headers=employee_headers
        ).json()["id"]
        client.post(
            f"/api/quiz-attempts/{attempt_id}/submit",
            json={"answers": [{"questionId": "p1", "answer": "1", "timeSpent": 30}]},
            headers=employee_headers,
        )
        url = f"/api/quiz-attempts/quiz/{published_quiz_id}/stats"

        assert client.get(url, headers=employee_headers).status_code == 403

        body = client.get(url, headers=admin_headers).json()
        assert body["quiz"]["id"] == published_quiz_id
        assert body["statistics"] == {
            "totalAttempts": 1,
            "averageScore": 67,
            "averageTime": 30.0,
            "passRate": 100,
        }
        assert len(body["recentAttempts"]) == 1
