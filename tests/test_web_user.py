"""Tests for user, subject and catalog endpoints."""

from studydash import __version__
from studydash.web.schemas import HealthResponse


class TestHealthEndpoint:
    """Tests for GET /health."""

    def test_health_returns_ok(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert data["version"] == __version__
        assert "T" in data["timestamp"]

    def test_schema_default_version(self):
        """The health schema reports the package version by default."""
        assert HealthResponse().version == __version__


class TestGetUser:
    """Tests for GET /api/user."""

    def test_get_user(self, client):
        """Returns the fixed user with camelCase keys."""
        response = client.get("/api/user")
        assert response.status_code == 200
        data = response.json()
        assert data["id"] == 1
        assert data["username"] == "alexj"
        assert data["fullName"] == "Alex Johnson"
        assert data["email"] == "alex.j@university.edu"
        assert data["avatarUrl"].startswith("https://")

    def test_password_not_returned(self, client):
        """The password never leaves the server."""
        data = client.get("/api/user").json()
        assert "password" not in data

    def test_user_missing(self, empty_client):
        """Empty store gives 404 with a message."""
        response = empty_client.get("/api/user")
        assert response.status_code == 404
        assert "User 1" in response.json()["message"]


class TestSubjectProgress:
    """Tests for /api/user/subjects/progress."""

    def test_list_subject_progress(self, client):
        """Each row embeds its subject."""
        response = client.get("/api/user/subjects/progress")
        assert response.status_code == 200
        data = response.json()
        assert len(data) == 5
        assert data[0]["subject"] == {"id": 1, "name": "Math"}
        assert data[0]["progress"] == 85
        assert data[0]["userId"] == 1
        assert data[0]["subjectId"] == 1

    def test_update_subject_progress(self, client):
        """PATCH sets progress on one row."""
        response = client.patch("/api/user/subjects/progress/2", json={"progress": 90})
        assert response.status_code == 200
        assert response.json()["progress"] == 90
        assert response.json()["subject"]["name"] == "Science"

    def test_update_subject_progress_unknown(self, client):
        response = client.patch("/api/user/subjects/progress/50", json={"progress": 10})
        assert response.status_code == 404

    def test_update_subject_progress_out_of_range(self, client):
        response = client.patch("/api/user/subjects/progress/1", json={"progress": 101})
        assert response.status_code == 400


class TestCatalog:
    """Tests for /api/courses and /api/subjects."""

    def test_list_courses(self, client):
        data = client.get("/api/courses").json()
        assert [c["code"] for c in data] == ["MATH 301", "PHYS 202", "CS 315"]
        assert data[0]["iconName"] == "square-root-alt"
        assert data[0]["iconColor"] == "primary"

    def test_course_materials(self, client):
        response = client.get("/api/courses/2/materials")
        assert response.status_code == 200
        data = response.json()
        assert len(data) == 1
        assert data[0]["title"] == "Physics Lab Report"
        assert data[0]["courseId"] == 2

    def test_course_materials_unknown_course(self, client):
        response = client.get("/api/courses/99/materials")
        assert response.status_code == 404

    def test_list_subjects(self, client):
        data = client.get("/api/subjects").json()
        assert [s["name"] for s in data] == [
            "Math",
            "Science",
            "History",
            "English",
            "Computer Science",
        ]


class TestUnknownRoutes:
    """Unmatched routes use the same error shape."""

    def test_unknown_path(self, client):
        response = client.get("/api/nope")
        assert response.status_code == 404
        assert "message" in response.json()
