"""
Tests for the developer dashboard aggregation
"""
import pytest

from project_tracker.models.project import Project
from project_tracker.services.identity import get_user
from project_tracker.services.stats import coerce_amount, global_stats, total_revenue


class TestRevenueCoercion:

    def test_mixed_amounts(self):
        assert total_revenue([100, "abc", None, 50]) == 150

    @pytest.mark.parametrize("value, expected", [
        (100, 100.0),
        ("42.5", 42.5),
        ("abc", 0.0),
        (None, 0.0),
        ("", 0.0),
        (float("nan"), 0.0),
        ([1, 2], 0.0),
    ])
    def test_coerce_amount(self, value, expected):
        assert coerce_amount(value) == expected

    def test_empty(self):
        assert total_revenue([]) == 0


class TestGlobalStats:

    def test_counts_only_own_students(self, client, developer, create_student,
                                      assign_project, register_developer):
        first = create_student(client, developer, username="s1")
        second = create_student(client, developer, username="s2")
        assign_project(client, developer, first, amount=100)
        assign_project(client, developer, first, amount=None)
        assign_project(client, developer, second, amount=50)

        other = register_developer(client, username="dev2")
        foreign = create_student(client, other, username="s3")
        assign_project(client, other, foreign, amount=1000)

        response = client.get("/api/students/stats/global", headers=developer["headers"])

        assert response.status_code == 200
        assert response.json() == {
            "total_students": 2,
            "total_projects": 3,
            "total_revenue": 150,
        }

    def test_no_students(self, client, developer):
        response = client.get("/api/students/stats/global", headers=developer["headers"])

        assert response.json() == {"total_students": 0, "total_projects": 0, "total_revenue": 0}

    def test_student_forbidden(self, client, student_headers):
        response = client.get("/api/students/stats/global", headers=student_headers)

        assert response.status_code == 403

    def test_reflects_amount_updates(self, client, developer, student, assign_project, db_session):
        project = assign_project(client, developer, student, amount=100)
        client.put(f"/api/students/project/{project['id']}", json={"amount": 0}, headers=developer["headers"])

        stats = global_stats(db_session, get_user(db_session, developer["id"]))

        assert stats.total_projects == 1
        assert stats.total_revenue == 0
        assert db_session.get(Project, project["id"]).amount == 0
