"""
Tests for project CRUD and search endpoints.
"""
from uuid import uuid4

import pytest

from projecthub.modules.projects.models import Project


@pytest.fixture
def project(db, user):
    project = Project(
        id=uuid4(),
        user_id=user.id,
        project_name="Solar Car",
        image="http://minio.local:9000/project-images/1-1.jpg",
        description="Sun powered",
    )
    db.add(project)
    db.commit()
    db.refresh(project)
    return project


@pytest.fixture
def other_project(db, other_user):
    project = Project(id=uuid4(), user_id=other_user.id, project_name="Wind Turbine")
    db.add(project)
    db.commit()
    db.refresh(project)
    return project


class TestCreateProject:
    """POST /api/projects"""

    def test_requires_auth(self, client):
        response = client.post("/api/projects", json={"project_name": "x"})

        assert response.status_code == 401

    def test_create(self, client, user, auth_headers):
        response = client.post(
            "/api/projects",
            json={
                "project_name": "Robot Arm",
                "image": "data:image/png;base64,YWJj",
                "description": "Six axes",
            },
            headers=auth_headers,
        )

        assert response.status_code == 201
        data = response.json()
        assert data["user_id"] == str(user.id)
        assert data["project_name"] == "Robot Arm"
        assert data["image"] == "data:image/png;base64,YWJj"

    def test_name_required(self, client, auth_headers):
        response = client.post("/api/projects", json={"project_name": ""}, headers=auth_headers)

        assert response.status_code == 422


class TestReadProjects:
    """GET /api/projects and /api/projects/{id}"""

    def test_list(self, client, project, other_project):
        response = client.get("/api/projects")

        assert response.status_code == 200
        assert {p["id"] for p in response.json()} == {str(project.id), str(other_project.id)}

    def test_list_by_owner(self, client, user, project, other_project):
        response = client.get("/api/projects", params={"user_id": str(user.id)})

        assert [p["id"] for p in response.json()] == [str(project.id)]

    def test_get(self, client, project):
        response = client.get(f"/api/projects/{project.id}")

        assert response.status_code == 200
        assert response.json()["image"] == project.image

    def test_get_missing(self, client):
        response = client.get(f"/api/projects/{uuid4()}")

        assert response.status_code == 404


class TestSearchProjects:
    """GET /api/projects/search"""

    def test_case_insensitive_substring(self, client, project, other_project):
        response = client.get("/api/projects/search", params={"q": "sOLAR"})

        assert response.status_code == 200
        assert [p["id"] for p in response.json()] == [str(project.id)]

    def test_scoped_to_owner(self, client, other_user, project, other_project):
        response = client.get(
            "/api/projects/search",
            params={"q": "solar", "user_id": str(other_user.id)},
        )

        assert response.json() == []

    @pytest.mark.parametrize("q", ["", "   "])
    def test_blank_query(self, client, q):
        response = client.get("/api/projects/search", params={"q": q})

        assert response.status_code == 400
        assert response.json()["detail"] == "Search query is required"


class TestUpdateProject:
    """PUT /api/projects/{id}"""

    def test_partial_update(self, client, project, auth_headers):
        response = client.put(
            f"/api/projects/{project.id}",
            json={"description": "Now with batteries"},
            headers=auth_headers,
        )

        assert response.status_code == 200
        data = response.json()
        assert data["description"] == "Now with batteries"
        assert data["project_name"] == "Solar Car"
        assert data["image"] == project.image

    def test_clear_image(self, client, project, auth_headers):
        response = client.put(
            f"/api/projects/{project.id}",
            json={"image": None},
            headers=auth_headers,
        )

        assert response.status_code == 200
        assert response.json()["image"] is None

    def test_empty_name_rejected(self, client, project, auth_headers):
        response = client.put(
            f"/api/projects/{project.id}",
            json={"project_name": ""},
            headers=auth_headers,
        )

        assert response.status_code == 400

    def test_not_owner_sees_not_found(self, client, project, other_auth_headers):
        response = client.put(
            f"/api/projects/{project.id}",
            json={"project_name": "Stolen"},
            headers=other_auth_headers,
        )

        assert response.status_code == 404


class TestDeleteProject:
    """DELETE /api/projects/{id}"""

    def test_delete(self, client, project, auth_headers):
        response = client.delete(f"/api/projects/{project.id}", headers=auth_headers)

        assert response.status_code == 204
        assert client.get(f"/api/projects/{project.id}").status_code == 404

    def test_not_owner(self, client, project, other_auth_headers):
        response = client.delete(f"/api/projects/{project.id}", headers=other_auth_headers)

        assert response.status_code == 404
        assert client.get(f"/api/projects/{project.id}").status_code == 200
