"""Tests for project service business logic."""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest
from fastapi import HTTPException

from projecthub.modules.projects.models import Project
from projecthub.modules.projects.service import ProjectService


class TestProjectListing:
    """Ordering and filtering."""

    def test_newest_first(self, db, user):
        now = datetime.now(timezone.utc)
        for offset, name in enumerate(["old", "middle", "new"]):
            db.add(
                Project(
                    id=uuid4(),
                    user_id=user.id,
                    project_name=name,
                    created_at=now + timedelta(minutes=offset),
                    updated_at=now,
                )
            )
        db.commit()

        projects = ProjectService(db).list_projects()

        assert [p.project_name for p in projects] == ["new", "middle", "old"]

    def test_search_trims_query(self, db, user):
        service = ProjectService(db)
        service.create_project(user=user, project_name="Garden Planner")

        assert [p.project_name for p in service.search_projects("  garden  ")] == ["Garden Planner"]


class TestProjectMutation:
    """Create, update and delete through the service."""

    def test_create_sets_owner(self, db, user):
        project = ProjectService(db).create_project(
            user=user,
            project_name="Drone",
            image="data:image/png;base64,YWJj",
        )

        assert project.user_id == user.id
        assert project.id is not None

    def test_update_ignores_unknown_fields(self, db, user):
        service = ProjectService(db)
        project = service.create_project(user=user, project_name="Drone")

        updated = service.update_project(project.id, user, user_id=uuid4(), description="Quad")

        assert updated.user_id == user.id
        assert updated.description == "Quad"

    def test_update_with_nothing_is_noop(self, db, user):
        service = ProjectService(db)
        project = service.create_project(user=user, project_name="Drone")

        assert service.update_project(project.id, user).project_name == "Drone"

    def test_update_other_users_project(self, db, user, other_user):
        service = ProjectService(db)
        project = service.create_project(user=user, project_name="Drone")

        with pytest.raises(HTTPException) as exc_info:
            service.update_project(project.id, other_user, project_name="Mine")
        assert exc_info.value.status_code == 404

    def test_delete_missing(self, db, user):
        with pytest.raises(HTTPException) as exc_info:
            ProjectService(db).delete_project(uuid4(), user)
        assert exc_info.value.status_code == 404



class TestProjectSearch:
    """LIKE wildcards in the query are matched literally."""

    @pytest.mark.parametrize(
        "query,expected",
        [
            ("50%", ["50% off"]),
            ("a_b", ["a_b tools"]),
            ("\\", ["back\\slash"]),
        ],
    )
    def test_wildcards_are_literal(self, db, user, query, expected):
        service = ProjectService(db)
        for name in ["50% off", "500 units", "a_b tools", "axb tools", "back\\slash"]:
            service.create_project(user=user, project_name=name)

        assert [p.project_name for p in service.search_projects(query)] == expected
