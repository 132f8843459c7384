from __future__ import annotations

import uuid
from typing import Optional

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from projecthub.core.logging import get_logger
from projecthub.integrations.storage import storage_kind_of
from projecthub.modules.projects.models import Project
from projecthub.modules.projects.repository import ProjectRepository
from projecthub.modules.users.models import User

logger = get_logger(__name__)

UPDATABLE_FIELDS = {"project_name", "image", "description"}


class ProjectService:
    """Service layer for project operations."""

    def __init__(self, db: Session):
        self.db = db
        self.project_repo = ProjectRepository(db)

    def list_projects(self, user_id: Optional[uuid.UUID] = None) -> list[Project]:
        return self.project_repo.list_all(user_id=user_id)

    def search_projects(self, query: str, user_id: Optional[uuid.UUID] = None) -> list[Project]:
        if not query or not query.strip():
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Search query is required",
            )
        return self.project_repo.search(query.strip(), user_id=user_id)

    def get_project(self, project_id: uuid.UUID) -> Project:
        project = self.project_repo.get_by_id(project_id)
        if not project:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Project not found",
            )
        return project

    def create_project(
        self,
        user: User,
        project_name: str,
        image: Optional[str] = None,
        description: Optional[str] = None,
    ) -> Project:
        """Create a project owned by the given user."""
        project = self.project_repo.create(
            user_id=user.id,
            project_name=project_name,
            image=image,
            description=description,
        )
        self.db.commit()
        self.db.refresh(project)

        logger.info(
            "created project",
            project_id=str(project.id),
            user_id=str(user.id),
            image_storage=storage_kind_of(project.image),
        )
        return project

    def update_project(self, project_id: uuid.UUID, user: User, **update_data) -> Project:
        """Apply a partial update. Projects owned by someone else look missing."""
        project = self.project_repo.get_owned(project_id, user.id)
        if not project:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Project not found",
            )

        changes = {k: v for k, v in update_data.items() if k in UPDATABLE_FIELDS}
        if "project_name" in changes and not changes["project_name"]:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Project name cannot be empty",
            )
        if not changes:
            return project

        project = self.project_repo.update(project, **changes)
        self.db.commit()
        self.db.refresh(project)

        if "image" in changes:
            logger.info(
                "updated project image",
                project_id=str(project.id),
                image_storage=storage_kind_of(project.image),
            )
        return project

    def delete_project(self, project_id: uuid.UUID, user: User) -> None:
        project = self.project_repo.get_owned(project_id, user.id)
        if not project:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Project not found",
            )

        self.project_repo.delete(project)
        self.db.commit()
        logger.info("deleted project", project_id=str(project_id), user_id=str(user.id))
