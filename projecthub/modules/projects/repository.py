from __future__ import annotations

import uuid
from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from projecthub.modules.projects.models import Project


class ProjectRepository:
    """Repository for Project entity with CRUD operations."""

    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, project_id: uuid.UUID) -> Optional[Project]:
        """Get project by ID."""
        return self.db.query(Project).filter(Project.id == project_id).first()

    def get_owned(self, project_id: uuid.UUID, user_id: uuid.UUID) -> Optional[Project]:
        """Get project by ID only if it belongs to the given user."""
        return (
            self.db.query(Project)
            .filter(Project.id == project_id, Project.user_id == user_id)
            .first()
        )

    def list_all(self, user_id: Optional[uuid.UUID] = None) -> list[Project]:
        """List projects, newest first, optionally for one owner."""
        query = self.db.query(Project)
        if user_id is not None:
            query = query.filter(Project.user_id == user_id)
        return query.order_by(Project.created_at.desc()).all()

    def search(self, text: str, user_id: Optional[uuid.UUID] = None) -> list[Project]:
        """Case-insensitive substring match on project_name; `%` and `_` match literally."""
        escaped = text.lower().replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
        query = self.db.query(Project).filter(
            func.lower(Project.project_name).like(f"%{escaped}%", escape="\\")
        )
        if user_id is not None:
            query = query.filter(Project.user_id == user_id)
        return query.order_by(Project.created_at.desc()).all()

    def create(
        self,
        user_id: uuid.UUID,
        project_name: str,
        image: Optional[str] = None,
        description: Optional[str] = None,
    ) -> Project:
        """Create a new project."""
        project = Project(
            user_id=user_id,
            project_name=project_name,
            image=image,
            description=description,
        )
        self.db.add(project)
        self.db.flush()
        return project

    def update(self, project: Project, **kwargs) -> Project:
        """Update project fields."""
        for key, value in kwargs.items():
            if hasattr(project, key):
                setattr(project, key, value)
        self.db.flush()
        return project

    def delete(self, project: Project) -> None:
        """Delete project."""
        self.db.delete(project)
        self.db.flush()
