# projecthub/modules/projects/routes.py
from uuid import UUID
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from projecthub.db.deps import get_current_user, get_db
from projecthub.modules.projects.service import ProjectService
from projecthub.modules.users.models import User
from projecthub.schemas.project import ProjectCreate, ProjectRead, ProjectUpdate

router = APIRouter(prefix="/projects", tags=["projects"])


@router.get("", response_model=List[ProjectRead])
def list_projects(
    db: Session = Depends(get_db),
    user_id: Optional[UUID] = Query(default=None, description="Only projects owned by this user"),
):
    """List projects, newest first."""
    return ProjectService(db).list_projects(user_id=user_id)


# Declared before /{project_id} so "search" is not parsed as an ID
@router.get("/search", response_model=List[ProjectRead])
def search_projects(
    q: str = Query(default="", description="Substring of the project name"),
    user_id: Optional[UUID] = Query(default=None),
    db: Session = Depends(get_db),
):
    return ProjectService(db).search_projects(q, user_id=user_id)


@router.get("/{project_id}", response_model=ProjectRead)
def get_project(project_id: UUID, db: Session = Depends(get_db)):
    return ProjectService(db).get_project(project_id)


@router.post(
    "",
    response_model=ProjectRead,
    status_code=status.HTTP_201_CREATED,
)
def create_project(
    payload: ProjectCreate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Create a project for the authenticated user."""
    return ProjectService(db).create_project(
        user=user,
        project_name=payload.project_name,
        image=payload.image,
        description=payload.description,
    )


@router.put("/{project_id}", response_model=ProjectRead)
def update_project(
    project_id: UUID,
    payload: ProjectUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Update the fields present in the body; `"image": null` clears the image."""
    update_data = payload.model_dump(exclude_unset=True)
    return ProjectService(db).update_project(project_id, user, **update_data)


@router.delete("/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_project(
    project_id: UUID,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    ProjectService(db).delete_project(project_id, user)
    return None
