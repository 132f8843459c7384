from datetime import datetime
from uuid import UUID
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ProjectBase(BaseModel):
    project_name: str = Field(min_length=1, max_length=200)
    # URL returned by POST /upload, stored verbatim
    image: Optional[str] = None
    description: Optional[str] = None


class ProjectCreate(ProjectBase):
    # Owner is always the authenticated user
    pass


class ProjectUpdate(BaseModel):
    project_name: Optional[str] = Field(default=None, max_length=200)
    image: Optional[str] = None
    description: Optional[str] = None


class ProjectRead(ProjectBase):
    id: UUID
    user_id: UUID
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
