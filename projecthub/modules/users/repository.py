from __future__ import annotations

import uuid
from typing import Optional

from sqlalchemy.orm import Session

from projecthub.modules.users.models import User


class UserRepository:
    """Repository for User entity with CRUD operations."""

    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, user_id: uuid.UUID) -> Optional[User]:
        """Get user by ID."""
        return self.db.query(User).filter(User.id == user_id).first()

    def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email."""
        return self.db.query(User).filter(User.email == email).first()

    def create(self, name: str, email: str, password_hash: str) -> User:
        """Create a new user."""
        user = User(
            name=name,
            email=email,
            password_hash=password_hash,
        )
        self.db.add(user)
        self.db.flush()  # flush to get the ID without committing
        return user
