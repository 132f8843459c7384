from __future__ import annotations

import uuid
from typing import Optional

from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from projecthub.core.logging import get_logger
from projecthub.core.security import create_access_token, get_password_hash, verify_password
from projecthub.modules.users.models import User
from projecthub.modules.users.repository import UserRepository

logger = get_logger(__name__)


class UserService:
    """Service layer for sign-up, sign-in and user lookup."""

    def __init__(self, db: Session):
        self.db = db
        self.user_repo = UserRepository(db)

    def sign_up(self, name: str, email: str, password: str) -> tuple[User, str]:
        """Create a user and return it with a fresh access token."""
        email = email.lower()
        if self.user_repo.get_by_email(email):
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="User with this email already exists",
            )

        try:
            user = self.user_repo.create(
                name=name,
                email=email,
                password_hash=get_password_hash(password),
            )
            self.db.commit()
        except IntegrityError:
            # Lost a race with a concurrent sign-up for the same email
            self.db.rollback()
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="User with this email already exists",
            )
        self.db.refresh(user)

        logger.info("user signed up", user_id=str(user.id))
        return user, create_access_token(subject=str(user.id))

    def authenticate(self, email: str, password: str) -> Optional[User]:
        """Return the user if the credentials match, else None."""
        user = self.user_repo.get_by_email(email.lower())
        if not user:
            return None

        if not verify_password(password, user.password_hash):
            return None

        return user

    def sign_in(self, email: str, password: str) -> tuple[User, str]:
        user = self.authenticate(email, password)
        if not user:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid email or password",
            )

        logger.info("user signed in", user_id=str(user.id))
        return user, create_access_token(subject=str(user.id))

    def get_user(self, user_id: uuid.UUID) -> User:
        user = self.user_repo.get_by_id(user_id)
        if not user:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="User not found",
            )
        return user
