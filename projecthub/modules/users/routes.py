# projecthub/modules/users/routes.py
from uuid import UUID

from fastapi import APIRouter, Depends, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

from projecthub.db.deps import get_db
from projecthub.modules.users.service import UserService
from projecthub.schemas.auth import AuthResponse, Token
from projecthub.schemas.user import UserCreate, UserRead, UserSignIn

router = APIRouter(prefix="/users", tags=["users"])


@router.post(
    "/signup",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
)
def sign_up(payload: UserCreate, db: Session = Depends(get_db)):
    """Register a new user and return an access token."""
    user, token = UserService(db).sign_up(
        name=payload.name,
        email=payload.email,
        password=payload.password,
    )
    return AuthResponse(token=token, user=UserRead.model_validate(user))


@router.post("/signin", response_model=AuthResponse)
def sign_in(payload: UserSignIn, db: Session = Depends(get_db)):
    """Sign in with email and password."""
    user, token = UserService(db).sign_in(email=payload.email, password=payload.password)
    return AuthResponse(token=token, user=UserRead.model_validate(user))


@router.post("/token", response_model=Token)
def login_for_access_token(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: Session = Depends(get_db),
):
    """OAuth2 password flow (username = email). Used by the docs UI."""
    _, access_token = UserService(db).sign_in(
        email=form_data.username,
        password=form_data.password,
    )
    return Token(access_token=access_token)


@router.get("/{user_id}", response_model=UserRead)
def get_user(user_id: UUID, db: Session = Depends(get_db)):
    return UserService(db).get_user(user_id)
