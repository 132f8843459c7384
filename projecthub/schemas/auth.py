from pydantic import BaseModel

from projecthub.schemas.user import UserRead


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"


class AuthResponse(BaseModel):
    """Returned by sign-up and sign-in."""
    token: str
    user: UserRead
