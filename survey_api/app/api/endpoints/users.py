"""
User endpoints.

Registration and login exist so that callers can obtain the bearer
token the survey and location routes authenticate with.  The first
registered user becomes the administrator.
"""

from fastapi import APIRouter, Depends

from survey_api.app.core.config import Settings
from survey_api.app.core.db import Database, get_db
from survey_api.app.core.errors import AuthenticationError
from survey_api.app.core.security import create_access_token, get_current_user, get_settings
from survey_api.app.schemas.user import Token, UserCreate, UserLogin, UserRead
from survey_api.app.services.user_service import UserService


router = APIRouter()


def get_user_service(db: Database = Depends(get_db)) -> UserService:
    return UserService(db)


@router.post("", response_model=UserRead)
async def register_user(
    user: UserCreate,
    settings: Settings = Depends(get_settings),
    service: UserService = Depends(get_user_service),
) -> UserRead:
    return await service.create_user(user, settings)


@router.post("/login", response_model=Token)
async def login_user(
    credentials: UserLogin,
    settings: Settings = Depends(get_settings),
    service: UserService = Depends(get_user_service),
) -> Token:
    """Check the credentials and return a bearer token."""
    user = await service.authenticate(credentials.email, credentials.password)
    if user is None:
        raise AuthenticationError("Invalid credentials")
    return Token(access_token=create_access_token({"sub": user.email}, settings))


@router.get("/me", response_model=UserRead)
async def read_current_user(current_user: UserRead = Depends(get_current_user)) -> UserRead:
    return current_user
