"""
Authentication endpoints for API v1.

Sign-up creates a profile with a fixed role and returns a bearer
token; login exchanges e-mail and password for a new token; ``/me``
returns the caller's profile.
"""

from fastapi import APIRouter, Depends, HTTPException, status

from campus_event_hub.app.core.errors import Conflict, InvalidInput, NotFound, Unauthenticated
from campus_event_hub.app.core.security import CurrentUser, get_current_user
from campus_event_hub.app.schemas.user import TokenResponse, UserCreate, UserLogin, UserProfile
from campus_event_hub.app.services.user_service import UserService

router = APIRouter()


@router.post("/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
async def sign_up(user: UserCreate) -> TokenResponse:
    try:
        return await UserService.sign_up(user)
    except InvalidInput as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message) from e
    except Conflict as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.message) from e


@router.post("/login", response_model=TokenResponse)
async def login(credentials: UserLogin) -> TokenResponse:
    try:
        return await UserService.login(credentials)
    except Unauthenticated as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=e.message,
            headers={"WWW-Authenticate": "Bearer"},
        ) from e


@router.get("/me", response_model=UserProfile)
async def read_me(current_user: CurrentUser = Depends(get_current_user)) -> UserProfile:
    try:
        return await UserService.get_profile(current_user.user_id)
    except NotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message) from e
