"""
Registration endpoints for API v1.

Every route requires an authenticated caller.  Users may list and
delete only their own registrations; the per-event listing is open
to any authenticated caller.
"""

from typing import Dict, List

from fastapi import APIRouter, Depends, HTTPException, Path, status

from campus_event_hub.app.core.errors import Conflict, Forbidden, InvalidInput, NotFound
from campus_event_hub.app.core.security import CurrentUser, get_current_user
from campus_event_hub.app.schemas.registration import RegistrationCreate, RegistrationRead
from campus_event_hub.app.services.registration_service import RegistrationService

router = APIRouter()


@router.get("/my", response_model=List[RegistrationRead])
async def list_my_registrations(
    current_user: CurrentUser = Depends(get_current_user),
) -> List[RegistrationRead]:
    """List the caller's own registrations."""
    return await RegistrationService.list_mine(current_user)


@router.get("/event/{event_id}", response_model=List[RegistrationRead])
async def list_event_registrations(
    event_id: str = Path(..., description="ID of the event"),
    current_user: CurrentUser = Depends(get_current_user),
) -> List[RegistrationRead]:
    return await RegistrationService.list_by_event(event_id)


@router.get("/user/{user_id}", response_model=List[RegistrationRead])
async def list_user_registrations(
    user_id: str = Path(..., description="ID of the user"),
    current_user: CurrentUser = Depends(get_current_user),
) -> List[RegistrationRead]:
    """List registrations of a user; callers may only query themselves."""
    try:
        return await RegistrationService.list_by_user(user_id, current_user)
    except Forbidden as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=e.message) from e


@router.post("", response_model=RegistrationRead, status_code=status.HTTP_201_CREATED)
async def register_for_event(
    registration: RegistrationCreate,
    current_user: CurrentUser = Depends(get_current_user),
) -> RegistrationRead:
    """Register the caller for an event.

    Returns 400 without ``eventId``, 409 if the caller is already
    registered and 404 if the event does not exist.
    """
    try:
        return await RegistrationService.register(registration, current_user)
    except InvalidInput as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message) from e
    except Conflict as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.message) from e
    except NotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message) from e


@router.delete("/{registration_id}")
async def unregister_from_event(
    registration_id: str = Path(..., description="ID of the registration"),
    current_user: CurrentUser = Depends(get_current_user),
) -> Dict[str, str]:
    """Delete one of the caller's registrations."""
    try:
        return await RegistrationService.unregister(registration_id, current_user)
    except NotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message) from e
    except Forbidden as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=e.message) from e
