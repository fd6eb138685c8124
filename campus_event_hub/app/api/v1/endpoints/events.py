"""
Event endpoints for API v1.

Listing and reading events is public; a bearer token is accepted but
not required.  Creating, updating and deleting events require an
authenticated caller (and the ``admin`` role when
``EVENT_WRITES_ADMIN_ONLY`` is set).
"""

from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, status

from campus_event_hub.app.core.errors import InvalidInput, NotFound
from campus_event_hub.app.core.security import CurrentUser, get_event_writer, get_optional_user
from campus_event_hub.app.schemas.event import EventCreate, EventRead, EventUpdate
from campus_event_hub.app.services.event_service import EventService

router = APIRouter()


@router.get("", response_model=List[EventRead])
async def list_events(
    current_user: Optional[CurrentUser] = Depends(get_optional_user),
) -> List[EventRead]:
    """List all events ordered by date, earliest first."""
    return await EventService.list_events()


@router.get("/{event_id}", response_model=EventRead)
async def get_event(
    event_id: str,
    current_user: Optional[CurrentUser] = Depends(get_optional_user),
) -> EventRead:
    """Retrieve a single event by its ID; 404 if it does not exist."""
    try:
        return await EventService.get_event(event_id)
    except NotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message) from e


@router.post("", response_model=EventRead, status_code=status.HTTP_201_CREATED)
async def create_event(
    event: EventCreate,
    current_user: CurrentUser = Depends(get_event_writer),
) -> EventRead:
    """Create a new event.

    ``title``, ``description``, ``date`` and ``venue`` are required;
    a 400 response names the missing ones.
    """
    try:
        return await EventService.create_event(event, current_user)
    except InvalidInput as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message) from e


@router.put("/{event_id}", response_model=EventRead)
async def update_event(
    event_id: str,
    updates: EventUpdate,
    current_user: CurrentUser = Depends(get_event_writer),
) -> EventRead:
    """Update an existing event.

    Partial updates are supported; any unspecified fields remain
    unchanged.
    """
    try:
        return await EventService.update_event(event_id, updates, current_user)
    except NotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message) from e
    except InvalidInput as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message) from e


@router.delete("/{event_id}")
async def delete_event(
    event_id: str,
    current_user: CurrentUser = Depends(get_event_writer),
) -> Dict[str, str]:
    """Delete an event.

    Registrations for the event are left untouched.
    """
    try:
        return await EventService.delete_event(event_id, current_user)
    except NotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message) from e
