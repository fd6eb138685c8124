"""
Pydantic models for event registrations.

A registration links one user to one event.  The pair
``(userId, eventId)`` is unique among live registrations.
"""

from typing import Optional

from pydantic import BaseModel, Field


class RegistrationCreate(BaseModel):
    """Schema for registering the caller for an event."""

    event_id: Optional[str] = Field(None, alias="eventId", examples=["E1"])

    model_config = {
        "populate_by_name": True,
    }


class RegistrationRead(BaseModel):
    registration_id: str = Field(..., alias="registrationId")
    user_id: str = Field(..., alias="userId")
    event_id: str = Field(..., alias="eventId")
    registered_at: str = Field(..., alias="registeredAt")

    model_config = {
        "populate_by_name": True,
    }
