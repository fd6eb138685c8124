"""
Pydantic models for event data.

``EventCreate`` and ``EventUpdate`` describe request bodies; their
fields are all optional at the schema level so that the service can
report every missing field at once with a 400 response.  ``EventRead``
is the stored/returned record.  Field names on the wire are camelCase.
"""

from typing import Optional

from pydantic import BaseModel, Field

REQUIRED_EVENT_FIELDS = ("title", "description", "date", "venue")


class EventCreate(BaseModel):
    """Schema for creating an event."""

    title: Optional[str] = Field(None, examples=["Orientation"])
    description: Optional[str] = Field(None, examples=["Welcome session"])
    date: Optional[str] = Field(None, examples=["2025-09-01"])
    venue: Optional[str] = Field(None, examples=["Hall A"])


class EventUpdate(BaseModel):
    """Schema for updating an event.

    All fields are optional; only provided, non-empty fields will be
    updated.
    """

    title: Optional[str] = None
    description: Optional[str] = None
    date: Optional[str] = None
    venue: Optional[str] = None


class EventRead(BaseModel):
    """Schema for reading an event from the API."""

    event_id: str = Field(..., alias="eventId")
    title: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    date: str = Field(..., min_length=1)
    venue: str = Field(..., min_length=1)
    created_by: str = Field(..., alias="createdBy")
    created_at: str = Field(..., alias="createdAt")
    updated_at: Optional[str] = Field(None, alias="updatedAt")

    model_config = {
        "populate_by_name": True,
    }
