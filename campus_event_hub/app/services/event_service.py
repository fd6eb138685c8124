"""
Business logic for events.

The ``EventService`` keeps events in the ``events`` collection of the
document store.  Any authenticated caller may create, update or
delete an event; the route layer decides whether an admin role is
additionally required.  Deleting an event leaves its registrations in
place.
"""

import logging
from typing import Dict, List

from pydantic import ValidationError

from campus_event_hub.app.core.db import Document, get_store
from campus_event_hub.app.core.errors import InvalidInput, MissingFields, NotFound, StoreUnavailable
from campus_event_hub.app.core.security import CurrentUser
from campus_event_hub.app.core.timeutil import normalize_iso_date, utcnow_iso
from campus_event_hub.app.schemas.event import REQUIRED_EVENT_FIELDS, EventCreate, EventRead, EventUpdate

logger = logging.getLogger(__name__)

EVENTS = "events"


def _filled(value) -> bool:
    return isinstance(value, str) and bool(value.strip())


def _to_event(doc: Document) -> EventRead:
    try:
        return EventRead.model_validate({**doc.data, "eventId": doc.id})
    except ValidationError as e:
        logger.error("Malformed event document %s: %s", doc.id, e)
        raise StoreUnavailable("Malformed event document") from e


class EventService:
    """Service for managing events."""

    @classmethod
    async def list_events(cls) -> List[EventRead]:
        """Return all events ordered by ``date`` ascending."""
        docs = get_store().query(EVENTS, order_by="date")
        logger.info("Fetched %s events", len(docs))
        return [_to_event(doc) for doc in docs]

    @classmethod
    async def get_event(cls, event_id: str) -> EventRead:
        """Retrieve a single event by ID.

        Raises ``NotFound`` if the event does not exist.
        """
        doc = get_store().get(EVENTS, event_id)
        if doc is None:
            raise NotFound("Event not found")
        return _to_event(doc)

    @classmethod
    async def create_event(cls, data: EventCreate, current_user: CurrentUser) -> EventRead:
        """Validate and store a new event created by ``current_user``.

        ``title``, ``description``, ``date`` and ``venue`` must all be
        present and non-empty; otherwise ``MissingFields`` names every
        offending field and nothing is written.
        """
        values = data.model_dump()
        missing = [name for name in REQUIRED_EVENT_FIELDS if not _filled(values.get(name))]
        if missing:
            raise MissingFields(missing)
        event_date = normalize_iso_date(values["date"])
        if event_date is None:
            raise InvalidInput("Field 'date' must be an ISO 8601 date")

        event_data = {name: values[name] for name in REQUIRED_EVENT_FIELDS}
        event_data["date"] = event_date
        event_data["createdBy"] = current_user.user_id
        event_data["createdAt"] = utcnow_iso()

        event_id = get_store().add(EVENTS, event_data)
        logger.info("User %s created event %s ('%s')", current_user.user_id, event_id, event_data["title"])
        return _to_event(Document(id=event_id, data=event_data))

    @classmethod
    async def update_event(cls, event_id: str, updates: EventUpdate, current_user: CurrentUser) -> EventRead:
        """Merge the supplied fields into an existing event.

        Fields that are absent or empty in ``updates`` keep their
        stored values.  ``updatedAt`` is always refreshed.  Raises
        ``NotFound`` if the event does not exist.
        """
        store = get_store()
        if store.get(EVENTS, event_id) is None:
            raise NotFound("Event not found")

        changes: Dict[str, str] = {
            name: value for name, value in updates.model_dump().items() if _filled(value)
        }
        if "date" in changes:
            event_date = normalize_iso_date(changes["date"])
            if event_date is None:
                raise InvalidInput("Field 'date' must be an ISO 8601 date")
            changes["date"] = event_date
        changes["updatedAt"] = utcnow_iso()

        doc = store.update(EVENTS, event_id, changes)
        if doc is None:
            # Deleted between the existence check and the write.
            raise NotFound("Event not found")
        logger.info("User %s updated event %s (%s)", current_user.user_id, event_id, ", ".join(sorted(changes)))
        return _to_event(doc)

    @classmethod
    async def delete_event(cls, event_id: str, current_user: CurrentUser) -> Dict[str, str]:
        """Delete an event.

        Registrations referencing the event are not removed.  Raises
        ``NotFound`` if the event does not exist.
        """
        store = get_store()
        if store.get(EVENTS, event_id) is None:
            raise NotFound("Event not found")
        if not store.delete(EVENTS, event_id):
            raise NotFound("Event not found")
        logger.info("User %s deleted event %s", current_user.user_id, event_id)
        return {"message": "Event deleted successfully"}
