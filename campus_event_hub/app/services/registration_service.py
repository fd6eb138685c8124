"""
Business logic for event registrations.

A registration ties the calling user to an event.  The service
enforces three rules:

* a user holds at most one registration per event (checked before the
  write and backed by a unique index in the store, so concurrent
  duplicates also end in ``Conflict``);
* a registration can only be created for an event that exists at that
  moment;
* only the owner of a registration may list or delete it.
"""

import logging
from typing import Dict, List

from pydantic import ValidationError

from campus_event_hub.app.core.db import Document, get_store
from campus_event_hub.app.core.errors import (
    Conflict,
    DuplicateDocument,
    Forbidden,
    InvalidInput,
    NotFound,
    StoreUnavailable,
)
from campus_event_hub.app.core.security import CurrentUser
from campus_event_hub.app.core.timeutil import utcnow_iso
from campus_event_hub.app.schemas.registration import RegistrationCreate, RegistrationRead
from campus_event_hub.app.services.event_service import EVENTS

logger = logging.getLogger(__name__)

REGISTRATIONS = "registrations"

ALREADY_REGISTERED = "Already registered for this event"


def _to_registration(doc: Document) -> RegistrationRead:
    try:
        return RegistrationRead.model_validate({**doc.data, "registrationId": doc.id})
    except ValidationError as e:
        logger.error("Malformed registration document %s: %s", doc.id, e)
        raise StoreUnavailable("Malformed registration document") from e


class RegistrationService:
    """Service for registering users to events."""

    @classmethod
    async def list_by_event(cls, event_id: str) -> List[RegistrationRead]:
        docs = get_store().query(REGISTRATIONS, filters={"eventId": event_id})
        logger.info("Fetched %s registrations for event %s", len(docs), event_id)
        return [_to_registration(doc) for doc in docs]

    @classmethod
    async def list_by_user(cls, user_id: str, current_user: CurrentUser) -> List[RegistrationRead]:
        """List the registrations of ``user_id``.

        Callers may only look at their own registrations; any other
        ``user_id`` raises ``Forbidden``.
        """
        if current_user.user_id != user_id:
            raise Forbidden("Forbidden: Cannot view other users' registrations")
        docs = get_store().query(REGISTRATIONS, filters={"userId": user_id})
        logger.info("Fetched %s registrations for user %s", len(docs), user_id)
        return [_to_registration(doc) for doc in docs]

    @classmethod
    async def list_mine(cls, current_user: CurrentUser) -> List[RegistrationRead]:
        return await cls.list_by_user(current_user.user_id, current_user)

    @classmethod
    async def register(cls, data: RegistrationCreate, current_user: CurrentUser) -> RegistrationRead:
        """Register the caller for an event.

        Checks run in this order: ``eventId`` present (``InvalidInput``),
        no existing registration for the pair (``Conflict``), event
        exists (``NotFound``).  Only then is the registration stored.
        """
        event_id = (data.event_id or "").strip()
        if not event_id:
            raise InvalidInput("Event ID is required")
        user_id = current_user.user_id
        store = get_store()

        existing = store.query(REGISTRATIONS, filters={"userId": user_id, "eventId": event_id})
        if existing:
            raise Conflict(ALREADY_REGISTERED)

        if store.get(EVENTS, event_id) is None:
            raise NotFound("Event not found")

        registration_data = {
            "userId": user_id,
            "eventId": event_id,
            "registeredAt": utcnow_iso(),
        }
        try:
            registration_id = store.add(REGISTRATIONS, registration_data)
        except DuplicateDocument as e:
            # A concurrent request for the same pair won the race.
            raise Conflict(ALREADY_REGISTERED) from e
        logger.info("User %s registered for event %s", user_id, event_id)
        return _to_registration(Document(id=registration_id, data=registration_data))

    @classmethod
    async def unregister(cls, registration_id: str, current_user: CurrentUser) -> Dict[str, str]:
        """Delete one of the caller's registrations.

        Raises ``NotFound`` if the registration does not exist and
        ``Forbidden`` if it belongs to another user.
        """
        store = get_store()
        doc = store.get(REGISTRATIONS, registration_id)
        if doc is None:
            raise NotFound("Registration not found")
        if doc.data.get("userId") != current_user.user_id:
            raise Forbidden("Forbidden: Cannot delete other users' registrations")
        store.delete(REGISTRATIONS, registration_id)
        logger.info("Deleted registration %s", registration_id)
        return {"message": "Successfully unregistered from event"}
