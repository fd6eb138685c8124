"""
Business logic for user profiles.

Profiles live in the ``users`` collection keyed by ``userId``, next
to a PBKDF2 password hash that never leaves the service.  Signing up
or logging in returns a bearer token whose claims carry the profile,
so the access-control dependencies do not need to hit the store.
"""

import logging
import uuid

from pydantic import ValidationError

from campus_event_hub.app.core.db import Document, get_store
from campus_event_hub.app.core.errors import (
    Conflict,
    DuplicateDocument,
    InvalidInput,
    MissingFields,
    NotFound,
    StoreUnavailable,
    Unauthenticated,
)
from campus_event_hub.app.core.security import create_access_token, hash_password, verify_password
from campus_event_hub.app.schemas.user import Role, TokenResponse, UserCreate, UserLogin, UserProfile

logger = logging.getLogger(__name__)

USERS = "users"

MIN_PASSWORD_LENGTH = 6


def _to_profile(doc: Document) -> UserProfile:
    data = {k: v for k, v in doc.data.items() if k != "passwordHash"}
    try:
        return UserProfile.model_validate({**data, "userId": doc.id})
    except ValidationError as e:
        logger.error("Malformed user document %s: %s", doc.id, e)
        raise StoreUnavailable("Malformed user document") from e


def _issue_token(profile: UserProfile) -> TokenResponse:
    token = create_access_token(
        {"sub": profile.user_id, "email": profile.email, "name": profile.name, "role": profile.role}
    )
    return TokenResponse(accessToken=token, tokenType="bearer", user=profile)


class UserService:
    """Service for signing up, logging in and reading profiles."""

    @classmethod
    async def sign_up(cls, data: UserCreate) -> TokenResponse:
        """Create a profile and return a token for it.

        The role is fixed at sign-up.  Raises ``InvalidInput`` for
        missing or malformed fields and ``Conflict`` if the e-mail is
        already registered.
        """
        values = data.model_dump()
        missing = [name for name in ("name", "email", "password", "role") if not (values.get(name) or "").strip()]
        if missing:
            raise MissingFields(missing)
        email = values["email"].strip().lower()
        if "@" not in email:
            raise InvalidInput("Invalid email address")
        if len(values["password"]) < MIN_PASSWORD_LENGTH:
            raise InvalidInput(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
        try:
            role = Role(values["role"])
        except ValueError:
            raise InvalidInput("Role must be 'admin' or 'student'")

        user_id = uuid.uuid4().hex
        user_data = {
            "name": values["name"].strip(),
            "email": email,
            "role": role.value,
            "passwordHash": hash_password(values["password"]),
        }
        try:
            get_store().add(USERS, user_data, doc_id=user_id)
        except DuplicateDocument as e:
            raise Conflict("Email already registered") from e
        logger.info("Registered %s user %s", role.value, user_id)
        return _issue_token(_to_profile(Document(id=user_id, data=user_data)))

    @classmethod
    async def login(cls, data: UserLogin) -> TokenResponse:
        """Check credentials and return a fresh token.

        Unknown e-mail and wrong password both raise ``Unauthenticated``
        with the same message.
        """
        email = (data.email or "").strip().lower()
        if not email or not data.password:
            raise Unauthenticated("Invalid credentials")
        docs = get_store().query(USERS, filters={"email": email})
        if not docs or not verify_password(data.password, docs[0].data.get("passwordHash", "")):
            logger.warning("Failed login for %s", email)
            raise Unauthenticated("Invalid credentials")
        return _issue_token(_to_profile(docs[0]))

    @classmethod
    async def get_profile(cls, user_id: str) -> UserProfile:
        doc = get_store().get(USERS, user_id)
        if doc is None:
            raise NotFound("User profile not found")
        return _to_profile(doc)
