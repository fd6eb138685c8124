"""
Error taxonomy shared by the store, the services and the HTTP layer.

Services raise these exceptions; endpoints translate them into
``HTTPException`` using the ``status_code`` carried by each class.
"""

from typing import Iterable


class ServiceError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code: int = 500

    def __init__(self, message: str = "") -> None:
        super().__init__(message)
        self.message = message


class Unauthenticated(ServiceError):
    status_code = 401


class Forbidden(ServiceError):
    status_code = 403


class InvalidInput(ServiceError):
    status_code = 400


class MissingFields(InvalidInput):
    """Raised when required fields are absent or empty."""

    def __init__(self, fields: Iterable[str]) -> None:
        self.fields = list(fields)
        super().__init__(f"Missing required fields: {', '.join(self.fields)}")


class NotFound(ServiceError):
    status_code = 404


class Conflict(ServiceError):
    status_code = 409


class DuplicateDocument(Conflict):
    """A write violated a unique index in the document store."""


class StoreUnavailable(ServiceError):
    status_code = 500
