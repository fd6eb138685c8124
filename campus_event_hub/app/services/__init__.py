"""
Service layer abstraction.

Each service encapsulates business logic for a domain and talks to
the document store from ``core.db``.  Services raise the exceptions
defined in ``core.errors``; translating them to HTTP responses is the
job of the API handlers.
"""
