"""
Application package initializer.

This package contains the main entrypoint for the API and all of its
submodules.  Each domain (events, registrations, users) has a service
in ``services``, schemas in ``schemas`` and a router defined in
``api/v1/endpoints``.  Versioning is handled by grouping routers under
the ``api/<version>/`` hierarchy.
"""

from .main import app  # noqa: F401
