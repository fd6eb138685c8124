"""
Top-level router for version 1 of the API.

This router aggregates domain-specific routers (events,
registrations, auth and service endpoints).  When new domains are
introduced, update this file to include their routers.
"""

from fastapi import APIRouter

from .endpoints import auth, events, registrations, system

router = APIRouter()

router.include_router(events.router, prefix="/events", tags=["events"])
router.include_router(registrations.router, prefix="/registrations", tags=["registrations"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(system.router, tags=["system"])
