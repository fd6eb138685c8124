"""
Pydantic schema definitions for API payloads.

Each domain (events, registrations, users) defines its own Pydantic
models for request and response bodies.  Wire field names are
camelCase; Python attributes are snake_case with aliases.
"""
