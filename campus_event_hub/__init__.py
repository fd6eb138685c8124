"""
Top-level package for the Campus Event Hub.

The HTTP API lives under ``app`` (``campus_event_hub.app.main:app``);
``client`` provides a ``requests``-based client for it.
"""

__all__ = []
