"""
In-process request activity log.

A bounded ring buffer of the most recent HTTP requests, filled by the
middleware in ``main`` and exposed read-only through
``GET /api/v1/activity``.  When full, the oldest entry is evicted.
Nothing in the event or registration logic depends on it.
"""

import itertools
from collections import deque
from typing import Any, Dict, List, Optional

from campus_event_hub.app.core.config import settings
from campus_event_hub.app.core.timeutil import utcnow_iso

class ActivityLog:
    """Fixed-capacity, newest-first log of request records."""

    def __init__(self, capacity: int = 100) -> None:
        if capacity < 1:
            raise ValueError("capacity must be positive")
        self.capacity = capacity
        self._entries: deque = deque(maxlen=capacity)
        self._ids = itertools.count(1)

    def record(
        self,
        method: str,
        path: str,
        status: int,
        duration_ms: float,
        user_agent: Optional[str] = None,
    ) -> Dict[str, Any]:
        entry = {
            "id": next(self._ids),
            "timestamp": utcnow_iso(),
            "method": method,
            "path": path,
            "status": status,
            "duration": f"{int(duration_ms)}ms",
            "userAgent": user_agent or "Unknown",
        }
        # appendleft on a bounded deque drops the oldest entry on the right.
        self._entries.appendleft(entry)
        return entry

    def entries(self) -> List[Dict[str, Any]]:
        return list(self._entries)

    def clear(self) -> None:
        self._entries.clear()


activity_log = ActivityLog(settings.activity_log_size)
