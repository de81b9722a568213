"""Tracker implementation for creating TraceEvents."""

import uuid
from collections import deque
from datetime import datetime, timezone
from typing import Protocol

from ..models import TraceEvent


class ITracker(Protocol):
    """Creating TraceEvents for observability."""

    async def track(self, event_type: str, actor: str, data: dict) -> None:
        """Create a TraceEvent and record it."""
        ...

    def get_events(
        self,
        after: datetime | None = None,
        event_types: list[str] | None = None,
        actor: str | None = None,
        limit: int = 100,
    ) -> list[TraceEvent]:
        """Return recorded events, oldest first."""
        ...


class Tracker:
    """Keeps the most recent TraceEvents in memory."""

    def __init__(self, max_events: int = 1000):
        self._events: deque[TraceEvent] = deque(maxlen=max_events)

    async def track(self, event_type: str, actor: str, data: dict) -> None:
        """Create TraceEvent and record it."""
        self._events.append(
            TraceEvent(
                id=str(uuid.uuid4()),
                event_type=event_type,
                actor=actor,
                data=data,
                timestamp=datetime.now(timezone.utc),
            )
        )

    def get_events(
        self,
        after: datetime | None = None,
        event_types: list[str] | None = None,
        actor: str | None = None,
        limit: int = 100,
    ) -> list[TraceEvent]:
        events = [
            e
            for e in self._events
            if (after is None or e.timestamp > after)
            and (not event_types or e.event_type in event_types)
            and (actor is None or e.actor == actor)
        ]
        return events[:limit]
