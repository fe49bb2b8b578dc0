"""Domain models for calendar events."""

from __future__ import annotations

from .errors import CalendarError, ConflictError, FormatError, NotFoundError, ValidationError
from .models import DEFAULT_EVENT_COLOR, Event, EventDraft, intervals_overlap, is_time_of_day

__all__ = [
    "DEFAULT_EVENT_COLOR",
    "CalendarError",
    "ConflictError",
    "Event",
    "EventDraft",
    "FormatError",
    "NotFoundError",
    "ValidationError",
    "intervals_overlap",
    "is_time_of_day",
]
