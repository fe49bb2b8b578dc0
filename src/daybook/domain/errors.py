from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from .models import Event


class CalendarError(Exception):
    """Base class for every recoverable calendar failure."""


class ValidationError(CalendarError):
    pass


class ConflictError(CalendarError):
    """Raised when a candidate time range overlaps events already on that day."""

    def __init__(self, key: str, conflicts: Sequence["Event"]) -> None:
        self.key = key
        self.conflicts = list(conflicts)
        names = ", ".join(
            f"{event.name} ({event.start_time}-{event.end_time})" for event in self.conflicts
        )
        super().__init__(f"Time slot on {key} overlaps with existing event(s): {names}")


class NotFoundError(CalendarError):
    def __init__(self, key: str, event_id: int) -> None:
        self.key = key
        self.event_id = event_id
        super().__init__(f"Event {event_id} not found on {key}")


class FormatError(CalendarError):
    pass


__all__ = ["CalendarError", "ConflictError", "FormatError", "NotFoundError", "ValidationError"]
