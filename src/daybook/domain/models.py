from __future__ import annotations

import re
from dataclasses import dataclass, replace
from typing import Any, Dict, Optional

from .errors import FormatError, ValidationError

DEFAULT_EVENT_COLOR = "#4A90E2"
_TIME_PATTERN = re.compile(r"^(?:[01]\d|2[0-3]):[0-5]\d$")


def is_time_of_day(value: Any) -> bool:
    """Return True for zero-padded 24-hour ``HH:MM`` strings."""

    return isinstance(value, str) and bool(_TIME_PATTERN.match(value))


def intervals_overlap(start_a: str, end_a: str, start_b: str, end_b: str) -> bool:
    """Half-open ``[start, end)`` intersection; abutting ranges do not overlap."""

    return start_a < end_b and start_b < end_a


@dataclass(frozen=True, slots=True)
class EventDraft:
    """Caller-supplied fields for creating or replacing an event."""

    name: str
    start_time: str
    end_time: str
    description: str = ""
    color: str = DEFAULT_EVENT_COLOR

    def validate(self) -> None:
        if not isinstance(self.name, str) or not self.name.strip():
            raise ValidationError("Event name is required")
        if not isinstance(self.description, str):
            raise ValidationError("Event description must be text")
        if not self.start_time or not self.end_time:
            raise ValidationError("Start and end times are required")
        for label, value in (("start", self.start_time), ("end", self.end_time)):
            if not is_time_of_day(value):
                raise ValidationError(f"Invalid {label} time {value!r}; expected HH:MM")
        if self.start_time >= self.end_time:
            raise ValidationError(
                f"Start time {self.start_time} must be before end time {self.end_time}"
            )
        if not self.color or not isinstance(self.color, str):
            raise ValidationError("Event color is required")


@dataclass(frozen=True, slots=True)
class Event:
    id: int
    name: str
    start_time: str
    end_time: str
    date: str
    description: str = ""
    color: str = DEFAULT_EVENT_COLOR

    @classmethod
    def from_draft(cls, event_id: int, key: str, draft: EventDraft) -> "Event":
        return cls(
            id=event_id,
            name=draft.name,
            start_time=draft.start_time,
            end_time=draft.end_time,
            date=key,
            description=draft.description or "",
            color=draft.color,
        )

    @classmethod
    def from_record(cls, record: Dict[str, Any], *, key: Optional[str] = None) -> "Event":
        """Build an event from its exported form, rejecting malformed records.

        Unknown fields are ignored. ``description`` and ``color`` fall back to
        their defaults when missing. When ``key`` is given the record's
        ``date`` (if present) must match it.
        """

        if not isinstance(record, dict):
            raise FormatError(f"Event record must be an object, got {type(record).__name__}")
        event_id = record.get("id")
        if isinstance(event_id, bool) or not isinstance(event_id, int):
            raise FormatError(f"Event id must be an integer, got {event_id!r}")
        name = record.get("name")
        if not isinstance(name, str) or not name.strip():
            raise FormatError(f"Event {event_id} has no name")
        start_time = record.get("startTime")
        end_time = record.get("endTime")
        if not is_time_of_day(start_time) or not is_time_of_day(end_time):
            raise FormatError(f"Event {event_id} has malformed times {start_time!r}-{end_time!r}")
        if start_time >= end_time:
            raise FormatError(f"Event {event_id} ends before it starts")
        description = record.get("description") or ""
        if not isinstance(description, str):
            raise FormatError(f"Event {event_id} description must be a string")
        color = record.get("color") or DEFAULT_EVENT_COLOR
        if not isinstance(color, str):
            raise FormatError(f"Event {event_id} color must be a string")
        date = record.get("date", key)
        if key is not None and date != key:
            raise FormatError(f"Event {event_id} is dated {date!r} but stored under {key}")
        if not isinstance(date, str):
            raise FormatError(f"Event {event_id} has no date")
        return cls(
            id=event_id,
            name=name,
            start_time=start_time,
            end_time=end_time,
            date=date,
            description=description,
            color=color,
        )

    def to_record(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "startTime": self.start_time,
            "endTime": self.end_time,
            "description": self.description,
            "color": self.color,
            "date": self.date,
        }

    def with_draft(self, draft: EventDraft) -> "Event":
        return replace(
            self,
            name=draft.name,
            start_time=draft.start_time,
            end_time=draft.end_time,
            description=draft.description or "",
            color=draft.color,
        )

    def overlaps(self, start_time: str, end_time: str) -> bool:
        return intervals_overlap(self.start_time, self.end_time, start_time, end_time)

    def matches(self, needle: str) -> bool:
        """Case-insensitive substring match on name and description."""

        lowered = needle.lower()
        return lowered in self.name.lower() or lowered in self.description.lower()
