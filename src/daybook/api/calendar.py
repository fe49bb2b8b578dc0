from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Any, Dict, Optional

from ..core import parse_date_key
from .registry import register_api
from .serializers import serialize_event, serialize_month, serialize_search_hit
from .state import api_state


@register_api(
    "calendar_month",
    description="Return the month grid (Sunday first) with per-day event counts.",
    category="calendar",
    tags=("calendar", "month"),
)
def calendar_month(year: Optional[int] = None, month: Optional[int] = None) -> Dict[str, Any]:
    reference = date.today()
    overview = api_state.calendar.month_overview(year or reference.year, month or reference.month)
    return serialize_month(overview)


@register_api(
    "list_events",
    description="Return the events of one day in the order they were added.",
    category="events",
    tags=("events", "read"),
)
def list_events(day: str) -> Dict[str, Any]:
    events = api_state.calendar.list_day(day)
    return {"date": day, "events": [serialize_event(event) for event in events]}


@register_api(
    "add_event",
    description="Create an event on a day; fails when the time range overlaps another event.",
    category="events",
    tags=("events", "write"),
)
def add_event(
    day: str,
    name: str,
    start_time: str,
    end_time: str,
    description: str = "",
    color: Optional[str] = None,
) -> Dict[str, Any]:
    event = api_state.calendar.add(
        day,
        name=name,
        start_time=start_time,
        end_time=end_time,
        description=description,
        color=color,
    )
    return {"event": serialize_event(event)}


@register_api(
    "update_event",
    description="Change an existing event; omitted fields keep their current value.",
    category="events",
    tags=("events", "write"),
)
def update_event(
    day: str,
    event_id: int,
    name: Optional[str] = None,
    start_time: Optional[str] = None,
    end_time: Optional[str] = None,
    description: Optional[str] = None,
    color: Optional[str] = None,
) -> Dict[str, Any]:
    event = api_state.calendar.update(
        day,
        event_id,
        name=name,
        start_time=start_time,
        end_time=end_time,
        description=description,
        color=color,
    )
    return {"event": serialize_event(event)}


@register_api(
    "delete_event",
    description="Remove an event from a day.",
    category="events",
    tags=("events", "write"),
)
def delete_event(day: str, event_id: int) -> Dict[str, Any]:
    api_state.calendar.delete(day, event_id)
    return {"deleted": event_id, "date": day}


@register_api(
    "search_events",
    description="Case-insensitive search over event names and descriptions across all days.",
    category="events",
    tags=("events", "search"),
)
def search_events(term: str = "") -> Dict[str, Any]:
    hits = api_state.calendar.search(term)
    return {"term": term, "results": [serialize_search_hit(hit) for hit in hits]}


@register_api(
    "export_snapshot",
    description="Return every event keyed by date, in the persisted export format.",
    category="snapshot",
    tags=("snapshot", "read"),
)
def export_snapshot() -> Dict[str, Any]:
    return api_state.calendar.store.export_snapshot()


@register_api(
    "export_to_file",
    description="Write the snapshot (or one month of it) to calendar-events-YYYY-MM-DD.json.",
    category="snapshot",
    tags=("snapshot", "export"),
)
def export_to_file(day: Optional[str] = None, month_only: bool = False) -> Dict[str, Any]:
    context = parse_date_key(day) if day else None
    path = api_state.calendar.export(context=context, month_only=month_only)
    return {"path": str(path)}


@register_api(
    "import_snapshot",
    description="Replace every event with a previously exported snapshot.",
    category="snapshot",
    tags=("snapshot", "write"),
)
def import_snapshot(snapshot: Optional[dict] = None, path: Optional[str] = None) -> Dict[str, Any]:
    if path:
        count = api_state.calendar.import_file(Path(path))
    elif snapshot is not None:
        api_state.calendar.store.import_snapshot(snapshot)
        count = len(api_state.calendar.store)
    else:
        raise ValueError("Provide either a snapshot object or a path to one.")
    return {"events": count}
