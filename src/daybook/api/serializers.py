from __future__ import annotations

from typing import Any, Dict, Tuple

from ..domain import Event
from ..services import MonthOverview
from .models import EventPayload, MonthPayload, SearchHitPayload


def serialize_event(event: Event) -> Dict[str, Any]:
    return EventPayload.from_domain(event).model_dump(by_alias=True)


def serialize_search_hit(hit: Tuple[str, Event]) -> Dict[str, Any]:
    key, event = hit
    return SearchHitPayload(date=key, event=EventPayload.from_domain(event)).model_dump(by_alias=True)


def serialize_month(overview: MonthOverview) -> Dict[str, Any]:
    return MonthPayload.from_overview(overview).model_dump()
