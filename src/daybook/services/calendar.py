from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from ..core import (
    EventStore,
    export_to_file,
    month_grid,
    parse_date_key,
    read_snapshot,
    today,
)
from ..domain import Event, EventDraft
from .context import ServiceContext

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class MonthOverview:
    year: int
    month: int
    weeks: List[List[Optional[int]]]
    counts: Dict[int, int] = field(default_factory=dict)
    today: Optional[int] = None


@dataclass(slots=True)
class CalendarService:
    context: ServiceContext

    @property
    def store(self) -> EventStore:
        return self.context.store

    def draft(
        self,
        *,
        name: str,
        start_time: str,
        end_time: str,
        description: str = "",
        color: Optional[str] = None,
    ) -> EventDraft:
        return EventDraft(
            name=name,
            start_time=start_time,
            end_time=end_time,
            description=description or "",
            color=color or self.context.settings.storage.default_color,
        )

    def list_day(self, key: str) -> List[Event]:
        return self.store.list_events(key)

    def add(self, key: str, **fields) -> Event:
        return self.store.add_event(key, self.draft(**fields))

    def update(self, key: str, event_id: int, **fields) -> Event:
        """Replace an event's fields; omitted fields keep their current value."""

        current = self.store.get_event(key, event_id)
        merged = {
            "name": current.name,
            "start_time": current.start_time,
            "end_time": current.end_time,
            "description": current.description,
            "color": current.color,
        }
        merged.update({name: value for name, value in fields.items() if value is not None})
        return self.store.update_event(key, event_id, self.draft(**merged))

    def delete(self, key: str, event_id: int) -> None:
        self.store.delete_event(key, event_id)

    def search(self, term: str) -> List[Tuple[str, Event]]:
        return self.store.search(term)

    def month_overview(self, year: int, month: int) -> MonthOverview:
        counts = {
            parse_date_key(key).day: len(events)
            for key, events in self.store.events_in_month(year, month).items()
        }
        current = parse_date_key(today())
        return MonthOverview(
            year=year,
            month=month,
            weeks=month_grid(year, month),
            counts=counts,
            today=current.day if (current.year, current.month) == (year, month) else None,
        )

    def export(
        self,
        *,
        context: Optional[date] = None,
        month_only: bool = False,
        directory: Optional[Path] = None,
    ) -> Path:
        target_dir = directory or self.context.settings.storage.export_dir
        return export_to_file(self.store, target_dir, context=context, month_only=month_only)

    def import_file(self, path: Path) -> int:
        if not path.is_file():
            raise FileNotFoundError(f"No snapshot file at {path}")
        self.store.import_snapshot(read_snapshot(path))
        logger.info("Imported %s", path)
        return len(self.store)
