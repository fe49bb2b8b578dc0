from __future__ import annotations

import logging
import threading
import time
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

from ..domain import ConflictError, Event, EventDraft, FormatError, NotFoundError, ValidationError
from .datekeys import month_prefix, parse_date_key

logger = logging.getLogger(__name__)

ExportedForm = Dict[str, List[Dict[str, Any]]]
Listener = Callable[["EventStore", str], None]


def _require_key(key: str) -> str:
    parse_date_key(key)
    return key


class EventStore:
    """Day-keyed event collection that never holds two overlapping events on one day.

    Every public operation runs under a re-entrant lock and either applies
    completely or raises without touching state. Listeners registered with
    :meth:`subscribe` are called after each successful mutation with the
    store and the name of the action.
    """

    def __init__(self, snapshot: Optional[Mapping[str, Any]] = None) -> None:
        self._days: Dict[str, List[Event]] = {}
        self._lock = threading.RLock()
        self._listeners: List[Listener] = []
        self._last_id = 0
        if snapshot:
            self._replace(self._validate_snapshot(snapshot))

    # -- observers -------------------------------------------------------

    def subscribe(self, listener: Listener) -> None:
        with self._lock:
            if listener not in self._listeners:
                self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        with self._lock:
            if listener in self._listeners:
                self._listeners.remove(listener)

    def _mutate(self, action: str, callback: Callable[[Dict[str, List[Event]]], Any]) -> Any:
        with self._lock:
            saved_days = {key: list(events) for key, events in self._days.items()}
            saved_last_id = self._last_id
            result = callback(self._days)
            try:
                for listener in list(self._listeners):
                    listener(self, action)
            except Exception:
                logger.exception("Listener failed after %s; rolling back", action)
                self._days = saved_days
                self._last_id = saved_last_id
                raise
            return result

    # -- reads -----------------------------------------------------------

    def __len__(self) -> int:
        with self._lock:
            return sum(len(events) for events in self._days.values())

    def day_count(self, key: str) -> int:
        with self._lock:
            return len(self._days.get(key, ()))

    def list_events(self, key: str) -> List[Event]:
        with self._lock:
            return list(self._days.get(key, ()))

    def get_event(self, key: str, event_id: int) -> Event:
        with self._lock:
            return self._days.get(key, [])[self._index_of(key, event_id)]

    def events_in_month(self, year: int, month: int) -> Dict[str, List[Event]]:
        prefix = month_prefix(year, month) + "-"
        with self._lock:
            return {
                key: list(events)
                for key, events in sorted(self._days.items())
                if key.startswith(prefix)
            }

    def find_conflicts(
        self,
        key: str,
        start_time: str,
        end_time: str,
        *,
        exclude_id: Optional[int] = None,
    ) -> List[Event]:
        with self._lock:
            return [
                event
                for event in self._days.get(key, ())
                if event.id != exclude_id and event.overlaps(start_time, end_time)
            ]

    def search(self, term: str) -> List[Tuple[str, Event]]:
        needle = term or ""
        with self._lock:
            matches = [
                (key, event)
                for key in sorted(self._days)
                for event in self._days[key]
                if not needle or event.matches(needle)
            ]
        logger.debug("Search %r matched %d event(s)", needle, len(matches))
        return matches

    # -- writes ----------------------------------------------------------

    def add_event(self, key: str, draft: EventDraft) -> Event:
        _require_key(key)
        draft.validate()

        def _add(days: Dict[str, List[Event]]) -> Event:
            self._ensure_free(key, draft)
            event = Event.from_draft(self._allocate_id(), key, draft)
            days.setdefault(key, []).append(event)
            return event

        event = self._mutate("add_event", _add)
        logger.info("Added event %s '%s' on %s %s-%s", event.id, event.name, key, event.start_time, event.end_time)
        return event

    def update_event(self, key: str, event_id: int, draft: EventDraft) -> Event:
        _require_key(key)
        draft.validate()

        def _update(days: Dict[str, List[Event]]) -> Event:
            index = self._index_of(key, event_id)
            self._ensure_free(key, draft, exclude_id=event_id)
            updated = days[key][index].with_draft(draft)
            days[key][index] = updated
            return updated

        event = self._mutate("update_event", _update)
        logger.info("Updated event %s on %s", event_id, key)
        return event

    def delete_event(self, key: str, event_id: int) -> None:
        def _delete(days: Dict[str, List[Event]]) -> None:
            index = self._index_of(key, event_id)
            del days[key][index]
            if not days[key]:
                del days[key]

        self._mutate("delete_event", _delete)
        logger.info("Deleted event %s on %s", event_id, key)

    # -- snapshots -------------------------------------------------------

    def export_snapshot(self) -> ExportedForm:
        with self._lock:
            return {
                key: [event.to_record() for event in events]
                for key, events in sorted(self._days.items())
            }

    def export_month(self, year: int, month: int) -> ExportedForm:
        return {
            key: [event.to_record() for event in events]
            for key, events in self.events_in_month(year, month).items()
        }

    def import_snapshot(self, data: Mapping[str, Any]) -> None:
        """Replace every event with the contents of an exported snapshot.

        The payload is validated in full before anything is replaced, so a
        :class:`FormatError` leaves the current events untouched.
        """

        days = self._validate_snapshot(data)
        self._mutate("import_snapshot", lambda _: self._replace(days))
        logger.info("Imported snapshot with %d day(s), %d event(s)", len(days), len(self))

    # -- internals -------------------------------------------------------

    def _index_of(self, key: str, event_id: int) -> int:
        for index, event in enumerate(self._days.get(key, ())):
            if event.id == event_id:
                return index
        logger.warning("Event %s not found on %s", event_id, key)
        raise NotFoundError(key, event_id)

    def _ensure_free(self, key: str, draft: EventDraft, *, exclude_id: Optional[int] = None) -> None:
        conflicts = self.find_conflicts(key, draft.start_time, draft.end_time, exclude_id=exclude_id)
        if conflicts:
            logger.warning(
                "Rejected %s-%s on %s: overlaps %s",
                draft.start_time,
                draft.end_time,
                key,
                [event.id for event in conflicts],
            )
            raise ConflictError(key, conflicts)

    def _allocate_id(self) -> int:
        # Millisecond timestamps, bumped when two events land in the same tick.
        candidate = max(int(time.time() * 1000), self._last_id + 1)
        self._last_id = candidate
        return candidate

    def _replace(self, days: Dict[str, List[Event]]) -> None:
        self._days = days
        self._last_id = max((event.id for events in days.values() for event in events), default=0)

    @staticmethod
    def _validate_snapshot(data: Mapping[str, Any]) -> Dict[str, List[Event]]:
        if not isinstance(data, Mapping):
            raise FormatError(f"Snapshot must be an object keyed by date, got {type(data).__name__}")
        days: Dict[str, List[Event]] = {}
        seen_ids: set[int] = set()
        for key, records in data.items():
            try:
                _require_key(key)
            except ValidationError as exc:
                raise FormatError(str(exc)) from exc
            if not isinstance(records, list):
                raise FormatError(f"Events for {key} must be a list")
            events: List[Event] = []
            for record in records:
                event = Event.from_record(record, key=key)
                if event.id in seen_ids:
                    raise FormatError(f"Duplicate event id {event.id}")
                clashes = [other.id for other in events if other.overlaps(event.start_time, event.end_time)]
                if clashes:
                    raise FormatError(f"Event {event.id} on {key} overlaps event(s) {clashes}")
                seen_ids.add(event.id)
                events.append(event)
            if events:
                days[key] = events
        return days


__all__ = ["EventStore", "ExportedForm", "Listener"]
