"""Date keys, the event store, and snapshot persistence."""

from .config import APP_NAME, DATA_DIR, EVENTS_FILE, ensure_data_dir
from .datekeys import (
    WEEKDAY_LABELS,
    days_in_month,
    first_weekday_of_month,
    is_date_key,
    key_for,
    month_grid,
    month_prefix,
    parse_date_key,
    shift_month,
    to_date_key,
    today,
)
from .event_store import EventStore, ExportedForm
from .snapshot_file import SnapshotFile, export_filename, export_to_file, read_snapshot

__all__ = [
    "APP_NAME",
    "DATA_DIR",
    "EVENTS_FILE",
    "EventStore",
    "ExportedForm",
    "SnapshotFile",
    "WEEKDAY_LABELS",
    "days_in_month",
    "ensure_data_dir",
    "export_filename",
    "export_to_file",
    "first_weekday_of_month",
    "is_date_key",
    "key_for",
    "month_grid",
    "month_prefix",
    "parse_date_key",
    "read_snapshot",
    "shift_month",
    "to_date_key",
    "today",
]
