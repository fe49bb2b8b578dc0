from __future__ import annotations

import logging
import os
import tempfile
from datetime import date
from pathlib import Path
from typing import Any, Mapping, Optional

import orjson

from ..domain import FormatError
from .config import EVENTS_FILE, EXPORT_FILENAME_TEMPLATE, ensure_data_dir
from .datekeys import key_for
from .event_store import EventStore, ExportedForm

logger = logging.getLogger(__name__)


def _write_atomic(path: Path, payload: Mapping[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    data = orjson.dumps(payload, option=orjson.OPT_INDENT_2) + b"\n"
    fd, tmp_name = tempfile.mkstemp(prefix=".events-", suffix=".json", dir=str(path.parent))
    try:
        with os.fdopen(fd, "wb") as handle:
            handle.write(data)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(tmp_name, path)
    finally:
        if os.path.exists(tmp_name):
            os.remove(tmp_name)


def read_snapshot(path: Path) -> ExportedForm:
    """Decode a snapshot file; a missing or empty file is an empty calendar."""

    if not path.exists():
        return {}
    raw = path.read_bytes()
    if not raw.strip():
        return {}
    try:
        data = orjson.loads(raw)
    except orjson.JSONDecodeError as exc:
        raise FormatError(f"{path} is not valid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise FormatError(f"{path} must contain an object keyed by date")
    return data


class SnapshotFile:
    """JSON file holding the full event snapshot, rewritten after every change."""

    def __init__(self, path: Optional[Path] = None) -> None:
        if path is None:
            ensure_data_dir()
        self._path = path or EVENTS_FILE

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> ExportedForm:
        return read_snapshot(self._path)

    def save(self, store: EventStore) -> None:
        _write_atomic(self._path, store.export_snapshot())
        logger.debug("Snapshot written to %s", self._path)

    def __call__(self, store: EventStore, action: str) -> None:
        logger.debug("Persisting after %s", action)
        self.save(store)

    def open_store(self) -> EventStore:
        """Hydrate a store from disk and keep the file in sync with it."""

        store = EventStore()
        snapshot = self.load()
        if snapshot:
            store.import_snapshot(snapshot)
        store.subscribe(self)
        logger.info("Loaded %d event(s) from %s", len(store), self._path)
        return store


def export_filename(context: Optional[date] = None) -> str:
    return EXPORT_FILENAME_TEMPLATE.format(key=key_for(context or date.today()))


def export_to_file(
    store: EventStore,
    directory: Path,
    *,
    context: Optional[date] = None,
    month_only: bool = False,
) -> Path:
    """Write the full snapshot, or the context date's month, to ``directory``."""

    context = context or date.today()
    payload = store.export_month(context.year, context.month) if month_only else store.export_snapshot()
    target = directory / export_filename(context)
    _write_atomic(target, payload)
    logger.info("Exported %d day(s) to %s", len(payload), target)
    return target


__all__ = ["SnapshotFile", "export_filename", "export_to_file", "read_snapshot"]
