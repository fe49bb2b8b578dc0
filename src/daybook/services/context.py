from __future__ import annotations

from dataclasses import dataclass, field

from ..config import AppSettings, get_settings
from ..core import EventStore, SnapshotFile


@dataclass(slots=True)
class ServiceContext:
    """Aggregate root for services to share settings, the event store, and its file."""

    settings: AppSettings = field(default_factory=get_settings)
    snapshot_file: SnapshotFile = field(init=False)
    store: EventStore = field(init=False)

    def __post_init__(self) -> None:
        self.snapshot_file = SnapshotFile(self.settings.storage.data_file)
        self.store = self.snapshot_file.open_store()
