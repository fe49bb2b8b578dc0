from __future__ import annotations

from pathlib import Path
from platformdirs import user_data_dir

APP_NAME = "Daybook"
APP_AUTHOR = "Daybook"
DATA_DIR = Path(user_data_dir(APP_NAME, APP_AUTHOR))
EVENTS_FILE = DATA_DIR / "calendar_events.json"
EXPORT_FILENAME_TEMPLATE = "calendar-events-{key}.json"


def ensure_data_dir() -> None:
    DATA_DIR.mkdir(parents=True, exist_ok=True)
