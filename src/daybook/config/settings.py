from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from ..core.config import DATA_DIR, EVENTS_FILE
from ..domain import DEFAULT_EVENT_COLOR

load_dotenv()


@dataclass(frozen=True)
class StorageSettings:
    data_file: Path
    export_dir: Path
    default_color: str


@dataclass(frozen=True)
class ServerSettings:
    host: str
    port: int


@dataclass(frozen=True)
class LoggingSettings:
    level: str
    log_dir: Path

    @property
    def log_file(self) -> Path:
        return self.log_dir / "daybook.log"


@dataclass(frozen=True)
class AppSettings:
    storage: StorageSettings
    server: ServerSettings
    logging: LoggingSettings


def _path_from_env(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    return Path(raw).expanduser() if raw else default


def _port_from_env(name: str, default: int) -> int:
    raw: Optional[str] = os.getenv(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    storage = StorageSettings(
        data_file=_path_from_env("DAYBOOK_DATA_FILE", EVENTS_FILE),
        export_dir=_path_from_env("DAYBOOK_EXPORT_DIR", Path.cwd()),
        default_color=os.getenv("DAYBOOK_DEFAULT_COLOR") or DEFAULT_EVENT_COLOR,
    )

    server = ServerSettings(
        host=os.getenv("DAYBOOK_API_HOST", "127.0.0.1"),
        port=_port_from_env("DAYBOOK_API_PORT", 8000),
    )

    logging_settings = LoggingSettings(
        level=os.getenv("DAYBOOK_LOG_LEVEL", "INFO").upper(),
        log_dir=_path_from_env("DAYBOOK_LOG_DIR", DATA_DIR),
    )

    return AppSettings(storage=storage, server=server, logging=logging_settings)
