from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import List, Optional

from .config import LoggingSettings, get_settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_FILE_HANDLER = "daybook.file"
_CONSOLE_HANDLER = "daybook.console"
_NOISY_LOGGERS = ("hypercorn.access", "httpx", "multipart")


def _installed_handlers() -> List[logging.Handler]:
    return [
        handler
        for handler in logging.getLogger().handlers
        if handler.get_name() in (_FILE_HANDLER, _CONSOLE_HANDLER)
    ]


def configure_logging(settings: Optional[LoggingSettings] = None, *, level: Optional[str] = None) -> Path:
    """Attach the Daybook file and console handlers to the root logger.

    The rotating log file lives in ``settings.log_dir`` (``DAYBOOK_LOG_DIR``).
    Handlers are installed once; later calls only change the level. Returns
    the path of the active log file.
    """

    settings = settings or get_settings().logging
    resolved = getattr(logging, (level or settings.level).upper(), logging.INFO)
    root = logging.getLogger()
    root.setLevel(resolved)

    for handler in _installed_handlers():
        if isinstance(handler, RotatingFileHandler):
            return Path(handler.baseFilename)

    settings.log_dir.mkdir(parents=True, exist_ok=True)
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    file_handler = RotatingFileHandler(str(settings.log_file), maxBytes=1_000_000, backupCount=5, encoding="utf-8")
    file_handler.set_name(_FILE_HANDLER)
    file_handler.setFormatter(formatter)

    console_handler = logging.StreamHandler()
    console_handler.set_name(_CONSOLE_HANDLER)
    console_handler.setFormatter(formatter)

    root.addHandler(file_handler)
    root.addHandler(console_handler)

    # Third-party chatter stays at WARNING unless Daybook itself runs at DEBUG.
    noisy_level = logging.DEBUG if resolved <= logging.DEBUG else logging.WARNING
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(noisy_level)

    logging.getLogger(__name__).debug("Logging configured at %s. Output file: %s", logging.getLevelName(resolved), settings.log_file)
    return settings.log_file


def reset_logging() -> None:
    """Detach and close the handlers installed by :func:`configure_logging`."""

    root = logging.getLogger()
    for handler in _installed_handlers():
        root.removeHandler(handler)
        handler.close()


__all__ = ["DATE_FORMAT", "LOG_FORMAT", "configure_logging", "reset_logging"]
