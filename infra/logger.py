"""
Process-wide logging for the engine, the agents and the HTTP API.

Engine modules only call get_logger(); entrypoints (example_game.py, api.app)
call configure_from_settings() once so the level and output format follow
the HIDDEN_STATIONS_* settings.
"""
from __future__ import annotations

import json
import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import TYPE_CHECKING, Union

from infra.paths import LOG_DIR

if TYPE_CHECKING:
    from infra.settings import Settings

DEFAULT_LOGFILE = LOG_DIR / "hidden_stations.log"
PLAIN_FORMAT = "%(asctime)s | %(levelname)-7s | %(name)s | %(message)s"
DATE_FORMAT = "%H:%M:%S"

# Rotate at 1 MiB, keep three old files; batch runs log every round.
MAX_LOG_BYTES = 1 << 20
LOG_BACKUPS = 3

# Request-level chatter from the API server and test client.
NOISY_LOGGERS = ("uvicorn.access", "httpx", "httpcore")


class JsonLineFormatter(logging.Formatter):
    """One JSON object per record; messages are escaped by json.dumps."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "time": self.formatTime(record, DATE_FORMAT),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        return json.dumps(payload)


def configure_logging(
    level: Union[str, int] = "INFO",
    *,
    json_lines: bool = False,
    logfile: str | Path | None = DEFAULT_LOGFILE,
) -> None:
    """
    Replace the root handlers with a stdout handler and, optionally, a rotating file.

    Args:
        level: Logging level name or int
        json_lines: Emit JSON lines instead of the plain pipe-separated format
        logfile: Rotating log file; None keeps output on stdout only
    """
    formatter: logging.Formatter
    if json_lines:
        formatter = JsonLineFormatter()
    else:
        formatter = logging.Formatter(PLAIN_FORMAT, DATE_FORMAT)

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(level)

    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(formatter)
    root.addHandler(console)

    if logfile is not None:
        path = Path(logfile)
        path.parent.mkdir(parents=True, exist_ok=True)
        rotating = RotatingFileHandler(
            path, maxBytes=MAX_LOG_BYTES, backupCount=LOG_BACKUPS, encoding="utf-8"
        )
        rotating.setFormatter(formatter)
        root.addHandler(rotating)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.captureWarnings(True)


def configure_from_settings(settings: Settings, logfile: str | Path | None = DEFAULT_LOGFILE) -> None:
    """Apply Settings.log_level and Settings.log_json."""
    configure_logging(settings.log_level, json_lines=settings.log_json, logfile=logfile)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
