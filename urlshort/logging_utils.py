from __future__ import annotations

import json
import logging
import os
import sys
from datetime import datetime, timezone
from logging.handlers import TimedRotatingFileHandler

# Carried over from `extra=` when present on a record
CONTEXT_FIELDS = ("trace_id", "path", "source")

# TraceLogMiddleware already writes one line per request
QUIET_LOGGERS = {"uvicorn.access": logging.WARNING}


class JsonFormatter(logging.Formatter):
    """Render a record as one JSON line.

    Dict messages become the event body; plain strings (uvicorn, libraries)
    are wrapped as ``{"event": "log", "message": ...}`` so every line has an
    ``event`` key to filter on.
    """

    def __init__(self, service_name: str):
        super().__init__()
        self.service_name = service_name

    def format(self, record: logging.LogRecord) -> str:
        line = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "service": self.service_name,
            "logger": record.name,
            "pid": record.process,
        }
        for field in CONTEXT_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                line[field] = value

        if isinstance(record.msg, dict):
            line.update(record.msg)
        else:
            line.update({"event": "log", "message": record.getMessage()})

        if record.exc_info:
            line["exc_info"] = self.formatException(record.exc_info)

        return json.dumps(line, ensure_ascii=True, default=str)


def _rotating_file(log_dir: str, service_name: str, retention_days: int) -> logging.Handler:
    os.makedirs(log_dir, exist_ok=True)
    return TimedRotatingFileHandler(
        os.path.join(log_dir, f"{service_name}.log"),
        when="D",
        interval=1,
        backupCount=retention_days,
        encoding="utf-8",
    )


def setup_logging(service_name: str, log_dir: str | None, level: str, retention_days: int) -> None:
    """Send every logger (ours and uvicorn's) through the JSON formatter.

    Safe to call more than once; only the first call installs handlers.
    """
    global _CONFIGURED
    if _CONFIGURED:
        return

    formatter = JsonFormatter(service_name)
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_dir:
        handlers.append(_rotating_file(log_dir, service_name, retention_days))

    root = logging.getLogger()
    root.setLevel(level.upper())
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)

    for name, quiet_level in QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(quiet_level)

    _CONFIGURED = True


_CONFIGURED = False
