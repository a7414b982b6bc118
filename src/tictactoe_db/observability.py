from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import TextIO

from tictactoe_db.config import Settings

_RESERVED_RECORD_FIELDS = frozenset(
    logging.LogRecord("", logging.INFO, "", 0, "", None, None).__dict__
) | {"message", "asctime", "taskName"}

_TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def _extra_fields(record: logging.LogRecord) -> dict[str, object]:
    return {
        key: value
        for key, value in record.__dict__.items()
        if key not in _RESERVED_RECORD_FIELDS and not key.startswith("_")
    }


class JsonFormatter(logging.Formatter):
    """One JSON object per record; `extra=` fields are merged in.

    `static_fields` (app name, environment) are stamped on every line.
    """

    def __init__(self, static_fields: dict[str, object] | None = None) -> None:
        super().__init__()
        self.static_fields = dict(static_fields or {})

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, object] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **self.static_fields,
        }
        payload.update(_extra_fields(record))
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=True, default=str)


class KeyValueFormatter(logging.Formatter):
    """Plain text line followed by the record's `extra=` fields as key=value."""

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        extras = _extra_fields(record)
        if not extras:
            return line
        pairs = " ".join(f"{key}={value}" for key, value in extras.items())
        return f"{line} {pairs}"


def configure_logging(settings: Settings, stream: TextIO | None = None) -> None:
    level = getattr(logging, settings.app_log_level.upper(), logging.INFO)
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)

    stream_handler = logging.StreamHandler(stream)
    if settings.app_log_json:
        stream_handler.setFormatter(
            JsonFormatter(static_fields={"app": settings.app_name, "env": settings.app_env})
        )
    else:
        stream_handler.setFormatter(
            KeyValueFormatter(fmt=_TEXT_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S")
        )
    root_logger.addHandler(stream_handler)
