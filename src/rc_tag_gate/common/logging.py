"""
Логирование rc-tag-gate.

Назначение:
- один логгер проекта
- JSON-строки для CI (event + payload), text-формат для локального запуска
"""

from __future__ import annotations

import datetime as dt
import json
import logging
import sys

PROJECT_LOGGER = "rc_tag_gate"


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        data = {
            "ts": dt.datetime.fromtimestamp(record.created, dt.timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "event": record.getMessage(),
        }
        payload = getattr(record, "payload", None)
        if payload is not None:
            data["payload"] = payload
        if record.exc_info:
            data["exc"] = self.formatException(record.exc_info)
        return json.dumps(data, ensure_ascii=False, default=str)


class TextFormatter(logging.Formatter):
    def __init__(self) -> None:
        super().__init__("%(levelname)s %(name)s: %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        payload = getattr(record, "payload", None)
        if payload:
            line = f"{line} {json.dumps(payload, ensure_ascii=False, default=str)}"
        return line


def setup_logging(level: str = "INFO", fmt: str = "json") -> None:
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(TextFormatter() if fmt == "text" else JsonFormatter())

    logger = logging.getLogger(PROJECT_LOGGER)
    logger.handlers[:] = [handler]
    logger.setLevel((level or "INFO").upper())


def get_project_logger() -> logging.Logger:
    return logging.getLogger(PROJECT_LOGGER)
