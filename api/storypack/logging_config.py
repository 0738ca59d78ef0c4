"""
JSON logging for the story-pack API and CLIs.

Every record becomes one JSON line on stdout. Module code logs an event
name as the message and attaches structured fields through ``extra``:

    logger.info("story_pack_assembled", extra={"story_id": pack.story_id})

which renders as

    {"timestamp": "...Z", "level": "info", "logger": "...", "service":
     "storypack", "environment": "development", "event":
     "story_pack_assembled", "story_id": "..."}
"""

from __future__ import annotations

import json
import logging
import sys
from typing import Any

from .config import settings
from .utils.datetime_utils import now_utc, to_iso_z

# Attributes every LogRecord carries; anything else came in through ``extra``
_STANDARD_RECORD_FIELDS = frozenset(
    logging.LogRecord("", logging.INFO, "", 0, "", None, None).__dict__
) | {"message", "asctime"}

# Servers that log their own access lines; the middleware already does that
_NOISY_LOGGERS = ("uvicorn.access",)


def _record_fields(record: logging.LogRecord) -> dict[str, Any]:
    return {
        key: value
        for key, value in record.__dict__.items()
        if key not in _STANDARD_RECORD_FIELDS and not key.startswith("_")
    }


class JSONFormatter(logging.Formatter):
    """Render a record as one JSON object tagged with service and environment."""

    def __init__(self, service: str | None = None, environment: str | None = None) -> None:
        super().__init__()
        self.service = service or settings.service_name
        self.environment = environment or settings.environment

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": to_iso_z(now_utc()),
            "level": record.levelname.lower(),
            "logger": record.name,
            "service": self.service,
            "environment": self.environment,
            "event": record.getMessage(),
        }
        payload.update(_record_fields(record))
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


def resolve_log_level(level: str | None, environment: str) -> int:
    """Explicit level if it names one, else DEBUG outside production."""
    if level:
        resolved = logging.getLevelName(level.strip().upper())
        return resolved if isinstance(resolved, int) else logging.INFO
    return logging.INFO if environment.lower() == "production" else logging.DEBUG


def configure_logging(
    service: str | None = None,
    environment: str | None = None,
    log_level: str | None = None,
) -> None:
    """Send all logging through a single JSON handler on stdout.

    Unset arguments come from Settings (SERVICE_NAME, ENVIRONMENT, LOG_LEVEL).
    """
    environment = environment or settings.environment
    handler = logging.StreamHandler(stream=sys.stdout)
    handler.setFormatter(JSONFormatter(service=service, environment=environment))

    root_logger = logging.getLogger()
    root_logger.handlers = [handler]
    root_logger.setLevel(resolve_log_level(log_level or settings.log_level, environment))

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
