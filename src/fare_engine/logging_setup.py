"""Logging setup for the fare API process.

Library modules only create module-level loggers; ``setup_logging`` is
called once by the process entry point.  JSON output carries the quote
context that the engine attaches through ``extra=`` (origin, destination,
conditions source, vehicle type) as top-level keys.
"""

import json
import logging
import sys
from datetime import datetime, timezone

SERVICE_NAME = "fare-engine"

CONTEXT_FIELDS = ("origin", "destination", "conditions_source", "vehicle_type")


class JSONFormatter(logging.Formatter):
    """One JSON object per line."""

    def __init__(self, environment: str = "development"):
        super().__init__()
        self.environment = environment

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "service_name": SERVICE_NAME,
            "environment": self.environment,
        }
        for field in CONTEXT_FIELDS:
            if hasattr(record, field):
                payload[field] = getattr(record, field)
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def setup_logging(
    level: str = "INFO",
    json_output: bool = False,
    environment: str = "development",
) -> None:
    """Send every log record to stdout at ``level``.

    Raises ``ValueError`` for an unknown level name so a typo in
    ``LOG_LEVEL`` fails at startup.
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        raise ValueError(f"unknown log level {level!r}")

    handler = logging.StreamHandler(sys.stdout)
    if json_output:
        handler.setFormatter(JSONFormatter(environment))
    else:
        handler.setFormatter(
            logging.Formatter(
                "%(asctime)s [%(levelname)8s] %(name)s: %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(numeric_level)

    # Access lines duplicate what the quote logs already say.
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
