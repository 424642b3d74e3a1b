"""Logging setup driven by ObservabilityConfig.

Modules log through ``logging.getLogger(__name__)`` and attach context via
``extra={...}``. The JSON formatter keeps those extra fields; the plain
text formatter shows only the message.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Optional

from .config import ObservabilityConfig, get_config

# Attributes every LogRecord has; anything else came in through ``extra``.
_RESERVED = set(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


class JsonFormatter(logging.Formatter):
    """One JSON object per line, including ``extra`` fields."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "time": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key, value in vars(record).items():
            if key not in _RESERVED and not key.startswith("_"):
                entry[key] = value
        if record.exc_info:
            entry["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str, ensure_ascii=False)


def configure_logging(config: Optional[ObservabilityConfig] = None) -> logging.Handler:
    """Install a stream handler on the ``trip_planner`` logger.

    Calling it again replaces the handler it installed before.

    Returns:
        The installed handler.
    """
    config = config or get_config().observability
    logger = logging.getLogger("trip_planner")

    for handler in list(logger.handlers):
        if getattr(handler, "_trip_planner", False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler._trip_planner = True  # type: ignore[attr-defined]
    if config.structured:
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter(config.format))

    logger.addHandler(handler)
    logger.setLevel(config.level.upper())
    return handler
