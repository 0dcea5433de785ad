# graph_agents/logging_config.py
"""
Stderr-only logging configuration.

Streamed tokens are written to stdout, so ALL logging goes to stderr.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

_LEVELS = {
    "quiet": logging.WARNING,
    "normal": logging.INFO,
    "verbose": logging.DEBUG,
}


class JsonFormatter(logging.Formatter):
    """Formats log records as JSON for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON line."""
        log_data: dict[str, Any] = {
            "ts": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }

        if record.exc_info:
            log_data["exc"] = self.formatException(record.exc_info)

        return json.dumps(log_data)


def configure_logging(verbosity: str = "normal", json_output: bool = False) -> None:
    """
    Configure the root logger to write to stderr only.

    Clears existing handlers to prevent stdout pollution.

    Args:
        verbosity:   "quiet", "normal" or "verbose"
        json_output: JSON lines instead of the human-readable CLI format
    """
    level = _LEVELS.get(verbosity, logging.INFO)

    handler = logging.StreamHandler(sys.stderr)
    if json_output:
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s  %(levelname)-7s  %(message)s", datefmt="%H:%M:%S")
        )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)

    # httpx logs every request at INFO
    for logger_name in ["openai", "httpx"]:
        logging.getLogger(logger_name).setLevel(
            logging.DEBUG if verbosity == "verbose" else logging.WARNING
        )
