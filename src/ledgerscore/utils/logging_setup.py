"""Logging configuration for the command line."""

import logging
import sys
from typing import Any

from pythonjsonlogger.json import JsonFormatter

TEXT_FORMAT = "%(levelname)s %(name)s: %(message)s"


class LedgerJsonFormatter(JsonFormatter):
    """JSON formatter with level and service fields."""

    def add_fields(
        self, log_record: dict[str, Any], record: logging.LogRecord, message_dict: dict[str, Any]
    ) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["level"] = record.levelname
        log_record["service"] = "ledgerscore"


def setup_logging(level: str = "WARNING", json_output: bool = False) -> None:
    """Configure root logging to stderr.

    Args:
        level: Log level name
        json_output: Emit one JSON object per record instead of plain text
    """
    logger = logging.getLogger()
    logger.setLevel(level.upper())

    # Remove existing handlers
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    if json_output:
        handler.setFormatter(LedgerJsonFormatter("%(asctime)s %(name)s %(message)s"))
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT))
    logger.addHandler(handler)
