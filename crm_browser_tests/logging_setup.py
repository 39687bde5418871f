"""
Logging Setup
=============
Root logger configuration for a suite run: plain text for terminals, or one
JSON object per line carrying the suite, case and attempt of the record.
"""

import json
import logging
from datetime import UTC, datetime
from typing import Optional

# Extra fields the runner attaches to records via ``extra=``
_CONTEXT_FIELDS = ("suite", "case", "attempt")

PLAIN_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


class JSONFormatter(logging.Formatter):
    """
    Formatter that outputs JSON strings for structured logging systems (ELK, Datadog, etc.)
    """

    def format(self, record: logging.LogRecord) -> str:
        log_obj = {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_obj["exception"] = self.formatException(record.exc_info)

        for name in _CONTEXT_FIELDS:
            if hasattr(record, name):
                log_obj[name] = getattr(record, name)

        return json.dumps(log_obj)


def setup_logging(level: str = "INFO", json_logs: bool = False, stream: Optional[object] = None):
    """
    Configure the root logger for a suite run.

    Replaces existing root handlers so repeated calls don't duplicate output.
    Playwright's own loggers are kept at WARNING.
    """
    handler = logging.StreamHandler(stream)
    handler.setFormatter(JSONFormatter() if json_logs else logging.Formatter(PLAIN_FORMAT))

    root_logger = logging.getLogger()
    root_logger.setLevel(level.upper() if isinstance(level, str) else level)
    root_logger.handlers = [handler]

    logging.getLogger("asyncio").setLevel(logging.WARNING)
    logging.getLogger("playwright").setLevel(logging.WARNING)
    return root_logger
