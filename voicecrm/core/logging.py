"""
Logging Configuration

Console logging as JSON lines (production) or colored text (local runs).
Keyword arguments passed to a StructuredLogger call become fields of the
record, e.g. logger.info("Agent created", agent_id=..., client_id=...).
"""

import logging
import sys
import json
from datetime import datetime
from typing import Any, Dict, Optional
from functools import lru_cache

NOISY_LOGGERS = ("httpx", "httpcore", "urllib3", "botocore", "boto3", "asyncio")


def _fields(record: logging.LogRecord) -> Dict[str, Any]:
    return getattr(record, "fields", None) or {}


class JSONFormatter(logging.Formatter):
    """One JSON object per record; static fields (service, environment) are stamped on each"""

    def __init__(self, static_fields: Optional[Dict[str, Any]] = None):
        super().__init__()
        self.static_fields = static_fields or {}

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.utcnow().isoformat() + "Z",
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
            **self.static_fields,
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        entry.update(_fields(record))
        return json.dumps(entry, default=str)


class TextFormatter(logging.Formatter):
    """Colored single-line output with trailing key=value fields"""

    COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelname, self.RESET)
        line = (
            f"{self.formatTime(record, '%Y-%m-%d %H:%M:%S')} "
            f"{color}[{record.levelname:8}]{self.RESET} {record.name}: {record.getMessage()}"
        )

        fields = _fields(record)
        if fields:
            line += " " + " ".join(f"{key}={value}" for key, value in fields.items())
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


def setup_logging(
    level: str = "INFO",
    format_type: str = "text",
    service: Optional[str] = None,
    environment: Optional[str] = None
) -> None:
    """
    Configure the root logger

    Args:
        level: Log level name; unknown names fall back to INFO
        format_type: "json" or "text"
        service: Service name stamped on JSON records
        environment: Deployment environment stamped on JSON records
    """
    if format_type.lower() == "json":
        static = {k: v for k, v in (("service", service), ("environment", environment)) if v}
        formatter: logging.Formatter = JSONFormatter(static)
    else:
        formatter = TextFormatter()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


class StructuredLogger:
    """Wraps a stdlib logger; keyword arguments are attached to the record as fields"""

    def __init__(self, name: str):
        self._logger = logging.getLogger(name)

    def _log(self, level: int, message: str, fields: Dict[str, Any], exc_info: bool = False) -> None:
        if not self._logger.isEnabledFor(level):
            return
        # stacklevel 3 points module/function/line at the caller of debug()/info()/...
        self._logger.log(
            level,
            message,
            exc_info=exc_info,
            extra={"fields": fields} if fields else None,
            stacklevel=3
        )

    def debug(self, message: str, **fields) -> None:
        self._log(logging.DEBUG, message, fields)

    def info(self, message: str, **fields) -> None:
        self._log(logging.INFO, message, fields)

    def warning(self, message: str, **fields) -> None:
        self._log(logging.WARNING, message, fields)

    def error(self, message: str, exc_info: bool = False, **fields) -> None:
        self._log(logging.ERROR, message, fields, exc_info=exc_info)

    def exception(self, message: str, **fields) -> None:
        self._log(logging.ERROR, message, fields, exc_info=True)


@lru_cache(maxsize=128)
def get_logger(name: str) -> StructuredLogger:
    """Get a cached structured logger"""
    return StructuredLogger(name)
