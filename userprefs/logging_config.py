"""
UserPrefs Logging Configuration
Structured logging with context for debugging and monitoring
"""
import logging
import sys
import json
import traceback
from datetime import datetime, timezone
from typing import Optional

from .config import get_settings

# ============================================================
# LOG LEVELS
# ============================================================

_settings = get_settings()
LOG_LEVEL = _settings.log_level.upper()
LOG_FORMAT = _settings.log_format  # json or text

# ============================================================
# STRUCTURED LOGGING
# ============================================================

class StructuredLogger:
    """Logger that outputs structured JSON logs"""

    def __init__(self, name: str):
        self.name = name
        self.logger = logging.getLogger(name)
        self.logger.setLevel(getattr(logging, LOG_LEVEL, logging.INFO))

        # Remove existing handlers
        self.logger.handlers = []

        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(StructuredFormatter() if LOG_FORMAT == "json" else TextFormatter())
        self.logger.addHandler(handler)

    def _log(self, level: str, message: str, **context):
        extra = {
            "context": context,
            "logger_name": self.name,
        }
        getattr(self.logger, level.lower())(message, extra=extra)

    def info(self, message: str, **context):
        self._log("info", message, **context)

    def warning(self, message: str, **context):
        self._log("warning", message, **context)

    def error(self, message: str, error: Optional[Exception] = None, **context):
        if error:
            context["error_type"] = type(error).__name__
            context["error_message"] = str(error)
            context["traceback"] = "".join(
                traceback.format_exception(type(error), error, error.__traceback__)
            )
        self._log("error", message, **context)


class StructuredFormatter(logging.Formatter):
    """Formats logs as JSON"""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": getattr(record, "logger_name", record.name),
            "message": record.getMessage(),
        }

        if hasattr(record, "context"):
            log_data.update(record.context)

        return json.dumps(log_data, default=str)


class TextFormatter(logging.Formatter):
    """Formats logs as readable text"""

    COLORS = {
        "DEBUG": "\033[36m",     # Cyan
        "INFO": "\033[32m",      # Green
        "WARNING": "\033[33m",   # Yellow
        "ERROR": "\033[31m",     # Red
        "CRITICAL": "\033[35m",  # Magenta
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelname, "")
        timestamp = datetime.now(timezone.utc).strftime("%H:%M:%S")

        parts = [
            f"{color}[{timestamp}]",
            f"[{record.levelname}]",
            f"{self.RESET}{record.getMessage()}",
        ]

        if hasattr(record, "context") and record.context:
            context_str = " ".join(f"{k}={v}" for k, v in record.context.items() if k != "traceback")
            if context_str:
                parts.append(f"\033[90m({context_str}){self.RESET}")

        return " ".join(parts)


# ============================================================
# LOGGER INSTANCES
# ============================================================

api_logger = StructuredLogger("userprefs.api")
settings_logger = StructuredLogger("userprefs.settings")
db_logger = StructuredLogger("userprefs.db")


def get_logger(name: str) -> StructuredLogger:
    """Get or create a logger by name"""
    return StructuredLogger(f"userprefs.{name}")
