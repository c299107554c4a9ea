"""
Logging configuration for the service.

``setup_logging`` configures the root logger with a console handler using
either a plain text or a JSON-lines format, matching ``Settings.log_format``.
Logging is set up exactly once per process.
"""
import json
import logging
from datetime import datetime, timezone
from typing import List, Optional

_TEXT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Names given to the handlers installed by setup_logging
CONSOLE_HANDLER_NAME = "todoboard.console"
FILE_HANDLER_NAME = "todoboard.file"


class JSONFormatter(logging.Formatter):
    """Render each record as a single JSON object."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


def setup_logging(level: str = "INFO", log_format: str = "text", logfile: Optional[str] = None) -> None:
    """Configure the root logger.

    Handlers attached by other code are left alone. Once this function has
    installed its own handlers, later calls (repeated ``create_app`` calls)
    only update the level.

    Args:
        level: Logging level name, case insensitive.
        log_format: ``"text"`` or ``"json"``.
        logfile: Optional path of a file to log to as well.
    """
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    if installed_handlers(root):
        return

    if log_format == "json":
        formatter: logging.Formatter = JSONFormatter()
    else:
        formatter = logging.Formatter(fmt=_TEXT_FORMAT, datefmt=_DATE_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.set_name(CONSOLE_HANDLER_NAME)
    console_handler.setFormatter(formatter)
    root.addHandler(console_handler)

    if logfile:
        file_handler = logging.FileHandler(logfile, encoding="utf-8")
        file_handler.set_name(FILE_HANDLER_NAME)
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)


def installed_handlers(logger: Optional[logging.Logger] = None) -> List[logging.Handler]:
    """Return the handlers ``setup_logging`` attached to ``logger`` (root by default)."""
    logger = logger or logging.getLogger()
    return [h for h in logger.handlers if h.get_name() in (CONSOLE_HANDLER_NAME, FILE_HANDLER_NAME)]
