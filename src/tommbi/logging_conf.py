from __future__ import annotations

import logging
import sys

from tommbi.settings import Settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# httpx logs every request URL at INFO, and the chat URL carries the API key.
# uvicorn.access logs each page load and NiceGUI socket poll.
QUIET_LOGGERS: dict[str, int] = {
    "httpx": logging.WARNING,
    "httpcore": logging.WARNING,
    "uvicorn.access": logging.WARNING,
}


def resolve_level(level: str | None) -> int | None:
    """Numeric level for a name such as 'debug', or None if logging does not know it."""
    value = logging.getLevelName(str(level or "").strip().upper())
    return value if isinstance(value, int) else None


def configure_logging(settings: Settings) -> logging.Handler:
    """Send every record to stdout at `settings.log_level` and return the handler."""
    level = resolve_level(settings.log_level)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(logging.INFO if level is None else level)

    for name, quiet in QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(quiet)

    if level is None:
        logging.getLogger(__name__).warning("Unknown log level %r, using INFO", settings.log_level)
    return handler
