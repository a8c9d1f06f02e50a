"""
Logging setup for the booking API.

Rejected bookings are logged as warnings and every successful write as
an info record, so the application's own loggers (everything under
``appointment_booking_api``) follow ``LOG_LEVEL`` while third-party
libraries stay at ``WARNING`` unless debug logging is requested.
"""

import logging
from pathlib import Path
from typing import Optional


APP_LOGGER = "appointment_booking_api"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_HANDLER_PREFIX = "booking-api"


def _resolve_log_path(logfile: str) -> Path:
    """Relative paths are taken from the project root, like the database path."""
    path = Path(logfile)
    if not path.is_absolute():
        path = Path(__file__).resolve().parent.parent.parent.parent / path
    path.parent.mkdir(parents=True, exist_ok=True)
    return path


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> None:
    """Attach the console (and optional file) handler to the root logger.

    Calling it again is a no-op as long as the handlers installed by a
    previous call are still attached; handlers added by other tools,
    such as pytest's capture handler, do not count.

    Parameters
    ----------
    level : str
        Level name for the application's loggers (e.g. ``"DEBUG"``).
        Unknown names fall back to ``INFO``.
    logfile : Optional[str]
        File that receives a copy of every record.  Its parent
        directory is created if missing.
    """
    root = logging.getLogger()
    if any((h.get_name() or "").startswith(_HANDLER_PREFIX) for h in root.handlers):
        return

    app_level = getattr(logging, level.upper(), logging.INFO)
    root.setLevel(logging.DEBUG if app_level <= logging.DEBUG else logging.WARNING)
    logging.getLogger(APP_LOGGER).setLevel(app_level)

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if logfile:
        handlers.append(logging.FileHandler(_resolve_log_path(logfile), encoding="utf-8"))

    for index, handler in enumerate(handlers):
        handler.set_name(f"{_HANDLER_PREFIX}-{index}")
        handler.setFormatter(formatter)
        root.addHandler(handler)
