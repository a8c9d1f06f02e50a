"""Source of the current time for appointment validation."""

from datetime import datetime, timezone

from .config import settings


class SystemClock:
    """Returns the current time as a naive date-time.

    Stored appointment times carry no timezone, so "now" is reduced to a
    naive value before comparison.  UTC is used unless ``use_utc`` is
    false, in which case the server's local time is returned.
    """

    def __init__(self, use_utc: bool | None = None):
        self.use_utc = settings.clock_utc if use_utc is None else use_utc

    def now(self) -> datetime:
        if self.use_utc:
            return datetime.now(timezone.utc).replace(tzinfo=None)
        return datetime.now()
