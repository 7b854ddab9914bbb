"""Civil-time clock backed by pytz"""

from datetime import datetime
import pytz
from src.app.services.clock import Clock


class ZonedClock(Clock):
    """Clock reporting the current time in a fixed IANA timezone (default Asia/Jakarta)"""

    def __init__(self, timezone_name: str = "Asia/Jakarta"):
        self.timezone = pytz.timezone(timezone_name)

    def now(self) -> datetime:
        return datetime.now(self.timezone)


class FixedClock(Clock):
    """Clock frozen at a given instant, for replaying a billing run on a chosen date"""

    def __init__(self, instant: datetime, timezone_name: str = "Asia/Jakarta"):
        tz = pytz.timezone(timezone_name)
        self.instant = tz.localize(instant) if instant.tzinfo is None else instant.astimezone(tz)

    def now(self) -> datetime:
        return self.instant
