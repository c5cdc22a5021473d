"""Application clock pinned to a single configured timezone"""

from datetime import date, datetime
from typing import Optional
from zoneinfo import ZoneInfo

from lunch.config import settings


class Clock:
    """
    Supplies "now" and "today" in the application timezone.

    Every order date and slot deadline goes through this class so the
    deadline math never depends on the host timezone.
    """

    def __init__(self, timezone_id: Optional[str] = None):
        self.timezone_id = (timezone_id or settings.default_timezone).strip()
        self._tz = ZoneInfo(self.timezone_id)

    def now(self) -> datetime:
        return datetime.now(self._tz)

    def today(self) -> date:
        """Current date in the application timezone"""
        return self.now().date()

    def now_minutes(self) -> int:
        """Minutes since local midnight, 0..1439"""
        now = self.now()
        return now.hour * 60 + now.minute


class FixedClock(Clock):
    """Clock frozen at a given local date and minute of day"""

    def __init__(self, today: date, now_minutes: int, timezone_id: Optional[str] = None):
        super().__init__(timezone_id)
        if not 0 <= now_minutes < 24 * 60:
            raise ValueError(f"now_minutes out of range: {now_minutes}")
        self._today = today
        self._now_minutes = now_minutes

    def now(self) -> datetime:
        hours, minutes = divmod(self._now_minutes, 60)
        return datetime(
            self._today.year,
            self._today.month,
            self._today.day,
            hours,
            minutes,
            tzinfo=self._tz,
        )

    def today(self) -> date:
        return self._today

    def now_minutes(self) -> int:
        return self._now_minutes

    def set(self, now_minutes: int, today: Optional[date] = None) -> None:
        self._now_minutes = now_minutes
        if today is not None:
            self._today = today
