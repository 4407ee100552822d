"""Day-key partitioning -- maps instants to ``MM-DD`` rotation windows.

Day-keys carry no year. Only today and yesterday are ever queried, so a
key repeating a year later is harmless.
"""
import re
from datetime import date, datetime, timedelta, timezone

import pytz

DEFAULT_TIMEZONE = "America/New_York"

DAY_KEY_PATTERN = re.compile(r"^\d{2}-\d{2}$")


def format_day_key(day: date) -> str:
    return f"{day.month:02d}-{day.day:02d}"


def is_day_key(value: str) -> bool:
    return bool(DAY_KEY_PATTERN.match(value))


class DatePartitioner:
    """Converts instants to day-keys in a fixed civil timezone."""

    def __init__(self, timezone_name: str = DEFAULT_TIMEZONE):
        self._tz = pytz.timezone(timezone_name)

    @property
    def timezone_name(self) -> str:
        return self._tz.zone

    def local_date(self, instant: datetime | None = None) -> date:
        if instant is None:
            instant = datetime.now(timezone.utc)
        elif instant.tzinfo is None:
            instant = instant.replace(tzinfo=timezone.utc)
        return instant.astimezone(self._tz).date()

    def day_key(self, instant: datetime | None = None) -> str:
        return format_day_key(self.local_date(instant))

    def yesterday_key(self, instant: datetime | None = None) -> str:
        """Day-key of the civil day before *instant*'s local date."""
        return format_day_key(self.local_date(instant) - timedelta(days=1))

    def retention_window(self, instant: datetime | None = None) -> set[str]:
        """The day-keys whose artifacts must be kept: today and yesterday."""
        today = self.local_date(instant)
        return {format_day_key(today), format_day_key(today - timedelta(days=1))}
