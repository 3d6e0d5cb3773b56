from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from typing import Callable, Iterator, Optional

from ..core.constants import CIVIL_UTC_OFFSET


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def utc_now() -> datetime:
    """Current UTC time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now(timezone.utc)


def iter_days(start: date, end: date) -> Iterator[date]:
    """Yield every date from start to end inclusive, oldest first."""
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


class CivilClock:
    """Resolves "now" under a fixed civil offset.

    The rollover target date and the invocation window are both civil values, so
    they do not depend on the timezone the server happens to run in.
    """

    def __init__(
        self,
        *,
        offset: timedelta = CIVIL_UTC_OFFSET,
        source: Optional[Callable[[], datetime]] = None,
    ):
        self._tz = timezone(offset)
        self._source = source or utc_now

    def now(self) -> datetime:
        current = self._source()
        if current.tzinfo is None:
            current = current.replace(tzinfo=timezone.utc)
        return current.astimezone(self._tz)

    def today(self) -> date:
        return self.now().date()
