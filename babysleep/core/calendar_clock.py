"""Epoch seconds to calendar text, without datetime or calendar.

Everything here is UTC: an epoch count is split into whole years from 1970,
then whole months of that year, then day/hour/minute/second.
"""

import math
from dataclasses import dataclass
from enum import IntEnum

from babysleep.common.logger import log
from babysleep.core.errors import InvalidTimeValue

SECONDS_PER_MINUTE = 60
SECONDS_PER_HOUR = 60 * SECONDS_PER_MINUTE
SECONDS_PER_DAY = 24 * SECONDS_PER_HOUR
EPOCH_YEAR = 1970


def is_leap_year(year):
    return year % 400 == 0 or (year % 4 == 0 and year % 100 != 0)


def seconds_in_year(year):
    days = 366 if is_leap_year(year) else 365
    return days * SECONDS_PER_DAY


class Month(IntEnum):
    JANUARY = 1
    FEBRUARY = 2
    MARCH = 3
    APRIL = 4
    MAY = 5
    JUNE = 6
    JULY = 7
    AUGUST = 8
    SEPTEMBER = 9
    OCTOBER = 10
    NOVEMBER = 11
    DECEMBER = 12

    def next(self):
        """The following month; December wraps to January."""
        return Month(self.value % 12 + 1)

    def days(self, is_leap):
        if self is Month.FEBRUARY:
            return 29 if is_leap else 28
        if self in (Month.APRIL, Month.JUNE, Month.SEPTEMBER, Month.NOVEMBER):
            return 30
        return 31

    def seconds(self, is_leap):
        return self.days(is_leap) * SECONDS_PER_DAY


@dataclass(frozen=True)
class CalendarTimestamp:
    year: int
    month: int
    day: int
    hour: int
    minute: int
    second: int

    def __str__(self):
        return (f"{self.year}/{self.month:02d}/{self.day:02d} "
                f"{self.hour:02d}:{self.minute:02d}:{self.second:02d}")


# Turns whatever the caller passed into a whole, non-negative number of seconds. Negative values clamp to zero,
# anything that isn't a finite number is refused.
def _whole_seconds(value):
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidTimeValue(f"Expected a number of seconds, got {type(value).__name__}")
    if isinstance(value, float) and not math.isfinite(value):
        raise InvalidTimeValue(f"Expected a finite number of seconds, got {value}")
    if value < 0:
        log.debug(f"Clamping negative seconds value {value} to 0")
        return 0
    return int(value)


def classify_year(total_seconds, starting_year=EPOCH_YEAR):
    """Walk whole years forward from ``starting_year``.

    Returns ``(year, remaining_seconds)`` where remaining_seconds is the
    offset into ``year`` and always less than that year's length.
    """
    year = starting_year
    remaining = total_seconds
    year_length = seconds_in_year(year)
    while remaining >= year_length:
        remaining -= year_length
        year += 1
        year_length = seconds_in_year(year)
    return year, remaining


def classify_month(remaining_seconds, is_leap_year, month=Month.JANUARY):
    """Walk whole months forward from ``month`` within a single year.

    Returns ``(month, remaining_seconds)``; remaining_seconds is the offset
    into the returned month. Exactly one month's worth of seconds belongs to
    the following month.
    """
    month = Month(month)
    remaining = remaining_seconds
    while remaining >= month.seconds(is_leap_year):
        remaining -= month.seconds(is_leap_year)
        following = month.next()
        if following is Month.JANUARY:
            raise ValueError(f"{remaining_seconds} seconds runs past the end of the year")
        month = following
    return month, remaining


def to_calendar(epoch_seconds):
    seconds = _whole_seconds(epoch_seconds)
    year, remaining = classify_year(seconds, EPOCH_YEAR)
    month, remaining = classify_month(remaining, is_leap_year(year))

    day, remaining = divmod(remaining, SECONDS_PER_DAY)
    hour, remaining = divmod(remaining, SECONDS_PER_HOUR)
    minute, second = divmod(remaining, SECONDS_PER_MINUTE)
    return CalendarTimestamp(
        year=year,
        month=int(month),
        day=day + 1,
        hour=hour,
        minute=minute,
        second=second,
    )


def format_timestamp(epoch_seconds):
    """Format UTC epoch seconds as ``YYYY/MM/DD HH:MM:SS``."""
    return str(to_calendar(epoch_seconds))


def format_duration(seconds):
    """Format a duration as ``HH:MM:SS``, wrapping at one day."""
    seconds_today = _whole_seconds(seconds) % SECONDS_PER_DAY
    hours, rem = divmod(seconds_today, SECONDS_PER_HOUR)
    minutes, secs = divmod(rem, SECONDS_PER_MINUTE)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"
