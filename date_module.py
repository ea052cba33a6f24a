"""
Date Module

Fixed-width date and date-and-time values used by the dataset.

    Date:           YYYY/MM/DD           packed as YYYYMMDD
    Date-and-time:  YYYY/MM/DD HH:MM:SS  packed as YYYYMMDDHHMMSS

Packing into integers keeps comparisons and sorting plain integer
comparisons. Day differences count every month as 31 days, the same
calendar the validator accepts, so a date that parses always has a
day number and later dates always have larger ones.
"""

from typing import Optional, Tuple

# Constants
DATE_LENGTH = 10
TIME_LENGTH = 8
DATE_AND_TIME_LENGTH = DATE_LENGTH + 1 + TIME_LENGTH
SECONDS_PER_DAY = 86400
DAYS_PER_MONTH = 31


def _parse_fixed_digits(text: str) -> Optional[int]:
    """Parse a run of ASCII digits; signs and spaces are rejected."""
    if not text or any(c < '0' or c > '9' for c in text):
        return None
    return int(text)


def date_from_values(year: int, month: int, day: int) -> Optional[int]:
    """Pack a date, returning None when a component is out of range."""
    if year < 1 or year > 9999 or month < 1 or month > 12 or day < 1 or day > 31:
        return None
    return year * 10000 + month * 100 + day


def date_from_string(text: str) -> Optional[int]:
    """
    Parse a date in YYYY/MM/DD format.

    Args:
        text: Date string

    Returns:
        Packed YYYYMMDD integer, or None if the string is malformed
    """
    if len(text) != DATE_LENGTH or text[4] != '/' or text[7] != '/':
        return None

    year = _parse_fixed_digits(text[0:4])
    month = _parse_fixed_digits(text[5:7])
    day = _parse_fixed_digits(text[8:10])
    if year is None or month is None or day is None:
        return None

    return date_from_values(year, month, day)


def date_get_year(date: int) -> int:
    return date // 10000


def date_get_month(date: int) -> int:
    return date // 100 % 100


def date_get_day(date: int) -> int:
    return date % 100


def date_to_string(date: int) -> str:
    return "%04d/%02d/%02d" % (date_get_year(date), date_get_month(date), date_get_day(date))


def date_to_day_number(date: int) -> int:
    """
    Day count of a packed date, with every month taken as 31 days long.

    Any date that passes date_from_values maps to a distinct day number,
    and day numbers order the same way as the packed integers.
    """
    return (date_get_year(date) * 12 + date_get_month(date)) * DAYS_PER_MONTH + date_get_day(date)


def date_diff(a: int, b: int) -> int:
    """Number of days from b to a (negative when a is earlier)."""
    return date_to_day_number(a) - date_to_day_number(b)


def time_from_string(text: str) -> Optional[int]:
    """
    Parse a time of day in HH:MM:SS format.

    Returns:
        Seconds since midnight, or None if the string is malformed
    """
    if len(text) != TIME_LENGTH or text[2] != ':' or text[5] != ':':
        return None

    hours = _parse_fixed_digits(text[0:2])
    minutes = _parse_fixed_digits(text[3:5])
    seconds = _parse_fixed_digits(text[6:8])
    if hours is None or minutes is None or seconds is None:
        return None
    if hours > 23 or minutes > 59 or seconds > 59:
        return None

    return hours * 3600 + minutes * 60 + seconds


def date_and_time_from_values(date: int, seconds: int) -> int:
    """Pack a date and a number of seconds since midnight."""
    hours, rest = divmod(seconds, 3600)
    minutes, secs = divmod(rest, 60)
    return date * 1000000 + hours * 10000 + minutes * 100 + secs


def date_and_time_from_date(date: int) -> int:
    """Date-and-time at 00:00:00 of a date."""
    return date * 1000000


def date_and_time_from_string(text: str) -> Optional[int]:
    """
    Parse a date-and-time in YYYY/MM/DD HH:MM:SS format.

    Returns:
        Packed YYYYMMDDHHMMSS integer, or None if the string is malformed
    """
    if len(text) != DATE_AND_TIME_LENGTH or text[DATE_LENGTH] != ' ':
        return None

    date = date_from_string(text[:DATE_LENGTH])
    seconds = time_from_string(text[DATE_LENGTH + 1:])
    if date is None or seconds is None:
        return None

    return date_and_time_from_values(date, seconds)


def date_and_time_get_date(date_and_time: int) -> int:
    return date_and_time // 1000000


def date_and_time_get_time(date_and_time: int) -> Tuple[int, int, int]:
    """Split the time of day into (hours, minutes, seconds)."""
    time = date_and_time % 1000000
    return time // 10000, time // 100 % 100, time % 100


def date_and_time_get_seconds(date_and_time: int) -> int:
    """Seconds since midnight."""
    hours, minutes, seconds = date_and_time_get_time(date_and_time)
    return hours * 3600 + minutes * 60 + seconds


def date_and_time_to_string(date_and_time: int) -> str:
    hours, minutes, seconds = date_and_time_get_time(date_and_time)
    return "%s %02d:%02d:%02d" % (date_to_string(date_and_time_get_date(date_and_time)),
                                  hours, minutes, seconds)


def date_and_time_diff(a: int, b: int) -> int:
    """Number of seconds from b to a (negative when a is earlier)."""
    days = date_diff(date_and_time_get_date(a), date_and_time_get_date(b))
    return days * SECONDS_PER_DAY + date_and_time_get_seconds(a) - date_and_time_get_seconds(b)
