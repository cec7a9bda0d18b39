"""Calendar arithmetic and time conversion routines.

Dates are handled as "scalar" day numbers counted from 1 January of
year 1 in the proleptic Gregorian calendar, which makes the conversions
valid from 1-01-01 through 14699-12-31. Timestamps are whole seconds
since 1970-01-01 00:00:00 UTC.
"""

from __future__ import annotations

import time as _time
from dataclasses import dataclass, fields
from typing import Callable, Iterator

SECONDS_PER_DAY = 60 * 60 * 24

# mktime accepts tm_year values in this range (years 1970 to 2020).
MKTIME_MIN_YEAR = 70
MKTIME_MAX_YEAR = 120

_ABBREVIATED_DAYS = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")
_FULL_DAYS = (
    "Sunday", "Monday", "Tuesday", "Wednesday",
    "Thursday", "Friday", "Saturday",
)
_ABBREVIATED_MONTHS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)
_FULL_MONTHS = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)
_TIMEZONE_NAME = ""


@dataclass(slots=True)
class Tm:
    """Broken-down time, with the field meanings of the C ``struct tm``."""

    tm_sec: int = 0
    tm_min: int = 0
    tm_hour: int = 0
    tm_mday: int = 0
    tm_mon: int = 0
    tm_year: int = 0
    tm_wday: int = 0
    tm_yday: int = 0
    tm_isdst: int = 0


def is_leap(year: int) -> bool:
    """Return True if ``year`` is a Gregorian leap year."""
    return year % 400 == 0 or (year % 4 == 0 and year % 100 != 0)


def _months_to_days(month: int) -> int:
    return (month * 3057 - 3007) // 100


def _years_to_days(year: int) -> int:
    return year * 365 + year // 4 - year // 100 + year // 400


def ymd_to_scalar(year: int, month: int, day: int) -> int:
    """Return the scalar day number of a date (1-01-01 is day 1)."""
    scalar = day + _months_to_days(month)
    if month > 2:
        scalar -= 1 if is_leap(year) else 2
    return scalar + _years_to_days(year - 1)


def scalar_to_ymd(scalar: int) -> tuple[int, int, int]:
    """Return ``(year, month, day)`` for a scalar day number."""
    year = scalar * 400 // 146097
    while _years_to_days(year) < scalar:
        year += 1
    n = scalar - _years_to_days(year - 1)
    if n > 59:
        n += 2
        if is_leap(year):
            n -= 1 if n > 62 else 2
    month = (n * 100 + 3007) // 3057
    return year, month, n - _months_to_days(month)


def _trunc_mod(value: int, divisor: int) -> int:
    remainder = abs(value) % divisor
    return -remainder if value < 0 else remainder


def day_of_week(year: int, month: int, day: int) -> int:
    """Return the weekday of a date, 0 for Sunday through 6 for Saturday."""
    y = _trunc_mod(year, 400) + 400
    leap_adjust = 0
    if month <= 2:
        leap = (year % 4 == 0 and year % 100 != 0) or year % 400 == 0
        leap_adjust = 5 if leap else 6
    total = (
        (((month + 9) % 12 + 1) << 4) % 27
        + day + 1 + y + y // 4 - y // 100 + leap_adjust
    )
    return total % 7


def current_time() -> int:
    """Return the current time in whole seconds since the epoch."""
    return int(_time.time())


def clock() -> int:
    """Return processor time used; always -1 as it is not available."""
    return -1


def difftime(time1: int, time0: int) -> float:
    """Return ``time1 - time0`` in seconds as a float."""
    return float(time1 - time0)


_EPOCH_SCALAR = ymd_to_scalar(1970, 1, 1)


def gmtime(timer: int) -> Tm:
    """Break a timestamp down into UTC calendar fields."""
    if timer < 0:
        raise ValueError(f"timestamp must not be negative: {timer}")
    days, secs = divmod(timer, SECONDS_PER_DAY)
    year, month, day = scalar_to_ymd(days + _EPOCH_SCALAR)
    minutes, sec = divmod(secs, 60)
    hour, minute = divmod(minutes, 60)
    return Tm(
        tm_sec=sec,
        tm_min=minute,
        tm_hour=hour,
        tm_mday=day,
        tm_mon=month - 1,
        tm_year=year - 1900,
        tm_wday=day_of_week(year, month, day),
        tm_yday=ymd_to_scalar(year, month, day) - ymd_to_scalar(year, 1, 1),
        tm_isdst=-1,
    )


def localtime(timer: int) -> Tm:
    """Break a timestamp down as local time; no time zone is applied."""
    return gmtime(timer)


def mktime(tm: Tm) -> int:
    """Convert calendar fields to a timestamp and normalise ``tm`` in place.

    Only years 1970 to 2020 are accepted; others raise ValueError.
    """
    if not MKTIME_MIN_YEAR <= tm.tm_year <= MKTIME_MAX_YEAR:
        raise ValueError(f"year out of range for mktime: {tm.tm_year + 1900}")
    days = ymd_to_scalar(tm.tm_year + 1900, tm.tm_mon + 1, tm.tm_mday) - _EPOCH_SCALAR
    timestamp = ((days * 24 + tm.tm_hour) * 60 + tm.tm_min) * 60 + tm.tm_sec
    normalised = gmtime(timestamp)
    for f in fields(Tm):
        setattr(tm, f.name, getattr(normalised, f.name))
    return timestamp


def _name(table: tuple[str, ...], index: int, what: str) -> str:
    if not 0 <= index < len(table):
        raise ValueError(f"{what} out of range: {index}")
    return table[index]


def asctime(tm: Tm) -> str:
    """Format ``tm`` as ``'Sun Sep 16 01:03:52 1973\\n'``."""
    wday = _name(_ABBREVIATED_DAYS, tm.tm_wday, "weekday")
    mon = _name(_ABBREVIATED_MONTHS, tm.tm_mon, "month")
    return (
        f"{wday} {mon}{tm.tm_mday:3d} "
        f"{tm.tm_hour:02d}:{tm.tm_min:02d}:{tm.tm_sec:02d} {1900 + tm.tm_year}\n"
    )


def ctime(timer: int) -> str:
    """Format a timestamp as local time in the ``asctime`` layout."""
    return asctime(localtime(timer))


def _digits(value: int, width: int) -> str:
    """Zero-padded decimal keeping only the last ``width`` digits."""
    return str(value % 10 ** width).zfill(width)


def _week_of_year(tm: Tm, first_weekday_offset: int) -> str:
    week = tm.tm_yday // 7
    if tm.tm_yday % 7 > (tm.tm_wday + first_weekday_offset) % 7:
        week += 1
    return _digits(week, 2)


def _day_abbr(tm: Tm) -> str:
    return _name(_ABBREVIATED_DAYS, tm.tm_wday, "weekday")


def _month_abbr(tm: Tm) -> str:
    return _name(_ABBREVIATED_MONTHS, tm.tm_mon, "month")


def _date_string(tm: Tm) -> str:
    return (
        f"{_day_abbr(tm)} {_month_abbr(tm)} "
        f"{_digits(tm.tm_mday, 2)} {_digits(tm.tm_year + 1900, 4)}"
    )


def _time_string(tm: Tm) -> str:
    return f"{_digits(tm.tm_hour, 2)}:{_digits(tm.tm_min, 2)}:{_digits(tm.tm_sec, 2)}"


def _date_time_string(tm: Tm) -> str:
    return (
        f"{_day_abbr(tm)} {_month_abbr(tm)} {_digits(tm.tm_mday, 2)} "
        f"{_time_string(tm)} {_digits(tm.tm_year + 1900, 4)}"
    )


_CONVERSIONS: dict[str, Callable[[Tm], str]] = {
    "%": lambda tm: "%",
    "a": _day_abbr,
    "A": lambda tm: _name(_FULL_DAYS, tm.tm_wday, "weekday"),
    "b": _month_abbr,
    "B": lambda tm: _name(_FULL_MONTHS, tm.tm_mon, "month"),
    "c": _date_time_string,
    "d": lambda tm: _digits(tm.tm_mday, 2),
    "H": lambda tm: _digits(tm.tm_hour, 2),
    "I": lambda tm: _digits(tm.tm_hour % 12 or 12, 2),
    "j": lambda tm: _digits(tm.tm_yday + 1, 3),
    "m": lambda tm: _digits(tm.tm_mon + 1, 2),
    "M": lambda tm: _digits(tm.tm_min, 2),
    "p": lambda tm: "PM" if tm.tm_hour > 11 else "AM",
    "S": lambda tm: _digits(tm.tm_sec, 2),
    "U": lambda tm: _week_of_year(tm, 0),
    "W": lambda tm: _week_of_year(tm, 6),
    "w": lambda tm: _digits(tm.tm_wday, 1),
    "x": _date_string,
    "X": _time_string,
    "y": lambda tm: _digits(tm.tm_year % 100, 2),
    "Y": lambda tm: _digits(tm.tm_year + 1900, 4),
    "Z": lambda tm: _TIMEZONE_NAME,
}


def _expand(fmt: str, tm: Tm) -> Iterator[str]:
    chars = iter(fmt)
    for ch in chars:
        if ch != "%":
            yield ch
            continue
        spec = next(chars, "")
        conversion = _CONVERSIONS.get(spec)
        yield "%" + spec if conversion is None else conversion(tm)


def strftime(fmt: str, tm: Tm, maxsize: int | None = None) -> str:
    """Format ``tm`` according to ``fmt``.

    Unknown conversions are copied through unchanged. If ``maxsize`` is
    given, the result (plus a terminator) must fit in that many
    characters, otherwise ValueError is raised.
    """
    result = "".join(_expand(fmt, tm))
    if maxsize is not None:
        if maxsize < 1:
            raise ValueError(f"maxsize must be at least 1: {maxsize}")
        if len(result) > maxsize - 1:
            raise ValueError(
                f"formatted time needs {len(result) + 1} characters, "
                f"only {maxsize} allowed"
            )
    return result