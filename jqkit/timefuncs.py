"""Date and time built-ins working on timestamps and broken-down time arrays."""

from __future__ import annotations

import math
import os
import re
import time
from datetime import datetime, timedelta, timezone, tzinfo
from typing import Any, Callable, Optional
from zoneinfo import ZoneInfo

from .errors import InvalidArgTypeError, QueryExecutionError
from .number import is_number, saturating_int

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_SECOND = timedelta(seconds=1)
_I32_MIN = -(2**31)
_I32_MAX = 2**31 - 1
_U8_MAX = 255
_U32_MAX = 2**32 - 1

_DAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")
_MONTHS = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)

_ISO8601_RE = re.compile(
    r"(\d{4})-(\d{2})-(\d{2})[Tt](\d{2}):(\d{2}):(\d{2})(?:\.(\d+))?"
    r"(?:([Zz])|([+-])(\d{2}):(\d{2}))"
)
_POSIX_TZ_RE = re.compile(
    r"(?P<name>[A-Za-z]{3,}|<[A-Za-z0-9+-]{3,}>)"
    r"(?P<sign>[+-]?)(?P<hours>\d{1,2})(?::(?P<minutes>\d{2}))?(?::(?P<seconds>\d{2}))?"
)
_SPEC_RE = re.compile(r"%(.?)", re.DOTALL)


def _timestamp_to_time(timestamp: Any) -> tuple[datetime, int]:
    """Split a timestamp into a whole-second UTC datetime and nanoseconds."""
    f = float(timestamp)
    if math.isnan(f):
        return _EPOCH, 0
    if math.isinf(f):
        raise QueryExecutionError(f"Timestamp out of range: {f}")
    whole = math.floor(f)
    nanos = int((f - whole) * 1e9)
    try:
        return _EPOCH + timedelta(seconds=whole), nanos
    except OverflowError:
        raise QueryExecutionError(f"Timestamp out of range: {f}") from None


def _time_to_timestamp(moment: datetime, nanos: int) -> float:
    seconds = (moment - _EPOCH) // _SECOND
    return (seconds * 10**9 + nanos) / 1e9


def _time_to_array(moment: datetime, nanos: int) -> list:
    return [
        float(moment.year),
        float(moment.month - 1),
        float(moment.day),
        float(moment.hour),
        float(moment.minute),
        moment.second + nanos / 1e9,
        float(moment.isoweekday() % 7),
        float(moment.timetuple().tm_yday - 1),
    ]


def _array_to_time(value: Any) -> Optional[tuple[datetime, int]]:
    """Read a broken-down time array as a naive datetime; None if it has the wrong shape."""
    if not isinstance(value, list) or len(value) < 6:
        return None
    fields = value[:6]
    if not all(is_number(field) for field in fields):
        return None
    year, month0, day, hour, minute, second = (float(field) for field in fields)
    if math.isfinite(second):
        whole_second = saturating_int(math.floor(second), 0, _U8_MAX)
        nanos = saturating_int((second % 1.0) * 1e9, 0, _U32_MAX)
    else:
        whole_second = saturating_int(second, 0, _U8_MAX)
        nanos = 0
    try:
        moment = datetime(
            saturating_int(year, _I32_MIN, _I32_MAX),
            saturating_int(month0, 0, _U8_MAX) + 1,
            saturating_int(day, 0, _U8_MAX),
            saturating_int(hour, 0, _U8_MAX),
            saturating_int(minute, 0, _U8_MAX),
            whole_second,
        )
    except (ValueError, OverflowError) as exc:
        raise QueryExecutionError(f"Invalid broken-down time: {exc}") from None
    return moment, nanos


def _parse_tz(spec: str) -> tzinfo:
    key = spec[1:] if spec.startswith(":") else spec
    if key:
        try:
            return ZoneInfo(key)
        except (KeyError, ValueError, OSError):
            pass
    found = _POSIX_TZ_RE.fullmatch(spec)
    if found is None:
        raise QueryExecutionError("Invalid TZ environment variable")
    west = timedelta(
        hours=int(found.group("hours")),
        minutes=int(found.group("minutes") or 0),
        seconds=int(found.group("seconds") or 0),
    )
    offset = west if found.group("sign") == "-" else -west
    try:
        return timezone(offset, found.group("name").strip("<>"))
    except ValueError:
        raise QueryExecutionError("Unable to apply time zone got from TZ") from None


def _local_zone() -> Optional[tzinfo]:
    """The zone named by TZ, or None for the system's local zone."""
    spec = os.environ.get("TZ")
    return None if spec is None else _parse_tz(spec)


def _in_zone(moment: datetime, zone: Optional[tzinfo]) -> datetime:
    try:
        return moment.astimezone(zone)
    except (OverflowError, OSError, ValueError) as exc:
        raise QueryExecutionError(f"Time zone lookup failed: {exc}") from None


def _offset(moment: datetime) -> str:
    total = int((moment.utcoffset() or timedelta(0)).total_seconds())
    sign = "-" if total < 0 else "+"
    total = abs(total)
    return f"{sign}{total // 3600:02d}{total % 3600 // 60:02d}"


def _hour12(moment: datetime) -> int:
    return moment.hour % 12 or 12


def _yday0(moment: datetime) -> int:
    return moment.timetuple().tm_yday - 1


_SPECIFIERS: dict[str, Callable[[datetime], str]] = {
    "a": lambda d: _DAYS[d.weekday()][:3],
    "A": lambda d: _DAYS[d.weekday()],
    "b": lambda d: _MONTHS[d.month - 1][:3],
    "h": lambda d: _MONTHS[d.month - 1][:3],
    "B": lambda d: _MONTHS[d.month - 1],
    "C": lambda d: f"{d.year // 100:02d}",
    "d": lambda d: f"{d.day:02d}",
    "e": lambda d: f"{d.day:2d}",
    "G": lambda d: f"{d.isocalendar()[0]:04d}",
    "g": lambda d: f"{d.isocalendar()[0] % 100:02d}",
    "H": lambda d: f"{d.hour:02d}",
    "I": lambda d: f"{_hour12(d):02d}",
    "j": lambda d: f"{_yday0(d) + 1:03d}",
    "k": lambda d: f"{d.hour:2d}",
    "l": lambda d: f"{_hour12(d):2d}",
    "m": lambda d: f"{d.month:02d}",
    "M": lambda d: f"{d.minute:02d}",
    "p": lambda d: "AM" if d.hour < 12 else "PM",
    "S": lambda d: f"{d.second:02d}",
    "s": lambda d: str((d - _EPOCH) // _SECOND),
    "u": lambda d: str(d.isoweekday()),
    "w": lambda d: str(d.isoweekday() % 7),
    "U": lambda d: f"{(_yday0(d) + 7 - d.isoweekday() % 7) // 7:02d}",
    "W": lambda d: f"{(_yday0(d) + 7 - d.weekday()) // 7:02d}",
    "V": lambda d: f"{d.isocalendar()[1]:02d}",
    "y": lambda d: f"{d.year % 100:02d}",
    "Y": lambda d: str(d.year),
    "z": _offset,
    "n": lambda d: "\n",
    "t": lambda d: "\t",
    "%": lambda d: "%",
}

_COMPOSITE = {
    "c": "%a %b %e %H:%M:%S %Y",
    "D": "%m/%d/%y",
    "F": "%Y-%m-%d",
    "r": "%I:%M:%S %p",
    "R": "%H:%M",
    "T": "%H:%M:%S",
    "x": "%m/%d/%y",
    "X": "%H:%M:%S",
}


def _format_time(fmt: str, moment: datetime, zone_name: str) -> str:
    def replace(found: re.Match) -> str:
        spec = found.group(1)
        if spec in _COMPOSITE:
            return _format_time(_COMPOSITE[spec], moment, zone_name)
        if spec == "Z":
            return zone_name
        handler = _SPECIFIERS.get(spec)
        if handler is None:
            raise QueryExecutionError(f"Unsupported time format specifier `%{spec}`")
        return handler(moment)

    return _SPEC_RE.sub(replace, fmt)


def gmtime(value: Any) -> list:
    """Break a timestamp down into UTC calendar fields."""
    if not is_number(value):
        raise InvalidArgTypeError("gmtime", value)
    return _time_to_array(*_timestamp_to_time(value))


def localtime(value: Any) -> list:
    """Break a timestamp down into calendar fields of the local zone."""
    if not is_number(value):
        raise InvalidArgTypeError("localtime", value)
    moment, nanos = _timestamp_to_time(value)
    return _time_to_array(_in_zone(moment, _local_zone()), nanos)


def mktime(value: Any) -> float:
    """Turn a UTC broken-down time array into a timestamp."""
    parsed = _array_to_time(value)
    if parsed is None:
        raise InvalidArgTypeError("mktime", value)
    moment, nanos = parsed
    return _time_to_timestamp(moment.replace(tzinfo=timezone.utc), nanos)


def now(value: Any) -> float:
    """Return the current time as a timestamp."""
    return time.time_ns() / 1e9


def fromdateiso8601(value: Any) -> float:
    """Parse an RFC 3339 date-time into a timestamp."""
    if not isinstance(value, str):
        raise InvalidArgTypeError("fromdateiso8601", value)
    found = _ISO8601_RE.fullmatch(value)
    if found is None:
        raise QueryExecutionError(f"Invalid ISO 8601 date-time: {value}")
    year, month, day, hour, minute, second = (int(found.group(i)) for i in range(1, 7))
    fraction = found.group(7)
    if found.group(8):
        zone = timezone.utc
    else:
        offset_minutes = int(found.group(11))
        if offset_minutes >= 60:
            raise QueryExecutionError(f"Invalid ISO 8601 date-time: {value}")
        offset = timedelta(hours=int(found.group(10)), minutes=offset_minutes)
        try:
            zone = timezone(-offset if found.group(9) == "-" else offset)
        except ValueError:
            raise QueryExecutionError(f"Invalid ISO 8601 date-time: {value}") from None
    try:
        moment = datetime(year, month, day, hour, minute, second, tzinfo=zone)
    except ValueError:
        raise QueryExecutionError(f"Invalid ISO 8601 date-time: {value}") from None
    nanos = int(fraction[:9].ljust(9, "0")) if fraction else 0
    return _time_to_timestamp(moment, nanos)


def strftime(context: Any, fmt: Any) -> str:
    """Format a timestamp or broken-down time in UTC."""
    if is_number(context):
        moment, _ = _timestamp_to_time(context)
    else:
        parsed = _array_to_time(context)
        if parsed is None:
            raise InvalidArgTypeError("strftime", context)
        moment = parsed[0].replace(tzinfo=timezone.utc)
    if not isinstance(fmt, str):
        raise InvalidArgTypeError("strftime", fmt)
    return _format_time(fmt, moment, "UTC")


def strflocaltime(context: Any, fmt: Any) -> str:
    """Format a timestamp or local broken-down time in the local zone."""
    parsed = None
    if not is_number(context):
        parsed = _array_to_time(context)
        if parsed is None:
            raise InvalidArgTypeError("strflocaltime", context)
    if not isinstance(fmt, str):
        raise InvalidArgTypeError("strflocaltime", fmt)
    zone = _local_zone()
    if parsed is None:
        moment, _ = _timestamp_to_time(context)
    else:
        naive = parsed[0]
        offset = _in_zone(naive.replace(tzinfo=timezone.utc), zone).utcoffset()
        moment = naive.replace(tzinfo=timezone(offset or timedelta(0)))
    local = _in_zone(moment, zone)
    return _format_time(fmt, local, local.tzname() or "")


def strptime(context: Any, fmt: Any) -> list:
    """Parse text with a format into a broken-down time; any zone offset is dropped."""
    if not isinstance(context, str):
        raise InvalidArgTypeError("strptime", context)
    if not isinstance(fmt, str):
        raise InvalidArgTypeError("strptime", fmt)
    try:
        parsed = datetime.strptime(context, fmt)
    except ValueError as exc:
        raise QueryExecutionError(f"Unable to parse time: {exc}") from None
    nanos = parsed.microsecond * 1000
    moment = parsed.replace(tzinfo=timezone.utc, microsecond=0)
    return _time_to_array(moment, nanos)