"""Primitive value converter parsing text into value types.

Every parser here returns ``None`` when the text is not a valid literal of the
target type. ``ParseConverter`` turns that into a declination so a later
converter in the chain can still try the value.
"""

from __future__ import annotations

import math
import re
import struct
from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from decimal import Decimal, InvalidOperation
from typing import Any
from uuid import UUID

from funcworker.converters.context import (
    INTEGER_BOUNDS,
    Char,
    ConverterContext,
    DateTimeOffset,
    Float32,
    Float64,
)
from funcworker.converters.results import UNHANDLED, ConversionResult, Succeeded

type Parser = Callable[[str], Any]

_INTEGER_RE = re.compile(r"\s*(?P<sign>[+-])?(?P<digits>[0-9]+)\s*")
_FLOAT_RE = re.compile(
    r"\s*[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?\s*"
)
_DECIMAL_RE = re.compile(r"\s*[+-]?(?:[0-9][0-9,]*(?:\.[0-9]*)?|\.[0-9]+)\s*")
_FLOAT_SYMBOLS = {
    "infinity": math.inf,
    "+infinity": math.inf,
    "-infinity": -math.inf,
    "∞": math.inf,
    "+∞": math.inf,
    "-∞": -math.inf,
    "nan": math.nan,
}
_DECIMAL_MAX = Decimal("79228162514264337593543950335")

_TIMESPAN_RE = re.compile(
    r"\s*(?P<sign>-)?(?:"
    r"(?P<only_days>[0-9]+)"
    r"|(?:(?P<days>[0-9]+)\.)?(?P<hours>[0-9]{1,2}):(?P<minutes>[0-9]{1,2})"
    r"(?::(?P<seconds>[0-9]{1,2})(?:\.(?P<fraction>[0-9]{1,7}))?)?"
    r")\s*"
)
_TICKS_PER_SECOND = 10_000_000
_TICKS_PER_DAY = 86_400 * _TICKS_PER_SECOND
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1
_MAX_DAY_DIGITS = len(str(_INT64_MAX // _TICKS_PER_DAY))

_GUID_RE = re.compile(
    r"(?P<n>[0-9a-fA-F]{32})"
    r"|(?P<d>[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12})"
    r"|\{(?P<b>[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12})\}"
    r"|\((?P<p>[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12})\)"
)

_ZONE_SUFFIX_RE = re.compile(
    r"(?P<body>.*[0-9]:[0-9]{2}(?::[0-9]{2}(?:\.[0-9]+)?)?(?:\s*[AaPp][Mm])?)"
    r"\s*(?P<zone>Z|GMT|UTC|[+-][0-9]{2}:?[0-9]{2})"
)
_LONG_FRACTION_RE = re.compile(r"(\.[0-9]{6})[0-9]+")
# Only numeric directives: names and AM/PM are resolved before strptime so
# the result never depends on the process locale.
_DATETIME_FORMATS = (
    "%m/%d/%Y %H:%M:%S",
    "%m/%d/%Y %H:%M",
    "%m/%d/%Y",
    "%m-%d-%Y %H:%M:%S",
    "%m-%d-%Y",
    "%Y/%m/%d %H:%M:%S",
    "%Y/%m/%d",
    "%m %d, %Y %H:%M:%S",
    "%m %d, %Y",
    "%d %m %Y %H:%M:%S",
    "%d %m %Y",
)
_WEEKDAYS = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")
_MONTHS = (
    "january",
    "february",
    "march",
    "april",
    "may",
    "june",
    "july",
    "august",
    "september",
    "october",
    "november",
    "december",
)
_WEEKDAY_PREFIX_RE = re.compile(r"(?P<weekday>[A-Za-z]+)\s*,\s*(?P<rest>.*)")
_MERIDIEM_SUFFIX_RE = re.compile(r"(?P<rest>.*?)\s*(?P<meridiem>[AaPp][Mm])")
_WORD_RE = re.compile(r"[A-Za-z]+")


def _bounded_digits(digits: str, max_digits: int) -> int | None:
    """Convert an ASCII digit run, declining runs longer than ``max_digits``.

    Leading zeros never count towards the length, so arbitrarily padded
    literals stay valid while oversized ones are rejected before ``int()``
    hits the interpreter's digit limit.
    """
    significant = digits.lstrip("0") or "0"
    if len(significant) > max_digits:
        return None
    return int(significant)


def _integer_parser(minimum: int, maximum: int) -> Parser:
    max_digits = len(str(max(-minimum, maximum)))

    def parse(text: str) -> int | None:
        match = _INTEGER_RE.fullmatch(text)
        if match is None:
            return None
        value = _bounded_digits(match.group("digits"), max_digits)
        if value is None:
            return None
        if match.group("sign") == "-":
            value = -value
        if minimum <= value <= maximum:
            return value
        return None

    return parse


def _parse_bool(text: str) -> bool | None:
    lowered = text.strip().lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    return None


def _parse_double(text: str) -> float | None:
    symbol = _FLOAT_SYMBOLS.get(text.strip().lower())
    if symbol is not None:
        return symbol
    if not _FLOAT_RE.fullmatch(text):
        return None
    # float() already saturates to +/-inf on overflow.
    return float(text)


def _parse_single(text: str) -> float | None:
    value = _parse_double(text)
    if value is None or math.isinf(value) or math.isnan(value):
        return value
    try:
        return struct.unpack("f", struct.pack("f", value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


def _parse_decimal(text: str) -> Decimal | None:
    if not _DECIMAL_RE.fullmatch(text):
        return None
    try:
        value = Decimal(text.strip().replace(",", ""))
    except InvalidOperation:
        return None
    if value.copy_abs() > _DECIMAL_MAX:
        return None
    return value


def _parse_char(text: str) -> str | None:
    return text if len(text) == 1 else None


def _split_zone(text: str) -> tuple[str, timezone | None]:
    match = _ZONE_SUFFIX_RE.fullmatch(text)
    if match is None:
        return text, None
    zone = match.group("zone")
    if zone in {"Z", "GMT", "UTC"}:
        return match.group("body"), timezone.utc
    digits = zone[1:].replace(":", "")
    hours, minutes = int(digits[:2]), int(digits[2:])
    if hours > 14 or minutes > 59:
        return text, None
    offset = timedelta(hours=hours, minutes=minutes)
    return match.group("body"), timezone(-offset if zone[0] == "-" else offset)


def _name_index(word: str, names: tuple[str, ...]) -> int | None:
    lowered = word.lower()
    for index, name in enumerate(names):
        if lowered in (name, name[:3]):
            return index
    return None


def _month_number(match: re.Match[str]) -> str:
    index = _name_index(match.group(), _MONTHS)
    return match.group() if index is None else str(index + 1)


def _parse_numeric_calendar(body: str) -> datetime | None:
    try:
        return datetime.fromisoformat(body)
    except (OverflowError, ValueError):
        pass
    for fmt in _DATETIME_FORMATS:
        try:
            return datetime.strptime(body, fmt)
        except (OverflowError, ValueError):
            continue
    return None


def _parse_calendar(text: str) -> datetime | None:
    """Parse the calendar representations shared by date-time targets.

    English day names, month names and ``AM``/``PM`` designators are matched
    case-insensitively. A leading day name must agree with the date.
    """
    body, zone = _split_zone(text.strip())
    body = _LONG_FRACTION_RE.sub(r"\1", body.strip())

    weekday: int | None = None
    prefix = _WEEKDAY_PREFIX_RE.fullmatch(body)
    if prefix is not None:
        weekday = _name_index(prefix.group("weekday"), _WEEKDAYS)
        if weekday is None:
            return None
        body = prefix.group("rest")

    meridiem: str | None = None
    suffix = _MERIDIEM_SUFFIX_RE.fullmatch(body)
    if suffix is not None:
        meridiem = suffix.group("meridiem").upper()
        body = suffix.group("rest")

    parsed = _parse_numeric_calendar(_WORD_RE.sub(_month_number, body))
    if parsed is None:
        return None
    if meridiem is not None:
        if not 1 <= parsed.hour <= 12:
            return None
        hour = parsed.hour % 12 + (12 if meridiem == "PM" else 0)
        parsed = parsed.replace(hour=hour)
    if weekday is not None and parsed.weekday() != weekday:
        return None
    if zone is not None:
        if parsed.tzinfo is not None:
            return None
        parsed = parsed.replace(tzinfo=zone)
    return parsed


def _parse_datetime_offset(text: str) -> datetime | None:
    parsed = _parse_calendar(text)
    if parsed is None:
        return None
    try:
        if parsed.tzinfo is None:
            # No explicit offset: resolve against the local zone right now.
            parsed = parsed.astimezone()
        parsed.astimezone(timezone.utc)
    except (OverflowError, OSError, ValueError):
        return None
    return parsed


def _parse_timespan(text: str) -> timedelta | None:
    match = _TIMESPAN_RE.fullmatch(text)
    if match is None:
        return None
    days = _bounded_digits(
        match.group("only_days") or match.group("days") or "0", _MAX_DAY_DIGITS
    )
    if days is None:
        return None
    if match.group("only_days") is not None:
        ticks = days * _TICKS_PER_DAY
    else:
        hours = int(match.group("hours"))
        minutes = int(match.group("minutes"))
        seconds = int(match.group("seconds") or 0)
        if hours > 23 or minutes > 59 or seconds > 59:
            return None
        fraction = (match.group("fraction") or "").ljust(7, "0")
        ticks = (
            days * _TICKS_PER_DAY
            + (hours * 3600 + minutes * 60 + seconds) * _TICKS_PER_SECOND
            + int(fraction)
        )
    if match.group("sign"):
        ticks = -ticks
    if not _INT64_MIN <= ticks <= _INT64_MAX:
        return None
    micros = abs(ticks) // 10
    return timedelta(microseconds=-micros if ticks < 0 else micros)


def _parse_guid(text: str) -> UUID | None:
    match = _GUID_RE.fullmatch(text.strip())
    if match is None:
        return None
    digits = next(group for group in match.groups() if group is not None)
    return UUID(digits)


PARSERS: dict[object, Parser] = {
    bool: _parse_bool,
    **{marker: _integer_parser(*bounds) for marker, bounds in INTEGER_BOUNDS.items()},
    Float32: _parse_single,
    Float64: _parse_double,
    float: _parse_double,
    Decimal: _parse_decimal,
    Char: _parse_char,
    datetime: _parse_calendar,
    DateTimeOffset: _parse_datetime_offset,
    timedelta: _parse_timespan,
    UUID: _parse_guid,
}


class ParseConverter:
    """Parse textual sources into primitive value types.

    Notes
    -----
    Input that is not text, blank text, unsupported targets and malformed
    literals all yield ``Unhandled``; this converter never reports ``Failed``.
    """

    name = "parse"

    def convert(self, context: ConverterContext) -> ConversionResult:
        target = context.target_type
        source = context.source
        if not target.is_value_type or not isinstance(source, str) or not source.strip():
            return UNHANDLED

        parser = PARSERS.get(target.base)
        if parser is None:
            return UNHANDLED

        value = parser(source)
        if value is None:
            return UNHANDLED
        return Succeeded(value)
