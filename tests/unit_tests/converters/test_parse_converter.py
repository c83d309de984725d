"""Unit tests for the primitive parse converter."""

from __future__ import annotations

import math
import re
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from enum import Enum
from uuid import UUID

import pytest
from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st

from funcworker.converters import (
    Char,
    ConversionStatus,
    ConverterContext,
    DateTimeOffset,
    Float32,
    Float64,
    Int8,
    Int16,
    Int32,
    Int64,
    ParseConverter,
    Succeeded,
    TargetType,
    UInt8,
    UInt16,
    UInt32,
    UInt64,
    Unhandled,
)
from funcworker.converters.context import INTEGER_BOUNDS
from funcworker.converters.parse import _DATETIME_FORMATS, PARSERS

_converter = ParseConverter()


def _convert(source: object, base: object, optional: bool = False):
    context = ConverterContext(source=source, target_type=TargetType(base, optional))
    return _converter.convert(context)


def _assert_success(source: str, base: object, expected: object) -> None:
    for optional in (False, True):
        result = _convert(source, base, optional)
        assert isinstance(result, Succeeded), (source, base, optional)
        assert result.value == expected
        assert type(result.value) is type(expected)


def _assert_declined(source: object, base: object) -> None:
    for optional in (False, True):
        result = _convert(source, base, optional)
        assert isinstance(result, Unhandled), (source, base, optional)
        assert result.status is ConversionStatus.UNHANDLED


class _Color(Enum):
    RED = 1


def test_conversion_skipped_for_non_value_target() -> None:
    """Decline targets that are not value types."""
    _assert_declined("source", str)


def test_conversion_skipped_for_non_text_source() -> None:
    """Decline sources that are not strings."""
    _assert_declined(123, Int32)


@pytest.mark.parametrize("source", [None, "", " ", "\t\r\n  "])
def test_conversion_skipped_for_blank_source(source: str | None) -> None:
    """Decline null, empty and whitespace-only sources."""
    _assert_declined(source, Int32)


def test_conversion_skipped_for_unsupported_value_type() -> None:
    """Decline value types with no registered parser."""
    _assert_declined("RED", _Color)


@pytest.mark.parametrize(
    ("source", "expected"), [("true", True), ("FALSE", False), ("TrUe", True)]
)
def test_bool_success(source: str, expected: bool) -> None:
    _assert_success(source, bool, expected)


@pytest.mark.parametrize("source", ["1", "0", "truue"])
def test_bool_declined(source: str) -> None:
    _assert_declined(source, bool)


@pytest.mark.parametrize(
    ("base", "source", "expected"),
    [
        (UInt8, "0", 0),
        (UInt8, "0100", 100),
        (UInt8, "255", 255),
        (Int8, "-128", -128),
        (Int8, "000", 0),
        (Int8, "127", 127),
        (UInt16, "05678", 5678),
        (UInt16, "65535", 65535),
        (Int16, "-32768", -32768),
        (Int16, "00975", 975),
        (Int16, "32767", 32767),
        (UInt32, "0007770", 7770),
        (UInt32, "4294967295", 4294967295),
        (Int32, "-2147483648", -2147483648),
        (Int32, "-010101010", -10101010),
        (Int32, "2147483647", 2147483647),
        (UInt64, "00709551615000", 709551615000),
        (UInt64, "18446744073709551615", 18446744073709551615),
        (Int64, "-9223372036854775808", -9223372036854775808),
        (Int64, "9223372036854775807", 9223372036854775807),
        (int, " +42 ", 42),
    ],
)
def test_integer_success(base: object, source: str, expected: int) -> None:
    _assert_success(source, base, expected)


@pytest.mark.parametrize(
    ("base", "source"),
    [
        (UInt8, "-1"),
        (UInt8, "256"),
        (UInt8, "hello"),
        (Int8, "-129"),
        (Int8, "128"),
        (UInt16, "65536"),
        (UInt16, "true"),
        (Int16, "32768"),
        (Int16, "f04ca9b7-7279-401f-9224-ce4e4117c69a"),
        (UInt32, "4294967296"),
        (UInt32, "!"),
        (Int32, "-2147483649"),
        (Int32, "2147483648"),
        (Int32, "00:01:30"),
        (Int32, "1_000"),
        (UInt64, "18446744073709551616"),
        (UInt64, "1.23"),
        (Int64, "-9223372036854775809"),
        (Int64, "9223372036854775808"),
        (Int64, "-0113.4"),
    ],
)
def test_integer_declined(base: object, source: str) -> None:
    _assert_declined(source, base)


@pytest.mark.parametrize("base", list(INTEGER_BOUNDS))
def test_integer_accepts_long_zero_padded_literal(base: object) -> None:
    _assert_success("0" * 5000 + "1", base, 1)
    _assert_success(" +" + "0" * 5000 + "7 ", base, 7)


@pytest.mark.parametrize("base", list(INTEGER_BOUNDS))
def test_integer_declines_long_overflow_literal(base: object) -> None:
    _assert_declined("9" * 5000, base)
    _assert_declined("-" + "9" * 5000, base)
    _assert_declined("0" * 5000 + "1" + "0" * 20, base)


@pytest.mark.parametrize(
    ("source", "expected"),
    [
        ("-∞", -math.inf),
        ("-3.402823E+39", -math.inf),
        ("-0134", -134.0),
        ("0", 0.0),
        ("3.402823e+39", math.inf),
        ("∞", math.inf),
        ("Infinity", math.inf),
    ],
)
def test_single_success(source: str, expected: float) -> None:
    _assert_success(source, Float32, expected)


def test_single_rounds_to_single_precision() -> None:
    result = _convert("0.1", Float32)
    assert isinstance(result, Succeeded)
    assert result.value != 0.1
    assert result.value == pytest.approx(0.1, rel=1e-7)


@pytest.mark.parametrize("source", ["3054caf4-64e6-4157-9b2e-c41bd128c98c", "foo bar baz"])
def test_single_declined(source: str) -> None:
    _assert_declined(source, Float32)


@pytest.mark.parametrize(
    ("source", "expected"),
    [
        ("-∞", -math.inf),
        ("-1.7976931348623157E+309", -math.inf),
        ("-1.7976931348623157e+308", -1.7976931348623157e308),
        ("-797693.1348E-4", -79.76931348),
        ("00", 0.0),
        ("03134", 3134.0),
        ("1.7976931348623157E+309", math.inf),
    ],
)
def test_double_success(source: str, expected: float) -> None:
    _assert_success(source, Float64, expected)
    _assert_success(source, float, expected)


def test_double_nan_symbol() -> None:
    result = _convert("NaN", Float64)
    assert isinstance(result, Succeeded)
    assert math.isnan(result.value)


@pytest.mark.parametrize("source", ["T", "9/24/2023 11:45:58 PM", "inf"])
def test_double_declined(source: str) -> None:
    _assert_declined(source, Float64)


@pytest.mark.parametrize(
    ("source", "expected"),
    [
        ("-79228162514264337593543950335", Decimal("-79228162514264337593543950335")),
        ("-25,162.1378", Decimal("-25162.1378")),
        ("0.0", Decimal("0.0")),
        ("1.62345", Decimal("1.62345")),
        ("79228162514264337593543950335", Decimal("79228162514264337593543950335")),
    ],
)
def test_decimal_success(source: str, expected: Decimal) -> None:
    _assert_success(source, Decimal, expected)


@pytest.mark.parametrize(
    "source",
    [
        "-79228162514264337593543950336",
        "79228162514264337593543950336",
        "false",
        "1e5",
    ],
)
def test_decimal_declined(source: str) -> None:
    _assert_declined(source, Decimal)


@pytest.mark.parametrize(
    ("source", "expected"),
    [
        ("1/1/0001 12:00:00 AM", datetime(1, 1, 1)),
        ("04/11/2022", datetime(2022, 4, 11)),
        ("04-13-2022", datetime(2022, 4, 13)),
        ("2022-08-15", datetime(2022, 8, 15)),
        (
            "2022-04-11T17:17:12.9326256Z",
            datetime(2022, 4, 11, 17, 17, 12, 932625, tzinfo=timezone.utc),
        ),
        ("9999-12-31T23:59:59.9999999", datetime(9999, 12, 31, 23, 59, 59, 999999)),
    ],
)
def test_datetime_success(source: str, expected: datetime) -> None:
    _assert_success(source, datetime, expected)


@pytest.mark.parametrize(
    "source", ["12/31/0000 11:59:59 PM", "10000-01-01T00:00:00", "1.02:03:04"]
)
def test_datetime_declined(source: str) -> None:
    _assert_declined(source, datetime)


@pytest.mark.parametrize(
    ("source", "offset_hours"),
    [
        ("Monday, January 1, 0001 12:00:00 AM GMT", 0),
        ("2022-05-16T08:16:53.1880572-03:00", -3),
        ("2022-05-16T08:17:54.1880573-01:00", -1),
        ("Fri, 31 Dec 9999 23:59:59 GMT", 0),
    ],
)
def test_datetime_offset_with_explicit_offset(source: str, offset_hours: int) -> None:
    for optional in (False, True):
        result = _convert(source, DateTimeOffset, optional)
        assert isinstance(result, Succeeded)
        assert result.value.utcoffset() == timedelta(hours=offset_hours)


@pytest.mark.parametrize("source", ["2022-05-16T08:16:53", "2022-05-16"])
def test_datetime_offset_without_offset_uses_local_zone(source: str) -> None:
    result = _convert(source, DateTimeOffset)
    assert isinstance(result, Succeeded)
    naive = datetime.fromisoformat(source)
    assert result.value.replace(tzinfo=None) == naive
    assert result.value.utcoffset() == naive.astimezone().utcoffset()


@pytest.mark.parametrize(
    "source",
    [
        "Monday, January 1, 0001 12:00:00 AM +08:00",
        "Sat, 01 Dec 10000 00:00:00 GMT",
        "1.02:03:04",
    ],
)
def test_datetime_offset_declined(source: str) -> None:
    _assert_declined(source, DateTimeOffset)


@pytest.mark.parametrize(
    ("source", "expected"),
    [
        ("-10675199.02:48:05.4775808", -timedelta(days=10675199, seconds=10085, microseconds=477580)),
        ("-00:25:30.5000000", -timedelta(minutes=25, seconds=30, microseconds=500000)),
        ("0", timedelta(0)),
        ("12:34:56.789", timedelta(hours=12, minutes=34, seconds=56, microseconds=789000)),
        ("10675199.02:48:05.4775807", timedelta(days=10675199, seconds=10085, microseconds=477580)),
    ],
)
def test_timespan_success(source: str, expected: timedelta) -> None:
    _assert_success(source, timedelta, expected)


@pytest.mark.parametrize(
    "source",
    [
        "-10675199.02:48:05.4775809",
        "10675199.02:48:05.4775808",
        "1/1/0001 12:00:00 AM",
        "24:00",
    ],
)
def test_timespan_declined(source: str) -> None:
    _assert_declined(source, timedelta)


def test_timespan_accepts_long_zero_padded_days() -> None:
    _assert_success("0" * 5000 + "2", timedelta, timedelta(days=2))
    _assert_success(
        "-" + "0" * 5000 + "1.02:03:04",
        timedelta,
        -timedelta(days=1, hours=2, minutes=3, seconds=4),
    )


@pytest.mark.parametrize(
    "source", ["9" * 5000, "9" * 5000 + ".00:00", "-" + "9" * 5000, "0" * 5000 + "12:00"]
)
def test_timespan_declines_long_literals(source: str) -> None:
    _assert_declined(source, timedelta)


@pytest.mark.parametrize(
    ("source", "expected"),
    [
        ("monday, JANUARY 1, 0001 12:00:00 am", datetime(1, 1, 1)),
        ("Jan 15, 2024", datetime(2024, 1, 15)),
        ("15 Sep 2024 10:30:00", datetime(2024, 9, 15, 10, 30)),
        ("1/2/2024 1:05:00 PM", datetime(2024, 1, 2, 13, 5)),
        ("1/2/2024 12:30:00 pm", datetime(2024, 1, 2, 12, 30)),
    ],
)
def test_datetime_english_names_and_designators(source: str, expected: datetime) -> None:
    _assert_success(source, datetime, expected)


@pytest.mark.parametrize(
    "source",
    ["Tuesday, January 1, 0001", "Funday, January 1, 2024", "1/2/2024 13:00:00 PM", "Smarch 1, 2024"],
)
def test_datetime_declines_inconsistent_names(source: str) -> None:
    _assert_declined(source, datetime)


def test_calendar_formats_do_not_depend_on_locale() -> None:
    """Day names, month names and AM/PM never reach strptime."""
    for fmt in _DATETIME_FORMATS:
        assert re.search(r"%[aAbBpcxX]", fmt) is None, fmt


@pytest.mark.parametrize(
    "source",
    [
        "00000000-0000-0000-0000-000000000000",
        "6cf8151848244ca78a169e14b4f13beb",
        "6cf81518-4824-4ca7-8a16-9e14b4f13beb",
        "{6cf81518-4824-4ca7-8a16-9e14b4f13beb}",
        "(6cf81518-4824-4ca7-8a16-9e14b4f13beb)",
    ],
)
def test_guid_success(source: str) -> None:
    digits = source.strip("{}()")
    _assert_success(source, UUID, UUID(digits))


@pytest.mark.parametrize(
    "source",
    [
        "a-string-with-four-hyphens",
        "12345",
        "true",
        "6cf81518-4824-4ca7-8a16",
        "6cf81518-4824-4ca7-8a16_9e14b4f13beb",
        "ValidGuidInsideAString6cf81518-4824-4ca7-8a16-9e14b4f13beb",
    ],
)
def test_guid_declined(source: str) -> None:
    _assert_declined(source, UUID)


@pytest.mark.parametrize("source", ["\0", "A", "Ӓ", "\uffff"])
def test_char_success(source: str) -> None:
    _assert_success(source, Char, source)


@pytest.mark.parametrize("source", ["hello world", "10"])
def test_char_declined(source: str) -> None:
    _assert_declined(source, Char)


@given(st.integers(min_value=-(2**31), max_value=2**31 - 1))
def test_int32_accepts_every_in_range_literal(value: int) -> None:
    """Every canonical Int32 literal converts to the same value."""
    _assert_success(str(value), Int32, value)


@given(st.integers().filter(lambda v: v < -(2**31) or v > 2**31 - 1))
def test_int32_declines_every_out_of_range_literal(value: int) -> None:
    """Out-of-range literals are declined, never failed."""
    _assert_declined(str(value), Int32)


_DIGIT_RUNS = st.from_regex(r"[+-]?0*[0-9]{1,6000}", fullmatch=True)


@settings(
    deadline=None,
    suppress_health_check=[HealthCheck.too_slow, HealthCheck.data_too_large],
)
@given(st.one_of(st.text(), _DIGIT_RUNS))
def test_parse_never_reports_failure(source: str) -> None:
    """Arbitrary text and long digit runs only ever succeed or decline."""
    for base in PARSERS:
        for optional in (False, True):
            result = _convert(source, base, optional)
            assert result.status in (ConversionStatus.SUCCEEDED, ConversionStatus.UNHANDLED)


def test_conversion_is_repeatable() -> None:
    first = _convert("{6cf81518-4824-4ca7-8a16-9e14b4f13beb}", UUID)
    second = _convert("{6cf81518-4824-4ca7-8a16-9e14b4f13beb}", UUID)
    assert first == second == Succeeded(UUID("6cf81518-4824-4ca7-8a16-9e14b4f13beb"))
