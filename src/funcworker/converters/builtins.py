"""Built-in converters registered ahead of and after ``ParseConverter``."""

from __future__ import annotations

import math
from collections.abc import Callable
from datetime import datetime
from functools import lru_cache
from typing import Any

from pydantic import TypeAdapter, ValidationError
from pydantic.errors import PydanticSchemaGenerationError

from funcworker.converters.context import (
    FLOAT32_MAX,
    INTEGER_BOUNDS,
    Char,
    ConverterContext,
    DateTimeOffset,
    Float32,
    Float64,
)
from funcworker.converters.results import UNHANDLED, ConversionResult, Failed, Succeeded


def _fits_integer(minimum: int, maximum: int) -> Callable[[Any], bool]:
    def check(value: Any) -> bool:
        return (
            isinstance(value, int)
            and not isinstance(value, bool)
            and minimum <= value <= maximum
        )

    return check


def _is_double(value: Any) -> bool:
    return isinstance(value, float)


def _fits_single(value: Any) -> bool:
    return isinstance(value, float) and (
        not math.isfinite(value) or abs(value) <= FLOAT32_MAX
    )


def _is_char(value: Any) -> bool:
    return isinstance(value, str) and len(value) == 1


def _is_aware(value: Any) -> bool:
    return isinstance(value, datetime) and value.utcoffset() is not None


# Value rules for targets whose runtime class is wider than the target.
_VALUE_CHECKS: dict[object, Callable[[Any], bool]] = {
    **{marker: _fits_integer(*bounds) for marker, bounds in INTEGER_BOUNDS.items()},
    Float32: _fits_single,
    Float64: _is_double,
    float: _is_double,
    Char: _is_char,
    DateTimeOffset: _is_aware,
}


class TypeConverter:
    """Pass through sources that already are valid values of the target.

    Sized numeric, ``Char`` and ``DateTimeOffset`` targets only accept values
    inside their range; any other target must be a class the source is an
    instance of.
    """

    name = "type"

    def convert(self, context: ConverterContext) -> ConversionResult:
        source = context.source
        base = context.target_type.base
        if source is None:
            return UNHANDLED
        check = _VALUE_CHECKS.get(base)
        if check is not None:
            return Succeeded(source) if check(source) else UNHANDLED
        if not isinstance(base, type):
            return UNHANDLED
        if isinstance(source, bool) and base is not bool:
            return UNHANDLED
        if isinstance(source, base):
            return Succeeded(source)
        return UNHANDLED


@lru_cache(maxsize=256)
def _adapter(target: object) -> TypeAdapter:
    return TypeAdapter(target)


class JsonConverter:
    """Deserialize JSON text into structured (non-value) targets.

    Notes
    -----
    Targets are validated through ``pydantic.TypeAdapter``, so pydantic models,
    dataclasses, ``TypedDict`` and generic containers are all supported. Invalid
    JSON or payloads that do not fit the target are reported as ``Failed``.
    """

    name = "json"

    def convert(self, context: ConverterContext) -> ConversionResult:
        target = context.target_type
        source = context.source
        if target.is_value_type or not isinstance(source, (str, bytes, bytearray)):
            return UNHANDLED
        if not source.strip():
            return UNHANDLED
        if target.runtime_type in (str, bytes, object):
            return UNHANDLED

        try:
            adapter = _adapter(target.base)
        except (TypeError, PydanticSchemaGenerationError):
            return UNHANDLED
        try:
            return Succeeded(adapter.validate_json(source))
        except ValidationError as exc:
            return Failed(exc)
