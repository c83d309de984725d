"""Input converters turning raw external values into typed parameters."""

from .base import Converter
from .builtins import JsonConverter, TypeConverter
from .context import (
    Char,
    ConverterContext,
    DateTimeOffset,
    Float32,
    Float64,
    Int8,
    Int16,
    Int32,
    Int64,
    TargetType,
    UInt8,
    UInt16,
    UInt32,
    UInt64,
)
from .parse import ParseConverter
from .pipeline import ConversionPipeline
from .registry import ConverterRegistry, create_default_registry
from .results import ConversionResult, ConversionStatus, Failed, Succeeded, Unhandled

__all__ = [
    "Char",
    "ConversionPipeline",
    "ConversionResult",
    "ConversionStatus",
    "Converter",
    "ConverterContext",
    "ConverterRegistry",
    "DateTimeOffset",
    "Failed",
    "Float32",
    "Float64",
    "Int8",
    "Int16",
    "Int32",
    "Int64",
    "JsonConverter",
    "ParseConverter",
    "Succeeded",
    "TargetType",
    "TypeConverter",
    "UInt8",
    "UInt16",
    "UInt32",
    "UInt64",
    "Unhandled",
    "create_default_registry",
]
