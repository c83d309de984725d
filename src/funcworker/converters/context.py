"""Conversion request descriptors: target types and converter contexts."""

from __future__ import annotations

import enum
import types
import typing
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Any, NewType
from uuid import UUID

from funcworker.types import PropertyMap

Int8 = NewType("Int8", int)
UInt8 = NewType("UInt8", int)
Int16 = NewType("Int16", int)
UInt16 = NewType("UInt16", int)
Int32 = NewType("Int32", int)
UInt32 = NewType("UInt32", int)
Int64 = NewType("Int64", int)
UInt64 = NewType("UInt64", int)
Float32 = NewType("Float32", float)
Float64 = NewType("Float64", float)
Char = NewType("Char", str)
DateTimeOffset = NewType("DateTimeOffset", datetime)

# Inclusive ranges of the integer targets; plain ``int`` is 64-bit.
INTEGER_BOUNDS: dict[object, tuple[int, int]] = {
    Int8: (-(2**7), 2**7 - 1),
    UInt8: (0, 2**8 - 1),
    Int16: (-(2**15), 2**15 - 1),
    UInt16: (0, 2**16 - 1),
    Int32: (-(2**31), 2**31 - 1),
    UInt32: (0, 2**32 - 1),
    Int64: (-(2**63), 2**63 - 1),
    int: (-(2**63), 2**63 - 1),
    UInt64: (0, 2**64 - 1),
}
FLOAT32_MAX = 3.4028234663852886e38

VALUE_TYPES: frozenset[object] = frozenset(
    {
        bool,
        int,
        float,
        Int8,
        UInt8,
        Int16,
        UInt16,
        Int32,
        UInt32,
        Int64,
        UInt64,
        Float32,
        Float64,
        Decimal,
        Char,
        datetime,
        DateTimeOffset,
        timedelta,
        UUID,
    }
)


def runtime_type(tp: object) -> object:
    """Unwrap ``NewType`` markers down to the class values actually have."""
    while isinstance(tp, NewType):
        tp = tp.__supertype__
    return tp


@dataclass(frozen=True)
class TargetType:
    """Statically declared target of a conversion.

    Parameters
    ----------
    base : object
        Nominal type identity, e.g. ``Int32``, ``UUID`` or a pydantic model.
    optional : bool, default=False
        Whether the target is the nullable wrapper of ``base``.
    """

    base: Any
    optional: bool = False

    @classmethod
    def from_annotation(cls, annotation: object) -> TargetType:
        """Build a target from a type annotation such as ``Int32 | None``.

        Parameters
        ----------
        annotation : object
            Annotation read from a function signature.

        Returns
        -------
        TargetType
            Target with ``optional`` set when ``None`` is one of the members.
        """
        origin = typing.get_origin(annotation)
        if origin is typing.Union or origin is types.UnionType:
            members = [arg for arg in typing.get_args(annotation) if arg is not type(None)]
            if len(members) == 1:
                return cls(base=members[0], optional=True)
        return cls(base=annotation)

    @property
    def is_value_type(self) -> bool:
        if self.base in VALUE_TYPES:
            return True
        return isinstance(self.base, type) and issubclass(self.base, enum.Enum)

    @property
    def runtime_type(self) -> object:
        return runtime_type(self.base)

    @property
    def name(self) -> str:
        label = getattr(self.base, "__name__", None) or repr(self.base)
        return f"{label} | None" if self.optional else label


@dataclass(frozen=True)
class ConverterContext:
    """Single conversion request handed to each converter in turn.

    Converters must treat the context as read-only; ``properties`` is exposed
    through a read-only mapping proxy.
    """

    source: Any
    target_type: TargetType
    properties: PropertyMap = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not isinstance(self.properties, types.MappingProxyType):
            object.__setattr__(
                self, "properties", types.MappingProxyType(dict(self.properties))
            )

    @classmethod
    def create(
        cls,
        source: Any,
        target: TargetType | object,
        properties: Mapping[str, Any] | None = None,
    ) -> ConverterContext:
        """Build a context, accepting either a ``TargetType`` or an annotation."""
        target_type = (
            target if isinstance(target, TargetType) else TargetType.from_annotation(target)
        )
        return cls(source=source, target_type=target_type, properties=properties or {})
