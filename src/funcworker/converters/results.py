"""Outcome types returned by converters."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, ClassVar


class ConversionStatus(enum.Enum):
    """Discriminator shared by all conversion outcomes."""

    UNHANDLED = "unhandled"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True)
class Unhandled:
    """The converter declined the request; the next converter may try."""

    status: ClassVar[ConversionStatus] = ConversionStatus.UNHANDLED


@dataclass(frozen=True)
class Succeeded:
    """The converter produced ``value``."""

    value: Any
    status: ClassVar[ConversionStatus] = ConversionStatus.SUCCEEDED


@dataclass(frozen=True)
class Failed:
    """The converter recognised the request but the data was invalid."""

    error: BaseException
    status: ClassVar[ConversionStatus] = ConversionStatus.FAILED


type ConversionResult = Unhandled | Succeeded | Failed

UNHANDLED = Unhandled()
