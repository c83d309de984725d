"""Converter protocol for input value conversion."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from funcworker.converters.context import ConverterContext
from funcworker.converters.results import ConversionResult


@runtime_checkable
class Converter(Protocol):
    """Protocol implemented by input converters."""

    name: str

    def convert(self, context: ConverterContext) -> ConversionResult:
        """Attempt to convert the context source into its target type.

        Parameters
        ----------
        context : ConverterContext
            Source value, declared target type and ambient properties.

        Returns
        -------
        ConversionResult
            ``Unhandled`` to decline, ``Succeeded`` with the converted value,
            or ``Failed`` when the value is recognised but invalid.
        """
