"""Exception hierarchy shared across funcworker modules."""

from __future__ import annotations


class FuncWorkerError(Exception):
    """Base class for all funcworker errors."""

    exit_code = 1


class ConverterRegistryError(FuncWorkerError):
    """Raised when converters cannot be registered, loaded or looked up."""


class ConversionError(FuncWorkerError):
    """Raised when a converter reports a hard failure for a value."""

    exit_code = 2


class UnconvertibleParameterError(ConversionError):
    """Raised when every converter in the chain declined a value."""


class MetadataGenerationError(FuncWorkerError):
    """Raised when function metadata cannot be generated or persisted."""

    exit_code = 3
