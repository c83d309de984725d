"""Top-level API for function metadata and input conversion."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from pathlib import Path
from typing import Any

from funcworker.types import MetadataRecord, PathLike

__version__ = "0.1.0"


def convert_value(
    source: Any,
    target: object,
    properties: Mapping[str, Any] | None = None,
    *,
    converter_modules: Iterable[str] | None = None,
) -> Any:
    """Convert a raw external value into ``target`` with the default chain.

    Parameters
    ----------
    source : Any
        Raw value, typically a string.
    target : object
        ``TargetType`` or a type annotation such as ``Int32 | None``.
    properties : Mapping[str, Any] | None, default=None
        Ambient properties visible to converters.
    converter_modules : Iterable[str] | None, default=None
        Extra converter modules appended after the built-in chain.

    Returns
    -------
    Any
        Converted value.
    """
    from .converters.registry import create_default_registry

    pipeline = create_default_registry(converter_modules).pipeline()
    return pipeline.convert_value(source, target, properties)


def bind_arguments(
    func: Callable[..., Any],
    raw_inputs: Mapping[str, Any],
    *,
    converter_modules: Iterable[str] | None = None,
) -> dict[str, Any]:
    """Convert raw inputs into the annotated parameters of ``func``."""
    from .converters.registry import create_default_registry

    pipeline = create_default_registry(converter_modules).pipeline()
    return pipeline.bind_arguments(func, raw_inputs)


def write_function_metadata(
    functions: Iterable[MetadataRecord],
    output_path: PathLike,
    *,
    max_attempts: int = 10,
    delay_seconds: float = 1.0,
) -> Path:
    """Persist a metadata document, retrying while the destination is locked.

    Parameters
    ----------
    functions : Iterable[MetadataRecord]
        Ordered metadata records.
    output_path : PathLike
        Destination document path.
    max_attempts : int, default=10
        Attempt ceiling.
    delay_seconds : float, default=1.0
        Fixed delay between attempts.

    Returns
    -------
    Path
        Destination path.
    """
    from .application.use_cases import build_generation_options
    from .metadata.retry import write_metadata_with_retry
    from .metadata.writer import resolve_metadata_path

    options = build_generation_options(
        max_attempts=max_attempts, delay_seconds=delay_seconds
    )
    write_metadata_with_retry(functions, output_path, options=options.retry)
    return resolve_metadata_path(output_path)


__all__ = [
    "bind_arguments",
    "convert_value",
    "write_function_metadata",
]
