"""Application-layer use-cases and option objects."""

from __future__ import annotations

import logging
from pathlib import Path

from funcworker.application.options import GenerationOptions, RetryOptions
from funcworker.application.ports import MetadataGenerator, MetadataWriter
from funcworker.application.results import GenerationResult
from funcworker.types import PathLike


def build_generation_options(
    *,
    max_attempts: int = 10,
    delay_seconds: float = 1.0,
) -> GenerationOptions:
    """Build typed generation options via lazy use-case import."""
    from funcworker.application.use_cases import build_generation_options as _impl

    return _impl(max_attempts=max_attempts, delay_seconds=delay_seconds)


def generate_function_metadata(
    *,
    module_path: PathLike,
    output_path: PathLike,
    generator: MetadataGenerator,
    options: GenerationOptions | None = None,
    log: logging.Logger | None = None,
) -> GenerationResult:
    """Generate and persist function metadata via lazy use-case import."""
    from funcworker.application.use_cases import generate_function_metadata as _impl

    return _impl(
        module_path=Path(module_path),
        output_path=Path(output_path),
        generator=generator,
        options=options,
        log=log,
    )


__all__ = [
    "GenerationOptions",
    "GenerationResult",
    "MetadataGenerator",
    "MetadataWriter",
    "RetryOptions",
    "build_generation_options",
    "generate_function_metadata",
]
