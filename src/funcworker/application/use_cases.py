"""Application use-cases orchestrating metadata generation."""

from __future__ import annotations

import logging
import time
from pathlib import Path

from pydantic import ValidationError

from funcworker.application.options import GenerationOptions, RetryOptions
from funcworker.application.ports import MetadataGenerator, MetadataWriter
from funcworker.application.results import GenerationResult
from funcworker.errors import MetadataGenerationError
from funcworker.metadata.retry import write_metadata_with_retry
from funcworker.metadata.writer import write_metadata
from funcworker.schemas import GenerationConfig, RetryConfig
from funcworker.types import PathLike, SleepFn

logger = logging.getLogger(__name__)


def build_generation_options(
    *,
    max_attempts: int = 10,
    delay_seconds: float = 1.0,
) -> GenerationOptions:
    """Build validated generation options.

    Raises
    ------
    MetadataGenerationError
        If retry settings are out of range.
    """
    try:
        config = RetryConfig(max_attempts=max_attempts, delay_seconds=delay_seconds)
    except ValidationError as exc:
        raise MetadataGenerationError(f"Invalid retry settings: {exc}") from exc
    return GenerationOptions(
        retry=RetryOptions(
            max_attempts=config.max_attempts,
            delay_seconds=config.delay_seconds,
        )
    )


def generate_function_metadata(
    *,
    module_path: PathLike,
    output_path: PathLike,
    generator: MetadataGenerator,
    options: GenerationOptions | None = None,
    writer: MetadataWriter = write_metadata,
    sleep: SleepFn = time.sleep,
    log: logging.Logger | None = None,
) -> GenerationResult:
    """Use-case: describe the functions of a module and persist the document.

    Parameters
    ----------
    module_path : PathLike
        Compiled module handed to the discovery collaborator.
    output_path : PathLike
        Destination of the metadata document.
    generator : MetadataGenerator
        Discovery collaborator producing the metadata records.
    options : GenerationOptions | None, default=None
        Retry policy for the write.
    writer, sleep, log
        Injection points forwarded to ``write_metadata_with_retry``.

    Returns
    -------
    GenerationResult
        Destination, function count and attempts used.

    Raises
    ------
    MetadataGenerationError
        If discovery fails or the write is still failing at the retry ceiling.
    """
    options = options or GenerationOptions()
    log = log or logger
    try:
        config = GenerationConfig(
            module_path=str(module_path),
            output_path=str(output_path),
            retry=RetryConfig(
                max_attempts=options.retry.max_attempts,
                delay_seconds=options.retry.delay_seconds,
            ),
        )
    except ValidationError as exc:
        raise MetadataGenerationError(f"Invalid generation parameters: {exc}") from exc

    source = Path(config.module_path)
    destination = Path(config.output_path)
    log.info("Generating function metadata for %s", source)
    try:
        functions = list(generator.generate(source))
        log.info("Discovered %d function(s) in %s", len(functions), source)
        attempts = write_metadata_with_retry(
            functions,
            destination,
            options=options.retry,
            writer=writer,
            sleep=sleep,
            log=log,
        )
    except MetadataGenerationError:
        log.error("Unable to build function metadata for %s", source)
        raise

    log.info("Wrote function metadata for %s to %s", source, destination)
    return GenerationResult(
        output_path=destination,
        module_path=source,
        function_count=len(functions),
        attempts=attempts,
    )
