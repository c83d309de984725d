"""Retrying persistence of the metadata document.

The destination may be held open by a concurrent build or deployment step, so
``OSError`` is treated as transient and retried after a fixed delay. Any other
exception (for example a record that cannot be serialized) is a data fault and
propagates on the first attempt.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Iterable

from funcworker.application.options import RetryOptions
from funcworker.application.ports import MetadataWriter
from funcworker.errors import MetadataGenerationError
from funcworker.metadata.writer import write_metadata
from funcworker.types import MetadataRecord, PathLike, SleepFn

logger = logging.getLogger(__name__)


def _warn_retry(
    log: logging.Logger,
    exc: OSError,
    output_path: PathLike,
    attempt: int,
    options: RetryOptions,
) -> None:
    log.warning(
        "Could not write function metadata to %s. Error: '%s'. "
        "Beginning retry %d of %d (%d left) in %dms.",
        output_path,
        exc,
        attempt,
        options.max_attempts - 1,
        options.max_attempts - 1 - attempt,
        int(options.delay_seconds * 1000),
    )


def _give_up(
    log: logging.Logger, exc: OSError, output_path: PathLike, options: RetryOptions
) -> MetadataGenerationError:
    log.error(
        "Failed to write function metadata to %s after %d attempts: %s",
        output_path,
        options.max_attempts,
        exc,
        exc_info=exc,
    )
    return MetadataGenerationError(
        f"Unable to write function metadata to {output_path} after "
        f"{options.max_attempts} attempts: {exc}"
    )


def write_metadata_with_retry(
    functions: Iterable[MetadataRecord],
    output_path: PathLike,
    *,
    options: RetryOptions | None = None,
    writer: MetadataWriter = write_metadata,
    sleep: SleepFn = time.sleep,
    log: logging.Logger | None = None,
) -> int:
    """Write metadata, retrying transient I/O failures.

    Parameters
    ----------
    functions : Iterable[MetadataRecord]
        Ordered metadata records; materialized once before the first attempt.
    output_path : PathLike
        Destination document path.
    options : RetryOptions | None, default=None
        Attempt ceiling and delay. Defaults to 10 attempts, 1 second apart.
    writer : callable, default=write_metadata
        Serialize-and-write operation for one attempt.
    sleep : callable, default=time.sleep
        Blocking wait between attempts.
    log : logging.Logger | None, default=None
        Operator-visible log; defaults to this module's logger.

    Returns
    -------
    int
        Number of attempts used.

    Raises
    ------
    MetadataGenerationError
        If every attempt failed with ``OSError``.
    """
    options = options or RetryOptions()
    log = log or logger
    records = list(functions)
    attempt = 0
    while True:
        try:
            writer(records, output_path)
            return attempt + 1
        except OSError as exc:
            attempt += 1
            if attempt >= options.max_attempts:
                raise _give_up(log, exc, output_path, options) from exc
            _warn_retry(log, exc, output_path, attempt, options)
            sleep(options.delay_seconds)


async def write_metadata_with_retry_async(
    functions: Iterable[MetadataRecord],
    output_path: PathLike,
    *,
    options: RetryOptions | None = None,
    writer: MetadataWriter = write_metadata,
    log: logging.Logger | None = None,
) -> int:
    """Async variant of ``write_metadata_with_retry``.

    Waits between attempts with ``asyncio.sleep`` so the event loop keeps
    running other tasks; attempts never overlap.
    """
    options = options or RetryOptions()
    log = log or logger
    records = list(functions)
    attempt = 0
    while True:
        try:
            writer(records, output_path)
            return attempt + 1
        except OSError as exc:
            attempt += 1
            if attempt >= options.max_attempts:
                raise _give_up(log, exc, output_path, options) from exc
            _warn_retry(log, exc, output_path, attempt, options)
            await asyncio.sleep(options.delay_seconds)
