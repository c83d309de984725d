"""Typed option objects shared across metadata use-cases."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class RetryOptions:
    """Retry policy for persisting the metadata document.

    Attempts are strictly sequential with a fixed delay between them.
    """

    max_attempts: int = 10
    delay_seconds: float = 1.0


@dataclass(frozen=True)
class GenerationOptions:
    """Shared options passed through the generation use-case."""

    retry: RetryOptions = RetryOptions()
