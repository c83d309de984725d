"""Application-layer result objects."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class GenerationResult:
    """Structured metadata generation outcome."""

    output_path: Path
    module_path: Path
    function_count: int
    attempts: int = 1
