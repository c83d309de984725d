"""Application ports for the metadata generation boundary."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import Protocol

from funcworker.types import MetadataRecord, PathLike


class MetadataGenerator(Protocol):
    """Discover functions in a compiled module and describe them."""

    def generate(self, module_path: Path) -> Iterable[MetadataRecord]:
        """Return ordered metadata records, raising on unrecoverable errors."""


class MetadataWriter(Protocol):
    """Serialize and persist metadata records in a single attempt."""

    def __call__(
        self, functions: Iterable[MetadataRecord], output_path: PathLike
    ) -> Path | None:
        """Write the document or raise ``OSError`` on I/O failure."""
