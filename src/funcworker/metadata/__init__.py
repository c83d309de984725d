"""Function metadata persistence."""

from .retry import write_metadata_with_retry, write_metadata_with_retry_async
from .writer import (
    METADATA_FILENAME,
    read_metadata,
    resolve_metadata_path,
    serialize_metadata,
    write_metadata,
)

__all__ = [
    "METADATA_FILENAME",
    "read_metadata",
    "resolve_metadata_path",
    "serialize_metadata",
    "write_metadata",
    "write_metadata_with_retry",
    "write_metadata_with_retry_async",
]
