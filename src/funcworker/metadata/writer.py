"""JSON persistence for function metadata documents."""

from __future__ import annotations

import json
import os
import tempfile
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from pydantic import BaseModel, TypeAdapter

from funcworker.schemas import FunctionMetadata
from funcworker.types import MetadataRecord, PathLike

METADATA_FILENAME = "functions.metadata"

_DOCUMENT_ADAPTER = TypeAdapter(list[FunctionMetadata])


def _record_payload(record: MetadataRecord) -> dict[str, Any]:
    if isinstance(record, BaseModel):
        return record.model_dump(mode="json", by_alias=True, exclude_none=True)
    if isinstance(record, Mapping):
        return dict(record)
    raise TypeError(
        f"Metadata records must be pydantic models or mappings, got {type(record).__name__}."
    )


def serialize_metadata(functions: Iterable[MetadataRecord]) -> str:
    """Serialize metadata records into the document text.

    Raises
    ------
    TypeError, ValueError
        If a record is not serializable.
    """
    payload = [_record_payload(record) for record in functions]
    return json.dumps(payload, indent=2, ensure_ascii=False, allow_nan=False) + "\n"


def resolve_metadata_path(path: PathLike) -> Path:
    """Return the document path, appending ``functions.metadata`` to directories."""
    resolved = Path(path)
    if resolved.is_dir():
        return resolved / METADATA_FILENAME
    return resolved


def write_metadata(functions: Iterable[MetadataRecord], output_path: PathLike) -> Path:
    """Write the metadata document, replacing the destination atomically.

    The document is serialized before anything touches disk, then written to a
    temporary sibling file and moved over ``output_path``. Readers see either
    the previous document or the complete new one.

    Parameters
    ----------
    functions : Iterable[MetadataRecord]
        Ordered metadata records.
    output_path : PathLike
        Destination file, or a directory that receives ``functions.metadata``.

    Returns
    -------
    Path
        Path of the written document.
    """
    text = serialize_metadata(functions)
    destination = resolve_metadata_path(output_path)
    destination.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(
        prefix=f".{destination.name}.", suffix=".tmp", dir=destination.parent
    )
    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(text)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(tmp_path, destination)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise
    return destination


def read_metadata(path: PathLike) -> list[FunctionMetadata]:
    """Load a metadata document written by ``write_metadata``."""
    source = resolve_metadata_path(path)
    return _DOCUMENT_ADAPTER.validate_json(source.read_bytes())
