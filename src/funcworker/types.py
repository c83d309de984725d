"""Shared type aliases used across converter and metadata modules."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any

from pydantic import BaseModel

type PropertyMap = Mapping[str, Any]
type MetadataRecord = BaseModel | Mapping[str, Any]
type PathLike = str | Path
type SleepFn = Callable[[float], None]
