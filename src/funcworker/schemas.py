"""Pydantic schemas for function metadata records and validated configuration."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class _MetadataModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class BindingMetadata(_MetadataModel):
    """Single trigger/input/output binding of a function.

    Binding-specific settings (connection names, paths, schedules) are kept as
    extra fields and written through unchanged.
    """

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="allow"
    )

    name: str = Field(min_length=1)
    type: str = Field(min_length=1)
    direction: Literal["In", "Out", "InOut"] = "In"
    data_type: str | None = None
    cardinality: Literal["One", "Many"] | None = None


class RetryMetadata(_MetadataModel):
    """Function-level retry policy declared on the function."""

    strategy: Literal["fixedDelay", "exponentialBackoff"]
    max_retry_count: int = Field(ge=-1)
    delay_interval: str | None = None
    minimum_interval: str | None = None
    maximum_interval: str | None = None


class FunctionMetadata(_MetadataModel):
    """Metadata record describing one externally invoked function."""

    name: str = Field(min_length=1)
    entry_point: str = Field(min_length=1)
    script_file: str
    language: str = "python"
    is_proxy: bool = False
    bindings: list[BindingMetadata] = Field(default_factory=list)
    retry: RetryMetadata | None = None
    properties: dict[str, Any] = Field(default_factory=dict)

    @field_validator("bindings")
    @classmethod
    def _validate_unique_bindings(
        cls, value: list[BindingMetadata]
    ) -> list[BindingMetadata]:
        names = [binding.name for binding in value]
        if len(names) != len(set(names)):
            raise ValueError("binding names must be unique within a function.")
        return value


class RetryConfig(BaseModel):
    """Validated settings for the retrying metadata writer."""

    model_config = ConfigDict(extra="forbid")

    max_attempts: int = Field(default=10, ge=1)
    delay_seconds: float = Field(default=1.0, ge=0.0)


class GenerationConfig(BaseModel):
    """Validated input for the metadata generation use-case."""

    model_config = ConfigDict(extra="forbid")

    module_path: str = Field(min_length=1)
    output_path: str = Field(min_length=1)
    retry: RetryConfig = Field(default_factory=RetryConfig)
