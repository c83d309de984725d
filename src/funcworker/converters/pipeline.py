"""Ordered converter chain and function argument binding."""

from __future__ import annotations

import inspect
import logging
import typing
from collections.abc import Callable, Iterable, Mapping
from typing import Any

from funcworker.converters.base import Converter
from funcworker.converters.context import ConverterContext, TargetType
from funcworker.converters.results import UNHANDLED, ConversionResult, Failed, Succeeded
from funcworker.errors import ConversionError, UnconvertibleParameterError

logger = logging.getLogger(__name__)


class ConversionPipeline:
    """Offer each conversion request to converters in a fixed order.

    The first result other than ``Unhandled`` wins; later converters are not
    consulted.
    """

    def __init__(self, converters: Iterable[Converter]) -> None:
        self._converters: tuple[Converter, ...] = tuple(converters)

    @property
    def converters(self) -> tuple[Converter, ...]:
        return self._converters

    def convert(self, context: ConverterContext) -> ConversionResult:
        """Run the chain for one context.

        Parameters
        ----------
        context : ConverterContext
            Conversion request.

        Returns
        -------
        ConversionResult
            The deciding converter's result, or ``Unhandled`` when every
            converter declined.
        """
        for converter in self._converters:
            result = converter.convert(context)
            if not isinstance(result, (Succeeded, Failed)):
                continue
            logger.debug(
                "converter %r returned %s for target %s",
                converter.name,
                result.status.value,
                context.target_type.name,
            )
            return result
        return UNHANDLED

    def convert_value(
        self,
        source: Any,
        target: TargetType | object,
        properties: Mapping[str, Any] | None = None,
    ) -> Any:
        """Convert ``source`` into ``target`` or raise.

        Parameters
        ----------
        source : Any
            Raw external value.
        target : TargetType | object
            Target descriptor or a type annotation.
        properties : Mapping[str, Any] | None, default=None
            Ambient properties made available to converters.

        Returns
        -------
        Any
            Converted value.

        Raises
        ------
        ConversionError
            If a converter reported ``Failed``.
        UnconvertibleParameterError
            If every converter declined.
        """
        context = ConverterContext.create(source, target, properties)
        result = self.convert(context)
        label = _describe(context)
        match result:
            case Succeeded(value=value):
                return value
            case Failed(error=error):
                raise ConversionError(f"Failed to convert {label}: {error}") from error
            case _:
                raise UnconvertibleParameterError(
                    f"No converter could convert {label}."
                )

    def bind_arguments(
        self,
        func: Callable[..., Any],
        raw_inputs: Mapping[str, Any],
        properties: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Convert raw inputs into the parameter types ``func`` declares.

        Parameters
        ----------
        func : Callable[..., Any]
            Function whose annotated parameters receive the values.
        raw_inputs : Mapping[str, Any]
            Raw values keyed by parameter name. Unknown keys are ignored.
        properties : Mapping[str, Any] | None, default=None
            Extra ambient properties shared by every parameter context.

        Returns
        -------
        dict[str, Any]
            Keyword arguments ready to call ``func`` with.

        Raises
        ------
        ConversionError
            If a parameter fails to convert or a required one is missing.
        """
        signature = inspect.signature(func)
        hints = typing.get_type_hints(func)
        bound: dict[str, Any] = {}
        for name, parameter in signature.parameters.items():
            if parameter.kind in (parameter.VAR_POSITIONAL, parameter.VAR_KEYWORD):
                continue
            target = TargetType.from_annotation(hints.get(name, object))
            if name not in raw_inputs:
                if parameter.default is not parameter.empty:
                    bound[name] = parameter.default
                    continue
                if target.optional:
                    bound[name] = None
                    continue
                raise UnconvertibleParameterError(
                    f"Missing value for required parameter '{name}'."
                )

            source = raw_inputs[name]
            if source is None and target.optional:
                bound[name] = None
                continue
            context_properties = dict(properties or {})
            context_properties["parameter_name"] = name
            bound[name] = self.convert_value(source, target, context_properties)
        return bound


def _describe(context: ConverterContext) -> str:
    parameter = context.properties.get("parameter_name")
    prefix = f"parameter '{parameter}' " if parameter else "value "
    return f"{prefix}{context.source!r} to {context.target_type.name}"
