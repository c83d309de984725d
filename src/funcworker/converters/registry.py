"""Converter registry and discovery helpers."""

from __future__ import annotations

import importlib
import importlib.util
from collections.abc import Iterable
from pathlib import Path
from types import ModuleType

from funcworker.converters.base import Converter
from funcworker.converters.builtins import JsonConverter, TypeConverter
from funcworker.converters.parse import ParseConverter
from funcworker.converters.pipeline import ConversionPipeline
from funcworker.errors import ConverterRegistryError


class ConverterRegistry:
    """Ordered registry of input converters.

    Registration order is conversion priority: a converter registered earlier
    always gets first refusal.
    """

    def __init__(self) -> None:
        self._converters: dict[str, Converter] = {}

    def register(self, converter: Converter) -> None:
        """Register converter instance by unique name.

        Re-registering an existing name replaces the converter but keeps its
        position in the chain.

        Parameters
        ----------
        converter : Converter
            Converter instance to register.

        Raises
        ------
        ConverterRegistryError
            If the converter has no usable name or no ``convert`` method.
        """
        name = getattr(converter, "name", "").strip()
        if not name:
            raise ConverterRegistryError("Converter must define a non-empty 'name'.")
        if not callable(getattr(converter, "convert", None)):
            raise ConverterRegistryError(
                f"Converter '{name}' must implement convert(context)."
            )
        self._converters[name] = converter

    def names(self) -> list[str]:
        """Return registered converter names in priority order."""
        return list(self._converters)

    def get(self, name: str) -> Converter:
        """Get converter by name.

        Raises
        ------
        ConverterRegistryError
            If converter name is not registered.
        """
        try:
            return self._converters[name]
        except KeyError as exc:
            raise ConverterRegistryError(
                f"Unknown converter '{name}'. Available converters: {', '.join(self.names())}"
            ) from exc

    def pipeline(self) -> ConversionPipeline:
        """Snapshot the current registration order into a pipeline."""
        return ConversionPipeline(self._converters.values())

    def load_module(self, module_or_path: str) -> None:
        """Import a converter module and append its converters to the chain.

        The module's top-level code runs on import.

        Parameters
        ----------
        module_or_path : str
            Dotted module name or path to a ``.py`` file.
        """
        module = _import_module_or_path(module_or_path)
        _register_from_module(module, self)


def _import_module_or_path(module_or_path: str) -> ModuleType:
    """Import a converter module from a ``.py`` file or a dotted module name.

    An existing filesystem path wins over a module of the same name, so a
    function project can ship converters next to its sources without
    installing them.

    Raises
    ------
    ConverterRegistryError
        If the file cannot be loaded or the module cannot be imported.
    """
    candidate = Path(module_or_path)
    if not candidate.exists():
        try:
            return importlib.import_module(module_or_path)
        except Exception as exc:
            raise ConverterRegistryError(
                f"Unable to import converter module '{module_or_path}': {exc}"
            ) from exc

    spec = importlib.util.spec_from_file_location(candidate.stem, candidate)
    if spec is None or spec.loader is None:
        raise ConverterRegistryError(f"Unable to load converter module from {candidate}.")
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def _register_from_module(module: ModuleType, registry: ConverterRegistry) -> None:
    """Append the converters a module provides to ``registry``.

    A ``register_converters(registry)`` hook takes precedence. Otherwise the
    module lists its converters in ``CONVERTERS`` or exposes a single one as
    ``CONVERTER``; either way they join the chain in declaration order.
    """
    hook = getattr(module, "register_converters", None)
    if hook is not None:
        hook(registry)
        return

    converters = getattr(module, "CONVERTERS", None)
    if converters is None and getattr(module, "CONVERTER", None) is not None:
        converters = [module.CONVERTER]
    if converters is None:
        raise ConverterRegistryError(
            "Converter module must expose register_converters(registry), CONVERTERS, or CONVERTER."
        )
    for converter in converters:
        registry.register(converter)


def create_default_registry(
    extra_modules: Iterable[str] | None = None,
) -> ConverterRegistry:
    """Create registry with the built-in chain.

    Parameters
    ----------
    extra_modules : Iterable[str] | None, optional
        Additional converter modules; their converters run after the built-ins.

    Returns
    -------
    ConverterRegistry
        Registry holding ``type``, ``parse`` and ``json`` converters, in that
        order, followed by any external converters.
    """
    registry = ConverterRegistry()
    registry.register(TypeConverter())
    registry.register(ParseConverter())
    registry.register(JsonConverter())
    for module in extra_modules or []:
        registry.load_module(module)
    return registry
