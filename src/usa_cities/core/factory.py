"""Name-keyed registries for parsers and table sources.

Built-in implementations are listed as ``"module:Class"`` import paths and
imported the first time they are asked for, so naming a table source in
configuration does not import every parser and source up front. Names are
case-insensitive and ``-`` and ``_`` are interchangeable, so the
``USA_CITIES_MODE`` value ``on-demand`` resolves like ``on_demand``.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from importlib import import_module
from typing import Any, ClassVar, Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


def normalize_name(name: str) -> str:
    """Canonical registry key for a plugin name."""
    return name.strip().lower().replace("-", "_")


class PluginFactory(Generic[T]):
    """Create plugin instances by name.

    Subclasses declare:
        - _builtins: Mapping of name to ``"module:Class"`` import path
        - _default_type: Name used when create() gets no name
        - _entity_name: Human-readable name for error messages

    Each subclass gets its own registry of user-registered classes.
    Registered classes take precedence over built-ins of the same name, so
    unregistering an override brings the built-in back.

    Example subclass:
        class ParserFactory(PluginFactory[RecordParserProtocol]):
            _builtins = {"delimited": "usa_cities.parsers.delimited:DelimitedParser"}
            _default_type = "delimited"
            _entity_name = "parser"
    """

    _builtins: ClassVar[Mapping[str, str]] = {}
    _registry: ClassVar[dict[str, type[Any]]] = {}
    _default_type: ClassVar[str]
    _entity_name: ClassVar[str] = "plugin"

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        cls._registry = {}

    @classmethod
    def register(cls, name: str, impl_class: type[T], *, replace: bool = False) -> None:
        """Register an implementation under a name.

        Args:
            name: Name the implementation is created by.
            impl_class: Class implementing the protocol.
            replace: Allow overriding an existing name, built-ins included.

        Raises:
            TypeError: If impl_class is not a class.
            ValueError: If the name is empty, or already taken and replace
                is False.
        """
        key = normalize_name(name)
        if not key:
            raise ValueError(f"{cls._entity_name} name must not be empty")
        if not isinstance(impl_class, type):
            raise TypeError(f"{cls._entity_name} implementation must be a class: {impl_class!r}")
        if not replace and cls.is_registered(key):
            raise ValueError(f"{cls._entity_name} type already registered: {key}")
        cls._registry[key] = impl_class
        logger.debug("Registered %s type %s -> %s", cls._entity_name, key, impl_class.__name__)

    @classmethod
    def unregister(cls, name: str) -> None:
        """Remove a registered implementation, if present.

        Built-ins cannot be removed; unregistering an override of a
        built-in restores the built-in.
        """
        cls._registry.pop(normalize_name(name), None)

    @classmethod
    def is_registered(cls, name: str) -> bool:
        """Check whether a name resolves to an implementation."""
        key = normalize_name(name)
        return key in cls._registry or key in cls._builtins

    @classmethod
    def resolve(cls, name: str | None = None) -> type[T]:
        """Look up the class registered under a name.

        Args:
            name: Registered name. If None, uses the default type.

        Returns:
            Implementation class.

        Raises:
            ValueError: If the name is not registered.
        """
        key = normalize_name(name if name is not None else cls._default_type)
        if key in cls._registry:
            return cls._registry[key]
        if key in cls._builtins:
            module_name, _, class_name = cls._builtins[key].partition(":")
            impl_class: type[T] = getattr(import_module(module_name), class_name)
            return impl_class
        raise ValueError(
            f"Unknown {cls._entity_name} type: {key}. "
            f"Available types: {', '.join(cls.available_types())}"
        )

    @classmethod
    def create(cls, name: str | None = None, **kwargs: Any) -> T:
        """Create an instance of the named implementation.

        Args:
            name: Registered name. If None, uses the default type.
            **kwargs: Arguments passed to the constructor.

        Returns:
            New instance of the requested implementation.

        Raises:
            ValueError: If the name is not registered.
        """
        return cls.resolve(name)(**kwargs)

    @classmethod
    def available_types(cls) -> list[str]:
        """List built-in and registered names, sorted."""
        return sorted(set(cls._builtins) | set(cls._registry))

    @classmethod
    def clear_registry(cls) -> None:
        """Drop every registered class, leaving only the built-ins."""
        cls._registry.clear()
