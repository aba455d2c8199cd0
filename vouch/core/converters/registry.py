# vouch/core/converters/registry.py
"""
Default converter registry: maps value types to converters.

The registry provides:
- Converter registration per type (register)
- Lookup walking the MRO, so subclasses share their base's converter
- Generic aliases (``list[int]``, ``dict[str, int]``, ``tuple[int, ...]``)
  resolved to sequence converters on the default tokenizer
- Enum types resolved to an ``EnumConverter``
- An ``UnsupportedConverter`` for anything else

Design principles:
- One process-wide default instance, lazily created
- Thread-safe (uses locks for registration); lookups are read-only
"""

from __future__ import annotations

import logging
import threading
import types
import typing
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Optional

from .base import Converter
from .sequence import ArrayConverter, CollectionConverter, MapConverter
from .simple import (
    BooleanConverter,
    DateConverter,
    DateTimeConverter,
    DecimalConverter,
    EnumConverter,
    FloatConverter,
    IntegerConverter,
    StringConverter,
    UnsupportedConverter,
)


logger = logging.getLogger(__name__)

_COLLECTION_TYPES = (list, set, frozenset)


class ConverterRegistry:
    """
    Type to converter mapping.

    Usage:
    ```python
    registry = ConverterRegistry()
    registry.register(Money, MoneyConverter())

    registry.get(int)               # IntegerConverter
    registry.get(list[int])         # CollectionConverter(IntegerConverter)
    registry.get(dict[str, int])    # MapConverter(StringConverter, IntegerConverter)
    ```
    """

    def __init__(self, with_defaults: bool = True):
        self._converters: Dict[Any, Converter] = {}
        self._lock = threading.Lock()
        if with_defaults:
            self._register_defaults()

    def _register_defaults(self) -> None:
        self.register(str, StringConverter())
        self.register(bool, BooleanConverter())
        self.register(int, IntegerConverter())
        self.register(float, FloatConverter())
        self.register(Decimal, DecimalConverter())
        self.register(datetime, DateTimeConverter())
        self.register(date, DateConverter())

    def register(self, value_type: Any, converter: Converter) -> None:
        """
        Register ``converter`` as the default for ``value_type``.

        A previous registration for the same type is replaced.
        """
        with self._lock:
            self._converters[value_type] = converter
        logger.debug("Registered converter %r for %r", converter, value_type)

    def unregister(self, value_type: Any) -> None:
        with self._lock:
            self._converters.pop(value_type, None)

    def has(self, value_type: Any) -> bool:
        """Check if a converter is registered for exactly ``value_type``"""
        return value_type in self._converters

    def get(self, value_type: Any) -> Converter:
        """
        Get the default converter for ``value_type``.

        Args:
            value_type: Plain class or generic alias

        Returns:
            Registered converter, a converter derived from the type shape,
            or an ``UnsupportedConverter``
        """
        registered = self._converters.get(value_type)
        if registered is not None:
            return registered

        origin = typing.get_origin(value_type)
        if origin is not None:
            return self._get_generic(value_type, origin)

        if isinstance(value_type, type):
            if issubclass(value_type, Enum):
                return EnumConverter(value_type)
            for base in value_type.__mro__:
                registered = self._converters.get(base)
                if registered is not None:
                    return registered
            if issubclass(value_type, dict):
                return MapConverter(self.get(object), self.get(object), value_type)
            if issubclass(value_type, tuple):
                return ArrayConverter(self.get(object))
            if issubclass(value_type, _COLLECTION_TYPES):
                return CollectionConverter(self.get(object), value_type)
        return UnsupportedConverter(value_type)

    def _get_generic(self, value_type: Any, origin: Any) -> Converter:
        args = typing.get_args(value_type)
        if origin is typing.Union or origin is types.UnionType:
            members = [arg for arg in args if arg is not type(None)]
            return self.get(members[0]) if len(members) == 1 else UnsupportedConverter(value_type)
        if isinstance(origin, type) and issubclass(origin, dict):
            key_type, item_type = args if len(args) == 2 else (object, object)
            return MapConverter(self.get(key_type), self.get(item_type), origin)
        if origin is tuple:
            item_type = args[0] if args else object
            return ArrayConverter(self.get(item_type))
        if origin in _COLLECTION_TYPES:
            item_type = args[0] if args else object
            return CollectionConverter(self.get(item_type), origin)
        return UnsupportedConverter(value_type)

    def count(self) -> int:
        return len(self._converters)

    def clear(self) -> None:
        """Clear all registrations (useful for testing)"""
        with self._lock:
            self._converters.clear()

    def __repr__(self) -> str:
        return f"ConverterRegistry(converters={len(self._converters)})"


# Global registry instance
_default_registry: Optional[ConverterRegistry] = None
_default_registry_lock = threading.Lock()


def get_default_registry() -> ConverterRegistry:
    """
    Get the process-wide default converter registry.

    The registry is lazily initialized on first access.
    """
    global _default_registry

    if _default_registry is None:
        with _default_registry_lock:
            if _default_registry is None:
                _default_registry = ConverterRegistry()

    return _default_registry


def set_default_registry(registry: ConverterRegistry) -> None:
    global _default_registry
    with _default_registry_lock:
        _default_registry = registry


def reset_default_registry() -> None:
    """Drop the default registry; the next access builds a fresh one"""
    global _default_registry
    with _default_registry_lock:
        _default_registry = None


__all__ = [
    "ConverterRegistry",
    "get_default_registry",
    "set_default_registry",
    "reset_default_registry",
]
