# vouch/core/targets.py
"""
Validation targets.

A target names which part of a (possibly composite) value a component applies
to. Components never receive the target as a parameter: they read it from the
validation context, so nested composites compose without special-casing.
"""

from __future__ import annotations

import collections.abc
import typing
from enum import Enum
from typing import Any


class Target(str, Enum):
    """Part of a value a validation component applies to"""
    VALUE = "value"        # the whole value
    PROPERTY = "property"  # the value as a property of its entity (sibling access)
    KEYS = "keys"          # mapping keys
    ELEMENTS = "elements"  # mapping values / collection and array elements

    def __str__(self) -> str:
        return self.value

    @property
    def is_composite(self) -> bool:
        """Whether the target addresses a part of a composite value"""
        return self in (Target.KEYS, Target.ELEMENTS)


def _origin(carrier_type: Any) -> Any:
    origin = typing.get_origin(carrier_type)
    return origin if origin is not None else carrier_type


def has_keys(carrier_type: Any) -> bool:
    """Check whether values of ``carrier_type`` expose keys"""
    origin = _origin(carrier_type)
    return isinstance(origin, type) and issubclass(origin, collections.abc.Mapping)


def has_elements(carrier_type: Any) -> bool:
    """Check whether values of ``carrier_type`` expose elements"""
    origin = _origin(carrier_type)
    if not isinstance(origin, type) or issubclass(origin, (str, bytes, bytearray)):
        return False
    return issubclass(origin, (collections.abc.Mapping, collections.abc.Collection))


def supports_target(target: Target, carrier_type: Any) -> bool:
    """Check whether ``target`` is legal for values of ``carrier_type``"""
    if target is Target.KEYS:
        return has_keys(carrier_type)
    if target is Target.ELEMENTS:
        return has_elements(carrier_type)
    return True


__all__ = ["Target", "has_keys", "has_elements", "supports_target"]
