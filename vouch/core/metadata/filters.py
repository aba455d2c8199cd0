# vouch/core/metadata/filters.py
"""
Property filters select which properties an entity validation visits.

Filters are callables over ``PropertyMeta`` and combine with ``&``, ``|``
and ``~``.
"""

from __future__ import annotations

from typing import Tuple

from .entity import PropertyMeta


class PropertyFilter:
    def __call__(self, meta: PropertyMeta) -> bool:
        raise NotImplementedError

    def __and__(self, other: PropertyFilter) -> PropertyFilter:
        return And(self, other)

    def __or__(self, other: PropertyFilter) -> PropertyFilter:
        return Or(self, other)

    def __invert__(self) -> PropertyFilter:
        return Not(self)


class _All(PropertyFilter):
    def __call__(self, meta):
        return True

    def __repr__(self) -> str:
        return "ALL"


ALL = _All()


class NameSet(PropertyFilter):
    def __init__(self, *names: str):
        self.names = frozenset(names)

    def __call__(self, meta):
        return meta.name in self.names

    def __repr__(self) -> str:
        return f"NameSet({', '.join(sorted(self.names))})"


class NameStartsWith(PropertyFilter):
    def __init__(self, prefix: str):
        self.prefix = prefix

    def __call__(self, meta):
        return meta.name.startswith(self.prefix)


class NameEndsWith(PropertyFilter):
    def __init__(self, suffix: str):
        self.suffix = suffix

    def __call__(self, meta):
        return meta.name.endswith(self.suffix)


class Not(PropertyFilter):
    def __init__(self, inner: PropertyFilter):
        self.inner = inner

    def __call__(self, meta):
        return not self.inner(meta)


class And(PropertyFilter):
    def __init__(self, *filters: PropertyFilter):
        self.filters: Tuple[PropertyFilter, ...] = tuple(filters)

    def __call__(self, meta):
        return all(f(meta) for f in self.filters)


class Or(PropertyFilter):
    def __init__(self, *filters: PropertyFilter):
        self.filters: Tuple[PropertyFilter, ...] = tuple(filters)

    def __call__(self, meta):
        return any(f(meta) for f in self.filters)


__all__ = [
    "PropertyFilter",
    "ALL",
    "NameSet",
    "NameStartsWith",
    "NameEndsWith",
    "Not",
    "And",
    "Or",
]
