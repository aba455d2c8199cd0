# vouch/core/metadata/__init__.py
"""
Entity metadata provider: property descriptors, builders and filters.
"""

from .entity import EntityMeta, MappingMeta, ObjectMeta, PropertyMeta
from .builder import EntityMetaBuilder, MappingMetaBuilder
from .filters import (
    ALL,
    And,
    NameEndsWith,
    NameSet,
    NameStartsWith,
    Not,
    Or,
    PropertyFilter,
)

__all__ = [
    "PropertyMeta",
    "EntityMeta",
    "ObjectMeta",
    "MappingMeta",
    "EntityMetaBuilder",
    "MappingMetaBuilder",
    "PropertyFilter",
    "ALL",
    "NameSet",
    "NameStartsWith",
    "NameEndsWith",
    "Not",
    "And",
    "Or",
]
