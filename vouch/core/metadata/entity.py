# vouch/core/metadata/entity.py
"""
Entity metadata: ordered property descriptors plus an entity-level constraint.

Two access styles are supported:
- ObjectMeta: properties are attributes of plain objects (dataclasses etc.)
- MappingMeta: properties are keys of dict entities
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional, Sequence

from ...errors import DeclarationError, UnknownPropertyError
from ..constraints.base import Constraint
from ..converters.base import Converter


@dataclass(frozen=True)
class PropertyMeta:
    """Descriptor of one entity property"""
    name: str
    value_type: Any
    converter: Converter
    constraint: Optional[Constraint] = None
    default: Any = None
    readable: bool = True
    writable: bool = True
    mapping: bool = False

    def get_value(self, entity: Any) -> Any:
        if self.mapping:
            return entity.get(self.name)
        return getattr(entity, self.name, None)

    def set_value(self, entity: Any, value: Any) -> None:
        """Store ``value``; ``None`` stores the declared default"""
        if value is None:
            value = self.default
        if self.mapping:
            entity[self.name] = value
        else:
            setattr(entity, self.name, value)


class EntityMeta:
    """Ordered set of property descriptors for one entity type"""

    mapping: bool = False

    def __init__(
        self,
        entity_type: Any,
        properties: Sequence[PropertyMeta] = (),
        constraint: Optional[Constraint] = None,
    ):
        self.entity_type = entity_type
        self.constraint = constraint
        self._properties: Dict[str, PropertyMeta] = {}
        for meta in properties:
            if meta.name in self._properties:
                raise DeclarationError.invalid(
                    f"Duplicate property '{meta.name}'", entity_type=repr(entity_type)
                )
            self._properties[meta.name] = meta

    @property
    def property_names(self) -> List[str]:
        return list(self._properties)

    @property
    def properties(self) -> List[PropertyMeta]:
        return list(self._properties.values())

    def has_property(self, name: str) -> bool:
        return name in self._properties

    def get_property(self, name: str) -> PropertyMeta:
        """
        Raises:
            UnknownPropertyError: If ``name`` is not declared
        """
        meta = self._properties.get(name)
        if meta is None:
            raise UnknownPropertyError.for_property(self.entity_type, name)
        return meta

    def __iter__(self) -> Iterator[PropertyMeta]:
        return iter(self._properties.values())

    def __len__(self) -> int:
        return len(self._properties)

    def __repr__(self) -> str:
        name = getattr(self.entity_type, "__name__", self.entity_type)
        return f"{type(self).__name__}({name}, properties={self.property_names})"


class ObjectMeta(EntityMeta):
    """Metadata for attribute-access entities"""


class MappingMeta(EntityMeta):
    """Metadata for dict entities"""

    mapping = True

    def __init__(
        self,
        properties: Sequence[PropertyMeta] = (),
        constraint: Optional[Constraint] = None,
        entity_type: Any = dict,
    ):
        super().__init__(entity_type, properties, constraint)


__all__ = ["PropertyMeta", "EntityMeta", "ObjectMeta", "MappingMeta"]
