# vouch/core/engine.py
"""
Validation engine: validators, context builders and the validator factory.

Flow:
    ValidatorFactory -> Validator (one per entity metadata)
                     -> ContextBuilder (per call: locale, groups, filter, flags)
                     -> terminal operation (validate_entity, decode_value, ...)

Every terminal operation builds a fresh ``ValidationContext``, runs, and
either returns a value or raises one ``ValidationFailure`` aggregating the
violations of the call. Declaration problems (unknown property names) raise
``VouchError`` subclasses instead.

Design principles:
- Collect by default, fail fast on request
- A nested entity is validated in a child context; its failure is a cascade
- Corrections are written back only when the value actually changed
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Union

from ..config import VouchSettings, load_settings
from ..errors import UnknownPropertyError
from .context import ValidationContext
from .converters.base import Converter
from .message.builder import DEFAULT_MESSAGE_BUILDER, MessageBuilder
from .message.resolvers import MessageResolver, MessageResolverChain, YamlMessageResolver, chain_resolvers
from .metadata.entity import EntityMeta, PropertyMeta
from .targets import Target
from .violations import ConstraintViolation, MalformedValue


logger = logging.getLogger(__name__)

DEFAULT_GROUP = ""

ConverterRef = Union[str, Converter]


class Validator:
    """
    Validation and conversion operations for one entity type.

    The shortcut methods build a context with default call parameters; use
    ``new_context()`` to set locale, groups, filter or flags explicitly.
    """

    def __init__(self, factory: ValidatorFactory, meta: Optional[EntityMeta] = None):
        self.factory = factory
        self.meta = meta

    @property
    def entity_type(self) -> Any:
        return self.meta.entity_type if self.meta is not None else None

    def new_context(self, parent: Optional[ValidationContext] = None) -> ContextBuilder:
        """Context builder for one call; a parent makes it a cascade child"""
        return ContextBuilder(self, parent)

    # Shortcuts

    def validate_entity(self, entity: Any, *groups: str) -> Any:
        return self.new_context().groups(*groups).validate_entity(entity)

    def validate_property(self, entity: Any, name: str, *groups: str) -> Any:
        return self.new_context().groups(*groups).validate_property(entity, name)

    def validate_value(self, name: str, value: Any, *groups: str) -> Any:
        return self.new_context().groups(*groups).validate_value(name, value)

    def get_value(self, entity: Any, name: str) -> Any:
        _require_entity(entity)
        return self.get_property(name).get_value(entity)

    def set_value(self, entity: Any, name: str, value: Any) -> None:
        _require_entity(entity)
        meta = self.get_property(name)
        if not meta.writable:
            raise ValueError(f"Property '{name}' is read-only")
        meta.set_value(entity, value)

    def get_values(self, entity: Any) -> Dict[str, Any]:
        _require_entity(entity)
        return {meta.name: meta.get_value(entity) for meta in self._properties() if meta.readable}

    def set_values(self, entity: Any, values: Mapping[str, Any]) -> None:
        _require_entity(entity)
        for name, value in values.items():
            self.set_value(entity, name, value)

    def get_encoded_value(self, entity: Any, name: str) -> str:
        return self.new_context().localized_convert(False).get_encoded_value(entity, name)

    def set_encoded_value(self, entity: Any, name: str, text: Optional[str]) -> None:
        self.new_context().localized_convert(False).set_encoded_value(entity, name, text)

    def get_encoded_values(self, entity: Any) -> Dict[str, str]:
        return self.new_context().localized_convert(False).get_encoded_values(entity)

    def set_encoded_values(self, entity: Any, texts: Mapping[str, Optional[str]]) -> None:
        self.new_context().localized_convert(False).set_encoded_values(entity, texts)

    def get_localized_value(self, entity: Any, name: str) -> str:
        return self.new_context().localized_convert(True).get_encoded_value(entity, name)

    def set_localized_value(self, entity: Any, name: str, text: Optional[str]) -> None:
        self.new_context().localized_convert(True).set_encoded_value(entity, name, text)

    def get_localized_values(self, entity: Any) -> Dict[str, str]:
        return self.new_context().localized_convert(True).get_encoded_values(entity)

    def set_localized_values(self, entity: Any, texts: Mapping[str, Optional[str]]) -> None:
        self.new_context().localized_convert(True).set_encoded_values(entity, texts)

    # Metadata

    def get_property(self, name: str) -> PropertyMeta:
        """
        Raises:
            UnknownPropertyError: If the entity does not declare ``name``
        """
        if self.meta is None:
            raise UnknownPropertyError.for_property(None, name)
        return self.meta.get_property(name)

    def _properties(self) -> List[PropertyMeta]:
        return self.meta.properties if self.meta is not None else []

    # Operations on a built context

    def _validate_entity(self, context: ValidationContext, entity: Any) -> Any:
        if entity is None:
            return None
        context.current_entity = entity
        for meta in self._properties():
            if meta.readable and context.accepts_property(meta):
                self._validate_property(context, entity, meta)
        context.element_meta = None

        constraint = self.meta.constraint if self.meta is not None else None
        if constraint is not None:
            try:
                constraint.validate(entity, context)
            except ConstraintViolation as violation:
                context.add_violation(violation)

        logger.debug("Validated %s: %d violation(s)", context, len(context.violations))
        context.raise_if_violated()
        return entity

    def _validate_property(self, context: ValidationContext, entity: Any, meta: PropertyMeta) -> Any:
        context.current_entity = entity
        context.element_meta = meta
        value = meta.get_value(entity)
        if meta.constraint is None:
            return value
        with context.scoped(target=Target.PROPERTY, index=None):
            try:
                corrected = meta.constraint.validate(value, context)
            except ConstraintViolation as violation:
                context.add_violation(violation)
                return value
        if meta.writable and _changed(value, corrected):
            meta.set_value(entity, corrected)
        return corrected

    def _validate_value(self, context: ValidationContext, meta: PropertyMeta, value: Any) -> Any:
        context.element_meta = meta
        if meta.constraint is None:
            return value
        try:
            return meta.constraint.validate(value, context)
        except ConstraintViolation as violation:
            context.add_violation(violation)
            return value

    def _converter(self, context: ValidationContext, ref: ConverterRef) -> Converter:
        if isinstance(ref, Converter):
            return ref
        meta = self.get_property(ref)
        context.element_meta = meta
        return meta.converter

    def _decode(self, context: ValidationContext, ref: ConverterRef, text: Optional[str]) -> Any:
        converter = self._converter(context, ref)
        try:
            return True, converter.decode(text, context)
        except MalformedValue as violation:
            context.add_violation(violation)
            return False, None

    def __repr__(self) -> str:
        return f"Validator({self.meta!r})"


class ContextBuilder:
    """
    Fluent per-call parameters plus the terminal operations.

    A child builder (created with a parent context) inherits locale, groups,
    localized convert and fail fast from the parent.
    """

    def __init__(self, validator: Validator, parent: Optional[ValidationContext] = None):
        self.validator = validator
        self.parent = parent
        self._property_filter: Optional[Callable[[PropertyMeta], bool]] = None
        if parent is not None:
            self._locale: Any = parent.locale
            self._groups = parent.groups
            self._localized_convert = parent.localized_convert
            self._fail_fast = parent.fail_fast
        else:
            settings = validator.factory.settings
            self._locale = settings.locale
            self._groups = ()
            self._localized_convert = settings.localized_convert
            self._fail_fast = settings.fail_fast

    # Parameters

    def locale(self, locale: Any) -> ContextBuilder:
        self._locale = locale
        return self

    def property_filter(self, property_filter: Optional[Callable[[PropertyMeta], bool]]) -> ContextBuilder:
        self._property_filter = property_filter
        return self

    def groups(self, *groups: str) -> ContextBuilder:
        self._groups = tuple(groups)
        return self

    def localized_convert(self, flag: bool = True) -> ContextBuilder:
        self._localized_convert = flag
        return self

    def fail_fast(self, flag: bool = True) -> ContextBuilder:
        self._fail_fast = flag
        return self

    def build(self) -> ValidationContext:
        return ValidationContext(
            self.validator,
            parent=self.parent,
            locale=self._locale,
            property_filter=self._property_filter,
            groups=self._groups,
            localized_convert=self._localized_convert,
            fail_fast=self._fail_fast,
        )

    # Validation

    def validate_entity(self, entity: Any) -> Any:
        """
        Validate every readable, filter-accepted property, then the entity
        constraint. Corrections are written back to ``entity``.

        Raises:
            ValidationFailure: All violations of the entity
        """
        return self.validator._validate_entity(self.build(), entity)

    def validate_property(self, entity: Any, name: str) -> Any:
        """Validate one property; returns the (possibly corrected) value"""
        _require_entity(entity)
        meta = self.validator.get_property(name)
        context = self.build()
        value = self.validator._validate_property(context, entity, meta)
        context.raise_if_violated()
        return value

    def validate_value(self, name: str, value: Any) -> Any:
        """Validate a detached value against a property's constraint"""
        meta = self.validator.get_property(name)
        context = self.build()
        value = self.validator._validate_value(context, meta, value)
        context.raise_if_violated()
        return value

    # Data access

    def get_value(self, entity: Any, name: str) -> Any:
        return self.validator.get_value(entity, name)

    def set_value(self, entity: Any, name: str, value: Any) -> None:
        self.validator.set_value(entity, name, value)

    def get_values(self, entity: Any) -> Dict[str, Any]:
        return self.validator.get_values(entity)

    def set_values(self, entity: Any, values: Mapping[str, Any]) -> None:
        self.validator.set_values(entity, values)

    # Conversion

    def encode_value(self, ref: ConverterRef, value: Any) -> str:
        """Encode ``value`` with a property's converter (by name) or a converter"""
        context = self.build()
        return self.validator._converter(context, ref).encode(value, context)

    def decode_value(self, ref: ConverterRef, text: Optional[str]) -> Any:
        """
        Decode ``text`` with a property's converter (by name) or a converter.

        Raises:
            ValidationFailure: Wrapping the ``MalformedValue``
        """
        context = self.build()
        _, value = self.validator._decode(context, ref, text)
        context.raise_if_violated()
        return value

    def encode_values(self, values: Mapping[str, Any]) -> Dict[str, str]:
        context = self.build()
        return {
            name: self.validator._converter(context, name).encode(value, context)
            for name, value in values.items()
        }

    def decode_values(self, texts: Mapping[str, Optional[str]]) -> Dict[str, Any]:
        """Decode every text; malformed ones are aggregated into one failure"""
        context = self.build()
        values = {}
        for name, text in texts.items():
            ok, value = self.validator._decode(context, name, text)
            if ok:
                values[name] = value
        context.raise_if_violated()
        return values

    def get_encoded_value(self, entity: Any, name: str) -> str:
        return self.encode_value(name, self.validator.get_value(entity, name))

    def set_encoded_value(self, entity: Any, name: str, text: Optional[str]) -> None:
        _require_entity(entity)
        self.validator.set_value(entity, name, self.decode_value(name, text))

    def get_encoded_values(self, entity: Any) -> Dict[str, str]:
        return self.encode_values(self.validator.get_values(entity))

    def set_encoded_values(self, entity: Any, texts: Mapping[str, Optional[str]]) -> None:
        """
        Decode and set every value; well-formed values are set even when
        others are malformed.

        Raises:
            ValidationFailure: One aggregate of every ``MalformedValue``
        """
        _require_entity(entity)
        context = self.build()
        context.current_entity = entity
        for name, text in texts.items():
            ok, value = self.validator._decode(context, name, text)
            if ok:
                self.validator.set_value(entity, name, value)
        context.raise_if_violated()


class ValidatorFactory:
    """
    Creates and caches validators; owns the message machinery and settings.

    Usage:
    ```python
    factory = ValidatorFactory(resolvers=[DictMessageResolver({"de": {...}})])
    validator = factory.get_validator(person_meta)
    validator.new_context().locale("de").fail_fast().validate_entity(person)
    ```
    """

    def __init__(
        self,
        settings: Optional[VouchSettings] = None,
        resolvers: Iterable[MessageResolver] = (),
        message_builder: Optional[MessageBuilder] = None,
    ):
        self.settings = settings or VouchSettings.default()
        bundles = [YamlMessageResolver(path) for path in self.settings.message_bundles]
        self.message_resolver: MessageResolverChain = chain_resolvers([*resolvers, *bundles])
        self.message_builder = message_builder or DEFAULT_MESSAGE_BUILDER
        self._validators: Dict[Any, Validator] = {}
        self._lock = threading.Lock()

    def get_validator(self, meta: Optional[EntityMeta] = None) -> Validator:
        """Cached validator for ``meta``; without metadata, a plain value validator"""
        validator = self._validators.get(meta)
        if validator is not None:
            return validator
        with self._lock:
            validator = self._validators.get(meta)
            if validator is None:
                validator = Validator(self, meta)
                self._validators[meta] = validator
                logger.debug("Created validator for %r", meta)
        return validator

    def new_context(self) -> ContextBuilder:
        """Context builder on the plain value validator"""
        return self.get_validator().new_context()

    def __repr__(self) -> str:
        return f"ValidatorFactory(locale={self.settings.locale!r}, validators={len(self._validators)})"


def _require_entity(entity: Any) -> None:
    if entity is None:
        raise ValueError("entity must not be None")


def _changed(old: Any, new: Any) -> bool:
    if old is new:
        return False
    try:
        return bool(old != new)
    except (TypeError, ValueError):
        return True


# Global factory instance
_default_factory: Optional[ValidatorFactory] = None
_default_factory_lock = threading.Lock()


def get_default_factory() -> ValidatorFactory:
    """
    Get the process-wide default factory.

    Lazily created from ``load_settings()`` (``VOUCH_CONFIG`` if set).
    """
    global _default_factory

    if _default_factory is None:
        with _default_factory_lock:
            if _default_factory is None:
                _default_factory = ValidatorFactory(load_settings())

    return _default_factory


def set_default_factory(factory: ValidatorFactory) -> None:
    global _default_factory
    with _default_factory_lock:
        _default_factory = factory


def reset_default_factory() -> None:
    global _default_factory
    with _default_factory_lock:
        _default_factory = None


__all__ = [
    "DEFAULT_GROUP",
    "Validator",
    "ContextBuilder",
    "ValidatorFactory",
    "get_default_factory",
    "set_default_factory",
    "reset_default_factory",
]
