# vouch/core/constrained_map.py
"""
Constrained map: a thread-safe, validated dictionary of named settings.

The keys are fixed by ``MappingMeta``; every key starts at its declared
default. Writes go through a ``Transaction``: values are staged on a deep
copy, the whole copy is validated as one entity, and only a valid copy is
applied. Malformed text staged through raw or localized setters is kept per
key and reported together with the validation violations on commit.

Usage:
```python
meta = (
    MappingMetaBuilder()
    .property("host", str, constraint=NotEmpty(), default="localhost")
    .property("port", int, constraint=Range(min=1, max=65535), default=8080)
    .build()
)
settings = ConstrainedMap(factory.get_validator(meta))
with settings.new_transaction() as tx:
    tx.set_raw_value("port", "9090")
    tx.set_value("host", "example.org")
settings.save("server.yaml", comment="Server settings")
```

Design principles:
- The map never holds a value that failed validation, except through
  ``commit(invalid=True)`` (used by ``load``)
- Listeners see every applied change as ``(key, old, new)``
"""

from __future__ import annotations

import copy
import logging
import threading
from collections.abc import MutableMapping
from pathlib import Path
from typing import Any, Callable, Dict, Iterator, List, Mapping, Optional, Union

import yaml

from ..errors import ConfigError, DeclarationError, MissingMessageError
from .engine import ContextBuilder, Validator, _changed
from .metadata.entity import MappingMeta
from .violations import ValidationFailure, Violation


logger = logging.getLogger(__name__)

Listener = Callable[[str, Any, Any], None]


class ConstrainedMap(MutableMapping):
    """
    Mapping of declared keys to validated values.

    Item access follows ``dict`` conventions: unknown keys raise ``KeyError``,
    ``del m[key]`` and ``clear()`` reset to the defaults instead of removing
    keys. An invalid assignment raises ``ValidationFailure`` and leaves the
    map unchanged.
    """

    def __init__(self, validator: Validator):
        if not isinstance(validator.meta, MappingMeta):
            raise DeclarationError.invalid(
                "ConstrainedMap requires mapping metadata", meta=repr(validator.meta)
            )
        self.validator = validator
        self._values: Dict[str, Any] = {
            meta.name: copy.deepcopy(meta.default) for meta in validator.meta
        }
        self._listeners: List[Listener] = []
        self._lock = threading.RLock()

    # Mapping protocol

    def __getitem__(self, key: str) -> Any:
        return self.get_value(key)

    def __setitem__(self, key: str, value: Any) -> None:
        self.set_value(key, value)

    def __delitem__(self, key: str) -> None:
        self.reset_value(key)

    def __iter__(self) -> Iterator[str]:
        with self._lock:
            return iter(list(self._values))

    def __len__(self) -> int:
        return len(self._values)

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def clear(self) -> None:
        self.reset_values()

    # Single values

    def get_value(self, key: str) -> Any:
        with self._lock:
            self._require_key(key)
            return self._values[key]

    def set_value(self, key: str, value: Any, locale: Any = None) -> Any:
        """Validate and store ``value``; returns the previous value"""
        with self._lock:
            self._require_key(key)
            old = self._values[key]
            tx = self.new_transaction(locale)
            tx.set_value(key, value)
            tx.commit()
            return old

    def get_raw_value(self, key: str) -> str:
        with self._lock:
            self._require_key(key)
            return self.validator.get_encoded_value(self._values, key)

    def set_raw_value(self, key: str, text: Optional[str], locale: Any = None) -> Any:
        with self._lock:
            self._require_key(key)
            old = self._values[key]
            tx = self.new_transaction(locale)
            tx.set_raw_value(key, text)
            tx.commit()
            return old

    def get_localized_value(self, key: str, locale: Any = None) -> str:
        with self._lock:
            self._require_key(key)
            return self._builder(locale).localized_convert(True).get_encoded_value(self._values, key)

    def set_localized_value(self, key: str, text: Optional[str], locale: Any = None) -> Any:
        with self._lock:
            self._require_key(key)
            old = self._values[key]
            tx = self.new_transaction(locale)
            tx.set_localized_value(key, text)
            tx.commit()
            return old

    def reset_value(self, key: str, locale: Any = None) -> Any:
        with self._lock:
            self._require_key(key)
            old = self._values[key]
            tx = self.new_transaction(locale)
            tx.reset_value(key)
            tx.commit()
            return old

    def is_default(self, key: str) -> bool:
        with self._lock:
            self._require_key(key)
            return not _changed(self._values[key], self.validator.get_property(key).default)

    def comment(self, key: str, locale: Any = None) -> Optional[str]:
        """Message ``<key>.comment`` for ``locale``, or None when no bundle has it"""
        self._require_key(key)
        try:
            return self.validator.factory.message_resolver.resolve(
                f"{key}.comment", locale or self.validator.factory.settings.locale
            )
        except MissingMessageError:
            return None

    # All values

    def snapshot(self) -> Dict[str, Any]:
        """Deep copy of the current values"""
        with self._lock:
            return copy.deepcopy(self._values)

    def set_values(self, values: Mapping[str, Any], locale: Any = None) -> None:
        with self._lock:
            tx = self.new_transaction(locale)
            tx.set_values(values)
            tx.commit()

    def get_raw_values(self) -> Dict[str, str]:
        with self._lock:
            return self.validator.get_encoded_values(self._values)

    def set_raw_values(self, texts: Mapping[str, Optional[str]], locale: Any = None) -> None:
        with self._lock:
            tx = self.new_transaction(locale)
            tx.set_raw_values(texts)
            tx.commit()

    def get_localized_values(self, locale: Any = None) -> Dict[str, str]:
        with self._lock:
            return self._builder(locale).localized_convert(True).get_encoded_values(self._values)

    def set_localized_values(self, texts: Mapping[str, Optional[str]], locale: Any = None) -> None:
        with self._lock:
            tx = self.new_transaction(locale)
            tx.set_localized_values(texts)
            tx.commit()

    def reset_values(self, locale: Any = None) -> None:
        with self._lock:
            tx = self.new_transaction(locale)
            tx.reset_values()
            tx.commit()

    def new_transaction(self, locale: Any = None) -> Transaction:
        with self._lock:
            return Transaction(self, locale)

    # Listeners

    def add_listener(self, listener: Listener) -> None:
        with self._lock:
            self._listeners.append(listener)

    def remove_listener(self, listener: Listener) -> None:
        with self._lock:
            self._listeners.remove(listener)

    # Persistence

    def load(self, path: Union[str, Path], locale: Any = None) -> ConstrainedMap:
        """
        Read raw values from a YAML mapping and apply them.

        Values that decode are applied even when others are malformed or
        invalid; the problems are raised afterwards as one failure.

        Raises:
            ConfigError: Unreadable file, invalid YAML, unknown keys or non-scalar values
            ValidationFailure: Malformed or invalid values (after applying the rest)
        """
        path = Path(path)
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except OSError as e:
            raise ConfigError.invalid(f"Cannot read values file: {path}", error=str(e)) from e
        except yaml.YAMLError as e:
            raise ConfigError.invalid(f"Invalid values YAML: {path}", error=str(e)) from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigError.invalid(f"Values file must contain a mapping: {path}")
        unknown = [str(key) for key in data if key not in self._values]
        if unknown:
            raise ConfigError.invalid(f"Unknown keys in values file: {path}", keys=unknown)

        texts: Dict[str, Optional[str]] = {}
        for key, value in data.items():
            if isinstance(value, (dict, list)):
                raise ConfigError.invalid(f"Value of '{key}' must be a scalar: {path}", key=key)
            texts[key] = None if value is None else str(value)

        with self._lock:
            tx = self.new_transaction(locale)
            tx.set_raw_values(texts)
            tx.commit(invalid=True)
        logger.debug("Loaded %d value(s) from %s", len(texts), path)
        return self

    def save(self, path: Union[str, Path], comment: Optional[str] = None, locale: Any = None) -> ConstrainedMap:
        """
        Write raw values as YAML, each key preceded by its comment and
        constraint message.

        Raises:
            ConfigError: If the file cannot be written
        """
        path = Path(path)
        with self._lock:
            lines = self._render(comment, locale)
        try:
            with open(path, "w", encoding="utf-8") as f:
                f.write("\n".join(lines) + "\n")
        except OSError as e:
            raise ConfigError.invalid(f"Cannot write values file: {path}", error=str(e)) from e
        logger.debug("Saved %d value(s) to %s", len(self._values), path)
        return self

    def _render(self, comment: Optional[str], locale: Any) -> List[str]:
        texts = self.validator.get_encoded_values(self._values)
        context = self._builder(locale).build()
        lines: List[str] = []
        if comment:
            lines.extend(_comment_lines(comment))
            lines.append("")

        constraint = self.validator.meta.constraint
        if constraint is not None:
            lines.extend(_comment_lines(context.build_message(constraint)))
            lines.append("")

        for meta in self.validator.meta:
            lines.extend(_comment_lines(self.comment(meta.name, locale)))
            if meta.constraint is not None:
                context.element_meta = meta
                lines.extend(_comment_lines(context.build_message(meta.constraint)))
            dumped = yaml.safe_dump({meta.name: texts.get(meta.name, "")}, allow_unicode=True, default_flow_style=False)
            lines.append(dumped.rstrip("\n"))
        return lines

    # Internals

    def _require_key(self, key: Any) -> None:
        if key not in self._values:
            raise KeyError(key)

    def _builder(self, locale: Any) -> ContextBuilder:
        builder = self.validator.new_context()
        if locale is not None:
            builder.locale(locale)
        return builder

    def _apply(self, values: Mapping[str, Any]) -> None:
        for key, new in values.items():
            old = self._values[key]
            self._values[key] = new
            if _changed(old, new):
                for listener in list(self._listeners):
                    listener(key, old, new)

    def __repr__(self) -> str:
        with self._lock:
            return f"ConstrainedMap({self._values!r})"


class Transaction:
    """
    Staged changes to a ``ConstrainedMap``.

    Setters work on a private copy and never raise for malformed text; such
    text is remembered per key and reported by ``commit``. Used as a context
    manager, the transaction commits on normal exit and rolls back when the
    block raises.
    """

    def __init__(self, owner: ConstrainedMap, locale: Any = None):
        self.owner = owner
        self.locale = locale
        self._snapshot = owner.snapshot()
        self._violations: Dict[Optional[str], Violation] = {}

    def __enter__(self) -> Transaction:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        if exc_type is None:
            self.commit()
        else:
            self.rollback()
        return False

    @property
    def violations(self) -> List[Violation]:
        """Malformed values staged so far"""
        return list(self._violations.values())

    def get_value(self, key: str) -> Any:
        return self.owner.validator.get_value(self._snapshot, key)

    def set_value(self, key: str, value: Any) -> None:
        self._violations.pop(key, None)
        self.owner.validator.set_value(self._snapshot, key, value)

    def get_raw_value(self, key: str) -> str:
        return self._builder(False).get_encoded_value(self._snapshot, key)

    def set_raw_value(self, key: str, text: Optional[str]) -> None:
        self._set_encoded(key, text, localized=False)

    def get_localized_value(self, key: str) -> str:
        return self._builder(True).get_encoded_value(self._snapshot, key)

    def set_localized_value(self, key: str, text: Optional[str]) -> None:
        self._set_encoded(key, text, localized=True)

    def reset_value(self, key: str) -> None:
        meta = self.owner.validator.get_property(key)
        self._violations.pop(key, None)
        self._snapshot[key] = copy.deepcopy(meta.default)

    def set_values(self, values: Mapping[str, Any]) -> None:
        for key in values:
            self._violations.pop(key, None)
        self.owner.validator.set_values(self._snapshot, values)

    def get_raw_values(self) -> Dict[str, str]:
        return self._builder(False).get_encoded_values(self._snapshot)

    def set_raw_values(self, texts: Mapping[str, Optional[str]]) -> None:
        self._set_all_encoded(texts, localized=False)

    def get_localized_values(self) -> Dict[str, str]:
        return self._builder(True).get_encoded_values(self._snapshot)

    def set_localized_values(self, texts: Mapping[str, Optional[str]]) -> None:
        self._set_all_encoded(texts, localized=True)

    def reset_values(self) -> None:
        self._violations.clear()
        for meta in self.owner.validator.meta:
            self._snapshot[meta.name] = copy.deepcopy(meta.default)

    def commit(self, invalid: bool = False) -> None:
        """
        Validate the staged values and apply them to the map.

        Args:
            invalid: Apply the staged values even when they are malformed or invalid

        Raises:
            ValidationFailure: Staged malformed values plus validation
                violations, at most one per key
        """
        with self.owner._lock:
            violations = dict(self._violations)
            try:
                self._builder(False).validate_entity(self._snapshot)
            except ValidationFailure as failure:
                for violation in failure.violations:
                    violations.setdefault(violation.element_name, violation)

            if violations and not invalid:
                raise ValidationFailure(list(violations.values()))
            self.owner._apply(copy.deepcopy(self._snapshot))
            self._violations.clear()
            if violations:
                raise ValidationFailure(list(violations.values()))

    def rollback(self) -> None:
        """Discard staged changes and start over from the map's current values"""
        self._snapshot = self.owner.snapshot()
        self._violations.clear()

    def _builder(self, localized: bool) -> ContextBuilder:
        return self.owner._builder(self.locale).localized_convert(localized)

    def _set_encoded(self, key: str, text: Optional[str], localized: bool) -> None:
        self._violations.pop(key, None)
        try:
            self._builder(localized).set_encoded_value(self._snapshot, key, text)
        except ValidationFailure as failure:
            self._violations[key] = failure.first_violation

    def _set_all_encoded(self, texts: Mapping[str, Optional[str]], localized: bool) -> None:
        for key in texts:
            self._violations.pop(key, None)
        try:
            self._builder(localized).set_encoded_values(self._snapshot, texts)
        except ValidationFailure as failure:
            for violation in failure.violations:
                self._violations[violation.element_name] = violation


def _comment_lines(text: Optional[str]) -> List[str]:
    if not text:
        return []
    return [f"# {line.strip()}" for line in text.splitlines() if line.strip()]


__all__ = ["ConstrainedMap", "Transaction"]
