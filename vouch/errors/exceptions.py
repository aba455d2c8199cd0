# vouch/errors/exceptions.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict

from . import codes


def _normalize_error_code(code: Any) -> str:
    """
    Keep error_code stable and finite.
    Unknown codes are downgraded so callers can rely on the taxonomy.
    """
    c = str(code or codes.UNKNOWN).strip() or codes.UNKNOWN
    if c in codes.KNOWN_CODES:
        return c
    return codes.UNKNOWN


@dataclass
class VouchError(Exception):
    """
    Base exception for configuration and declaration problems.

    Runtime rule violations are NOT VouchErrors: they are reported through
    ``Violation`` / ``ValidationFailure`` and carry data instead of codes.
    """
    message: str
    error_code: str = codes.UNKNOWN
    details: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.error_code = _normalize_error_code(self.error_code)
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"

    @property
    def is_declaration(self) -> bool:
        return self.error_code in codes.DECLARATION_CODES

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": type(self).__name__,
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class DeclarationError(VouchError):
    """Invalid metadata or combinator declaration (fatal, raised at build time)."""

    @classmethod
    def invalid(cls, message: str, **details: Any) -> "DeclarationError":
        return cls(message=message, error_code=codes.INVALID_DECLARATION, details=details)


class TargetDeclarationError(DeclarationError):
    """A component references a target the carrier type does not expose."""

    @classmethod
    def for_target(cls, target: Any, carrier_type: Any) -> "TargetDeclarationError":
        return cls(
            message=f"Illegal reference to the target {target} for type {carrier_type!r}",
            error_code=codes.INVALID_TARGET,
            details={"target": str(target), "carrier_type": repr(carrier_type)},
        )


class MissingMessageError(VouchError):
    """No resolver knows the requested message key."""

    @classmethod
    def for_key(cls, key: str, locale: Any = None) -> "MissingMessageError":
        return cls(
            message=f"Can't find message with key \"{key}\"",
            error_code=codes.MISSING_MESSAGE,
            details={"key": key, "locale": str(locale) if locale is not None else None},
        )


class UnknownPropertyError(VouchError):
    """Property name is not declared on the entity metadata."""

    @classmethod
    def for_property(cls, entity_type: Any, name: str) -> "UnknownPropertyError":
        type_name = getattr(entity_type, "__name__", str(entity_type))
        return cls(
            message=f"Unknown property '{name}' of {type_name}",
            error_code=codes.UNKNOWN_PROPERTY,
            details={"property": name, "entity_type": type_name},
        )


class ConfigError(VouchError):
    """Settings file could not be read or does not match the settings model."""

    @classmethod
    def invalid(cls, message: str, **details: Any) -> "ConfigError":
        return cls(message=message, error_code=codes.INVALID_CONFIG, details=details)
