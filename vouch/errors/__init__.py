# vouch/errors/__init__.py
from . import codes
from .exceptions import (
    VouchError,
    DeclarationError,
    TargetDeclarationError,
    MissingMessageError,
    UnknownPropertyError,
    ConfigError,
)

__all__ = [
    "codes",
    "VouchError",
    "DeclarationError",
    "TargetDeclarationError",
    "MissingMessageError",
    "UnknownPropertyError",
    "ConfigError",
]
