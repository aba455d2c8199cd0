# vouch/errors/codes.py
from __future__ import annotations

from typing import Final


# ---- canonical error codes (stable public contract) ----
# generic
UNKNOWN: Final[str] = "UNKNOWN"

# declaration (raised once, while metadata is being built)
INVALID_DECLARATION: Final[str] = "INVALID_DECLARATION"
INVALID_TARGET: Final[str] = "INVALID_TARGET"

# runtime lookups
MISSING_MESSAGE: Final[str] = "MISSING_MESSAGE"
UNKNOWN_PROPERTY: Final[str] = "UNKNOWN_PROPERTY"

# configuration
INVALID_CONFIG: Final[str] = "INVALID_CONFIG"


# ---- semantic groups (internal helpers) ----

DECLARATION_CODES: Final[set[str]] = {
    INVALID_DECLARATION,
    INVALID_TARGET,
}

KNOWN_CODES: Final[set[str]] = {
    UNKNOWN,
    INVALID_DECLARATION,
    INVALID_TARGET,
    MISSING_MESSAGE,
    UNKNOWN_PROPERTY,
    INVALID_CONFIG,
}
