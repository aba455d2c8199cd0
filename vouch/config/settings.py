# vouch/config/settings.py
"""
VouchSettings: process-level defaults for validator factories.

Design principles:
- Code = truth (every field has a default)
- YAML = optional input, merged over the defaults by the loader
- Unknown keys are rejected so typos surface as configuration errors
"""

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from babel import Locale, UnknownLocaleError


DateStyle = Literal["short", "medium", "long", "full"]


class VouchSettings(BaseModel):
    """
    Factory-wide validation defaults.

    Fields:
    - locale: Locale used when a call does not pick one
    - integer_pattern / decimal_pattern / date_pattern: CLDR patterns for the
      default formats (None: locale default)
    - date_style / time_style: Styles used when no date pattern is set
    - message_bundles: YAML message bundles consulted before the built-in one
    - fail_fast / localized_convert: Call defaults, overridable per context
    """
    model_config = ConfigDict(extra="forbid", frozen=True)

    locale: str = Field(default="en_US", description="Default locale tag")
    integer_pattern: Optional[str] = Field(default=None, description="Integer format pattern")
    decimal_pattern: Optional[str] = Field(default=None, description="Decimal format pattern")
    date_pattern: Optional[str] = Field(default=None, description="Date format pattern")
    date_style: Optional[DateStyle] = Field(default="medium", description="Date style")
    time_style: Optional[DateStyle] = Field(default=None, description="Time style")
    message_bundles: List[str] = Field(default_factory=list, description="Extra message bundle paths")
    fail_fast: bool = Field(default=False, description="Raise on the first violation")
    localized_convert: bool = Field(default=False, description="Use locale formats for conversion")

    @field_validator("locale")
    @classmethod
    def _check_locale(cls, value: str) -> str:
        try:
            Locale.parse(value.replace("-", "_"))
        except (ValueError, UnknownLocaleError) as e:
            raise ValueError(f"unknown locale: {value!r}") from e
        return value

    @classmethod
    def default(cls) -> VouchSettings:
        """Create default settings (no YAML needed)"""
        return cls()


__all__ = ["VouchSettings", "DateStyle"]
