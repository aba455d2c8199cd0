# vouch/core/formats.py
"""
Locale-aware number and date formats.

Formats are small immutable objects built by the validation context (and
cached there for the default patterns). Patterns use the CLDR/LDML syntax
understood by Babel, e.g. ``#,##0.00`` or ``dd.MM.yyyy``.
"""

from __future__ import annotations

import re
from datetime import date, datetime, time
from decimal import Decimal
from typing import List, Optional, Union

from babel import Locale
from babel import dates as babel_dates
from babel import numbers as babel_numbers


DATE_STYLES = ("short", "medium", "long", "full")


def parse_locale(value: Union[str, Locale, None], default: str = "en_US") -> Locale:
    """Parse a locale tag (``de_DE``, ``de-DE``, ``de``) into a Babel Locale"""
    if isinstance(value, Locale):
        return value
    return Locale.parse(value or default, sep="-" if value and "-" in value else "_")


class IntegerFormat:
    """Formats and parses whole numbers"""

    def __init__(self, locale: Locale, pattern: Optional[str] = None):
        self.locale = locale
        self.pattern = pattern

    def format(self, value: int) -> str:
        return babel_numbers.format_decimal(int(value), format=self.pattern, locale=self.locale)

    def parse(self, text: str) -> int:
        number = babel_numbers.parse_decimal(text, locale=self.locale)
        if number != number.to_integral_value():
            raise ValueError(f"not an integer: {text!r}")
        return int(number)

    def __repr__(self) -> str:
        return f"IntegerFormat(locale={self.locale}, pattern={self.pattern!r})"


class DecimalFormat:
    """Formats and parses decimal numbers"""

    def __init__(self, locale: Locale, pattern: Optional[str] = None):
        self.locale = locale
        self.pattern = pattern

    def format(self, value: Union[int, float, Decimal]) -> str:
        return babel_numbers.format_decimal(value, format=self.pattern, locale=self.locale)

    def parse(self, text: str) -> Decimal:
        return babel_numbers.parse_decimal(text, locale=self.locale)

    def __repr__(self) -> str:
        return f"DecimalFormat(locale={self.locale}, pattern={self.pattern!r})"


class DateFormat:
    """
    Formats and parses dates, times and timestamps.

    Either an explicit pattern or a date/time style pair is used. A missing
    date style with a time style set formats times only; a missing time style
    formats dates only.

    Explicit patterns are parsed field by field: year, numeric or named
    months, day of month and weekday names. Time fields are accepted and
    skipped; any other field makes parsing fail.
    """

    def __init__(
        self,
        locale: Locale,
        pattern: Optional[str] = None,
        date_style: Optional[str] = "medium",
        time_style: Optional[str] = None,
    ):
        for style in (date_style, time_style):
            if style is not None and style not in DATE_STYLES:
                raise ValueError(f"unknown date/time style: {style!r}")
        self.locale = locale
        self.pattern = pattern
        self.date_style = date_style
        self.time_style = time_style
        self._compiled = None

    @property
    def effective_pattern(self) -> str:
        if self.pattern:
            return self.pattern
        parts = []
        if self.date_style:
            parts.append(babel_dates.get_date_format(self.date_style, locale=self.locale).pattern)
        if self.time_style:
            parts.append(babel_dates.get_time_format(self.time_style, locale=self.locale).pattern)
        return " ".join(parts)

    def format(self, value: Union[date, datetime, time]) -> str:
        pattern = self.effective_pattern
        if isinstance(value, datetime):
            return babel_dates.format_datetime(value, format=pattern, locale=self.locale)
        if isinstance(value, date):
            return babel_dates.format_date(value, format=pattern, locale=self.locale)
        return babel_dates.format_time(value, format=pattern, locale=self.locale)

    def parse_date(self, text: str) -> date:
        if self.pattern:
            if self._compiled is None:
                self._compiled = _compile_pattern(self.pattern, self.locale)
            return _parse_compiled(text, self._compiled)
        return babel_dates.parse_date(text, locale=self.locale, format=self.date_style or "medium")

    def __repr__(self) -> str:
        return (
            f"DateFormat(locale={self.locale}, pattern={self.pattern!r}, "
            f"date_style={self.date_style!r}, time_style={self.time_style!r})"
        )


def _names_pattern(names) -> str:
    # Longest first so "June" is not cut short by "Jun".
    return "(" + "|".join(re.escape(name) for name in sorted(set(names), key=len, reverse=True)) + ")"


def _name_width(count: int) -> str:
    return "wide" if count >= 4 else "abbreviated"


def _compile_pattern(pattern: str, locale: Locale):
    """
    Compile an LDML date pattern into ``(regex, fields)``.

    ``fields`` lists, per capture group, the field letter and the lookup table
    for name fields (None for numeric ones). Time fields are matched but do
    not contribute to the parsed date.
    """
    parts: List[str] = []
    fields: List[tuple] = []
    i = 0
    length = len(pattern)
    while i < length:
        ch = pattern[i]
        if ch == "'":
            end = pattern.find("'", i + 1)
            if end < 0:
                raise ValueError(f"unterminated quote in date pattern {pattern!r}")
            parts.append(re.escape(pattern[i + 1:end] or "'"))
            i = end + 1
            continue
        if ch.isspace():
            while i < length and pattern[i].isspace():
                i += 1
            parts.append(r"\s+")
            continue
        if not ("a" <= ch <= "z" or "A" <= ch <= "Z"):
            parts.append(re.escape(ch))
            i += 1
            continue

        count = 1
        while i + count < length and pattern[i + count] == ch:
            count += 1
        i += count

        if ch == "y":
            parts.append(r"(\d{1,4})")
            fields.append(("y", count))
        elif ch in "ML":
            if count <= 2:
                parts.append(r"(\d{1,2})")
                fields.append(("M", None))
            else:
                context = "format" if ch == "M" else "stand-alone"
                names = babel_dates.get_month_names(_name_width(count), context=context, locale=locale)
                parts.append(_names_pattern(names.values()))
                fields.append(("M", {name.lower(): month for month, name in names.items()}))
        elif ch == "d":
            parts.append(r"(\d{1,2})")
            fields.append(("d", None))
        elif ch in "Ec":
            context = "format" if ch == "E" else "stand-alone"
            names = babel_dates.get_day_names(_name_width(count), context=context, locale=locale)
            parts.append(_names_pattern(names.values()))
            fields.append((None, None))
        elif ch in "HhKkms":
            parts.append(r"(\d{1,2})")
            fields.append((None, None))
        elif ch == "S":
            parts.append(r"(\d+)")
            fields.append((None, None))
        elif ch == "a":
            names = babel_dates.get_period_names("abbreviated", context="format", locale=locale)
            parts.append(_names_pattern(names.values()))
            fields.append((None, None))
        else:
            raise ValueError(f"unsupported field {ch * count!r} in date pattern {pattern!r}")

    letters = {field for field, _ in fields}
    if not {"y", "M", "d"} <= letters:
        raise ValueError(f"date pattern {pattern!r} needs year, month and day fields")
    return re.compile("".join(parts), re.IGNORECASE), fields


def _parse_compiled(text: str, compiled) -> date:
    regex, fields = compiled
    match = regex.fullmatch(text)
    if match is None:
        raise ValueError(f"text {text!r} does not match pattern {regex.pattern!r}")
    values = {}
    for (field, spec), group in zip(fields, match.groups()):
        if field is None:
            continue
        if field == "M" and spec is not None:
            values["M"] = spec[group.lower()]
        elif field == "y":
            year = int(group)
            values["y"] = year + 2000 if spec == 2 and year < 100 else year
        else:
            values[field] = int(group)
    return date(values["y"], values["M"], values["d"])


__all__ = [
    "DATE_STYLES",
    "parse_locale",
    "IntegerFormat",
    "DecimalFormat",
    "DateFormat",
]
