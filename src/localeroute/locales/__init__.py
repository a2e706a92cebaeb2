"""Locale registry: configured locales and their lookup.

Exports:
    Locale: Immutable locale value object
    LocaleRegistry: Ordered registry with code, URL segment and default lookup
    BareDeclaration / OptionsDeclaration: Parsed configuration entries
    parse_declarations: Raw configuration to declarations

Python 3.13+.
"""

from .declarations import (
    BareDeclaration,
    LocaleDeclaration,
    OptionsDeclaration,
    parse_declarations,
)
from .locale import SUPPORTED_OPTIONS, Locale
from .registry import LocaleRegistry
from .types import ConfigEntries, LocaleCode, LocaleOptions, UrlSegment

__all__ = [
    "SUPPORTED_OPTIONS",
    "BareDeclaration",
    "ConfigEntries",
    "Locale",
    "LocaleCode",
    "LocaleDeclaration",
    "LocaleOptions",
    "LocaleRegistry",
    "OptionsDeclaration",
    "UrlSegment",
    "parse_declarations",
]
