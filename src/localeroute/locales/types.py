"""Type aliases for the locale domain.

Provides semantic type aliases used throughout localeroute and by user
code when annotating call sites.

Python 3.13+. Zero external dependencies.
"""

from collections.abc import Mapping, Sequence
from typing import TypeAlias

__all__ = [
    "ConfigEntries",
    "LocaleCode",
    "LocaleOptions",
    "UrlSegment",
]

LocaleCode: TypeAlias = str
"""Configured locale identifier (e.g., 'en', 'fr', 'fr_CA')."""

UrlSegment: TypeAlias = str
"""Path prefix that selects a locale (e.g., 'fr', 'francais')."""

LocaleOptions: TypeAlias = Mapping[str, object]
"""Raw per-locale options: url, default, poPath, moPath."""

ConfigEntries: TypeAlias = Mapping[str, object] | Sequence[object]
"""Raw locale configuration: a code-to-options mapping or a list mixing
bare codes and single-key mappings."""
