"""Hypothesis strategies for localeroute property-based testing.

Strategies are organized by domain:

- locales: Locale configuration mappings, URL segments and request paths
- catalogs: Translation entries and entry lists with unique identity keys

Usage:
    from tests.strategies import locale_configs, entry_lists
    from tests.strategies.locales import request_paths
"""

from .catalogs import contexts, entry_lists, originals, translation_entries, translations
from .locales import LOCALE_POOL, locale_configs, request_paths, url_segments

__all__ = [
    "LOCALE_POOL",
    "contexts",
    "entry_lists",
    "locale_configs",
    "originals",
    "request_paths",
    "translation_entries",
    "translations",
    "url_segments",
]
