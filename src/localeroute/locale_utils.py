"""Locale utilities backed by Babel.

Centralizes locale code normalization and Babel lookups so that catalog
headers and display labels use one consistent representation.

Python 3.13+.
"""

from __future__ import annotations

import functools
import logging
from typing import TYPE_CHECKING

from babel import Locale, UnknownLocaleError

if TYPE_CHECKING:
    from localeroute.locales.types import LocaleCode

__all__ = [
    "clear_locale_cache",
    "get_babel_locale",
    "native_label",
    "normalize_locale",
]

logger = logging.getLogger(__name__)


def normalize_locale(locale_code: LocaleCode) -> str:
    """Convert BCP-47 locale code to POSIX format for Babel.

    BCP-47 uses hyphens (fr-CA), while Babel/POSIX uses underscores (fr_CA).

    Args:
        locale_code: BCP-47 or POSIX locale code

    Returns:
        POSIX-formatted locale code

    Example:
        >>> normalize_locale("pt-BR")
        'pt_BR'
        >>> normalize_locale("en")
        'en'
    """
    return locale_code.replace("-", "_")


@functools.lru_cache(maxsize=128)
def get_babel_locale(locale_code: LocaleCode) -> Locale | None:
    """Get a Babel Locale object with caching.

    Args:
        locale_code: Locale code (BCP-47 or POSIX format accepted)

    Returns:
        Babel Locale, or None when Babel does not recognize the code.
        Configured locale codes are free-form, so a miss is not an error.
    """
    try:
        return Locale.parse(normalize_locale(locale_code))
    except (UnknownLocaleError, ValueError) as e:
        logger.warning("Babel does not know locale '%s': %s", locale_code, e)
        return None


def clear_locale_cache() -> None:
    """Clear the Babel locale cache (used by tests)."""
    get_babel_locale.cache_clear()


def native_label(locale_code: LocaleCode) -> str:
    """Return the locale's name in its own language.

    Example:
        >>> native_label("fr")
        'français'
        >>> native_label("xx-unknown")
        'xx-unknown'
    """
    babel_locale = get_babel_locale(locale_code)
    if babel_locale is None:
        return locale_code
    return babel_locale.get_display_name(babel_locale) or locale_code
