"""Ordered registry of configured locales.

The registry is the leaf of the localization subsystem: resolution,
catalog generation and rewrite generation all consult it and nothing
else. It is immutable once built; reloading configuration means building
a new registry with LocaleRegistry.load().

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from os import PathLike
from typing import TYPE_CHECKING

from localeroute.diagnostics import ConfigurationError, ErrorTemplate, LocaleNotFoundError
from localeroute.locales.declarations import parse_declarations
from localeroute.locales.locale import Locale

if TYPE_CHECKING:
    from localeroute.locales.types import ConfigEntries, LocaleCode, UrlSegment

__all__ = ["LocaleRegistry"]

logger = logging.getLogger(__name__)


class LocaleRegistry:
    """Ordered, immutable mapping of locale code to Locale.

    Declaration order is preserved; it decides the implicit default locale
    when none is flagged. An empty registry is valid and means localization
    is disabled.

    Example:
        >>> registry = LocaleRegistry.load({"en": {"default": True}, "fr": None})
        >>> registry.default_locale().code
        'en'
        >>> registry.by_url_segment("fr").code
        'fr'
    """

    __slots__ = ("_by_segment", "_locales")

    def __init__(self, locales: Iterable[Locale] = ()) -> None:
        """Build a registry from Locale objects.

        Args:
            locales: Locales in declaration order

        Raises:
            ConfigurationError: If codes repeat or several locales are default
        """
        ordered: dict[LocaleCode, Locale] = {}
        for locale in locales:
            if locale.code in ordered:
                diagnostic = ErrorTemplate.duplicate_code(locale.code)
                raise ConfigurationError(diagnostic, key=locale.code)
            ordered[locale.code] = locale

        defaults = [code for code, locale in ordered.items() if locale.is_default]
        if len(defaults) > 1:
            raise ConfigurationError(ErrorTemplate.multiple_defaults(defaults), key="default")

        by_segment: dict[UrlSegment, Locale] = {}
        for locale in ordered.values():
            # First declaration wins when two locales share a segment.
            by_segment.setdefault(locale.url_segment, locale)

        self._locales = ordered
        self._by_segment = by_segment

    @classmethod
    def load(
        cls,
        config_entries: ConfigEntries | None,
        *,
        catalog_root: str | PathLike[str] = ".",
        environment: str | None = None,
    ) -> LocaleRegistry:
        """Parse raw locale configuration into a registry.

        Args:
            config_entries: Mapping of code to options, or a list of bare
                codes and code-to-options mappings. None disables localization.
            catalog_root: Directory holding catalog files
            environment: Environment name enabling override catalogs

        Returns:
            New LocaleRegistry

        Raises:
            ConfigurationError: Naming the offending key on malformed input
        """
        declarations = parse_declarations(config_entries)
        registry = cls(
            Locale.from_declaration(d, catalog_root=catalog_root, environment=environment)
            for d in declarations
        )
        logger.debug("Loaded %d locale(s): %s", len(registry), ", ".join(registry.codes))
        return registry

    def __len__(self) -> int:
        return len(self._locales)

    def __iter__(self) -> Iterator[Locale]:
        return iter(self._locales.values())

    def __contains__(self, code: object) -> bool:
        return code in self._locales

    def __repr__(self) -> str:
        return f"LocaleRegistry({list(self._locales)!r})"

    @property
    def codes(self) -> tuple[LocaleCode, ...]:
        """Locale codes in declaration order."""
        return tuple(self._locales)

    def is_empty(self) -> bool:
        """Check whether localization is disabled (no locales configured)."""
        return not self._locales

    def get(self, code: LocaleCode) -> Locale | None:
        """Return the locale with this code, or None."""
        return self._locales.get(code)

    def by_code(self, code: LocaleCode) -> Locale:
        """Return the locale with this code.

        Raises:
            LocaleNotFoundError: If no locale has this code
        """
        locale = self._locales.get(code)
        if locale is None:
            raise LocaleNotFoundError(ErrorTemplate.locale_not_found(code), lookup=code)
        return locale

    def by_url_segment(self, segment: UrlSegment) -> Locale:
        """Return the locale whose URL segment equals ``segment`` exactly.

        Raises:
            LocaleNotFoundError: If no locale uses this segment
        """
        locale = self._by_segment.get(segment)
        if locale is None:
            raise LocaleNotFoundError(ErrorTemplate.url_segment_not_found(segment), lookup=segment)
        return locale

    def default_locale(self) -> Locale:
        """Return the default locale.

        The locale flagged ``default`` wins. When none is flagged, the last
        declared locale is the default.

        Raises:
            LocaleNotFoundError: If the registry is empty
        """
        for locale in self._locales.values():
            if locale.is_default:
                return locale
        if not self._locales:
            raise LocaleNotFoundError(ErrorTemplate.no_default_locale())
        return next(reversed(self._locales.values()))

    def non_default_url_segments(self) -> tuple[UrlSegment, ...]:
        """URL segments of every locale except the default, in order."""
        if not self._locales:
            return ()
        default = self.default_locale()
        return tuple(locale.url_segment for locale in self if locale != default)
