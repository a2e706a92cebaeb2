"""Routable entity descriptors.

A routable entity is something the host loads by a query variable (an
article, a product, a taxonomy term) and that exposes human-readable
URLs: a base slug plus named sub-routes such as ``comments`` or
``gallery``. Each locale may override the slug and any sub-route fragment.

Descriptors are built in code or from configuration mappings shaped as:

    {
        "query_var": "article",
        "slug": "articles",
        "rewrite": {"comments": "comments"},
        "i18n": {"fr": {"slug": "articles", "rewrite": {"comments": "commentaires"}}},
        "actions": ["comments", "show"],
    }

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, TypeAlias

from localeroute.diagnostics import ConfigurationError, ErrorTemplate

if TYPE_CHECKING:
    from localeroute.locales import LocaleCode

__all__ = [
    "LocalizedRouting",
    "RoutableEntity",
    "SubRouteKey",
]

SubRouteKey: TypeAlias = str
"""Name of a sub-route (e.g., 'comments')."""

_EMPTY: Mapping[str, str] = MappingProxyType({})


def _string_map(value: object, key: str) -> Mapping[str, str]:
    if value is None:
        return _EMPTY
    if not isinstance(value, Mapping):
        raise ConfigurationError(ErrorTemplate.malformed(key, "expected a table"), key=key)
    result: dict[str, str] = {}
    for name, fragment in value.items():
        if not isinstance(name, str) or not isinstance(fragment, str) or not fragment.strip("/"):
            description = "sub-route names and fragments must be non-empty strings"
            raise ConfigurationError(ErrorTemplate.malformed(f"{key}.{name}", description), key=key)
        result[name] = fragment.strip("/")
    return MappingProxyType(result)


def _optional_slug(value: object, key: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str) or not value.strip("/"):
        raise ConfigurationError(ErrorTemplate.malformed(key, "expected a non-empty slug"), key=key)
    return value.strip("/")


@dataclass(frozen=True, slots=True)
class LocalizedRouting:
    """Per-locale overrides of an entity's slug and sub-route fragments.

    Attributes:
        slug: Slug used in this locale, None to keep the canonical slug
        sub_routes: Sub-route key to fragment, for the keys that differ
    """

    slug: str | None = None
    sub_routes: Mapping[SubRouteKey, str] = field(default_factory=lambda: _EMPTY)


@dataclass(frozen=True, slots=True)
class RoutableEntity:
    """An entity that receives localized rewrite rules.

    Attributes:
        name: Short model name; the handling controller is ``<name>Controller``
        query_var: Query parameter the host resolves to load the entity
        slug: Canonical slug; entities without one get no rules
        sub_routes: Sub-route key to default fragment, in declaration order
        localized: Locale code to overrides
        actions: Controller actions available for sub-routes
    """

    name: str
    query_var: str
    slug: str | None = None
    sub_routes: Mapping[SubRouteKey, str] = field(default_factory=lambda: _EMPTY)
    localized: Mapping[LocaleCode, LocalizedRouting] = field(
        default_factory=lambda: MappingProxyType({})
    )
    actions: frozenset[str] = frozenset()

    @property
    def controller(self) -> str:
        """Name of the controller handling the entity's routes."""
        return f"{self.name}Controller"

    def effective_slug(self, locale_code: LocaleCode | None) -> str | None:
        """Slug used in a locale: its override, else the canonical slug."""
        override = self.localized.get(locale_code) if locale_code is not None else None
        if override is not None and override.slug is not None:
            return override.slug
        return self.slug

    def effective_fragment(self, key: SubRouteKey, locale_code: LocaleCode | None) -> str:
        """Fragment of a sub-route in a locale: its override, else the default.

        Raises:
            KeyError: If the entity declares no such sub-route
        """
        override = self.localized.get(locale_code) if locale_code is not None else None
        if override is not None and key in override.sub_routes:
            return override.sub_routes[key]
        return self.sub_routes[key]

    @classmethod
    def from_mapping(cls, name: str, data: Mapping[str, object]) -> RoutableEntity:
        """Build a descriptor from a configuration mapping.

        Args:
            name: Short model name
            data: Mapping with ``query_var`` and optional ``slug``,
                ``rewrite``, ``i18n`` and ``actions`` keys

        Returns:
            New RoutableEntity

        Raises:
            ConfigurationError: If the mapping has an unexpected shape
        """
        query_var = data.get("query_var", name.lower())
        if not isinstance(query_var, str) or not query_var:
            key = f"{name}.query_var"
            raise ConfigurationError(ErrorTemplate.malformed(key, "expected a string"), key=key)

        raw_i18n = data.get("i18n") or {}
        if not isinstance(raw_i18n, Mapping):
            key = f"{name}.i18n"
            raise ConfigurationError(ErrorTemplate.malformed(key, "expected a table"), key=key)
        localized: dict[LocaleCode, LocalizedRouting] = {}
        for code, overrides in raw_i18n.items():
            key = f"{name}.i18n.{code}"
            if not isinstance(overrides, Mapping):
                raise ConfigurationError(ErrorTemplate.malformed(key, "expected a table"), key=key)
            localized[str(code)] = LocalizedRouting(
                slug=_optional_slug(overrides.get("slug"), f"{key}.slug"),
                sub_routes=_string_map(overrides.get("rewrite"), f"{key}.rewrite"),
            )

        raw_actions = data.get("actions") or ()
        if isinstance(raw_actions, str) or not isinstance(raw_actions, Iterable):
            key = f"{name}.actions"
            raise ConfigurationError(ErrorTemplate.malformed(key, "expected a list"), key=key)

        return cls(
            name=name,
            query_var=query_var,
            slug=_optional_slug(data.get("slug"), f"{name}.slug"),
            sub_routes=_string_map(data.get("rewrite"), f"{name}.rewrite"),
            localized=MappingProxyType(localized),
            actions=frozenset(str(action) for action in raw_actions),
        )
