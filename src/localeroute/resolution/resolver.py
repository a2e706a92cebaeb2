"""Locale context resolution.

Decides the single active locale of a request. Sources are consulted in a
fixed precedence order and the first one that yields a configured locale
wins:

    1. Extension override (injected callable)
    2. Explicit ``locale`` parameter (POST first for asynchronous requests)
    3. URL path prefix; an unprefixed path selects the default locale
       (skipped in the administrative area)
    4. Code stored in the session by an earlier request
    5. Default locale

The result is a ResolvedLocale value handed to renderers, not state kept
on a shared object. Resolve once per request and pass the value along.

Python 3.13+.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, TypeAlias

from localeroute.constants import (
    ADMIN_SESSION_SUFFIX,
    DEFAULT_TEXT_DOMAIN,
    LOCALE_PARAMETER,
    PUBLIC_SESSION_SUFFIX,
)
from localeroute.enums import ContextKind, ResolutionSource

if TYPE_CHECKING:
    from localeroute.locales import Locale, LocaleCode, LocaleRegistry
    from localeroute.resolution.context import RequestContext, SessionStore

__all__ = [
    "LocaleOverride",
    "LocaleResolver",
    "ResolvedLocale",
    "context_kind",
    "resolve_locale",
    "session_key",
]

logger = logging.getLogger(__name__)

LocaleOverride: TypeAlias = "Callable[[RequestContext], LocaleCode | None]"
"""Extension point: return a locale code to force it, or None to abstain."""


@dataclass(frozen=True, slots=True)
class ResolvedLocale:
    """Outcome of resolving a request's locale.

    Attributes:
        locale: The active locale
        source: Precedence step that selected it
        context_kind: Administrative or public context of the request
        is_default: Whether the active locale is the registry default
    """

    locale: Locale
    source: ResolutionSource
    context_kind: ContextKind
    is_default: bool

    @property
    def code(self) -> LocaleCode:
        """Code of the active locale."""
        return self.locale.code

    @property
    def url_prefix(self) -> str:
        """Path prefix for links in this locale ('' for an unprefixed default)."""
        if self.is_default and not self.locale.has_custom_url:
            return ""
        return f"/{self.locale.url_segment}"

    def is_active(self, locale: Locale) -> bool:
        """Check whether ``locale`` is the active locale."""
        return locale.code == self.locale.code


def context_kind(request: RequestContext) -> ContextKind:
    """Classify a request for session bookkeeping.

    Asynchronous requests issued from public pages run through the
    administrative endpoint on most hosts, so only synchronous
    administrative requests count as ADMIN.
    """
    if request.is_admin() and not request.is_async():
        return ContextKind.ADMIN
    return ContextKind.PUBLIC


def session_key(kind: ContextKind, text_domain: str = DEFAULT_TEXT_DOMAIN) -> str:
    """Return the session key storing the locale code for a context kind.

    Example:
        >>> session_key(ContextKind.ADMIN)
        'localeroute_admin'
        >>> session_key(ContextKind.PUBLIC, "shop")
        'shop_front'
    """
    suffix = ADMIN_SESSION_SUFFIX if kind is ContextKind.ADMIN else PUBLIC_SESSION_SUFFIX
    return f"{text_domain}{suffix}"


def _prefix_pattern(registry: LocaleRegistry) -> re.Pattern[str] | None:
    segments = registry.non_default_url_segments()
    if not segments:
        return None
    alternation = "|".join(re.escape(segment) for segment in segments)
    return re.compile(rf"^/({alternation})(?:/|$)", re.IGNORECASE)


class LocaleResolver:
    """Resolves request locales against a registry.

    The URL prefix pattern is compiled once per resolver, so build one
    resolver per registry and reuse it across requests.

    Example:
        >>> registry = LocaleRegistry.load({"en": {"default": True}, "fr": None})
        >>> resolver = LocaleResolver(registry)
        >>> session = MemorySessionStore()
        >>> resolver.activate(MappingRequest("/fr/articles/"), session).code
        'fr'
        >>> session.get("localeroute_front")
        'fr'
    """

    __slots__ = ("_override", "_prefix", "_registry", "_segments", "_text_domain")

    def __init__(
        self,
        registry: LocaleRegistry,
        *,
        override: LocaleOverride | None = None,
        text_domain: str = DEFAULT_TEXT_DOMAIN,
    ) -> None:
        """Initialize resolver.

        Args:
            registry: Configured locales
            override: Optional extension callback consulted before any other
                source; a returned code wins outright
            text_domain: Namespace of the session keys
        """
        self._registry = registry
        self._override = override
        self._text_domain = text_domain
        self._prefix = _prefix_pattern(registry)
        self._segments = {s.casefold(): s for s in registry.non_default_url_segments()}

    @property
    def registry(self) -> LocaleRegistry:
        """Registry this resolver consults."""
        return self._registry

    def session_key_for(self, request: RequestContext) -> str:
        """Session key used for this request's context kind."""
        return session_key(context_kind(request), self._text_domain)

    def resolve(
        self,
        request: RequestContext,
        session_code: LocaleCode | None = None,
    ) -> ResolvedLocale | None:
        """Resolve the request locale without touching the session.

        Args:
            request: Current request
            session_code: Code stored for this context kind, if any

        Returns:
            ResolvedLocale, or None when localization is disabled
        """
        if self._registry.is_empty():
            return None

        source, locale = self._first_match(request, session_code)
        logger.debug("Resolved locale '%s' from %s", locale.code, source)
        return ResolvedLocale(
            locale=locale,
            source=source,
            context_kind=context_kind(request),
            is_default=locale == self._registry.default_locale(),
        )

    def activate(self, request: RequestContext, session: SessionStore) -> ResolvedLocale | None:
        """Resolve the request locale and remember it in the session.

        The chosen code is stored under the key of the request's context
        kind. A decision that came from the session itself is not written
        back, so the stored value only bridges a single request that lost
        its path or parameter context.

        Args:
            request: Current request
            session: Session store of the current visitor

        Returns:
            ResolvedLocale, or None when localization is disabled
        """
        key = self.session_key_for(request)
        stored = session.get(key) if session.has(key) else None
        resolved = self.resolve(request, stored)
        if resolved is not None and resolved.source is not ResolutionSource.SESSION:
            session.set(key, resolved.code)
        return resolved

    def _first_match(
        self,
        request: RequestContext,
        session_code: LocaleCode | None,
    ) -> tuple[ResolutionSource, Locale]:
        steps: list[tuple[ResolutionSource, Callable[[], Locale | None]]] = [
            (ResolutionSource.OVERRIDE, lambda: self._from_override(request)),
            (ResolutionSource.PARAMETER, lambda: self._from_parameter(request)),
            (ResolutionSource.URL_PATH, lambda: self._from_path(request)),
            (ResolutionSource.SESSION, lambda: self._from_code(session_code)),
        ]
        for source, step in steps:
            locale = step()
            if locale is not None:
                return source, locale
        return ResolutionSource.DEFAULT, self._registry.default_locale()

    def _from_code(self, code: str | None) -> Locale | None:
        if not code:
            return None
        return self._registry.get(code)

    def _from_override(self, request: RequestContext) -> Locale | None:
        if self._override is None:
            return None
        code = self._override(request)
        if code is None:
            return None
        locale = self._registry.get(code)
        if locale is None:
            logger.warning("Locale override returned unknown code '%s'; ignoring it", code)
        return locale

    def _from_parameter(self, request: RequestContext) -> Locale | None:
        values = [request.get_query_param(LOCALE_PARAMETER)]
        if request.is_async():
            values.insert(0, request.get_post_param(LOCALE_PARAMETER))
        for value in values:
            locale = self._from_code(value)
            if locale is not None:
                return locale
        return None

    def _from_path(self, request: RequestContext) -> Locale | None:
        if request.is_admin():
            return None
        if self._prefix is not None:
            match = self._prefix.match(request.path())
            if match is not None:
                segment = self._segments[match.group(1).casefold()]
                return self._registry.by_url_segment(segment)
        # No locale prefix: the path belongs to the default locale.
        return self._registry.default_locale()


def resolve_locale(
    request: RequestContext,
    registry: LocaleRegistry,
    session_code: LocaleCode | None = None,
    *,
    override: LocaleOverride | None = None,
) -> ResolvedLocale | None:
    """Resolve a request's locale in one call.

    Convenience wrapper around LocaleResolver.resolve() for callers that do
    not keep a resolver around.

    Args:
        request: Current request
        registry: Configured locales
        session_code: Code stored in the session for this context kind
        override: Optional extension callback

    Returns:
        ResolvedLocale, or None when the registry is empty
    """
    return LocaleResolver(registry, override=override).resolve(request, session_code)
