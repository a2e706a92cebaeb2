"""Tests for request locale resolution.

Covers the precedence chain (override, parameter, URL path, session,
default), session bookkeeping per context kind, and the ResolvedLocale
value handed to renderers.

Python 3.13+.
"""

from __future__ import annotations

import logging

import pytest
from hypothesis import assume, event, given
from hypothesis import strategies as st

from localeroute.enums import ContextKind, ResolutionSource
from localeroute.locales import LocaleRegistry
from localeroute.resolution import (
    LocaleResolver,
    MappingRequest,
    MemorySessionStore,
    RequestContext,
    context_kind,
    resolve_locale,
    session_key,
)
from tests.strategies import locale_configs
from tests.strategies.locales import request_paths


@pytest.fixture
def registry() -> LocaleRegistry:
    """English default without custom URL, French at /fr, German at /deutsch."""
    return LocaleRegistry.load(
        {"en": {"default": True}, "fr": {"url": "fr"}, "de": {"url": "deutsch"}}
    )


class TestContextKind:
    """Administrative versus public classification."""

    def test_admin_request(self) -> None:
        """Synchronous back-office requests are administrative."""
        assert context_kind(MappingRequest(admin=True)) is ContextKind.ADMIN

    def test_async_admin_request_is_public(self) -> None:
        """Asynchronous requests count as public even on the admin endpoint."""
        request = MappingRequest(admin=True, asynchronous=True)
        assert context_kind(request) is ContextKind.PUBLIC

    def test_public_request(self) -> None:
        """Plain visitor requests are public."""
        assert context_kind(MappingRequest("/")) is ContextKind.PUBLIC

    def test_session_keys_are_namespaced(self) -> None:
        """Session keys combine the text domain and the context kind."""
        assert session_key(ContextKind.ADMIN) == "localeroute_admin"
        assert session_key(ContextKind.PUBLIC) == "localeroute_front"
        assert session_key(ContextKind.PUBLIC, "shop") == "shop_front"


class TestPathResolution:
    """URL prefix matching."""

    def test_prefixed_path_selects_locale(self, registry: LocaleRegistry) -> None:
        """A path under /fr resolves to French."""
        resolved = LocaleResolver(registry).resolve(MappingRequest("/fr/articles/42/commentaires/"))

        assert resolved is not None
        assert resolved.code == "fr"
        assert resolved.source is ResolutionSource.URL_PATH
        assert not resolved.is_default

    def test_custom_segment(self, registry: LocaleRegistry) -> None:
        """Custom URL segments select their locale."""
        resolved = LocaleResolver(registry).resolve(MappingRequest("/deutsch/produkte/"))
        assert resolved is not None
        assert resolved.code == "de"

    def test_bare_prefix_without_trailing_slash(self, registry: LocaleRegistry) -> None:
        """The locale home page /fr matches without a trailing slash."""
        resolved = LocaleResolver(registry).resolve(MappingRequest("/fr"))
        assert resolved is not None
        assert resolved.code == "fr"

    def test_prefix_match_is_case_insensitive(self, registry: LocaleRegistry) -> None:
        """Segments match regardless of case."""
        resolved = LocaleResolver(registry).resolve(MappingRequest("/FR/articles/"))
        assert resolved is not None
        assert resolved.code == "fr"

    def test_segment_must_be_whole(self, registry: LocaleRegistry) -> None:
        """/french is not under /fr."""
        resolved = LocaleResolver(registry).resolve(MappingRequest("/french/"))
        assert resolved is not None
        assert resolved.code == "en"
        assert resolved.source is ResolutionSource.URL_PATH

    def test_unprefixed_path_selects_default(self, registry: LocaleRegistry) -> None:
        """/articles/42/ belongs to the default locale."""
        resolved = LocaleResolver(registry).resolve(MappingRequest("/articles/42/"))

        assert resolved is not None
        assert resolved.code == "en"
        assert resolved.source is ResolutionSource.URL_PATH
        assert resolved.is_default

    def test_admin_requests_skip_path(self, registry: LocaleRegistry) -> None:
        """Administrative paths carry no locale prefix."""
        request = MappingRequest("/fr/wp-admin/", admin=True)
        resolved = LocaleResolver(registry).resolve(request, session_code="de")

        assert resolved is not None
        assert resolved.code == "de"
        assert resolved.source is ResolutionSource.SESSION

    def test_admin_without_session_falls_back_to_default(self, registry: LocaleRegistry) -> None:
        """With nothing else to go on, administrative requests use the default."""
        resolved = LocaleResolver(registry).resolve(MappingRequest("/admin/", admin=True))
        assert resolved is not None
        assert resolved.source is ResolutionSource.DEFAULT
        assert resolved.code == "en"

    @given(config=locale_configs(min_size=2), data=st.data())
    def test_prefixed_paths_resolve_to_their_locale(
        self, config: dict[str, dict[str, object]], data: st.DataObject
    ) -> None:
        """Every non-default segment prefix selects its own locale."""
        registry = LocaleRegistry.load(config)
        default = registry.default_locale()
        locale = data.draw(st.sampled_from([loc for loc in registry if loc != default]))
        path = data.draw(request_paths(segment=locale.url_segment))

        resolved = LocaleResolver(registry).resolve(MappingRequest(path))
        assert resolved is not None
        assert resolved.locale == locale

    @given(config=locale_configs(), data=st.data())
    def test_unprefixed_paths_resolve_to_default(
        self, config: dict[str, dict[str, object]], data: st.DataObject
    ) -> None:
        """Paths outside every locale prefix select the default locale."""
        registry = LocaleRegistry.load(config)
        path = data.draw(request_paths())
        first = path.strip("/").split("/")[0].casefold()
        segments = {s.casefold() for s in registry.non_default_url_segments()}
        assume(first not in segments)
        event(f"locale_count={len(registry)}")

        resolved = LocaleResolver(registry).resolve(MappingRequest(path))
        assert resolved is not None
        assert resolved.locale == registry.default_locale()


class TestPrecedence:
    """Ordering of the resolution sources."""

    def test_parameter_beats_path_and_session(self, registry: LocaleRegistry) -> None:
        """An explicit locale parameter outranks everything but the override."""
        request = MappingRequest("/fr/articles/", query={"locale": "de"})
        resolved = LocaleResolver(registry).resolve(request, session_code="en")

        assert resolved is not None
        assert resolved.code == "de"
        assert resolved.source is ResolutionSource.PARAMETER

    def test_path_beats_session(self, registry: LocaleRegistry) -> None:
        """A locale prefix outranks the stored session value."""
        resolved = LocaleResolver(registry).resolve(
            MappingRequest("/fr/articles/"), session_code="de"
        )
        assert resolved is not None
        assert resolved.code == "fr"

    def test_unknown_parameter_is_ignored(self, registry: LocaleRegistry) -> None:
        """A parameter naming no configured locale falls through."""
        request = MappingRequest("/fr/", query={"locale": "zz"})
        resolved = LocaleResolver(registry).resolve(request)
        assert resolved is not None
        assert resolved.code == "fr"
        assert resolved.source is ResolutionSource.URL_PATH

    def test_async_post_parameter_first(self, registry: LocaleRegistry) -> None:
        """Asynchronous requests read the POST parameter before the query."""
        request = MappingRequest(
            "/ajax/",
            query={"locale": "de"},
            post={"locale": "fr"},
            admin=True,
            asynchronous=True,
        )
        resolved = LocaleResolver(registry).resolve(request)
        assert resolved is not None
        assert resolved.code == "fr"

    def test_sync_requests_ignore_post_parameter(self, registry: LocaleRegistry) -> None:
        """Only asynchronous requests consult POST data."""
        request = MappingRequest("/deutsch/", post={"locale": "fr"})
        resolved = LocaleResolver(registry).resolve(request)
        assert resolved is not None
        assert resolved.code == "de"

    def test_override_beats_everything(self, registry: LocaleRegistry) -> None:
        """The extension callback is consulted first."""
        resolver = LocaleResolver(registry, override=lambda request: "de")
        request = MappingRequest("/fr/", query={"locale": "en"})

        resolved = resolver.resolve(request, session_code="en")
        assert resolved is not None
        assert resolved.code == "de"
        assert resolved.source is ResolutionSource.OVERRIDE

    def test_override_abstaining(self, registry: LocaleRegistry) -> None:
        """An override returning None lets the chain continue."""
        seen: list[RequestContext] = []

        def abstain(request: RequestContext) -> str | None:
            seen.append(request)
            return None

        request = MappingRequest("/fr/")
        resolved = LocaleResolver(registry, override=abstain).resolve(request)
        assert resolved is not None
        assert resolved.code == "fr"
        assert seen == [request]

    def test_override_unknown_code_logged(
        self, registry: LocaleRegistry, caplog: pytest.LogCaptureFixture
    ) -> None:
        """An override naming an unknown locale is ignored with a warning."""
        resolver = LocaleResolver(registry, override=lambda request: "zz")
        with caplog.at_level(logging.WARNING, logger="localeroute.resolution.resolver"):
            resolved = resolver.resolve(MappingRequest("/fr/"))

        assert resolved is not None
        assert resolved.code == "fr"
        assert "zz" in caplog.text

    def test_unknown_session_code_falls_to_default(self, registry: LocaleRegistry) -> None:
        """A stale session value naming a removed locale is ignored."""
        resolved = LocaleResolver(registry).resolve(
            MappingRequest("/admin/", admin=True), session_code="it"
        )
        assert resolved is not None
        assert resolved.source is ResolutionSource.DEFAULT

    def test_empty_registry_resolves_to_none(self) -> None:
        """No locales means no active locale, not an error."""
        request = MappingRequest("/fr/", query={"locale": "fr"})
        assert LocaleResolver(LocaleRegistry()).resolve(request) is None
        assert resolve_locale(request, LocaleRegistry()) is None


class TestActivate:
    """Session bookkeeping."""

    def test_default_locale_written_to_public_key(self, registry: LocaleRegistry) -> None:
        """Resolving /articles/42/ stores the default under the public key."""
        session = MemorySessionStore()
        resolved = LocaleResolver(registry).activate(MappingRequest("/articles/42/"), session)

        assert resolved is not None
        assert resolved.code == "en"
        assert session.get("localeroute_front") == "en"
        assert not session.has("localeroute_admin")

    def test_admin_choice_written_to_admin_key(self, registry: LocaleRegistry) -> None:
        """Administrative decisions never touch the public key."""
        session = MemorySessionStore()
        request = MappingRequest("/admin/", query={"locale": "fr"}, admin=True)
        LocaleResolver(registry).activate(request, session)

        assert session.get("localeroute_admin") == "fr"
        assert not session.has("localeroute_front")

    def test_session_value_bridges_requests(self, registry: LocaleRegistry) -> None:
        """A stored administrative choice applies to the next admin request."""
        session = MemorySessionStore({"localeroute_admin": "de"})
        resolved = LocaleResolver(registry).activate(
            MappingRequest("/admin/", admin=True), session
        )
        assert resolved is not None
        assert resolved.code == "de"
        assert resolved.source is ResolutionSource.SESSION

    def test_custom_text_domain_namespaces_keys(self, registry: LocaleRegistry) -> None:
        """Session keys follow the configured text domain."""
        data: dict[str, str] = {}
        LocaleResolver(registry, text_domain="shop").activate(
            MappingRequest("/fr/"), MemorySessionStore(data)
        )
        assert data == {"shop_front": "fr"}

    def test_empty_registry_leaves_session_alone(self) -> None:
        """Disabled localization stores nothing."""
        data: dict[str, str] = {}
        resolved = LocaleResolver(LocaleRegistry()).activate(
            MappingRequest("/"), MemorySessionStore(data)
        )
        assert resolved is None
        assert data == {}


class TestResolvedLocale:
    """The per-request result value."""

    def test_url_prefix(self, registry: LocaleRegistry) -> None:
        """The default locale links without prefix, others with their segment."""
        resolver = LocaleResolver(registry)
        english = resolver.resolve(MappingRequest("/"))
        german = resolver.resolve(MappingRequest("/deutsch/"))

        assert english is not None
        assert german is not None
        assert english.url_prefix == ""
        assert german.url_prefix == "/deutsch"

    def test_default_with_custom_url_keeps_prefix(self) -> None:
        """A default locale with a custom URL still links under it."""
        registry = LocaleRegistry.load({"en": {"default": True, "url": "english"}, "fr": None})
        resolved = LocaleResolver(registry).resolve(MappingRequest("/"))
        assert resolved is not None
        assert resolved.url_prefix == "/english"

    def test_is_active(self, registry: LocaleRegistry) -> None:
        """is_active compares by locale code."""
        resolved = LocaleResolver(registry).resolve(MappingRequest("/fr/"))
        assert resolved is not None
        assert resolved.is_active(registry.by_code("fr"))
        assert not resolved.is_active(registry.by_code("en"))
