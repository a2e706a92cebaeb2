"""Localized rewrite rule generation.

Turns the locale registry and the routable entities into pattern to
redirect rules that let localized, human-readable URLs such as
``fr/articles/42/commentaires/`` reach the canonical query form
``index.php?article=42&locale=fr``.

Rules are coalesced per sub-route key: every locale segment, slug and
fragment observed for a key becomes one alternation of a single rule. The
rule count is bounded by the number of distinct sub-route keys, however
many locales and entities there are. Every pattern has the same four
groups:

    1. locale URL segment (empty for the unprefixed default locale)
    2. entity slug
    3. free segment (the entity identifier passed to the query variable)
    4. sub-route fragment

Patterns are relative to the site root and match from the start of the
path, like ``re.match``.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol

from localeroute.constants import DEFAULT_REDIRECT_BASE, LOCALE_PARAMETER
from localeroute.diagnostics import ConfigurationError, ErrorTemplate

if TYPE_CHECKING:
    from localeroute.locales import LocaleCode, LocaleRegistry
    from localeroute.routing.entities import RoutableEntity, SubRouteKey

__all__ = [
    "CollectingSink",
    "LocaleVariant",
    "RewriteRule",
    "RewriteRuleGenerator",
    "RewriteSink",
    "install_rules",
    "locale_variants",
]

logger = logging.getLogger(__name__)

_GROUP_REFERENCE = re.compile(r"\$(\d)")


class RewriteSink(Protocol):
    """Host rewrite table receiving generated rules."""

    def add_rule(self, pattern: str, redirect: str) -> None:
        """Install one rewrite rule."""


class CollectingSink:
    """RewriteSink that keeps rules in a list, in installation order."""

    __slots__ = ("rules",)

    def __init__(self) -> None:
        self.rules: list[tuple[str, str]] = []

    def add_rule(self, pattern: str, redirect: str) -> None:
        self.rules.append((pattern, redirect))


@dataclass(frozen=True, slots=True)
class RewriteRule:
    """One coalesced rewrite rule.

    Attributes:
        pattern: Regular expression over the request path
        redirect: Target with ``$n`` references to pattern groups
        sub_route: Sub-route key the rule serves
        query_var: Query variable receiving the free segment
    """

    pattern: str
    redirect: str
    sub_route: SubRouteKey
    query_var: str

    def apply(self, path: str) -> str | None:
        """Rewrite ``path`` with this rule.

        Returns:
            The redirect with group references substituted, or None when the
            path does not match

        Example:
            >>> rule.apply("fr/articles/42/commentaires/")
            'index.php?article=42&locale=fr'
        """
        match = re.match(self.pattern, path.lstrip("/"))
        if match is None:
            return None
        return _GROUP_REFERENCE.sub(lambda ref: match.group(int(ref.group(1))) or "", self.redirect)


@dataclass(frozen=True, slots=True)
class LocaleVariant:
    """A URL prefix under which routes are reachable.

    Attributes:
        locale_code: Locale whose slug and fragment overrides apply, None
            when localization is disabled
        segment: URL segment, '' for the unprefixed variant
    """

    locale_code: LocaleCode | None
    segment: str

    @property
    def is_unprefixed(self) -> bool:
        """Whether URLs of this variant carry no locale segment."""
        return not self.segment


def locale_variants(registry: LocaleRegistry) -> tuple[LocaleVariant, ...]:
    """List the URL prefixes routes must be reachable under.

    The default locale is always reachable without prefix, and also under
    its segment when it has a custom URL. Other locales are reachable under
    their segment. An empty registry yields only the unprefixed variant.
    """
    if registry.is_empty():
        return (LocaleVariant(None, ""),)
    default = registry.default_locale()
    variants = [LocaleVariant(default.code, "")]
    if default.has_custom_url:
        variants.append(LocaleVariant(default.code, default.url_segment))
    variants.extend(
        LocaleVariant(locale.code, locale.url_segment) for locale in registry if locale != default
    )
    return tuple(variants)


def _append_unique(values: list[str], value: str) -> None:
    if value not in values:
        values.append(value)


@dataclass(slots=True)
class _RuleGroup:
    query_var: str
    entity_name: str
    segments: list[str] = field(default_factory=list)
    slugs: list[str] = field(default_factory=list)
    fragments: list[str] = field(default_factory=list)

    def observe(self, variant: LocaleVariant, slug: str, fragment: str) -> None:
        if not variant.is_unprefixed:
            _append_unique(self.segments, variant.segment)
        _append_unique(self.slugs, slug)
        _append_unique(self.fragments, fragment)

    def locale_group(self) -> str:
        # Default-locale URLs are always reachable unprefixed.
        if not self.segments:
            return "()"
        alternation = "|".join(re.escape(segment) for segment in self.segments)
        return f"(?:({alternation})/)?"

    def pattern(self) -> str:
        slugs = "|".join(re.escape(slug) for slug in self.slugs)
        fragments = "|".join(re.escape(fragment) for fragment in self.fragments)
        return f"{self.locale_group()}({slugs})/([^/]+)/({fragments})/?$"


class RewriteRuleGenerator:
    """Computes the coalesced rewrite rule set for a registry and entities.

    Example:
        >>> generator = RewriteRuleGenerator()
        >>> [rule.pattern for rule in generator.generate(registry, [article])]
        ['(?:(fr)/)?(articles)/([^/]+)/(comments|commentaires)/?$']
    """

    __slots__ = ("_redirect_base",)

    def __init__(self, redirect_base: str = DEFAULT_REDIRECT_BASE) -> None:
        """Initialize generator.

        Args:
            redirect_base: Script the redirects point at
        """
        self._redirect_base = redirect_base

    def generate(
        self,
        registry: LocaleRegistry,
        entities: Iterable[RoutableEntity],
    ) -> tuple[RewriteRule, ...]:
        """Compute every rewrite rule.

        Rules come out ordered by sub-route key. Alternations list values in
        the order they were first observed: entities in the given order,
        locale variants default first. Entities sharing a sub-route key must
        share the query variable.

        Args:
            registry: Configured locales
            entities: Routable entities in registration order

        Returns:
            Rules, at most one per distinct sub-route key

        Raises:
            ConfigurationError: If entities sharing a sub-route key use
                different query variables
        """
        variants = locale_variants(registry)
        groups: dict[SubRouteKey, _RuleGroup] = {}

        for entity in entities:
            if entity.slug is None:
                logger.debug("Skipping entity '%s': no rewrite slug configured", entity.name)
                continue
            for key in entity.sub_routes:
                group = groups.get(key)
                if group is None:
                    group = _RuleGroup(query_var=entity.query_var, entity_name=entity.name)
                    groups[key] = group
                elif group.query_var != entity.query_var:
                    raise ConfigurationError(
                        ErrorTemplate.query_var_conflict(
                            key,
                            entity.name,
                            entity.query_var,
                            group.entity_name,
                            group.query_var,
                        ),
                        key=f"routing.{entity.name}.query_var",
                    )
                for variant in variants:
                    slug = entity.effective_slug(variant.locale_code)
                    if slug is None:
                        continue
                    fragment = entity.effective_fragment(key, variant.locale_code)
                    group.observe(variant, slug, fragment)

        rules = tuple(
            RewriteRule(
                pattern=groups[key].pattern(),
                redirect=self._redirect(groups[key].query_var),
                sub_route=key,
                query_var=groups[key].query_var,
            )
            for key in sorted(groups)
        )
        logger.debug("Generated %d rewrite rule(s)", len(rules))
        return rules

    def _redirect(self, query_var: str) -> str:
        return f"{self._redirect_base}?{query_var}=$3&{LOCALE_PARAMETER}=$1"


def install_rules(sink: RewriteSink, rules: Iterable[RewriteRule]) -> int:
    """Hand a computed rule set to the host rewrite table.

    Pass the complete result of RewriteRuleGenerator.generate(); the sink
    is only touched once every rule exists.

    Returns:
        Number of rules installed
    """
    rule_list = tuple(rules)
    for rule in rule_list:
        sink.add_rule(rule.pattern, rule.redirect)
    logger.info("Installed %d rewrite rule(s)", len(rule_list))
    return len(rule_list)
