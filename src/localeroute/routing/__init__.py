"""Localized URL routing: rewrite rules and router routes.

Exports:
    RoutableEntity / LocalizedRouting: Entity descriptors
    RewriteRuleGenerator: Coalesced rewrite rule computation
    install_rules: Hand rules to a RewriteSink
    build_routes: Router routes for localized sub-routes

Python 3.13+.
"""

from .entities import LocalizedRouting, RoutableEntity, SubRouteKey
from .routes import ModelRoute, build_routes, implied_action
from .rules import (
    CollectingSink,
    LocaleVariant,
    RewriteRule,
    RewriteRuleGenerator,
    RewriteSink,
    install_rules,
    locale_variants,
)

__all__ = [
    "CollectingSink",
    "LocaleVariant",
    "LocalizedRouting",
    "ModelRoute",
    "RewriteRule",
    "RewriteRuleGenerator",
    "RewriteSink",
    "RoutableEntity",
    "SubRouteKey",
    "build_routes",
    "implied_action",
    "install_rules",
    "locale_variants",
]
