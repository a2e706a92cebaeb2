"""Router routes for localized sub-routes.

A rewrite rule only turns a localized URL into a query string; the
application router still needs a route that dispatches the sub-route to a
controller action. build_routes() emits one route per distinct
(slug, fragment) pair an entity is reachable under, with the action
implied by the sub-route key:

    - the snake_case form of the key, when the entity declares that action
    - ``show`` otherwise, when declared
    - ``no_route_match`` as the last resort

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from localeroute.constants import FALLBACK_ACTIONS, ROUTE_METHODS
from localeroute.routing.rules import locale_variants

if TYPE_CHECKING:
    from localeroute.locales import LocaleRegistry
    from localeroute.routing.entities import RoutableEntity, SubRouteKey

__all__ = ["ModelRoute", "build_routes", "implied_action"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ModelRoute:
    """One router route.

    Attributes:
        methods: Accepted HTTP methods, '|' separated
        path: Route path with ``[:slug]`` and ``[<fragment>:rewrite]`` parameters
        target: ``Controller#action`` handling the route
    """

    methods: str
    path: str
    target: str

    def as_tuple(self) -> tuple[str, str, str]:
        """Return ``(methods, path, target)`` for routers taking plain tuples."""
        return (self.methods, self.path, self.target)


def implied_action(entity: RoutableEntity, key: SubRouteKey) -> str:
    """Pick the controller action handling a sub-route.

    Example:
        >>> entity = RoutableEntity("Article", "article", actions=frozenset({"view_all"}))
        >>> implied_action(entity, "view-all")
        'view_all'
    """
    candidate = key.replace("-", "_").lower()
    for action in (candidate, *FALLBACK_ACTIONS):
        if action in entity.actions:
            return action
    return FALLBACK_ACTIONS[-1]


def build_routes(
    registry: LocaleRegistry,
    entities: Iterable[RoutableEntity],
) -> tuple[ModelRoute, ...]:
    """Build the router routes matching the generated rewrite rules.

    Entities without a slug are skipped. Routes come out in observation
    order (entities in the given order, then sub-routes, then locale
    variants) with duplicates removed.
    """
    variants = locale_variants(registry)
    routes: dict[ModelRoute, None] = {}
    for entity in entities:
        if entity.slug is None:
            continue
        for key in entity.sub_routes:
            target = f"{entity.controller}#{implied_action(entity, key)}"
            for variant in variants:
                slug = entity.effective_slug(variant.locale_code)
                fragment = entity.effective_fragment(key, variant.locale_code)
                route = ModelRoute(
                    methods=ROUTE_METHODS,
                    path=f"/{slug}/[:slug]/[{fragment}:rewrite]/?",
                    target=target,
                )
                routes.setdefault(route, None)
    logger.debug("Built %d model route(s)", len(routes))
    return tuple(routes)
