"""Shared constants for localeroute.

Centralizes names and defaults used by more than one subsystem so that
the resolver, the catalog generator and the CLI agree on them.

Constants are grouped by domain:
- Text domain: default gettext domain and session key namespace
- Request: inbound parameter names
- Catalog files: file suffixes and reference markers
- Routing: redirect and route defaults

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Text domain
    "DEFAULT_TEXT_DOMAIN",
    "ADMIN_SESSION_SUFFIX",
    "PUBLIC_SESSION_SUFFIX",
    # Request
    "LOCALE_PARAMETER",
    # Catalog files
    "PO_SUFFIX",
    "MO_SUFFIX",
    "PROJECT_ROOT_MARKER",
    # Routing
    "DEFAULT_REDIRECT_BASE",
    "ROUTE_METHODS",
    "FALLBACK_ACTIONS",
]

# ============================================================================
# TEXT DOMAIN
# ============================================================================

DEFAULT_TEXT_DOMAIN: str = "localeroute"
"""Gettext domain stamped into catalogs when configuration names none."""

ADMIN_SESSION_SUFFIX: str = "_admin"
PUBLIC_SESSION_SUFFIX: str = "_front"

# ============================================================================
# REQUEST
# ============================================================================

LOCALE_PARAMETER: str = "locale"
"""Name of the GET/POST parameter that selects a locale explicitly."""

# ============================================================================
# CATALOG FILES
# ============================================================================

PO_SUFFIX: str = ".po"
MO_SUFFIX: str = ".mo"

PROJECT_ROOT_MARKER: str = "~"
"""Replaces the project root in source references written to catalogs."""

# ============================================================================
# ROUTING
# ============================================================================

DEFAULT_REDIRECT_BASE: str = "index.php"

ROUTE_METHODS: str = "GET|POST|PATCH|PUT|DELETE"

# Tried in order after the action implied by the sub-route key.
FALLBACK_ACTIONS: tuple[str, ...] = ("show", "no_route_match")
