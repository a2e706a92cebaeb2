"""localeroute - locale resolution, gettext catalog regeneration and localized rewrites.

Decides which language a request is in, keeps gettext catalogs in sync with
the source code without losing human translations, and produces the
coalesced rewrite rules that make localized URLs reachable.

Public API:
    LocaleRegistry - Ordered registry of configured locales
    LocaleResolver - Per-request locale resolution with session bookkeeping
    CatalogGenerator - PO/MO regeneration and translation editing
    merge_catalogs - Right-biased, non-destructive catalog merge
    RewriteRuleGenerator - Coalesced localized rewrite rules
    LocalizationConfig - Settings loaded from TOML

Exceptions:
    LocaleRouteError - Base exception class
    ConfigurationError - Malformed locale configuration
    LocaleNotFoundError - Locale lookup miss
    CatalogIOError - Catalog file read/write failure
    CatalogConsistencyError - Duplicate entry inside one catalog

Submodules:
    localeroute.locales - Locale value objects and declarations
    localeroute.resolution - Request/session protocols and resolution
    localeroute.catalogs - Catalog entries, merging and persistence
    localeroute.routing - Entity descriptors, rewrite rules and routes
    localeroute.diagnostics - Error codes, templates and formatting
"""

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

from .catalogs import CatalogGenerator, RegenerationSummary, TranslationEntry, merge_catalogs
from .config import LocalizationConfig
from .diagnostics import (
    CatalogConsistencyError,
    CatalogIOError,
    ConfigurationError,
    LocaleNotFoundError,
    LocaleRouteError,
)
from .locales import Locale, LocaleRegistry
from .resolution import LocaleResolver, ResolvedLocale, resolve_locale
from .routing import RewriteRule, RewriteRuleGenerator, RoutableEntity, install_rules

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
try:
    __version__ = _get_version("localeroute")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "CatalogConsistencyError",
    "CatalogGenerator",
    "CatalogIOError",
    "ConfigurationError",
    "Locale",
    "LocaleNotFoundError",
    "LocaleRegistry",
    "LocaleResolver",
    "LocaleRouteError",
    "LocalizationConfig",
    "RegenerationSummary",
    "ResolvedLocale",
    "RewriteRule",
    "RewriteRuleGenerator",
    "RoutableEntity",
    "TranslationEntry",
    "__version__",
    "install_rules",
    "merge_catalogs",
    "resolve_locale",
]
