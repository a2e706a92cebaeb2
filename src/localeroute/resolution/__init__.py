"""Locale context resolution for requests.

Exports:
    LocaleResolver: Precedence-chain resolver with session bookkeeping
    ResolvedLocale: Per-request resolution result
    resolve_locale: One-shot resolution helper
    RequestContext / SessionStore: Host capability protocols
    MappingRequest / MemorySessionStore: Dictionary-backed implementations

Python 3.13+.
"""

from .context import MappingRequest, MemorySessionStore, RequestContext, SessionStore
from .resolver import (
    LocaleOverride,
    LocaleResolver,
    ResolvedLocale,
    context_kind,
    resolve_locale,
    session_key,
)

__all__ = [
    "LocaleOverride",
    "LocaleResolver",
    "MappingRequest",
    "MemorySessionStore",
    "RequestContext",
    "ResolvedLocale",
    "SessionStore",
    "context_kind",
    "resolve_locale",
    "session_key",
]
