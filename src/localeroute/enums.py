"""Enumerations for localeroute type-safe constants.

Uses StrEnum so members compare equal to, and log as, plain strings.

Python 3.13+.
"""

from enum import StrEnum


class ContextKind(StrEnum):
    """Kind of request context a locale decision belongs to.

    Administrative and public decisions are stored under separate session
    keys so one never leaks into the other.
    """

    ADMIN = "admin"
    """Back-office request that is not an asynchronous sub-request."""

    PUBLIC = "public"
    """Visitor-facing request, including asynchronous front-end calls."""


class ResolutionSource(StrEnum):
    """Precedence step that produced a locale decision.

    Members are listed in precedence order.
    """

    OVERRIDE = "override"
    """Injected extension callback."""

    PARAMETER = "parameter"
    """Explicit ``locale`` request parameter."""

    URL_PATH = "url_path"
    """Locale URL prefix, or its absence for the default locale."""

    SESSION = "session"
    """Code stored in the session by a previous request."""

    DEFAULT = "default"
    """Configured (or implicit) default locale."""


class RegenerationStatus(StrEnum):
    """Outcome of regenerating one locale's catalog pair."""

    SUCCESS = "success"
    ERROR = "error"


__all__ = [
    "ContextKind",
    "RegenerationStatus",
    "ResolutionSource",
]
