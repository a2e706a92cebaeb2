"""Request and session capabilities consumed by the locale resolver.

The resolver never touches host globals. Hosts adapt their request and
session objects to the two protocols below; MappingRequest and
MemorySessionStore are plain implementations for tests, CLIs and hosts
that already hold request data as dictionaries.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from collections.abc import Mapping, MutableMapping
from types import MappingProxyType
from typing import Protocol

__all__ = [
    "MappingRequest",
    "MemorySessionStore",
    "RequestContext",
    "SessionStore",
]


class RequestContext(Protocol):
    """Read-only view of the current request.

    This is a Protocol (structural typing) rather than ABC so host request
    objects can satisfy it without inheriting from localeroute classes.
    """

    def get_query_param(self, name: str) -> str | None:
        """Return a GET-style parameter, or None when absent."""

    def get_post_param(self, name: str) -> str | None:
        """Return a POST-style parameter, or None when absent."""

    def path(self) -> str:
        """Return the request path (no scheme, host or query string)."""

    def is_admin(self) -> bool:
        """Check whether the request targets the administrative area."""

    def is_async(self) -> bool:
        """Check whether the request is an asynchronous sub-request."""


class SessionStore(Protocol):
    """Browsing-session storage holding one string per key."""

    def get(self, key: str) -> str | None:
        """Return the stored value, or None."""

    def set(self, key: str, value: str) -> None:
        """Store a value."""

    def has(self, key: str) -> bool:
        """Check whether a value is stored under key."""


class MappingRequest:
    """RequestContext backed by plain mappings.

    Example:
        >>> request = MappingRequest("/fr/articles/42/", query={"page": "2"})
        >>> request.get_query_param("page")
        '2'
        >>> request.is_admin()
        False
    """

    __slots__ = ("_admin", "_asynchronous", "_path", "_post", "_query")

    def __init__(
        self,
        path: str = "/",
        *,
        query: Mapping[str, str] | None = None,
        post: Mapping[str, str] | None = None,
        admin: bool = False,
        asynchronous: bool = False,
    ) -> None:
        self._path = path
        self._query: Mapping[str, str] = MappingProxyType(dict(query or {}))
        self._post: Mapping[str, str] = MappingProxyType(dict(post or {}))
        self._admin = admin
        self._asynchronous = asynchronous

    def __repr__(self) -> str:
        return (
            f"MappingRequest({self._path!r}, query={dict(self._query)!r}, "
            f"post={dict(self._post)!r}, admin={self._admin}, "
            f"asynchronous={self._asynchronous})"
        )

    def get_query_param(self, name: str) -> str | None:
        return self._query.get(name)

    def get_post_param(self, name: str) -> str | None:
        return self._post.get(name)

    def path(self) -> str:
        return self._path

    def is_admin(self) -> bool:
        return self._admin

    def is_async(self) -> bool:
        return self._asynchronous


class MemorySessionStore:
    """SessionStore backed by a dictionary.

    Pass an existing mutable mapping (for example a framework's session
    dict) to share storage with the host.
    """

    __slots__ = ("_data",)

    def __init__(self, data: MutableMapping[str, str] | None = None) -> None:
        self._data: MutableMapping[str, str] = data if data is not None else {}

    def __repr__(self) -> str:
        return f"MemorySessionStore({dict(self._data)!r})"

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def has(self, key: str) -> bool:
        return key in self._data
