"""Exception hierarchy with structured diagnostics.

All exceptions optionally store a Diagnostic object for rich error output.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic

__all__ = [
    "CatalogConsistencyError",
    "CatalogIOError",
    "ConfigurationError",
    "LocaleNotFoundError",
    "LocaleRouteError",
]


class LocaleRouteError(Exception):
    """Base exception for all localeroute errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize LocaleRouteError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.format_error())
        else:
            self.diagnostic = None
            super().__init__(message)


class ConfigurationError(LocaleRouteError):
    """Malformed or missing locale configuration.

    Fatal for the localization subsystem only: callers are expected to
    continue unlocalized.

    Attributes:
        key: Configuration key that caused the failure
    """

    def __init__(self, message: str | Diagnostic, *, key: str = "") -> None:
        """Initialize ConfigurationError.

        Args:
            message: Error message string OR Diagnostic object
            key: Offending configuration key
        """
        super().__init__(message)
        self.key = key


class LocaleNotFoundError(LocaleRouteError, LookupError):
    """Locale lookup miss.

    Recovered locally: resolution treats it as "try the next source".

    Attributes:
        lookup: The code or URL segment that was not found
    """

    def __init__(self, message: str | Diagnostic, *, lookup: str = "") -> None:
        """Initialize LocaleNotFoundError.

        Args:
            message: Error message string OR Diagnostic object
            lookup: The code or URL segment that was looked up
        """
        super().__init__(message)
        self.lookup = lookup


class CatalogIOError(LocaleRouteError):
    """Catalog file could not be read or written.

    Aborts regeneration of a single locale; batch runs continue with the
    remaining locales.

    Attributes:
        locale_code: Locale whose catalog failed
        path: File or directory involved
    """

    def __init__(
        self,
        message: str | Diagnostic,
        *,
        locale_code: str = "",
        path: str = "",
    ) -> None:
        """Initialize CatalogIOError.

        Args:
            message: Error message string OR Diagnostic object
            locale_code: Locale whose catalog failed
            path: File or directory involved
        """
        super().__init__(message)
        self.locale_code = locale_code
        self.path = path


class CatalogConsistencyError(LocaleRouteError):
    """Two entries of one catalog share an identity key.

    Never deduplicated silently.

    Attributes:
        context: Message context of the duplicated entry (None when absent)
        original: Original string of the duplicated entry
    """

    def __init__(
        self,
        message: str | Diagnostic,
        *,
        context: str | None = None,
        original: str = "",
    ) -> None:
        """Initialize CatalogConsistencyError.

        Args:
            message: Error message string OR Diagnostic object
            context: Message context of the duplicated entry
            original: Original string of the duplicated entry
        """
        super().__init__(message)
        self.context = context
        self.original = original
