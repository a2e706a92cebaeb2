"""Diagnostic codes and data structures.

Defines error codes and structured diagnostic messages.
Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Literal

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
]


class DiagnosticCode(Enum):
    """Error codes with unique identifiers.

    Organized by category:
        1000-1999: Configuration errors (locale declarations, config files)
        2000-2999: Lookup errors (unknown locales)
        3000-3999: Catalog errors (file I/O, consistency)
    """

    # Configuration errors (1000-1999)
    CONFIG_INVALID_CODE = 1001
    CONFIG_DUPLICATE_CODE = 1002
    CONFIG_UNKNOWN_OPTION = 1003
    CONFIG_INVALID_OPTION = 1004
    CONFIG_MULTIPLE_DEFAULTS = 1005
    CONFIG_MALFORMED = 1006
    CONFIG_FILE_UNREADABLE = 1007
    CONFIG_QUERY_VAR_CONFLICT = 1008

    # Lookup errors (2000-2999)
    LOCALE_NOT_FOUND = 2001
    URL_SEGMENT_NOT_FOUND = 2002
    NO_DEFAULT_LOCALE = 2003

    # Catalog errors (3000-3999)
    CATALOG_NOT_SCANNED = 3001
    CATALOG_READ_FAILED = 3002
    CATALOG_WRITE_FAILED = 3003
    CATALOG_DIRECTORY_NOT_WRITABLE = 3004
    CATALOG_DUPLICATE_ENTRY = 3005


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Attributes:
        code: Unique error code
        message: Human-readable error description
        hint: Suggestion for fixing the error
        subject: Configuration key, locale code or path the error is about
        severity: Error severity level
    """

    code: DiagnosticCode
    message: str
    hint: str | None = None
    subject: str | None = None
    severity: Literal["error", "warning"] = "error"

    def __str__(self) -> str:
        """Return human-readable error description."""
        return self.message

    def format_error(self) -> str:
        """Format diagnostic in compiler style.

        Example output:
            error[CONFIG_UNKNOWN_OPTION]: Unknown option 'lang' for locale 'fr'
              --> fr.lang
              = help: Supported options are: url, default, poPath, moPath

        Returns:
            Formatted error message
        """
        from .formatter import DiagnosticFormatter  # noqa: PLC0415 - circular

        return DiagnosticFormatter().format(self)
