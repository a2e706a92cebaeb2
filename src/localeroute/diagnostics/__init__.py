"""Diagnostic system for localeroute errors.

Provides structured error diagnostics with codes, subjects and hints.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode
from .errors import (
    CatalogConsistencyError,
    CatalogIOError,
    ConfigurationError,
    LocaleNotFoundError,
    LocaleRouteError,
)
from .formatter import DiagnosticFormatter, OutputFormat
from .templates import ErrorTemplate

__all__ = [
    "CatalogConsistencyError",
    "CatalogIOError",
    "ConfigurationError",
    "Diagnostic",
    "DiagnosticCode",
    "DiagnosticFormatter",
    "ErrorTemplate",
    "LocaleNotFoundError",
    "LocaleRouteError",
    "OutputFormat",
]
