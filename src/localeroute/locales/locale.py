"""Locale value object.

A Locale is built once from configuration and never changes afterwards.
Identity is the locale code: two Locale objects with the same code compare
equal and hash alike, whatever their other attributes.

Python 3.13+. Uses Babel for display labels.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from os import PathLike, fspath
from pathlib import Path
from typing import TYPE_CHECKING

from localeroute.constants import MO_SUFFIX, PO_SUFFIX
from localeroute.diagnostics import ConfigurationError, ErrorTemplate
from localeroute.locale_utils import native_label
from localeroute.locales.declarations import OptionsDeclaration

if TYPE_CHECKING:
    from localeroute.locales.declarations import LocaleDeclaration
    from localeroute.locales.types import LocaleCode, UrlSegment

__all__ = ["SUPPORTED_OPTIONS", "Locale"]

# Accepted option keys mapped to their canonical name.
_OPTION_ALIASES: Mapping[str, str] = {
    "url": "url",
    "default": "default",
    "poPath": "po_path",
    "po_path": "po_path",
    "moPath": "mo_path",
    "mo_path": "mo_path",
}

SUPPORTED_OPTIONS: tuple[str, ...] = ("url", "default", "poPath", "moPath")


@dataclass(frozen=True, slots=True, eq=False)
class Locale:
    """A configured language variant.

    Use Locale.from_declaration() to build instances from configuration;
    it validates options and derives catalog paths.

    Attributes:
        code: Unique identifier (e.g., 'en', 'fr_CA')
        url_segment: Path prefix selecting this locale (defaults to code)
        is_default: Whether configuration flagged this locale as default
        has_custom_url: Whether 'url' was configured explicitly
        po_path: Editable catalog file
        mo_path: Compiled catalog file
        environment_po_path: Environment-local override catalog, if any
    """

    code: LocaleCode
    url_segment: UrlSegment
    po_path: Path
    mo_path: Path
    is_default: bool = False
    has_custom_url: bool = False
    environment_po_path: Path | None = None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Locale):
            return NotImplemented
        return self.code == other.code

    def __hash__(self) -> int:
        return hash(self.code)

    def __repr__(self) -> str:
        return (
            f"Locale(code={self.code!r}, url_segment={self.url_segment!r}, "
            f"is_default={self.is_default})"
        )

    @property
    def native_label(self) -> str:
        """Locale name in its own language, or the code when Babel lacks it."""
        return native_label(self.code)

    def has_po_file(self) -> bool:
        """Check whether the editable catalog exists on disk."""
        return self.po_path.is_file()

    def has_environment_po_file(self) -> bool:
        """Check whether an environment-override catalog exists on disk."""
        return self.environment_po_path is not None and self.environment_po_path.is_file()

    @classmethod
    def from_declaration(
        cls,
        declaration: LocaleDeclaration,
        *,
        catalog_root: str | PathLike[str] = ".",
        environment: str | None = None,
    ) -> Locale:
        """Normalize a parsed declaration into a Locale.

        Args:
            declaration: Bare or options declaration
            catalog_root: Directory holding catalogs; relative poPath/moPath
                options are resolved against it
            environment: Environment name; when set, the locale gets an
                override catalog at ``<root>/<code>-<environment>.po``

        Returns:
            Locale instance

        Raises:
            ConfigurationError: If an option is unknown or has a bad value
        """
        code = declaration.code
        root = Path(catalog_root)
        options: dict[str, object] = {}
        if isinstance(declaration, OptionsDeclaration):
            for key, value in declaration.options.items():
                canonical = _OPTION_ALIASES.get(key)
                if canonical is None:
                    diagnostic = ErrorTemplate.unknown_option(code, str(key), SUPPORTED_OPTIONS)
                    raise ConfigurationError(diagnostic, key=f"{code}.{key}")
                options[canonical] = value

        url = options.get("url")
        if url is not None:
            if not isinstance(url, str) or not url.strip("/"):
                diagnostic = ErrorTemplate.invalid_option(code, "url", "a non-empty string", url)
                raise ConfigurationError(diagnostic, key=f"{code}.url")
            url = url.strip("/")

        is_default = options.get("default", False)
        if not isinstance(is_default, bool):
            diagnostic = ErrorTemplate.invalid_option(code, "default", "a boolean", is_default)
            raise ConfigurationError(diagnostic, key=f"{code}.default")

        po_path = cls._option_path(code, "po_path", options, root, f"{code}{PO_SUFFIX}")
        mo_path = cls._option_path(code, "mo_path", options, root, f"{code}{MO_SUFFIX}")
        environment_po_path = (
            root / f"{code}-{environment}{PO_SUFFIX}" if environment else None
        )

        return cls(
            code=code,
            url_segment=url if url is not None else code,
            po_path=po_path,
            mo_path=mo_path,
            is_default=is_default,
            has_custom_url=url is not None,
            environment_po_path=environment_po_path,
        )

    @staticmethod
    def _option_path(
        code: str,
        name: str,
        options: Mapping[str, object],
        root: Path,
        default_name: str,
    ) -> Path:
        value = options.get(name)
        if value is None:
            return root / default_name
        if not isinstance(value, (str, PathLike)) or not fspath(value):
            option = "poPath" if name == "po_path" else "moPath"
            diagnostic = ErrorTemplate.invalid_option(code, option, "a file path", value)
            raise ConfigurationError(diagnostic, key=f"{code}.{option}")
        return root / Path(value)
