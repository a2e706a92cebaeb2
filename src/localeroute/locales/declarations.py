"""Tagged-variant parsing of raw locale configuration.

Configuration files declare locales in two shapes that may be mixed:

    locales = ["en", {"fr": {"url": "francais"}}]
    locales = {"en": None, "fr": {"url": "francais"}}

Both are normalized at this boundary into a tuple of declarations, each
either a BareDeclaration (code only) or an OptionsDeclaration (code plus
an options mapping). Nothing past this module sees the raw shapes.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, TypeAlias

from localeroute.diagnostics import ConfigurationError, ErrorTemplate

if TYPE_CHECKING:
    from localeroute.locales.types import ConfigEntries, LocaleCode, LocaleOptions

__all__ = [
    "BareDeclaration",
    "LocaleDeclaration",
    "OptionsDeclaration",
    "parse_declarations",
    "validate_code",
]


@dataclass(frozen=True, slots=True)
class BareDeclaration:
    """Locale declared by its code alone."""

    code: LocaleCode


@dataclass(frozen=True, slots=True)
class OptionsDeclaration:
    """Locale declared with an options mapping.

    Attributes:
        code: Locale code
        options: Read-only view of the raw options
    """

    code: LocaleCode
    options: LocaleOptions = field(default_factory=lambda: MappingProxyType({}))


LocaleDeclaration: TypeAlias = BareDeclaration | OptionsDeclaration


def validate_code(code: object) -> LocaleCode:
    """Check that a configuration key is a usable locale code.

    Codes double as file names for catalogs, so path separators and
    traversal sequences are rejected along with blanks.

    Args:
        code: Raw configuration key

    Returns:
        The code, unchanged

    Raises:
        ConfigurationError: If the code is not a non-empty, path-safe string
    """
    if not isinstance(code, str):
        diagnostic = ErrorTemplate.invalid_code(repr(code), "expected a string")
        raise ConfigurationError(diagnostic, key=repr(code))
    reason = None
    if not code:
        reason = "code cannot be empty"
    elif code.strip() != code or any(ch.isspace() for ch in code):
        reason = "code cannot contain whitespace"
    elif "/" in code or "\\" in code:
        reason = "code cannot contain path separators"
    elif ".." in code:
        reason = "code cannot contain '..'"
    if reason is not None:
        raise ConfigurationError(ErrorTemplate.invalid_code(repr(code), reason), key=code)
    return code


def _declare(code: object, value: object) -> LocaleDeclaration:
    valid_code = validate_code(code)
    match value:
        case None | True:
            return BareDeclaration(valid_code)
        case Mapping():
            return OptionsDeclaration(valid_code, MappingProxyType(dict(value)))
        case _:
            diagnostic = ErrorTemplate.malformed(
                valid_code,
                f"expected an options table, got {type(value).__name__}",
            )
            raise ConfigurationError(diagnostic, key=valid_code)


def parse_declarations(raw: ConfigEntries | None) -> tuple[LocaleDeclaration, ...]:
    """Parse raw locale configuration into declarations.

    Declaration order is preserved; it decides the implicit default locale.

    Args:
        raw: Mapping of code to options (None/True for bare codes), or a
            sequence of bare codes and code-to-options mappings. None means
            localization is not configured.

    Returns:
        Declarations in configuration order (empty when raw is None)

    Raises:
        ConfigurationError: If an entry is malformed or a code repeats
    """
    if raw is None:
        return ()

    declarations: list[LocaleDeclaration] = []
    match raw:
        case Mapping():
            for code, value in raw.items():
                declarations.append(_declare(code, value))
        case str() | bytes():
            diagnostic = ErrorTemplate.malformed("locales", "expected a table or a list")
            raise ConfigurationError(diagnostic, key="locales")
        case Sequence():
            for index, item in enumerate(raw):
                match item:
                    case str():
                        declarations.append(BareDeclaration(validate_code(item)))
                    case Mapping():
                        for code, value in item.items():
                            declarations.append(_declare(code, value))
                    case _:
                        key = f"locales[{index}]"
                        diagnostic = ErrorTemplate.malformed(
                            key,
                            f"expected a locale code or table, got {type(item).__name__}",
                        )
                        raise ConfigurationError(diagnostic, key=key)
        case _:
            diagnostic = ErrorTemplate.malformed("locales", "expected a table or a list")
            raise ConfigurationError(diagnostic, key="locales")

    seen: set[str] = set()
    for declaration in declarations:
        if declaration.code in seen:
            diagnostic = ErrorTemplate.duplicate_code(declaration.code)
            raise ConfigurationError(diagnostic, key=declaration.code)
        seen.add(declaration.code)

    return tuple(declarations)
