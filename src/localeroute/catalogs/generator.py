"""Catalog regeneration for configured locales.

Regenerating a locale rebuilds its PO/MO pair from three layers, each
merged over the previous one:

    1. Freshly scanned strings (optional, untranslated)
    2. The persisted editable catalog (``<code>.po``)
    3. The environment-override catalog (``<code>-<env>.po``), if present

Human translations therefore survive rescans, and environment-local edits
win over the shared catalog. Strings that vanished from the scan are kept.

Batch regeneration records per-locale outcomes in a RegenerationSummary
instead of stopping at the first failure.

Python 3.13+. Uses Babel for catalogs.
"""

from __future__ import annotations

import html
import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, TypeAlias

from babel.messages.catalog import Catalog

from localeroute.catalogs.entries import (
    TranslationEntry,
    apply_translation,
    set_catalog_locale,
)
from localeroute.catalogs.merge import copy_catalog, find_or_create, merge_into
from localeroute.catalogs.store import (
    atomic_write,
    atomic_write_all,
    read_catalog,
    render_mo,
    render_po,
)
from localeroute.constants import DEFAULT_TEXT_DOMAIN
from localeroute.diagnostics import CatalogIOError, ErrorTemplate
from localeroute.enums import RegenerationStatus
from localeroute.locales import Locale

if TYPE_CHECKING:
    from localeroute.locales import LocaleCode, LocaleRegistry

__all__ = [
    "CatalogGenerator",
    "GeneratedCatalog",
    "LocaleRegenerationResult",
    "PostedTranslation",
    "RegenerationSummary",
    "posted_to_entries",
]

logger = logging.getLogger(__name__)

PostedTranslation: TypeAlias = TranslationEntry | Mapping[str, object]
"""One edited string as submitted by an editor form, or an entry."""


@dataclass(frozen=True, slots=True)
class GeneratedCatalog:
    """Catalog pair written for one locale.

    Attributes:
        locale_code: Locale the pair belongs to
        po_path: Editable catalog file written
        mo_path: Compiled catalog file written
        po_bytes: PO content written to ``po_path``
        mo_bytes: MO content written to ``mo_path``
        catalog: Merged catalog the files were rendered from
    """

    locale_code: LocaleCode
    po_path: Path
    mo_path: Path
    po_bytes: bytes
    mo_bytes: bytes
    catalog: Catalog

    @property
    def entry_count(self) -> int:
        """Number of messages in the catalog (header excluded)."""
        return len(self.catalog)


@dataclass(frozen=True, slots=True)
class LocaleRegenerationResult:
    """Outcome of regenerating a single locale.

    Attributes:
        locale_code: Locale that was regenerated
        status: Success or error
        generated: Written catalog pair on success
        error: Failure on error
    """

    locale_code: LocaleCode
    status: RegenerationStatus
    generated: GeneratedCatalog | None = None
    error: CatalogIOError | None = None

    @property
    def is_success(self) -> bool:
        """Check if the locale was regenerated."""
        return self.status == RegenerationStatus.SUCCESS

    @property
    def is_error(self) -> bool:
        """Check if regeneration failed."""
        return self.status == RegenerationStatus.ERROR


@dataclass(frozen=True, slots=True)
class RegenerationSummary:
    """Immutable aggregate of per-locale regeneration results.

    Example:
        >>> summary = generator.generate_all(scanned)
        >>> for result in summary.get_errors():
        ...     print(f"{result.locale_code}: {result.error}")
    """

    results: tuple[LocaleRegenerationResult, ...]

    def __repr__(self) -> str:
        return (
            f"RegenerationSummary(total={self.total}, "
            f"ok={self.successful}, errors={self.errors})"
        )

    @property
    def total(self) -> int:
        """Number of locales attempted."""
        return len(self.results)

    @property
    def successful(self) -> int:
        """Number of locales regenerated."""
        return sum(1 for r in self.results if r.is_success)

    @property
    def errors(self) -> int:
        """Number of locales that failed."""
        return sum(1 for r in self.results if r.is_error)

    @property
    def all_successful(self) -> bool:
        """Check that every locale was regenerated."""
        return self.errors == 0

    def get_errors(self) -> tuple[LocaleRegenerationResult, ...]:
        """Get all failed results."""
        return tuple(r for r in self.results if r.is_error)

    def get_successful(self) -> tuple[LocaleRegenerationResult, ...]:
        """Get all successful results."""
        return tuple(r for r in self.results if r.is_success)


def _posted_text(posted: Mapping[str, object], *names: str) -> str:
    for name in names:
        value = posted.get(name)
        if value is not None:
            return html.unescape(str(value))
    return ""


def posted_to_entries(posted: Iterable[PostedTranslation]) -> tuple[TranslationEntry, ...]:
    """Normalize editor submissions into translation entries.

    Form values arrive HTML-escaped and are decoded. Submissions without a
    translation are dropped, so an editor leaving a field blank never
    erases an existing translation. An empty context means no context.

    Recognized mapping keys: ``original``, ``translation``, ``context``,
    ``plural_original`` and ``plural_translation`` (camelCase spellings
    ``pluralOriginal`` and ``pluralTranslation`` are accepted too). A plural
    translation is either one string or a sequence of forms.
    """
    entries: list[TranslationEntry] = []
    for item in posted:
        if isinstance(item, TranslationEntry):
            if item.translation:
                entries.append(item)
            continue

        translation = _posted_text(item, "translation")
        if not translation:
            continue
        plural_value = item.get("plural_translation", item.get("pluralTranslation"))
        if plural_value is None or plural_value == "":
            plural_forms: tuple[str, ...] = ()
        elif isinstance(plural_value, str):
            plural_forms = (html.unescape(plural_value),)
        elif isinstance(plural_value, Iterable):
            plural_forms = tuple(html.unescape(str(form)) for form in plural_value)
        else:
            plural_forms = (html.unescape(str(plural_value)),)
        plural_original = _posted_text(item, "plural_original", "pluralOriginal") or None
        entries.append(
            TranslationEntry(
                original=_posted_text(item, "original"),
                translation=translation,
                context=_posted_text(item, "context") or None,
                plural_original=plural_original,
                plural_translation=plural_forms,
            )
        )
    return tuple(entries)


class CatalogGenerator:
    """Regenerates and edits the catalog pairs of a registry's locales.

    Callers serialize regeneration; two generators writing the same files
    concurrently may lose edits, though each file is always complete.

    Example:
        >>> generator = CatalogGenerator(registry, text_domain="shop")
        >>> generated = generator.generate("fr", scanned)
        >>> generated.po_path.name
        'fr.po'
    """

    __slots__ = ("_registry", "_text_domain")

    def __init__(
        self,
        registry: LocaleRegistry,
        *,
        text_domain: str = DEFAULT_TEXT_DOMAIN,
    ) -> None:
        """Initialize generator.

        Args:
            registry: Configured locales
            text_domain: Gettext domain stamped into generated catalogs
        """
        self._registry = registry
        self._text_domain = text_domain

    @property
    def text_domain(self) -> str:
        """Gettext domain stamped into generated catalogs."""
        return self._text_domain

    def _locale(self, locale: Locale | LocaleCode) -> Locale:
        if isinstance(locale, Locale):
            return locale
        return self._registry.by_code(locale)

    def _read(self, path: Path, locale: Locale) -> Catalog:
        return read_catalog(path, locale_code=locale.code, domain=self._text_domain)

    def load_translations(self, locale: Locale | LocaleCode) -> Catalog:
        """Return the persisted editable catalog of a locale.

        Raises:
            LocaleNotFoundError: If the code is not configured
            CatalogIOError: If the locale was never scanned or the file is
                unreadable
        """
        target = self._locale(locale)
        if not target.has_po_file():
            raise CatalogIOError(
                ErrorTemplate.catalog_not_scanned(target.code, str(target.po_path)),
                locale_code=target.code,
                path=str(target.po_path),
            )
        return self._read(target.po_path, target)

    def generate(
        self,
        locale: Locale | LocaleCode,
        scanned: Catalog | None = None,
    ) -> GeneratedCatalog:
        """Rebuild and write one locale's PO/MO pair.

        Args:
            locale: Locale or locale code
            scanned: Freshly extracted strings; None regenerates from the
                persisted catalogs alone

        Returns:
            The written catalog pair

        Raises:
            LocaleNotFoundError: If the code is not configured
            CatalogIOError: If a catalog cannot be read or written
        """
        target = self._locale(locale)
        persisted = self._read(target.po_path, target) if target.has_po_file() else None

        if scanned is not None:
            catalog = copy_catalog(scanned)
            if persisted is not None:
                merge_into(catalog, persisted)
        elif persisted is not None:
            catalog = persisted
        else:
            catalog = Catalog(fuzzy=False)

        environment_path = target.environment_po_path
        if environment_path is not None and environment_path.is_file():
            environment_po = self._read(environment_path, target)
            merge_into(catalog, environment_po)
            logger.debug("Merged environment catalog %s", environment_path)

        self._stamp_headers(catalog, target)
        po_bytes = render_po(catalog)
        mo_bytes = render_mo(catalog)
        atomic_write_all(
            [(target.po_path, po_bytes), (target.mo_path, mo_bytes)],
            locale_code=target.code,
        )
        logger.info("Regenerated catalogs for '%s' (%d messages)", target.code, len(catalog))
        return GeneratedCatalog(
            locale_code=target.code,
            po_path=target.po_path,
            mo_path=target.mo_path,
            po_bytes=po_bytes,
            mo_bytes=mo_bytes,
            catalog=catalog,
        )

    def generate_all(self, scanned: Catalog | None = None) -> RegenerationSummary:
        """Regenerate every configured locale.

        A CatalogIOError aborts only the locale it occurred in; it is logged
        and recorded in the summary.
        """
        results: list[LocaleRegenerationResult] = []
        for locale in self._registry:
            try:
                generated = self.generate(locale, scanned)
            except CatalogIOError as e:
                logger.warning("Could not regenerate catalogs for '%s': %s", locale.code, e)
                results.append(
                    LocaleRegenerationResult(
                        locale_code=locale.code,
                        status=RegenerationStatus.ERROR,
                        error=e,
                    )
                )
                continue
            results.append(
                LocaleRegenerationResult(
                    locale_code=locale.code,
                    status=RegenerationStatus.SUCCESS,
                    generated=generated,
                )
            )
        return RegenerationSummary(results=tuple(results))

    def save_translations(
        self,
        locale: Locale | LocaleCode,
        posted: Iterable[PostedTranslation],
    ) -> GeneratedCatalog:
        """Persist edited translations and regenerate the locale.

        Edits go to the environment-override catalog when an environment is
        configured, otherwise straight into the editable catalog. Existing
        entries of that file are kept.

        Args:
            locale: Locale or locale code
            posted: Editor submissions (see posted_to_entries)

        Returns:
            The regenerated catalog pair

        Raises:
            LocaleNotFoundError: If the code is not configured
            CatalogIOError: If a catalog cannot be read or written
        """
        target = self._locale(locale)
        edit_path = target.environment_po_path or target.po_path
        if edit_path.is_file():
            edits = self._read(edit_path, target)
        else:
            edits = Catalog(domain=self._text_domain, fuzzy=False)

        for entry in posted_to_entries(posted):
            message = find_or_create(edits, entry.context, entry.original, entry.plural_original)
            apply_translation(message, entry.translation, entry.plural_translation)

        self._stamp_headers(edits, target)
        atomic_write(edit_path, render_po(edits), locale_code=target.code)
        return self.generate(target)

    def _stamp_headers(self, catalog: Catalog, locale: Locale) -> None:
        catalog.domain = self._text_domain
        catalog.project = self._text_domain
        catalog.fuzzy = False
        set_catalog_locale(catalog, locale.code)
