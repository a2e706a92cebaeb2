"""Translation catalogs: merging, persistence and regeneration.

Exports:
    TranslationEntry: Plain-data translatable string
    merge_catalogs / merge_into: Right-biased, non-destructive merge
    CatalogGenerator: Per-locale PO/MO regeneration and editing
    RegenerationSummary: Batch regeneration outcome

Python 3.13+. Uses Babel for catalogs.
"""

from .entries import (
    EntryKey,
    Reference,
    TranslationEntry,
    apply_translation,
    build_catalog,
    check_consistency,
    entry_key,
    plural_translation_of,
    relativize_references,
    set_catalog_locale,
    translation_of,
)
from .generator import (
    CatalogGenerator,
    GeneratedCatalog,
    LocaleRegenerationResult,
    PostedTranslation,
    RegenerationSummary,
    posted_to_entries,
)
from .merge import copy_catalog, find_or_create, merge_catalogs, merge_into
from .store import (
    atomic_write,
    atomic_write_all,
    ensure_writable_directory,
    read_catalog,
    read_catalog_if_exists,
    render_mo,
    render_po,
)

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Entries
    "EntryKey",
    "Reference",
    "TranslationEntry",
    "apply_translation",
    "build_catalog",
    "check_consistency",
    "entry_key",
    "plural_translation_of",
    "relativize_references",
    "set_catalog_locale",
    "translation_of",
    # Merging
    "copy_catalog",
    "find_or_create",
    "merge_catalogs",
    "merge_into",
    # Persistence
    "atomic_write",
    "atomic_write_all",
    "ensure_writable_directory",
    "read_catalog",
    "read_catalog_if_exists",
    "render_mo",
    "render_po",
    # Regeneration
    "CatalogGenerator",
    "GeneratedCatalog",
    "LocaleRegenerationResult",
    "PostedTranslation",
    "RegenerationSummary",
    "posted_to_entries",
]
