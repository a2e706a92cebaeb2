"""Translation entries and their Babel message representation.

Catalogs are Babel ``Catalog`` objects throughout; this module adds the
plain-data TranslationEntry used at the boundary with external scanners
and editors, plus helpers that read and write the translation fields of a
Babel ``Message`` uniformly for singular and plural messages.

Identity of an entry is its ``(context, original)`` pair, the same key
Babel uses internally. Two entries with the same key are the same logical
string whatever their translations say.

Python 3.13+. Uses Babel for catalogs.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import PurePath, PurePosixPath
from typing import TYPE_CHECKING, TypeAlias

from babel.messages.catalog import Catalog, Message

from localeroute.constants import PROJECT_ROOT_MARKER
from localeroute.diagnostics import CatalogConsistencyError, ErrorTemplate
from localeroute.locale_utils import normalize_locale

if TYPE_CHECKING:
    from os import PathLike

__all__ = [
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
]

EntryKey: TypeAlias = tuple[str | None, str]
"""Identity of a translation entry: (context, original)."""

Reference: TypeAlias = tuple[str, int | None]
"""Source provenance of an entry: (file, line)."""


def entry_key(message: Message) -> EntryKey:
    """Return the (context, original) identity key of a Babel message."""
    original = message.id[0] if message.pluralizable else message.id
    return (message.context, original)


def translation_of(message: Message) -> str:
    """Return the singular translation of a message ('' when untranslated)."""
    if isinstance(message.string, (list, tuple)):
        return message.string[0] if message.string else ""
    return message.string or ""


def plural_translation_of(message: Message) -> tuple[str, ...]:
    """Return the plural forms after the first one (empty for singular messages)."""
    if isinstance(message.string, (list, tuple)):
        return tuple(message.string[1:])
    return ()


def apply_translation(
    message: Message,
    translation: str,
    plural_translation: Iterable[str] = (),
) -> None:
    """Overwrite the translation fields of a message in place.

    For plural messages, plural forms that ``plural_translation`` does not
    supply keep their current text.

    Args:
        message: Babel message to update
        translation: Singular (first form) translation
        plural_translation: Remaining plural forms
    """
    if not message.pluralizable:
        message.string = translation
        return
    forms = [translation, *plural_translation]
    current = plural_translation_of(message)
    for index in range(len(forms) - 1, len(current)):
        forms.append(current[index])
    message.string = tuple(forms)


@dataclass(frozen=True, slots=True)
class TranslationEntry:
    """One translatable string with its translation and provenance.

    Attributes:
        original: Source string (msgid)
        translation: Translated string ('' when untranslated)
        context: Disambiguating context (msgctxt), None when absent
        plural_original: Plural source string (msgid_plural), if any
        plural_translation: Plural forms after the first one
        references: (file, line) pairs where the string was found
    """

    original: str
    translation: str = ""
    context: str | None = None
    plural_original: str | None = None
    plural_translation: tuple[str, ...] = ()
    references: tuple[Reference, ...] = ()

    @property
    def key(self) -> EntryKey:
        """Identity key (context, original)."""
        return (self.context, self.original)

    @property
    def is_plural(self) -> bool:
        """Whether the entry has a plural source string."""
        return self.plural_original is not None

    def to_message(self) -> Message:
        """Convert to a Babel Message."""
        if self.plural_original is not None:
            forms = (self.translation, *self.plural_translation)
            if len(forms) < 2:
                forms = (*forms, "")
            return Message(
                (self.original, self.plural_original),
                forms,
                locations=list(self.references),
                context=self.context,
            )
        return Message(
            self.original,
            self.translation,
            locations=list(self.references),
            context=self.context,
        )

    @classmethod
    def from_message(cls, message: Message) -> TranslationEntry:
        """Build an entry from a Babel Message."""
        _, original = entry_key(message)
        plural_original = message.id[1] if message.pluralizable else None
        return cls(
            original=original,
            translation=translation_of(message),
            context=message.context,
            plural_original=plural_original,
            plural_translation=plural_translation_of(message),
            references=tuple((str(f), line) for f, line in message.locations),
        )


def check_consistency(entries: Iterable[TranslationEntry | Message]) -> None:
    """Verify that no two entries share an identity key.

    Args:
        entries: Entries or Babel messages of one catalog

    Raises:
        CatalogConsistencyError: On the first duplicated (context, original)
    """
    seen: set[EntryKey] = set()
    for entry in entries:
        key = entry.key if isinstance(entry, TranslationEntry) else entry_key(entry)
        if key in seen:
            context, original = key
            raise CatalogConsistencyError(
                ErrorTemplate.duplicate_entry(context, original),
                context=context,
                original=original,
            )
        seen.add(key)


def build_catalog(
    entries: Iterable[TranslationEntry],
    *,
    locale: str | None = None,
    domain: str | None = None,
) -> Catalog:
    """Build a Babel catalog from plain entries.

    Babel merges messages that share a key; duplicates are rejected here
    instead so that a scanner defect is not hidden.

    Args:
        entries: Entries in output order
        locale: Catalog locale identifier
        domain: Gettext domain

    Returns:
        New catalog

    Raises:
        CatalogConsistencyError: If two entries share an identity key
    """
    entry_list = list(entries)
    check_consistency(entry_list)
    catalog = Catalog(domain=domain, fuzzy=False)
    if locale is not None:
        set_catalog_locale(catalog, locale)
    for entry in entry_list:
        message = entry.to_message()
        catalog[message.id] = message
    return catalog


def set_catalog_locale(catalog: Catalog, locale_code: str) -> None:
    """Set the catalog language from a configured locale code.

    The code is written to the Language header even when Babel has no
    locale data for it.
    """
    catalog.locale = normalize_locale(locale_code)


def relativize_references(catalog: Catalog, root: str | PathLike[str]) -> None:
    """Rewrite reference paths under ``root`` as ``~/relative/path`` in place.

    Keeps catalogs identical across checkouts in different directories.
    References outside ``root`` are left untouched.
    """
    root_path = PurePath(root)
    for message in catalog:
        if not message.id:
            continue
        relocated = []
        for filename, line in message.locations:
            path = PurePath(filename)
            if path.is_relative_to(root_path):
                relative = PurePosixPath(*path.relative_to(root_path).parts)
                filename = f"{PROJECT_ROOT_MARKER}/{relative}"
            relocated.append((filename, line))
        message.locations = relocated
