"""Right-biased, non-destructive catalog merging.

Merging copies translations from an override catalog into a destination
catalog. For every override entry the destination entry with the same
(context, original) key is found, or created with an empty translation,
and its translation fields are overwritten. Destination entries that the
override does not mention are never touched and never deleted.

Catalog regeneration relies on this to keep human edits: freshly scanned
strings form the base, existing translations are merged over them, and
environment-local edits are merged last.

Python 3.13+. Uses Babel for catalogs.
"""

from __future__ import annotations

from babel.messages.catalog import Catalog, Message

from localeroute.catalogs.entries import (
    apply_translation,
    entry_key,
    plural_translation_of,
    translation_of,
)

__all__ = [
    "copy_catalog",
    "find_or_create",
    "merge_catalogs",
    "merge_into",
]


def copy_catalog(catalog: Catalog) -> Catalog:
    """Return an independent copy of a catalog.

    Headers, messages and obsolete messages are copied; mutating the copy
    never affects the original.
    """
    clone = Catalog(
        locale=catalog.locale_identifier,
        domain=catalog.domain,
        header_comment=catalog.header_comment,
        project=catalog.project,
        version=catalog.version,
        copyright_holder=catalog.copyright_holder,
        msgid_bugs_address=catalog.msgid_bugs_address,
        creation_date=catalog.creation_date,
        revision_date=catalog.revision_date,
        last_translator=catalog.last_translator,
        language_team=catalog.language_team,
        charset=catalog.charset,
        fuzzy=catalog.fuzzy,
    )
    for message in catalog:
        if not message.id:
            continue
        copied = message.clone()
        clone[copied.id] = copied
    clone.obsolete = {key: message.clone() for key, message in catalog.obsolete.items()}
    return clone


def find_or_create(
    catalog: Catalog,
    context: str | None,
    original: str,
    plural_original: str | None = None,
) -> Message:
    """Return the message with this identity key, adding it when missing.

    New messages start untranslated. When ``plural_original`` is given and
    the existing message is singular, the message is upgraded to a plural
    message keeping its translation as the first form.

    Args:
        catalog: Catalog to search and extend
        context: Message context (None when absent)
        original: Original string
        plural_original: Plural original string, for plural messages

    Returns:
        Message stored in ``catalog``
    """
    message = catalog.get(original, context=context)
    if message is None:
        if plural_original is None:
            return catalog.add(original, "", context=context)
        empty_forms = tuple("" for _ in range(max(catalog.num_plurals, 2)))
        return catalog.add((original, plural_original), empty_forms, context=context)

    if plural_original is not None and not message.pluralizable:
        message.id = (original, plural_original)
        message.string = (translation_of(message), "")
    return message


def merge_into(destination: Catalog, override: Catalog) -> Catalog:
    """Merge ``override`` into ``destination`` in place.

    Args:
        destination: Catalog receiving translations (mutated)
        override: Catalog whose translations win

    Returns:
        ``destination``, for chaining
    """
    for message in override:
        if not message.id:
            continue
        context, original = entry_key(message)
        plural_original = message.id[1] if message.pluralizable else None
        target = find_or_create(destination, context, original, plural_original)
        apply_translation(target, translation_of(message), plural_translation_of(message))
    return destination


def merge_catalogs(
    base: Catalog | None,
    override: Catalog,
    *,
    into: Catalog | None = None,
) -> Catalog:
    """Merge ``override`` over a copy of ``base``.

    Neither input is modified unless it is passed as ``into``. Entries
    only in ``base`` are kept unchanged; entries in ``override`` win for
    matching keys; entries only in ``override`` are added. Merging the
    same override twice yields the same entries as merging it once.

    Args:
        base: Catalog providing the entry set, or None to start empty
        override: Catalog whose translations win
        into: Destination to merge into instead of a copy of ``base``;
            ``base`` is ignored when given

    Returns:
        Merged catalog (``into`` when given)

    Example:
        >>> base = build_catalog([TranslationEntry("Hello", "Salut")])
        >>> override = build_catalog([TranslationEntry("Hello", "Bonjour")])
        >>> merged = merge_catalogs(base, override)
        >>> merged.get("Hello").string
        'Bonjour'
    """
    if into is not None:
        destination = into
    elif base is None:
        destination = Catalog(
            locale=override.locale_identifier, domain=override.domain, fuzzy=False
        )
    else:
        destination = copy_catalog(base)
    return merge_into(destination, override)
