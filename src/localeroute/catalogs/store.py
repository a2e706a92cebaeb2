"""Catalog persistence.

Reads PO files into Babel catalogs, renders catalogs to PO and MO bytes,
and writes files atomically: content goes to a temporary file in the
target directory which then replaces the target with ``os.replace``.
Readers therefore see either the previous file or the new one, never a
truncated mix.

Every file-system failure surfaces as CatalogIOError carrying the path
involved.

Python 3.13+. Uses Babel for PO/MO encoding.
"""

from __future__ import annotations

import logging
import os
import tempfile
from collections.abc import Sequence
from io import BytesIO
from pathlib import Path

from babel.messages.catalog import Catalog
from babel.messages.mofile import write_mo
from babel.messages.pofile import PoFileError, read_po, write_po

from localeroute.diagnostics import CatalogIOError, ErrorTemplate
from localeroute.locale_utils import normalize_locale

__all__ = [
    "atomic_write",
    "atomic_write_all",
    "ensure_writable_directory",
    "read_catalog",
    "read_catalog_if_exists",
    "render_mo",
    "render_po",
]

logger = logging.getLogger(__name__)


def read_catalog(
    path: Path,
    *,
    locale_code: str | None = None,
    domain: str | None = None,
) -> Catalog:
    """Parse a PO file.

    Args:
        path: PO file to read
        locale_code: Locale the catalog belongs to
        domain: Gettext domain

    Returns:
        Parsed catalog

    Raises:
        CatalogIOError: If the file is missing, unreadable or not valid PO
    """
    catalog_locale = normalize_locale(locale_code) if locale_code else None
    try:
        with path.open("rb") as fileobj:
            catalog = read_po(fileobj, locale=catalog_locale, domain=domain)
    except (OSError, UnicodeDecodeError, ValueError, PoFileError) as e:
        raise CatalogIOError(
            ErrorTemplate.catalog_read_failed(str(path), str(e)),
            locale_code=locale_code or "",
            path=str(path),
        ) from e
    logger.debug("Read catalog %s (%d messages)", path, len(catalog))
    return catalog


def read_catalog_if_exists(
    path: Path | None,
    *,
    locale_code: str | None = None,
    domain: str | None = None,
) -> Catalog | None:
    """Parse a PO file when it exists, else return None."""
    if path is None or not path.is_file():
        return None
    return read_catalog(path, locale_code=locale_code, domain=domain)


def render_po(catalog: Catalog) -> bytes:
    """Encode a catalog as PO bytes in the catalog's charset."""
    buffer = BytesIO()
    write_po(buffer, catalog, width=76, include_previous=False)
    return buffer.getvalue()


def render_mo(catalog: Catalog) -> bytes:
    """Encode a catalog as MO bytes.

    Untranslated and fuzzy messages are left out, as gettext expects.
    """
    buffer = BytesIO()
    write_mo(buffer, catalog, use_fuzzy=False)
    return buffer.getvalue()


def ensure_writable_directory(directory: Path, *, locale_code: str = "") -> None:
    """Create ``directory`` if needed and check that it accepts new files.

    Raises:
        CatalogIOError: If the directory cannot be created or written
    """
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise CatalogIOError(
            ErrorTemplate.directory_not_writable(str(directory)),
            locale_code=locale_code,
            path=str(directory),
        ) from e
    if not os.access(directory, os.W_OK | os.X_OK):
        raise CatalogIOError(
            ErrorTemplate.directory_not_writable(str(directory)),
            locale_code=locale_code,
            path=str(directory),
        )


def atomic_write(path: Path, data: bytes, *, locale_code: str = "") -> None:
    """Replace ``path`` with ``data`` in one step.

    Args:
        path: Target file
        data: Complete new content
        locale_code: Locale reported on failure

    Raises:
        CatalogIOError: If the directory is not writable or the write fails
    """
    atomic_write_all([(path, data)], locale_code=locale_code)


def atomic_write_all(
    files: Sequence[tuple[Path, bytes]],
    *,
    locale_code: str = "",
) -> None:
    """Replace several files together.

    Every file is first written to a temporary sibling. Targets are only
    replaced once all temporary files are complete, so a failed write
    leaves every target untouched.

    Args:
        files: Target paths with their complete new content
        locale_code: Locale reported on failure

    Raises:
        CatalogIOError: If a directory is not writable or a write fails
    """
    for path, _data in files:
        ensure_writable_directory(path.parent, locale_code=locale_code)

    staged: list[tuple[str, Path]] = []
    current = files[0][0] if files else None
    try:
        for path, data in files:
            current = path
            with tempfile.NamedTemporaryFile(
                dir=path.parent,
                prefix=f".{path.name}.",
                suffix=".tmp",
                delete=False,
            ) as handle:
                staged.append((handle.name, path))
                handle.write(data)
                handle.flush()
                os.fsync(handle.fileno())
        for temp_name, path in staged:
            current = path
            os.replace(temp_name, path)
    except OSError as e:
        for temp_name, _path in staged:
            Path(temp_name).unlink(missing_ok=True)
        raise CatalogIOError(
            ErrorTemplate.catalog_write_failed(str(current), str(e)),
            locale_code=locale_code,
            path=str(current),
        ) from e
    for path, data in files:
        logger.info("Wrote %s (%d bytes)", path, len(data))
