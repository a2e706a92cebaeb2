"""Localization configuration.

Gathers everything the subsystem needs from one place: declared locales,
where catalogs live, the text domain, the optional environment enabling
override catalogs, and routable entities. Typically read from the
``[i18n]`` table of a TOML file:

    [i18n]
    text_domain = "shop"
    catalog_root = "locale"
    environment = "dev"
    locales = {en = {default = true}, fr = {url = "francais"}}

    [routing.Article]
    query_var = "article"
    slug = "articles"
    rewrite = {comments = "comments"}

Relative paths in a file are resolved against the file's directory.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import logging
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from localeroute.constants import DEFAULT_TEXT_DOMAIN
from localeroute.diagnostics import ConfigurationError, ErrorTemplate
from localeroute.locales import LocaleRegistry
from localeroute.routing import RoutableEntity

if TYPE_CHECKING:
    from os import PathLike

    from localeroute.locales import ConfigEntries

__all__ = ["LocalizationConfig"]

logger = logging.getLogger(__name__)

_I18N_KEYS = frozenset({"locales", "catalog_root", "text_domain", "environment", "project_root"})


def _optional_string(table: Mapping[str, object], key: str) -> str | None:
    value = table.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        full_key = f"i18n.{key}"
        raise ConfigurationError(
            ErrorTemplate.malformed(full_key, f"expected a string, got {type(value).__name__}"),
            key=full_key,
        )
    return value


@dataclass(frozen=True, slots=True)
class LocalizationConfig:
    """Validated localization settings.

    Attributes:
        locales: Raw locale declarations (None disables localization)
        catalog_root: Directory holding catalog files
        text_domain: Gettext domain and session key namespace
        environment: Environment name enabling override catalogs
        project_root: Directory scanned sources are reported relative to
        entities: Routable entities in declaration order
    """

    locales: ConfigEntries | None = None
    catalog_root: Path = field(default_factory=lambda: Path("locale"))
    text_domain: str = DEFAULT_TEXT_DOMAIN
    environment: str | None = None
    project_root: Path = field(default_factory=Path.cwd)
    entities: tuple[RoutableEntity, ...] = ()

    def __post_init__(self) -> None:
        """Validate scalar settings.

        Raises:
            ConfigurationError: If the text domain or environment is unusable
        """
        if not self.text_domain or any(ch in self.text_domain for ch in "/\\ "):
            diagnostic = ErrorTemplate.malformed(
                "i18n.text_domain", f"expected a plain name, got {self.text_domain!r}"
            )
            raise ConfigurationError(diagnostic, key="i18n.text_domain")
        if self.environment is not None and (
            not self.environment or any(ch in self.environment for ch in "/\\ ")
        ):
            diagnostic = ErrorTemplate.malformed(
                "i18n.environment", f"expected a plain name, got {self.environment!r}"
            )
            raise ConfigurationError(diagnostic, key="i18n.environment")

    @classmethod
    def from_mapping(
        cls,
        data: Mapping[str, object],
        *,
        base_dir: str | PathLike[str] | None = None,
    ) -> LocalizationConfig:
        """Build configuration from a parsed document.

        Args:
            data: Document with an optional ``i18n`` table and an optional
                ``routing`` table of entity name to entity settings
            base_dir: Directory relative paths are resolved against
                (defaults to the working directory)

        Returns:
            New LocalizationConfig

        Raises:
            ConfigurationError: If the document has an unexpected shape
        """
        base = Path(base_dir) if base_dir is not None else Path.cwd()
        table = data.get("i18n", {})
        if not isinstance(table, Mapping):
            diagnostic = ErrorTemplate.malformed("i18n", "expected a table")
            raise ConfigurationError(diagnostic, key="i18n")
        unknown = sorted(str(key) for key in table if key not in _I18N_KEYS)
        if unknown:
            description = f"unknown setting(s) {', '.join(unknown)}"
            raise ConfigurationError(ErrorTemplate.malformed("i18n", description), key="i18n")

        routing = data.get("routing", {})
        if not isinstance(routing, Mapping):
            diagnostic = ErrorTemplate.malformed("routing", "expected a table")
            raise ConfigurationError(diagnostic, key="routing")
        entities: list[RoutableEntity] = []
        for name, settings in routing.items():
            if not isinstance(settings, Mapping):
                key = f"routing.{name}"
                raise ConfigurationError(ErrorTemplate.malformed(key, "expected a table"), key=key)
            entities.append(RoutableEntity.from_mapping(str(name), settings))

        catalog_root = _optional_string(table, "catalog_root")
        project_root = _optional_string(table, "project_root")
        locales = table.get("locales")
        return cls(
            locales=locales,  # type: ignore[arg-type]  # shape checked by LocaleRegistry.load
            catalog_root=base / (catalog_root or "locale"),
            text_domain=_optional_string(table, "text_domain") or DEFAULT_TEXT_DOMAIN,
            environment=_optional_string(table, "environment"),
            project_root=base / project_root if project_root else base,
            entities=tuple(entities),
        )

    @classmethod
    def from_toml(cls, path: str | PathLike[str]) -> LocalizationConfig:
        """Read configuration from a TOML file.

        Raises:
            ConfigurationError: If the file cannot be read or parsed, or has
                an unexpected shape
        """
        config_path = Path(path)
        try:
            with config_path.open("rb") as f:
                data = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as e:
            diagnostic = ErrorTemplate.config_file_unreadable(str(config_path), str(e))
            raise ConfigurationError(diagnostic, key=str(config_path)) from e
        logger.debug("Loaded configuration from %s", config_path)
        return cls.from_mapping(data, base_dir=config_path.resolve().parent)

    @property
    def is_localized(self) -> bool:
        """Check whether any locale is declared."""
        return bool(self.locales)

    def build_registry(self) -> LocaleRegistry:
        """Build the locale registry these settings describe.

        Raises:
            ConfigurationError: If the locale declarations are malformed
        """
        return LocaleRegistry.load(
            self.locales,
            catalog_root=self.catalog_root,
            environment=self.environment,
        )
