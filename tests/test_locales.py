"""Tests for locale declarations, the Locale value object and LocaleRegistry.

Covers tagged-variant parsing of raw configuration, option validation,
catalog path derivation, registry lookups and the default-locale rule
(flagged locale wins, otherwise the last declared locale).

Python 3.13+.
"""

from __future__ import annotations

from pathlib import Path

import pytest
from hypothesis import event, given

from localeroute.diagnostics import ConfigurationError, DiagnosticCode, LocaleNotFoundError
from localeroute.locales import (
    BareDeclaration,
    Locale,
    LocaleRegistry,
    OptionsDeclaration,
    parse_declarations,
)
from tests.strategies import locale_configs


class TestParseDeclarations:
    """Tagged-variant parsing at the configuration boundary."""

    def test_none_means_not_configured(self) -> None:
        """None parses to no declarations."""
        assert parse_declarations(None) == ()

    def test_mapping_with_bare_and_options_entries(self) -> None:
        """None and True values are bare, tables carry options."""
        declarations = parse_declarations({"en": None, "de": True, "fr": {"url": "francais"}})

        assert declarations[0] == BareDeclaration("en")
        assert declarations[1] == BareDeclaration("de")
        assert isinstance(declarations[2], OptionsDeclaration)
        assert declarations[2].code == "fr"
        assert declarations[2].options["url"] == "francais"

    def test_sequence_mixing_codes_and_tables(self) -> None:
        """A list may mix bare codes and single-key tables."""
        declarations = parse_declarations(["en", {"fr": {"default": True}}])

        assert [d.code for d in declarations] == ["en", "fr"]
        assert isinstance(declarations[0], BareDeclaration)
        assert isinstance(declarations[1], OptionsDeclaration)

    def test_order_preserved(self) -> None:
        """Declaration order follows configuration order."""
        codes = ["lv", "en", "de", "fr"]
        assert [d.code for d in parse_declarations(codes)] == codes

    def test_string_is_malformed(self) -> None:
        """A bare string is not a list of codes."""
        with pytest.raises(ConfigurationError) as exc_info:
            parse_declarations("en")  # type: ignore[arg-type]
        assert exc_info.value.key == "locales"

    def test_sequence_item_of_wrong_type(self) -> None:
        """Items other than codes and tables name their index."""
        with pytest.raises(ConfigurationError) as exc_info:
            parse_declarations(["en", 42])
        assert exc_info.value.key == "locales[1]"
        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code == DiagnosticCode.CONFIG_MALFORMED

    def test_options_of_wrong_type(self) -> None:
        """Option values must be tables."""
        with pytest.raises(ConfigurationError) as exc_info:
            parse_declarations({"fr": "francais"})
        assert exc_info.value.key == "fr"

    def test_duplicate_code_rejected(self) -> None:
        """The same code declared twice is an error."""
        with pytest.raises(ConfigurationError) as exc_info:
            parse_declarations(["en", {"en": {"url": "english"}}])
        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code == DiagnosticCode.CONFIG_DUPLICATE_CODE

    @pytest.mark.parametrize("code", ["", " en", "en us", "../en", "en/us", "a\\b", ".."])
    def test_unsafe_codes_rejected(self, code: str) -> None:
        """Codes double as file names and must be path-safe."""
        with pytest.raises(ConfigurationError) as exc_info:
            parse_declarations([code])
        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code == DiagnosticCode.CONFIG_INVALID_CODE

    def test_non_string_code_rejected(self) -> None:
        """Mapping keys must be strings."""
        with pytest.raises(ConfigurationError):
            parse_declarations({1: None})  # type: ignore[dict-item]


class TestLocaleFromDeclaration:
    """Normalization of declarations into Locale objects."""

    def test_bare_declaration_defaults(self, tmp_path: Path) -> None:
        """A bare code uses itself as URL segment and default catalog names."""
        locale = Locale.from_declaration(BareDeclaration("fr"), catalog_root=tmp_path)

        assert locale.code == "fr"
        assert locale.url_segment == "fr"
        assert not locale.has_custom_url
        assert not locale.is_default
        assert locale.po_path == tmp_path / "fr.po"
        assert locale.mo_path == tmp_path / "fr.mo"
        assert locale.environment_po_path is None

    def test_custom_url_is_stripped(self, tmp_path: Path) -> None:
        """Surrounding slashes are removed from the url option."""
        declaration = OptionsDeclaration("fr_CA", {"url": "/quebec/"})
        locale = Locale.from_declaration(declaration, catalog_root=tmp_path)

        assert locale.url_segment == "quebec"
        assert locale.has_custom_url

    def test_catalog_path_options(self, tmp_path: Path) -> None:
        """poPath and moPath resolve against the catalog root."""
        declaration = OptionsDeclaration("de", {"poPath": "de/app.po", "mo_path": "de/app.mo"})
        locale = Locale.from_declaration(declaration, catalog_root=tmp_path)

        assert locale.po_path == tmp_path / "de" / "app.po"
        assert locale.mo_path == tmp_path / "de" / "app.mo"

    def test_environment_catalog_path(self, tmp_path: Path) -> None:
        """An environment name adds an override catalog next to the others."""
        locale = Locale.from_declaration(
            BareDeclaration("fr"), catalog_root=tmp_path, environment="dev"
        )
        assert locale.environment_po_path == tmp_path / "fr-dev.po"
        assert not locale.has_environment_po_file()

        (tmp_path / "fr-dev.po").write_text("", encoding="utf-8")
        assert locale.has_environment_po_file()

    def test_unknown_option(self) -> None:
        """Unknown option keys are rejected with the supported list."""
        with pytest.raises(ConfigurationError) as exc_info:
            Locale.from_declaration(OptionsDeclaration("fr", {"slug": "x"}))
        assert exc_info.value.key == "fr.slug"
        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code == DiagnosticCode.CONFIG_UNKNOWN_OPTION

    @pytest.mark.parametrize(
        ("options", "key"),
        [
            ({"url": ""}, "fr.url"),
            ({"url": "/"}, "fr.url"),
            ({"url": 3}, "fr.url"),
            ({"default": "yes"}, "fr.default"),
            ({"poPath": ""}, "fr.poPath"),
            ({"moPath": 1}, "fr.moPath"),
        ],
    )
    def test_invalid_option_values(self, options: dict[str, object], key: str) -> None:
        """Bad option values name the offending key."""
        with pytest.raises(ConfigurationError) as exc_info:
            Locale.from_declaration(OptionsDeclaration("fr", options))
        assert exc_info.value.key == key

    def test_identity_is_the_code(self, tmp_path: Path) -> None:
        """Locales compare and hash by code alone."""
        first = Locale.from_declaration(BareDeclaration("fr"), catalog_root=tmp_path)
        second = Locale.from_declaration(
            OptionsDeclaration("fr", {"url": "francais"}), catalog_root=tmp_path / "other"
        )
        assert first == second
        assert len({first, second}) == 1

    def test_native_label(self) -> None:
        """Known locales are labeled in their own language; unknown ones by code."""
        assert Locale.from_declaration(BareDeclaration("fr")).native_label == "français"
        assert Locale.from_declaration(BareDeclaration("xx")).native_label == "xx"


class TestLocaleRegistry:
    """Registry construction and lookups."""

    def test_empty_registry_disables_localization(self) -> None:
        """An empty registry is valid."""
        registry = LocaleRegistry.load(None)

        assert registry.is_empty()
        assert len(registry) == 0
        assert registry.non_default_url_segments() == ()
        with pytest.raises(LocaleNotFoundError):
            registry.default_locale()

    def test_flagged_default_wins(self) -> None:
        """The locale flagged default is the default wherever it is declared."""
        registry = LocaleRegistry.load({"en": {"default": True}, "fr": None, "de": None})
        assert registry.default_locale().code == "en"

    def test_last_declared_is_implicit_default(self) -> None:
        """Without a flag, the last declared locale is the default."""
        registry = LocaleRegistry.load(["en", "fr", "de"])
        assert registry.default_locale().code == "de"

    def test_multiple_defaults_rejected(self) -> None:
        """Only one locale may be flagged default."""
        with pytest.raises(ConfigurationError) as exc_info:
            LocaleRegistry.load({"en": {"default": True}, "fr": {"default": True}})
        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code == DiagnosticCode.CONFIG_MULTIPLE_DEFAULTS

    def test_lookup_by_code_and_segment(self) -> None:
        """Locales are found by code and by URL segment."""
        registry = LocaleRegistry.load({"en": None, "fr_CA": {"url": "quebec"}})

        assert registry.by_code("fr_CA").url_segment == "quebec"
        assert registry.by_url_segment("quebec").code == "fr_CA"
        assert registry.get("de") is None
        assert "fr_CA" in registry
        assert registry.codes == ("en", "fr_CA")

    def test_lookup_misses_raise(self) -> None:
        """Misses raise LocaleNotFoundError, a LookupError."""
        registry = LocaleRegistry.load(["en"])

        with pytest.raises(LocaleNotFoundError) as exc_info:
            registry.by_code("fr")
        assert exc_info.value.lookup == "fr"
        with pytest.raises(LookupError):
            registry.by_url_segment("fr")

    def test_non_default_url_segments(self) -> None:
        """The default locale's segment is excluded, order kept."""
        registry = LocaleRegistry.load(
            {"en": {"default": True}, "fr": {"url": "francais"}, "de": None}
        )
        assert registry.non_default_url_segments() == ("francais", "de")

    def test_iteration_in_declaration_order(self) -> None:
        """Iteration yields Locale objects in declaration order."""
        registry = LocaleRegistry.load(["lv", "en"])
        assert [locale.code for locale in registry] == ["lv", "en"]

    @given(config=locale_configs())
    def test_exactly_one_default(self, config: dict[str, dict[str, object]]) -> None:
        """A non-empty registry always has one default, chosen by the rule."""
        registry = LocaleRegistry.load(config)
        flagged = [code for code, options in config.items() if options.get("default")]
        event(f"flagged={len(flagged)}")

        expected = flagged[0] if flagged else list(config)[-1]
        assert registry.default_locale().code == expected
        assert len(registry.non_default_url_segments()) == len(config) - 1

    @given(config=locale_configs())
    def test_every_segment_resolves_to_its_locale(
        self, config: dict[str, dict[str, object]]
    ) -> None:
        """by_url_segment inverts url_segment for unique segments."""
        registry = LocaleRegistry.load(config)
        for locale in registry:
            assert registry.by_url_segment(locale.url_segment) == locale
