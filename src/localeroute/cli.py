"""Command-line interface.

Usage:
    localeroute [--config FILE] extract SRC [SRC ...]
    localeroute [--config FILE] list SRC [SRC ...]
    localeroute [--config FILE] rules

``extract`` scans source directories for translatable strings and
regenerates every configured locale's catalogs. ``list`` prints the
strings found with their references. ``rules`` prints the rewrite rules
for the configured routable entities.

Exit status is 0 on success and 1 when configuration is invalid or any
locale failed.

Python 3.13+. Uses Babel for string extraction.
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import TextIO

from babel.messages.catalog import Catalog
from babel.messages.extract import DEFAULT_KEYWORDS, DEFAULT_MAPPING, extract_from_dir

from localeroute.catalogs import CatalogGenerator, relativize_references
from localeroute.config import LocalizationConfig
from localeroute.constants import DEFAULT_REDIRECT_BASE
from localeroute.diagnostics import DiagnosticFormatter, LocaleRouteError, OutputFormat
from localeroute.routing import RewriteRuleGenerator

__all__ = ["DEFAULT_CONFIG_FILE", "NO_LOCALE_MESSAGE", "build_parser", "main", "scan_sources"]

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "localeroute.toml"
NO_LOCALE_MESSAGE = "This project has no configured locale."


def scan_sources(
    sources: Iterable[str | Path],
    *,
    project_root: Path | None = None,
    method_map: Sequence[tuple[str, str]] = DEFAULT_MAPPING,
) -> Catalog:
    """Extract translatable strings from source directories.

    Strings found several times are merged into one entry listing every
    reference. When ``project_root`` is given, references under it are
    rewritten relative to it.

    Args:
        sources: Directories to scan
        project_root: Root references are reported relative to
        method_map: Babel (glob, extraction method) pairs

    Returns:
        Untranslated catalog of every string found
    """
    catalog = Catalog(fuzzy=False)
    for source in sources:
        directory = Path(source).resolve()
        logger.debug("Scanning %s", directory)
        for filename, lineno, message, _comments, context in extract_from_dir(
            str(directory),
            method_map=method_map,
            keywords=DEFAULT_KEYWORDS,
        ):
            location = (str(directory / filename), lineno)
            catalog.add(message, None, [location], context=context)
    if project_root is not None:
        relativize_references(catalog, project_root.resolve())
    logger.info("Found %d translatable string(s)", len(catalog))
    return catalog


def _report(error: LocaleRouteError, formatter: DiagnosticFormatter, stream: TextIO) -> None:
    if error.diagnostic is not None:
        print(formatter.format(error.diagnostic), file=stream)
    else:
        print(f"error: {error}", file=stream)


def _load_config(path: str | None) -> LocalizationConfig:
    if path is None:
        default = Path(DEFAULT_CONFIG_FILE)
        if not default.is_file():
            logger.debug("No %s found; running without locales", DEFAULT_CONFIG_FILE)
            return LocalizationConfig(project_root=Path.cwd())
        path = str(default)
    return LocalizationConfig.from_toml(path)


def _command_extract(config: LocalizationConfig, args: argparse.Namespace) -> int:
    registry = config.build_registry()
    if registry.is_empty():
        print(NO_LOCALE_MESSAGE)
        return 0

    scanned = scan_sources(args.sources, project_root=config.project_root)
    generator = CatalogGenerator(registry, text_domain=config.text_domain)
    summary = generator.generate_all(scanned)

    for result in summary.get_successful():
        generated = result.generated
        if generated is not None:
            count = generated.entry_count
            print(f"{result.locale_code}: {count} message(s) -> {generated.po_path}")
    for result in summary.get_errors():
        if result.error is not None:
            _report(result.error, args.formatter, sys.stderr)
    return 0 if summary.all_successful else 1


def _command_list(config: LocalizationConfig, args: argparse.Namespace) -> int:
    if config.build_registry().is_empty():
        print(NO_LOCALE_MESSAGE)
        return 0

    scanned = scan_sources(args.sources, project_root=config.project_root)
    for message in scanned:
        if not message.id:
            continue
        original = message.id[0] if message.pluralizable else message.id
        print(original)
        for filename, lineno in message.locations:
            print(f"{filename} @ {lineno}")
        print()
    return 0


def _command_rules(config: LocalizationConfig, args: argparse.Namespace) -> int:
    registry = config.build_registry()
    rules = RewriteRuleGenerator(args.redirect_base).generate(registry, config.entities)
    for rule in rules:
        print(f"{rule.pattern} => {rule.redirect}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="localeroute",
        description="Manage translation catalogs and localized rewrite rules.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Scan src/ and themes/ and regenerate every locale's catalogs:
  localeroute --config localeroute.toml extract src themes

  # Find where a string is used:
  localeroute list src | grep 'We have received your application' -A3
""",
    )
    parser.add_argument(
        "--config",
        "-c",
        help=f"Configuration file (default: ./{DEFAULT_CONFIG_FILE} when present)",
    )
    parser.add_argument(
        "--format",
        choices=[fmt.value for fmt in OutputFormat],
        default=OutputFormat.RUST.value,
        help="Error output format",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    commands = parser.add_subparsers(dest="command", required=True)

    extract = commands.add_parser("extract", help="Scan sources and regenerate catalogs")
    extract.add_argument("sources", nargs="+", help="Directories to scan")
    extract.set_defaults(handler=_command_extract)

    listing = commands.add_parser("list", help="Print translatable strings and references")
    listing.add_argument("sources", nargs="+", help="Directories to scan")
    listing.set_defaults(handler=_command_list)

    rules = commands.add_parser("rules", help="Print rewrite rules for routable entities")
    rules.add_argument(
        "--redirect-base",
        default=DEFAULT_REDIRECT_BASE,
        help=f"Script the redirects point at (default: {DEFAULT_REDIRECT_BASE})",
    )
    rules.set_defaults(handler=_command_rules)

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    args.formatter = DiagnosticFormatter(output_format=OutputFormat(args.format))

    try:
        config = _load_config(args.config)
        return int(args.handler(config, args))
    except LocaleRouteError as e:
        _report(e, args.formatter, sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
