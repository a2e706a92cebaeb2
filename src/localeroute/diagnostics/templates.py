"""Error message templates.

Centralized error message templates for testable, consistent error messages.
Python 3.13+. Zero external dependencies.
"""

from collections.abc import Iterable

from .codes import Diagnostic, DiagnosticCode

__all__ = ["ErrorTemplate"]


class ErrorTemplate:
    """Centralized error message templates.

    All error messages are created here so exception constructors never
    build strings inline, and tests can assert on codes instead of text.
    """

    @staticmethod
    def invalid_code(key: str, reason: str) -> Diagnostic:
        """Locale code is not a usable identifier.

        Args:
            key: The offending configuration key (repr for non-strings)
            reason: Why the code was rejected

        Returns:
            Diagnostic for CONFIG_INVALID_CODE
        """
        return Diagnostic(
            code=DiagnosticCode.CONFIG_INVALID_CODE,
            message=f"Invalid locale code {key}: {reason}",
            hint="Locale codes are non-empty strings such as 'en' or 'fr_CA'",
            subject=key,
        )

    @staticmethod
    def duplicate_code(code: str) -> Diagnostic:
        """Locale code declared more than once.

        Args:
            code: The duplicated locale code

        Returns:
            Diagnostic for CONFIG_DUPLICATE_CODE
        """
        return Diagnostic(
            code=DiagnosticCode.CONFIG_DUPLICATE_CODE,
            message=f"Locale '{code}' is declared more than once",
            hint="Remove the duplicate declaration",
            subject=code,
        )

    @staticmethod
    def unknown_option(code: str, option: str, supported: Iterable[str]) -> Diagnostic:
        """Locale options contain an unsupported key.

        Args:
            code: Locale being declared
            option: The unsupported option key
            supported: Supported option keys

        Returns:
            Diagnostic for CONFIG_UNKNOWN_OPTION
        """
        return Diagnostic(
            code=DiagnosticCode.CONFIG_UNKNOWN_OPTION,
            message=f"Unknown option '{option}' for locale '{code}'",
            hint=f"Supported options are: {', '.join(supported)}",
            subject=f"{code}.{option}",
        )

    @staticmethod
    def invalid_option(code: str, option: str, expected: str, value: object) -> Diagnostic:
        """Locale option has the wrong type or an unusable value.

        Args:
            code: Locale being declared
            option: Option key
            expected: Description of the expected value
            value: Value that was received

        Returns:
            Diagnostic for CONFIG_INVALID_OPTION
        """
        return Diagnostic(
            code=DiagnosticCode.CONFIG_INVALID_OPTION,
            message=(
                f"Option '{option}' of locale '{code}' must be {expected}, "
                f"got {type(value).__name__}: {value!r}"
            ),
            subject=f"{code}.{option}",
        )

    @staticmethod
    def multiple_defaults(codes: Iterable[str]) -> Diagnostic:
        """More than one locale is flagged as default.

        Args:
            codes: Locale codes flagged default

        Returns:
            Diagnostic for CONFIG_MULTIPLE_DEFAULTS
        """
        listed = ", ".join(f"'{c}'" for c in codes)
        return Diagnostic(
            code=DiagnosticCode.CONFIG_MULTIPLE_DEFAULTS,
            message=f"Only one locale may be the default, got: {listed}",
            hint="Keep 'default = true' on a single locale",
            subject="default",
        )

    @staticmethod
    def malformed(key: str, description: str) -> Diagnostic:
        """Configuration has an unexpected shape.

        Args:
            key: Configuration key or section
            description: What was wrong

        Returns:
            Diagnostic for CONFIG_MALFORMED
        """
        return Diagnostic(
            code=DiagnosticCode.CONFIG_MALFORMED,
            message=f"Malformed configuration at '{key}': {description}",
            subject=key,
        )

    @staticmethod
    def config_file_unreadable(path: str, reason: str) -> Diagnostic:
        """Configuration file could not be read or parsed.

        Args:
            path: Configuration file path
            reason: Underlying error text

        Returns:
            Diagnostic for CONFIG_FILE_UNREADABLE
        """
        return Diagnostic(
            code=DiagnosticCode.CONFIG_FILE_UNREADABLE,
            message=f"Cannot read configuration file '{path}': {reason}",
            subject=path,
        )

    @staticmethod
    def query_var_conflict(
        sub_route: str,
        entity: str,
        query_var: str,
        first_entity: str,
        first_query_var: str,
    ) -> Diagnostic:
        """Entities sharing a sub-route key disagree on the query variable.

        Args:
            sub_route: Shared sub-route key
            entity: Entity registered later
            query_var: Its query variable
            first_entity: Entity that registered the key first
            first_query_var: Query variable of the first entity

        Returns:
            Diagnostic for CONFIG_QUERY_VAR_CONFLICT
        """
        return Diagnostic(
            code=DiagnosticCode.CONFIG_QUERY_VAR_CONFLICT,
            message=(
                f"Sub-route '{sub_route}' of '{entity}' uses query variable "
                f"'{query_var}' but '{first_entity}' uses '{first_query_var}'"
            ),
            hint="Entities sharing a sub-route key must share the query variable",
            subject=f"routing.{entity}.query_var",
        )

    @staticmethod
    def locale_not_found(code: str) -> Diagnostic:
        """No locale with the given code.

        Args:
            code: Locale code that was looked up

        Returns:
            Diagnostic for LOCALE_NOT_FOUND
        """
        return Diagnostic(
            code=DiagnosticCode.LOCALE_NOT_FOUND,
            message=f"Locale '{code}' is not configured",
            subject=code,
        )

    @staticmethod
    def url_segment_not_found(segment: str) -> Diagnostic:
        """No locale uses the given URL segment.

        Args:
            segment: URL segment that was looked up

        Returns:
            Diagnostic for URL_SEGMENT_NOT_FOUND
        """
        return Diagnostic(
            code=DiagnosticCode.URL_SEGMENT_NOT_FOUND,
            message=f"No locale uses the URL segment '{segment}'",
            subject=segment,
        )

    @staticmethod
    def no_default_locale() -> Diagnostic:
        """Registry is empty, so there is no default locale.

        Returns:
            Diagnostic for NO_DEFAULT_LOCALE
        """
        return Diagnostic(
            code=DiagnosticCode.NO_DEFAULT_LOCALE,
            message="No locales are configured, localization is disabled",
        )

    @staticmethod
    def catalog_not_scanned(code: str, path: str) -> Diagnostic:
        """Locale has no persisted catalog yet.

        Args:
            code: Locale code
            path: Expected catalog path

        Returns:
            Diagnostic for CATALOG_NOT_SCANNED
        """
        return Diagnostic(
            code=DiagnosticCode.CATALOG_NOT_SCANNED,
            message=f"The project has never been scanned for '{code}'",
            hint="Run 'localeroute extract' to create the catalog",
            subject=path,
        )

    @staticmethod
    def catalog_read_failed(path: str, reason: str) -> Diagnostic:
        """Catalog file exists but cannot be read or parsed.

        Args:
            path: Catalog path
            reason: Underlying error text

        Returns:
            Diagnostic for CATALOG_READ_FAILED
        """
        return Diagnostic(
            code=DiagnosticCode.CATALOG_READ_FAILED,
            message=f"Cannot read catalog '{path}': {reason}",
            subject=path,
        )

    @staticmethod
    def catalog_write_failed(path: str, reason: str) -> Diagnostic:
        """Catalog file could not be written.

        Args:
            path: Catalog path
            reason: Underlying error text

        Returns:
            Diagnostic for CATALOG_WRITE_FAILED
        """
        return Diagnostic(
            code=DiagnosticCode.CATALOG_WRITE_FAILED,
            message=f"Cannot write catalog '{path}': {reason}",
            subject=path,
        )

    @staticmethod
    def directory_not_writable(path: str) -> Diagnostic:
        """Catalog directory is missing or not writable.

        Args:
            path: Directory path

        Returns:
            Diagnostic for CATALOG_DIRECTORY_NOT_WRITABLE
        """
        return Diagnostic(
            code=DiagnosticCode.CATALOG_DIRECTORY_NOT_WRITABLE,
            message=f"Catalog directory '{path}' is not writable",
            hint="Check the catalog_root setting and directory permissions",
            subject=path,
        )

    @staticmethod
    def duplicate_entry(context: str | None, original: str) -> Diagnostic:
        """Two entries share a (context, original) identity key.

        Args:
            context: Entry context (None when absent)
            original: Entry original string

        Returns:
            Diagnostic for CATALOG_DUPLICATE_ENTRY
        """
        where = f" in context '{context}'" if context else ""
        return Diagnostic(
            code=DiagnosticCode.CATALOG_DUPLICATE_ENTRY,
            message=f"Duplicate catalog entry '{original}'{where}",
            hint="Each (context, original) pair may appear once per catalog",
            subject=original,
        )
