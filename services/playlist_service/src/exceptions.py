"""
Custom exceptions for the playlist service.

Provides specific exception types for the scraping and catalog resolution
error scenarios. Transport failures (``ScrapingError``, ``CatalogRequestError``)
are kept distinct from resolution failures (``EntryNotFoundError``) so callers
can skip unresolved entries without masking network problems.
"""

from typing import Any


class PlaylistServiceError(Exception):
    """Base exception for all playlist service errors."""

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Error message
            error_code: Optional error code for categorization
            details: Optional additional error details
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}


class ScrapingError(PlaylistServiceError):
    """Raised when a source page cannot be fetched."""

    def __init__(
        self,
        message: str,
        url: str | None = None,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize scraping error.

        Args:
            message: Error message
            url: URL that failed to fetch
            status_code: HTTP status code if applicable
            details: Additional error details
        """
        error_details = details or {}
        if url:
            error_details["url"] = url
        if status_code:
            error_details["status_code"] = status_code

        super().__init__(message, "SCRAPING_ERROR", error_details)
        self.url = url
        self.status_code = status_code


class ParsingError(PlaylistServiceError):
    """Raised when a fetched document cannot be parsed."""

    def __init__(
        self,
        message: str,
        element: str | None = None,
        html_snippet: str | None = None,
    ) -> None:
        """Initialize parsing error.

        Args:
            message: Error message
            element: Element that failed to parse
            html_snippet: Snippet of HTML that caused the error
        """
        details = {}
        if element:
            details["element"] = element
        if html_snippet:
            details["html_snippet"] = html_snippet[:500]  # Limit snippet size

        super().__init__(message, "PARSING_ERROR", details)
        self.element = element
        self.html_snippet = html_snippet


class CatalogError(PlaylistServiceError):
    """Base class for failures reported by the music catalog client."""


class CatalogRequestError(CatalogError):
    """Raised when a catalog request fails at the transport level."""

    def __init__(
        self,
        message: str,
        endpoint: str | None = None,
        status_code: int | None = None,
    ) -> None:
        """Initialize catalog request error.

        Args:
            message: Error message
            endpoint: Catalog endpoint that failed
            status_code: HTTP status code if applicable
        """
        details: dict[str, Any] = {}
        if endpoint:
            details["endpoint"] = endpoint
        if status_code:
            details["status_code"] = status_code

        super().__init__(message, "CATALOG_REQUEST_ERROR", details)
        self.endpoint = endpoint
        self.status_code = status_code


class CatalogNotFoundError(CatalogError):
    """Raised when a catalog search yields no match."""

    def __init__(
        self,
        message: str,
        kind: str | None = None,
        query: str | None = None,
    ) -> None:
        """Initialize catalog not-found error.

        Args:
            message: Error message
            kind: Kind of entity searched for
            query: Search query text
        """
        details = {}
        if kind:
            details["kind"] = kind
        if query:
            details["query"] = query

        super().__init__(message, "CATALOG_NOT_FOUND", details)
        self.kind = kind
        self.query = query


class EntryNotFoundError(PlaylistServiceError):
    """Raised when an entry reference cannot be resolved against the catalog."""

    def __init__(
        self,
        reference: str,
        kind: str | None = None,
        message: str | None = None,
    ) -> None:
        """Initialize entry not-found error.

        Args:
            reference: Textual reference of the entry that failed
            kind: Kind of the entry (artist, album, track)
            message: Optional error message
        """
        details = {"reference": reference}
        if kind:
            details["kind"] = kind

        super().__init__(message or f"Could not find {kind or 'entry'}: {reference}", "ENTRY_NOT_FOUND", details)
        self.reference = reference
        self.kind = kind


class ValidationError(PlaylistServiceError):
    """Raised when data validation fails."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: Any | None = None,
    ) -> None:
        """Initialize validation error.

        Args:
            message: Error message
            field: Field that failed validation
            value: Value that failed validation
        """
        details = {}
        if field:
            details["field"] = field
        if value is not None:
            details["value"] = str(value)

        super().__init__(message, "VALIDATION_ERROR", details)
        self.field = field
        self.value = value


class ConfigurationError(PlaylistServiceError):
    """Raised when configuration is invalid."""

    def __init__(
        self,
        message: str,
        config_key: str | None = None,
        config_value: Any | None = None,
    ) -> None:
        """Initialize configuration error.

        Args:
            message: Error message
            config_key: Configuration key that is invalid
            config_value: Invalid configuration value
        """
        details = {}
        if config_key:
            details["config_key"] = config_key
        if config_value is not None:
            details["config_value"] = str(config_value)

        super().__init__(message, "CONFIGURATION_ERROR", details)
        self.config_key = config_key
        self.config_value = config_value
