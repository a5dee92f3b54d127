"""
Defines custom exceptions for the application to allow for more specific error handling.
"""


class DocFetchError(Exception):
    """Base exception for all application-specific errors."""


class ConfigurationError(DocFetchError):
    """Raised for issues related to configuration loading or validation."""


class ConfigNotFoundError(ConfigurationError):
    """Raised when the packages file cannot be located."""


class ConfigParseError(ConfigurationError):
    """Raised when the packages file exists but cannot be parsed."""


class FetchError(DocFetchError):
    """
    Base class for failures scoped to a single package. These are reported
    and never abort the batch.
    """


class InvalidOutputPathError(FetchError):
    """Raised when a package's output path is absolute or escapes the base directory."""


class DirectoryCreationError(FetchError):
    """Raised when the parent directories of an output file cannot be created."""


class NetworkError(FetchError):
    """Raised on DNS, connection, timeout, or non-2xx response failures."""


class WriteError(FetchError):
    """Raised when the fetched content cannot be written to disk."""
