"""
Defines custom exceptions for the application to allow for more specific error handling.
"""


class TldrCacheError(Exception):
    """Base exception for all application-specific errors."""


class FetchError(TldrCacheError):
    """Raised when the remote archive cannot be downloaded completely."""


class ExtractionError(TldrCacheError):
    """Raised when the downloaded archive is corrupt or cannot be unpacked."""


class IndexCorruptError(TldrCacheError):
    """Raised when the manifest file is missing or does not match the expected shape."""


class PageNotFoundError(TldrCacheError):
    """
    Raised when the manifest references a page that is not present on disk.
    """


class BusyError(TldrCacheError):
    """Raised when a cache refresh is requested while another one is in flight."""


class ConfigurationError(TldrCacheError):
    """Raised for issues related to configuration loading or validation."""
