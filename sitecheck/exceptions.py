"""Custom exceptions for sitecheck services."""


class ConfigurationError(Exception):
    """Raised when a run cannot start: no URLs, unreadable inputs or bad option values."""

    def __init__(self, message: str, source: str = None):
        self.source = source
        super().__init__(message if source is None else f"{source}: {message}")


class HttpFetchError(Exception):
    """Raised when an HTTP fetch fails due to network/transport errors."""

    def __init__(self, url: str, original: Exception):
        self.url = url
        self.original = original
        super().__init__(f"HTTP fetch failed for {url}: {original}")


class SerializationError(Exception):
    """Raised when the status report cannot be written.

    The completed results are kept on the exception so callers can still
    inspect them.
    """

    def __init__(self, path: str, original: Exception, results=()):
        self.path = path
        self.original = original
        self.results = tuple(results)
        super().__init__(f"Failed to write report to {path}: {original}")
