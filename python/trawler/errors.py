"""
Trawler error types.

I/O failures are NOT wrapped here: directory listings and file reads raise the
built-in OSError subclasses (FileNotFoundError, PermissionError, ...) and those
propagate unmodified to the caller of initialize_workspace().
"""


class TrawlerError(Exception):
    """Base class for Trawler domain errors."""

    pass


class UnsupportedSchemeError(TrawlerError, ValueError):
    """Raised when a non-file URI is asked for a local file-system path."""

    def __init__(self, location: str, scheme: str):
        super().__init__(f"Cannot map '{location}' to a local path (scheme '{scheme}')")
        self.location = location
        self.scheme = scheme


class DocumentAlreadyExistsError(TrawlerError):
    """Raised when adding a document whose URI is already known to the store."""

    def __init__(self, uri: str):
        super().__init__(f"A document with the URI '{uri}' is already present")
        self.uri = uri


class ConfigError(TrawlerError, ValueError):
    """Raised when environment configuration cannot be parsed."""

    pass
