"""Exceptions raised by notp."""


class NotpError(Exception):
    """Base class for all notp errors."""


class ConfigurationError(NotpError, ValueError):
    """Raised when options, counters or secrets are structurally invalid."""


class BackendUnavailableError(NotpError, RuntimeError):
    """Raised when the HMAC-SHA1 primitive cannot be used."""
