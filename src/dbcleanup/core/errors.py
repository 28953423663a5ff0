"""Exceptions raised by the cleanup core."""


class CleanupError(RuntimeError):
    """Base class for failures that abort a cleanup run."""


class ConfigurationError(CleanupError):
    """Raised when required inputs are missing. No network call has been made."""


class NetworkError(CleanupError):
    """Raised when listing databases fails (transport error or non-2xx status)."""


class DeletionError(CleanupError):
    """Raised when the delete call fails or the provider reports an error."""
