class MouthTrapError(Exception):
    """Base class for all errors raised by MOUTH TRAP."""


class ConfigurationError(MouthTrapError):
    """Raised at startup when the configured constants cannot produce a playable field."""


class StorageError(MouthTrapError):
    """Raised when the best-score store cannot be written."""
