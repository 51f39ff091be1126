"""Exception hierarchy for MinuteMind."""


class MinuteMindError(Exception):
    """Base class for all MinuteMind errors."""


class ValidationError(MinuteMindError):
    """Raised when a command is rejected before it reaches the store."""


class StorageError(MinuteMindError):
    """Raised by persistence adapters when a read or write fails."""
