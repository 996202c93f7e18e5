class RecordsError(Exception):
    """Base exception for every failure the records layer reports."""

    kind = "error"
    retryable = False


class ConfigurationError(RecordsError):
    """Raised when the backing record store is not configured."""

    kind = "configuration"


class ValidationError(RecordsError):
    """Raised when a required field is missing or malformed."""

    kind = "validation"


class NotFoundError(RecordsError):
    """Raised when a record id does not exist."""

    kind = "not_found"


class TransportError(RecordsError):
    """Raised when a network or store call failed. Callers may retry."""

    kind = "transport"
    retryable = True
