"""Custom exceptions for versefill."""


class VersefillError(Exception):
    """Base exception for all versefill errors."""

    pass


class ConfigurationError(VersefillError):
    """Raised when configuration is invalid or missing."""

    pass


class ResolutionError(VersefillError):
    """Raised when a citation cannot be resolved to verse text."""

    def __init__(self, message: str, reference: str = ""):
        super().__init__(message)
        self.reference = reference


class NotFoundError(ResolutionError):
    """Raised when the resolver has no text for a citation."""

    pass


class NetworkError(ResolutionError):
    """Raised when the lookup service is unreachable or times out."""

    pass


class ValidationError(ResolutionError):
    """Raised when a citation is not a well-formed reference."""

    pass
