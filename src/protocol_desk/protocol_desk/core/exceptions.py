class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class InvalidIdError(DomainError):
    """Raised when an identifier is malformed."""


class NotFoundError(DomainError):
    """Raised when a record does not exist."""


class AuthenticationError(DomainError):
    """Raised when credentials or the session token are invalid."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class UploadError(DomainError):
    """Raised when the image host rejects a file or cannot be reached."""


class ConfigurationError(DomainError):
    """Raised when required server-side configuration is missing."""


class TransportError(Exception):
    """Raised when the database cannot be reached or a query fails."""
