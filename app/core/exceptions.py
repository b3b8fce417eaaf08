"""Custom exceptions for the Teckion marketplace."""


class TeckionException(Exception):
    """Base exception for Teckion application."""
    
    pass


class ValidationError(TeckionException):
    """Raised when validation fails."""
    
    pass


class NotFoundError(TeckionException):
    """Raised when a resource is not found."""
    
    pass


class ConflictError(TeckionException):
    """Raised when a write carries a stale revision token."""
    
    pass


class DatabaseError(TeckionException):
    """Raised when a database operation fails."""
    
    pass


class ServiceError(TeckionException):
    """Raised when a service operation fails."""
    
    pass


class ConfigurationError(TeckionException):
    """Raised when configuration is invalid."""
    
    pass


class AuthenticationError(TeckionException):
    """Raised when authentication fails."""
    
    pass


class AuthorizationError(TeckionException):
    """Raised when a role lacks a required scope."""
    
    pass


class ComplianceWarning(TeckionException):
    """Raised when a contract revision fails the advisory compliance check and was not confirmed."""

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason
