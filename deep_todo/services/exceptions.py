"""Custom exceptions for service layer."""

from typing import Optional


class ServiceError(Exception):
    """Base exception for all service-related errors."""

    pass


class ApiServiceError(ServiceError):
    """Exception raised when the task service answers with an error status."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class AuthError(ApiServiceError):
    """Exception raised when the bearer token is missing, invalid or expired."""

    pass


class TaskNotFoundError(ApiServiceError):
    """Exception raised when a task does not exist on the server."""

    pass


class NetworkError(ServiceError):
    """Exception raised when a request could not be completed."""

    pass


class DataShapeError(ServiceError):
    """Exception raised when a response body has an unexpected shape."""

    pass


class NotAuthenticatedError(ServiceError):
    """Exception raised when no credential is stored for the session."""

    pass
