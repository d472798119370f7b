"""Service layer for abstracting the remote task service."""

from .api_service import TaskApiService
from .exceptions import (
    ServiceError,
    ApiServiceError,
    AuthError,
    TaskNotFoundError,
    NetworkError,
    DataShapeError,
    NotAuthenticatedError,
)

__all__ = [
    "TaskApiService",
    "ServiceError",
    "ApiServiceError",
    "AuthError",
    "TaskNotFoundError",
    "NetworkError",
    "DataShapeError",
    "NotAuthenticatedError",
]
