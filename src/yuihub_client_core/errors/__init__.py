"""Error taxonomy for YuiHub requests."""

from yuihub_client_core.errors.exceptions import (
    APIError,
    AuthError,
    ClientError,
    ForbiddenError,
    InvalidCredentialError,
    MalformedResponseError,
    NetworkError,
    NotFoundError,
    RequestTimeoutError,
    ServerError,
    UnauthorizedError,
    YuiHubError,
)
from yuihub_client_core.errors.handler import exception_class_for, raise_for_status

__all__ = [
    "APIError",
    "AuthError",
    "ClientError",
    "ForbiddenError",
    "InvalidCredentialError",
    "MalformedResponseError",
    "NetworkError",
    "NotFoundError",
    "RequestTimeoutError",
    "ServerError",
    "UnauthorizedError",
    "YuiHubError",
    "exception_class_for",
    "raise_for_status",
]
