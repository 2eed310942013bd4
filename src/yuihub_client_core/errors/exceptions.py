"""Structured exceptions for YuiHub request failures.

Hierarchy::

    YuiHubError
    +-- NetworkError            (DNS, refused connection, TLS; never retried)
    +-- RequestTimeoutError     (attempt exceeded its budget; never retried)
    +-- MalformedResponseError  (2xx body was not the expected JSON)
    +-- InvalidCredentialError  (token cannot be sent as a header value)
    +-- APIError                (server answered with a non-2xx status)
        +-- ClientError         (4xx)
        |   +-- AuthError
        |   |   +-- UnauthorizedError  (401)
        |   |   +-- ForbiddenError     (403)
        |   +-- NotFoundError   (404)
        +-- ServerError         (5xx)
"""


class YuiHubError(Exception):
    """Base exception for every failure of a logical YuiHub call."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    @property
    def requires_reauthentication(self) -> bool:
        """Whether callers should prompt the user to set credentials."""
        return self.status_code == 401


class NetworkError(YuiHubError):
    """The request never produced an HTTP response."""

    pass


class RequestTimeoutError(YuiHubError):
    """The attempt did not complete within its timeout budget."""

    def __init__(self, message: str, timeout_ms: int | None = None):
        super().__init__(message)
        self.timeout_ms = timeout_ms


class MalformedResponseError(YuiHubError):
    """A successful response whose body could not be used."""

    def __init__(self, message: str, status_code: int | None = None, body_snippet: str | None = None):
        super().__init__(message, status_code=status_code)
        self.body_snippet = body_snippet


class InvalidCredentialError(YuiHubError):
    """The resolved credential is not a valid HTTP header value.

    The message never contains the credential itself.
    """

    pass


class APIError(YuiHubError):
    """Base exception for HTTP status failures."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        reason: str = "",
        body_snippet: str | None = None,
    ):
        super().__init__(message, status_code=status_code)
        self.reason = reason
        self.body_snippet = body_snippet


class ClientError(APIError):
    """4xx client errors."""

    pass


class AuthError(ClientError):
    """401/403 after the header failover policy has run its course."""

    pass


class UnauthorizedError(AuthError):
    """401 Unauthorized."""

    pass


class ForbiddenError(AuthError):
    """403 Forbidden."""

    pass


class NotFoundError(ClientError):
    """404 Not Found."""

    pass


class ServerError(APIError):
    """5xx server errors."""

    pass
