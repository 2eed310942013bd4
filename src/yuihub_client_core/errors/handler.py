"""Status-code to exception mapping for completed HTTP attempts."""

from typing import Protocol

from yuihub_client_core.errors.exceptions import (
    APIError,
    ClientError,
    ForbiddenError,
    NotFoundError,
    ServerError,
    UnauthorizedError,
)


class StatusResponse(Protocol):
    status_code: int
    reason_phrase: str


EXCEPTION_MAP: dict[int, type[APIError]] = {
    401: UnauthorizedError,
    403: ForbiddenError,
    404: NotFoundError,
}


def exception_class_for(status_code: int) -> type[APIError]:
    """Pick the exception class for a non-2xx status code."""
    if status_code in EXCEPTION_MAP:
        return EXCEPTION_MAP[status_code]
    if 400 <= status_code < 500:
        return ClientError
    if 500 <= status_code < 600:
        return ServerError
    return APIError


def raise_for_status(response: StatusResponse, body_snippet: str | None = None) -> None:
    """Raise the appropriate exception for a non-2xx response.

    Args:
        response: Completed response (only status and reason are used).
        body_snippet: Optional, already truncated body text appended to the
            message.

    Raises:
        APIError subclass based on status code
    """
    status_code = response.status_code
    if 200 <= status_code < 300:
        return

    reason = response.reason_phrase or ""
    message = f"HTTP {status_code} {reason}".rstrip()
    if body_snippet:
        message = f"{message}: {body_snippet}"

    exc_class = exception_class_for(status_code)
    raise exc_class(
        message=message,
        status_code=status_code,
        reason=reason,
        body_snippet=body_snippet or None,
    )
