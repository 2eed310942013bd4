"""Authentication header construction and the header failover table.

YuiHub accepts the API key either as ``Authorization`` (optionally with a
``Bearer`` prefix) or as the custom ``x-yuihub-token`` header. When the
configured preference is ``auto`` the client starts with ``Authorization`` and,
on a 401/403, retries exactly once with the other header.

## Failover decision table

| Preference       | First header      | 401/403 on attempt 1 | Anything else |
|------------------|-------------------|----------------------|---------------|
| `auto`           | `authorization`   | retry `x-yuihub-token` | terminate   |
| `authorization`  | `authorization`   | terminate            | terminate     |
| `x-yuihub-token` | `x-yuihub-token`  | terminate            | terminate     |

Attempt 2 always terminates.
"""

import re
from enum import StrEnum

CONTENT_TYPE_HEADER = "Content-Type"
AUTHORIZATION_HEADER = "Authorization"
TOKEN_HEADER = "x-yuihub-token"

AUTH_FAILURE_STATUS_CODES: frozenset[int] = frozenset([401, 403])
MAX_ATTEMPTS = 2

_BEARER_PREFIX = re.compile(r"^Bearer\s+", re.IGNORECASE)


class AuthHeader(StrEnum):
    """Which header carries the credential."""

    AUTO = "auto"
    AUTHORIZATION = "authorization"
    TOKEN = "x-yuihub-token"


class AuthScheme(StrEnum):
    """Value format of the ``Authorization`` header."""

    BEARER = "bearer"
    NONE = "none"


def format_authorization(credential: str, scheme: AuthScheme) -> str:
    """Format an ``Authorization`` header value.

    Bearer values are not prefixed twice: a credential that already starts
    with ``Bearer `` (any case) is used unchanged.
    """
    if scheme is AuthScheme.BEARER and not _BEARER_PREFIX.match(credential):
        return f"Bearer {credential}"
    return credential


def build_headers(credential: str | None, header: AuthHeader, scheme: AuthScheme) -> dict[str, str]:
    """Build the headers for a single attempt.

    Args:
        credential: API key, or None/empty for an unauthenticated request.
        header: Concrete header choice. ``AuthHeader.AUTO`` must be resolved
            by the caller first.
        scheme: Format of the ``Authorization`` value.

    Returns:
        Content-Type plus at most one authentication header.

    Raises:
        ValueError: If ``header`` is ``AuthHeader.AUTO``.
    """
    if header is AuthHeader.AUTO:
        raise ValueError("AuthHeader.AUTO must be resolved to a concrete header before building headers")

    headers = {CONTENT_TYPE_HEADER: "application/json"}
    if not credential:
        return headers

    if header is AuthHeader.TOKEN:
        headers[TOKEN_HEADER] = credential
    else:
        headers[AUTHORIZATION_HEADER] = format_authorization(credential, scheme)
    return headers


def initial_header(preference: AuthHeader) -> AuthHeader:
    """Concrete header for the first attempt."""
    if preference is AuthHeader.TOKEN:
        return AuthHeader.TOKEN
    return AuthHeader.AUTHORIZATION


def alternate_header(header: AuthHeader) -> AuthHeader:
    """The other concrete header."""
    if header is AuthHeader.TOKEN:
        return AuthHeader.AUTHORIZATION
    return AuthHeader.TOKEN


def next_header(preference: AuthHeader, current: AuthHeader, status_code: int, attempt: int) -> AuthHeader | None:
    """Decide whether a completed attempt is followed by a failover attempt.

    Args:
        preference: Configured header preference.
        current: Header used by the attempt that just completed.
        status_code: Status code of that attempt.
        attempt: 1-indexed number of that attempt.

    Returns:
        Header for the next attempt, or None to stop.
    """
    if preference is not AuthHeader.AUTO:
        return None
    if attempt >= MAX_ATTEMPTS:
        return None
    if status_code not in AUTH_FAILURE_STATUS_CODES:
        return None
    return alternate_header(current)
