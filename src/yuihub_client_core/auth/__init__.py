"""Authentication components for YuiHub requests.

This module provides:
- Credential resolution (secure store first, configured fallback second)
- Header construction for ``Authorization`` / ``x-yuihub-token``
- The pure failover table used by the request executor

Example:
    ```python
    from yuihub_client_core.auth import AuthHeader, AuthScheme, CredentialResolver, build_headers

    resolver = CredentialResolver(fallback="abc123")
    headers = build_headers(resolver.resolve(), AuthHeader.AUTHORIZATION, AuthScheme.BEARER)
    # {"Content-Type": "application/json", "Authorization": "Bearer abc123"}
    ```
"""

from yuihub_client_core.auth.credentials import (
    DEFAULT_SECRET_KEY,
    CredentialResolver,
    InMemorySecretStore,
    SecretStore,
)
from yuihub_client_core.auth.exceptions import CredentialError, SecretStoreError
from yuihub_client_core.auth.headers import (
    AUTHORIZATION_HEADER,
    TOKEN_HEADER,
    AuthHeader,
    AuthScheme,
    alternate_header,
    build_headers,
    initial_header,
    next_header,
)

__all__ = [
    "AUTHORIZATION_HEADER",
    "DEFAULT_SECRET_KEY",
    "TOKEN_HEADER",
    "AuthHeader",
    "AuthScheme",
    "CredentialError",
    "CredentialResolver",
    "InMemorySecretStore",
    "SecretStore",
    "SecretStoreError",
    "alternate_header",
    "build_headers",
    "initial_header",
    "next_header",
]
