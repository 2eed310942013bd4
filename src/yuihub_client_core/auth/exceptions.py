"""Custom exceptions for credential handling.

Example:
    ```python
    from yuihub_client_core.auth.exceptions import SecretStoreError

    try:
        resolver.refresh()
    except SecretStoreError as e:
        print(f"Could not read token {e.key}: {e}")
    ```
"""


class CredentialError(Exception):
    """Base exception for credential-related errors.

    All credential-specific exceptions inherit from this class,
    making it easy to catch any credential-related error.
    """

    pass


class SecretStoreError(CredentialError):
    """Raised when the secure store fails to return a secret.

    Attributes:
        key: The secret key that was being accessed.
    """

    def __init__(self, message: str, key: str | None = None):
        super().__init__(message)
        self.key = key
