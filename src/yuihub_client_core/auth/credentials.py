"""Credential resolution backed by a secure store with a configured fallback.

The resolver owns a small cache of the securely stored token. The cache is
primed when the resolver is created and refreshed whenever the store reports
that the watched key changed, so every request reads the latest value without
touching the store.

Resolution order (highest to lowest priority):
1. Non-empty token from the secure store
2. Configured fallback value (string or zero-argument callable)
3. None (unauthenticated request)

Example:
    ```python
    from yuihub_client_core.auth import CredentialResolver, InMemorySecretStore

    store = InMemorySecretStore()
    resolver = CredentialResolver(store, fallback="key-from-settings")

    resolver.resolve()  # "key-from-settings"
    store.set("yuihub.apiKey", "stored-token")
    resolver.resolve()  # "stored-token"
    ```

Security Considerations:
    - Credentials are never logged (presence only, masked with ***)
"""

import logging
from collections.abc import Callable
from typing import Protocol

from yuihub_client_core.auth.exceptions import SecretStoreError

logger = logging.getLogger(__name__)

DEFAULT_SECRET_KEY = "yuihub.apiKey"

ChangeListener = Callable[[str], None]
Unsubscribe = Callable[[], None]


class SecretStore(Protocol):
    """Opaque key-value store for secrets with change notifications."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def delete(self, key: str) -> None: ...

    def subscribe(self, listener: ChangeListener) -> Unsubscribe: ...


class InMemorySecretStore:
    """Process-local :class:`SecretStore` implementation.

    Listeners are called with the changed key after every ``set`` and
    ``delete``.
    """

    def __init__(self, initial: dict[str, str] | None = None):
        self._values: dict[str, str] = dict(initial or {})
        self._listeners: list[ChangeListener] = []

    def get(self, key: str) -> str | None:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value
        self._notify(key)

    def delete(self, key: str) -> None:
        self._values.pop(key, None)
        self._notify(key)

    def subscribe(self, listener: ChangeListener) -> Unsubscribe:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, key: str) -> None:
        for listener in list(self._listeners):
            listener(key)


def _mask(value: str | None) -> str:
    return "***" if value else "(none)"


class CredentialResolver:
    """Resolve the current API key for a request.

    Attributes:
        secret_key: Key of the token inside the secure store.

    Example:
        ```python
        resolver = CredentialResolver(store, fallback=lambda: settings.api_key)
        headers = build_headers(resolver.resolve(), AuthHeader.AUTHORIZATION, AuthScheme.BEARER)
        ```
    """

    def __init__(
        self,
        secret_store: SecretStore | None = None,
        *,
        secret_key: str = DEFAULT_SECRET_KEY,
        fallback: str | Callable[[], str | None] | None = None,
    ):
        """Initialize the resolver and prime the token cache.

        Args:
            secret_store: Secure store to read the token from. When None,
                only the fallback is used.
            secret_key: Key of the token in the store.
            fallback: Configured credential used when the store has no
                token. A callable is invoked on every ``resolve()`` so that
                configuration changes are picked up.
        """
        self.secret_key = secret_key
        self._store = secret_store
        self._fallback = fallback
        self._cached_token: str | None = None
        self._unsubscribe: Unsubscribe | None = None

        if self._store is not None:
            self._unsubscribe = self._store.subscribe(self._on_store_change)
            self.refresh()

    def refresh(self) -> str | None:
        """Re-read the secure store into the cache.

        Returns:
            The cached token after refresh, or None.

        Raises:
            SecretStoreError: If the store fails to read the secret.
        """
        if self._store is None:
            return None
        try:
            value = self._store.get(self.secret_key)
        except SecretStoreError:
            raise
        except Exception as e:
            raise SecretStoreError(f"Failed to read secret {self.secret_key}: {e}", key=self.secret_key) from e
        self._cached_token = value or None
        logger.debug(f"Secret {self.secret_key} refreshed: token={_mask(self._cached_token)}")
        return self._cached_token

    def _on_store_change(self, key: str) -> None:
        if key != self.secret_key:
            return
        self.refresh()
        logger.info(f"Secret {key} changed -> {_mask(self._cached_token)}")

    def _fallback_value(self) -> str | None:
        if callable(self._fallback):
            return self._fallback() or None
        return self._fallback or None

    def resolve(self) -> str | None:
        """Return the credential for the next request.

        Returns:
            Stored token if present and non-empty, else the configured
            fallback, else None.
        """
        if self._cached_token:
            return self._cached_token
        return self._fallback_value()

    def store_token(self, token: str) -> None:
        """Persist a token, or delete it when ``token`` is empty.

        Args:
            token: New token. An empty string clears the stored secret.

        Raises:
            ValueError: If no secure store is configured.
        """
        if self._store is None:
            raise ValueError("No secret store configured")

        if token == "":
            self._store.delete(self.secret_key)
            self._cached_token = None
            logger.info(f"Secret {self.secret_key} deleted")
            return

        self._store.set(self.secret_key, token)
        self._cached_token = token
        logger.info(f"Secret {self.secret_key} stored (***)")

    def close(self) -> None:
        """Stop listening for store change notifications."""
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
