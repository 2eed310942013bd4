"""YuiHub Client Core - resilient authenticated client for the YuiHub service.

This library provides:
- Credential resolution from a secure store with a configured fallback
- ``Authorization`` / ``x-yuihub-token`` header selection with one-shot failover
- Per-attempt timeouts with cancellation
- Secret-redacting request diagnostics

Example:
    ```python
    from yuihub_client_core import InMemorySecretStore, Settings, YuiHubClient

    store = InMemorySecretStore({"yuihub.apiKey": "abc123"})
    async with YuiHubClient(Settings.from_env(), secret_store=store) as client:
        health = await client.health()
    ```
"""

from yuihub_client_core.auth import AuthHeader, AuthScheme, CredentialResolver, InMemorySecretStore
from yuihub_client_core.client import YuiHubClient
from yuihub_client_core.config import Settings
from yuihub_client_core.executor import RequestExecutor

__version__ = "0.1.0"

__all__ = [
    "AuthHeader",
    "AuthScheme",
    "CredentialResolver",
    "InMemorySecretStore",
    "RequestExecutor",
    "Settings",
    "YuiHubClient",
    "__version__",
]
