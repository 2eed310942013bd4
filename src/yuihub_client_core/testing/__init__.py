"""Testing utilities for code built on yuihub-client-core.

Example:
    ```python
    from yuihub_client_core.testing import RecordingHandler, create_test_client

    handler = RecordingHandler([httpx.Response(401), httpx.Response(200, json={"ok": True})])
    client = create_test_client(handler, api_key="abc123")
    await client.health()
    assert handler.auth_headers() == [("Authorization", "Bearer abc123"), ("x-yuihub-token", "abc123")]
    ```
"""

from collections.abc import Iterable

import httpx

from yuihub_client_core.auth.credentials import SecretStore
from yuihub_client_core.auth.headers import AUTHORIZATION_HEADER, TOKEN_HEADER
from yuihub_client_core.client import YuiHubClient
from yuihub_client_core.config import Settings
from yuihub_client_core.transport.timed import TimedTransport

TEST_BASE_URL = "https://hub.example.com"


class RecordingHandler:
    """``httpx.MockTransport`` handler that replays queued responses.

    Every request is recorded. The last queued response is repeated once the
    queue runs out.
    """

    def __init__(self, responses: Iterable[httpx.Response]):
        self._responses = list(responses)
        if not self._responses:
            raise ValueError("RecordingHandler needs at least one response")
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if len(self._responses) > 1:
            template = self._responses.pop(0)
        else:
            template = self._responses[0]
        return httpx.Response(template.status_code, headers=template.headers, content=template.content)

    @property
    def call_count(self) -> int:
        return len(self.requests)

    def auth_headers(self) -> list[tuple[str, str] | None]:
        """The authentication header sent with each request, or None."""
        sent: list[tuple[str, str] | None] = []
        for request in self.requests:
            if AUTHORIZATION_HEADER in request.headers:
                sent.append((AUTHORIZATION_HEADER, request.headers[AUTHORIZATION_HEADER]))
            elif TOKEN_HEADER in request.headers:
                sent.append((TOKEN_HEADER, request.headers[TOKEN_HEADER]))
            else:
                sent.append(None)
        return sent


def create_test_transport(handler) -> TimedTransport:
    """Timed transport whose requests are answered by ``handler``."""
    return TimedTransport(httpx.AsyncClient(transport=httpx.MockTransport(handler)))


def create_test_client(
    handler,
    *,
    secret_store: SecretStore | None = None,
    **settings_overrides,
) -> YuiHubClient:
    """YuiHub client wired to a mock transport.

    Args:
        handler: Sync or async ``httpx.MockTransport`` handler.
        secret_store: Optional secure store.
        **settings_overrides: Fields of :class:`Settings` to override.
    """
    settings_overrides.setdefault("api_base_url", TEST_BASE_URL)
    return YuiHubClient(
        Settings(**settings_overrides),
        secret_store=secret_store,
        transport=create_test_transport(handler),
    )


__all__ = [
    "TEST_BASE_URL",
    "RecordingHandler",
    "create_test_client",
    "create_test_transport",
]
