"""Deadline-bounded HTTP transport.

Each call to :meth:`TimedTransport.send` runs inside its own
``asyncio.timeout`` scope. When the budget runs out the in-flight send is
cancelled and :class:`~yuihub_client_core.errors.RequestTimeoutError` is
raised. The same budget is handed to httpx so that its connection pool and
socket reads give up at the same point.

The response body is streamed: nothing is read until the caller asks for it
via :meth:`RawResponse.text` or :meth:`RawResponse.json`.

Example:
    ```python
    async with TimedTransport() as transport:
        response = await transport.send(
            "GET", "https://hub.example.com/health", headers={}, timeout_ms=5000
        )
        if response.is_success:
            payload = await response.json()
    ```
"""

import asyncio
import json
import logging
from typing import Any

import httpx

from yuihub_client_core.errors.exceptions import InvalidCredentialError, NetworkError, RequestTimeoutError

logger = logging.getLogger(__name__)


def _unsendable_header(method: str, url: str) -> InvalidCredentialError:
    # Header values must be ASCII without line breaks; never echo the value
    return InvalidCredentialError(
        f"Request {method} {url} has a header value that cannot be sent; "
        "the API token may contain non-ASCII characters or line breaks"
    )


class RawResponse:
    """Status line of a completed attempt plus a deferred body reader."""

    def __init__(self, response: httpx.Response):
        self._response = response

    @property
    def status_code(self) -> int:
        return self._response.status_code

    @property
    def reason_phrase(self) -> str:
        return self._response.reason_phrase

    @property
    def url(self) -> str:
        return str(self._response.request.url)

    @property
    def is_success(self) -> bool:
        return self._response.is_success

    async def text(self) -> str:
        """Read and decode the body, closing the stream even if the read fails."""
        try:
            await self._response.aread()
        finally:
            await self._response.aclose()
        return self._response.text

    async def json(self) -> Any:
        """Read the body and decode it as JSON.

        Raises:
            ValueError: If the body is not valid JSON.
        """
        return json.loads(await self.text())

    async def text_or_empty(self) -> str:
        """Body text, or "" when the body cannot be read."""
        try:
            return await self.text()
        except (httpx.HTTPError, UnicodeDecodeError) as e:
            logger.debug(f"Could not read response body: {e}")
            return ""

    async def aclose(self) -> None:
        """Release the connection without reading the body."""
        await self._response.aclose()


class TimedTransport:
    """Send single HTTP attempts under a fixed timeout budget.

    Args:
        client: Existing ``httpx.AsyncClient`` to send through. When None a
            client is created and owned by the transport.
        verify: TLS verification flag for an owned client.
    """

    def __init__(self, client: httpx.AsyncClient | None = None, *, verify: bool = True) -> None:
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(verify=verify)

    async def __aenter__(self) -> "TimedTransport":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def send(
        self,
        method: str,
        url: str,
        *,
        headers: dict[str, str],
        params: dict[str, Any] | None = None,
        json: Any = None,
        timeout_ms: int,
    ) -> RawResponse:
        """Send one attempt, bounded by ``timeout_ms``.

        Args:
            method: HTTP method.
            url: Absolute request URL.
            headers: Request headers.
            params: Query parameters.
            json: JSON body, or None for no body.
            timeout_ms: Budget for this attempt in milliseconds.

        Returns:
            RawResponse with an unread body.

        Raises:
            RequestTimeoutError: The budget was exceeded; the send was cancelled.
            NetworkError: DNS, connection or TLS failure.
            InvalidCredentialError: A header value cannot be encoded for the wire.
        """
        budget = timeout_ms / 1000
        try:
            request = self._client.build_request(
                method,
                url,
                headers=headers,
                params=params,
                json=json,
                timeout=budget,
            )
        except (UnicodeEncodeError, httpx.LocalProtocolError):
            raise _unsendable_header(method, url) from None

        try:
            async with asyncio.timeout(budget):
                response = await self._client.send(request, stream=True)
        except TimeoutError as e:
            raise RequestTimeoutError(
                f"Request {method} {request.url} timed out after {timeout_ms}ms", timeout_ms=timeout_ms
            ) from e
        except httpx.TimeoutException as e:
            raise RequestTimeoutError(
                f"Request {method} {request.url} timed out after {timeout_ms}ms", timeout_ms=timeout_ms
            ) from e
        except httpx.LocalProtocolError:
            raise _unsendable_header(method, url) from None
        except httpx.TransportError as e:
            raise NetworkError(f"Request {method} {request.url} failed: {e}") from e

        return RawResponse(response)
