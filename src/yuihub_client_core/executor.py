"""Resilient request executor.

One logical call runs as::

    Init -> Attempt1Sent -> Success
                         -> AuthFailure -> Attempt2Sent -> Success | Failure
                         -> OtherFailure

The failover from attempt 1 to attempt 2 happens only when the header
preference is ``auto`` and the server answered 401 or 403; the second attempt
uses the other header and gets its own timeout budget. Timeouts, network
errors and malformed bodies are never retried.

Example:
    ```python
    executor = RequestExecutor(settings, CredentialResolver(fallback="abc123"), transport)
    health = await executor.get("/health", parser=Health.from_dict)
    ```
"""

import json
import logging
from collections.abc import Callable, Mapping
from typing import Any, TypeVar, overload

import httpx

from yuihub_client_core.auth.credentials import CredentialResolver
from yuihub_client_core.auth.headers import build_headers, initial_header, next_header
from yuihub_client_core.config import Settings
from yuihub_client_core.errors.exceptions import (
    MalformedResponseError,
    NetworkError,
    RequestTimeoutError,
    YuiHubError,
)
from yuihub_client_core.errors.handler import raise_for_status
from yuihub_client_core.transport.diagnostics import RedactingLogger
from yuihub_client_core.transport.timed import RawResponse, TimedTransport

logger = logging.getLogger(__name__)

T = TypeVar("T")
Parser = Callable[[dict[str, Any]], T]


def clean_params(params: Mapping[str, Any] | None) -> dict[str, str]:
    """Drop None and empty-string values; stringify the rest."""
    if not params:
        return {}
    return {key: str(value) for key, value in params.items() if value is not None and value != ""}


def build_url(base_url: str, path: str, params: Mapping[str, Any] | None = None) -> str:
    """Join base URL, path and query string.

    Example:
        ``build_url("https://hub/", "/search", {"q": "design", "limit": 5, "x": None})``
        returns ``"https://hub/search?q=design&limit=5"``.
    """
    url = httpx.URL(base_url.rstrip("/") + path)
    query = clean_params(params)
    if query:
        url = url.copy_merge_params(query)
    return str(url)


def decode_object(text: str) -> dict[str, Any]:
    """Decode a response body that must be a JSON object.

    Raises:
        ValueError: Invalid JSON.
        TypeError: Valid JSON that is not an object.
    """
    payload = json.loads(text)
    if not isinstance(payload, dict):
        raise TypeError(f"expected a JSON object, got {type(payload).__name__}")
    return payload


class RequestExecutor:
    """Run logical calls with header failover, timeouts and redacted logging.

    Args:
        settings: Current settings. May be replaced between calls through the
            ``settings`` attribute; each call reads it once at start.
        credentials: Credential resolver consulted once per logical call.
        transport: Timed transport used for every attempt.
        diagnostics: Redacting logger. Defaults to one configured from
            ``settings.log_response_bodies``.
    """

    def __init__(
        self,
        settings: Settings,
        credentials: CredentialResolver,
        transport: TimedTransport,
        diagnostics: RedactingLogger | None = None,
    ) -> None:
        self.settings = settings
        self.credentials = credentials
        self.transport = transport
        self._diagnostics = diagnostics

    def _diagnostics_for(self, settings: Settings) -> RedactingLogger:
        if self._diagnostics is not None:
            return self._diagnostics
        return RedactingLogger(log_response_bodies=settings.log_response_bodies)

    @overload
    async def execute(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, Any] | None = ...,
        body: Any = ...,
        parser: None = ...,
    ) -> dict[str, Any]: ...

    @overload
    async def execute(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, Any] | None = ...,
        body: Any = ...,
        parser: Parser[T],
    ) -> T: ...

    async def execute(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, Any] | None = None,
        body: Any = None,
        parser: Parser[T] | None = None,
    ) -> T | dict[str, Any]:
        """Execute one logical call.

        Args:
            method: HTTP method.
            path: Path below the base URL, starting with ``/``.
            params: Query parameters; None and "" values are omitted.
            body: JSON body for the request, or None.
            parser: Converts the decoded JSON object into the result type.

        Returns:
            ``parser(payload)`` when a parser is given, else the decoded JSON
            object.

        Raises:
            NetworkError: Transport failure.
            RequestTimeoutError: An attempt exceeded the timeout budget.
            APIError: Final attempt returned a non-2xx status.
            MalformedResponseError: A 2xx body was not the expected JSON.
        """
        settings = self.settings
        diagnostics = self._diagnostics_for(settings)
        method = method.upper()
        url = build_url(settings.base_url, path, params)
        credential = self.credentials.resolve()

        preference = settings.auth_header
        header = initial_header(preference)
        attempt = 1

        while True:
            headers = build_headers(credential, header, settings.auth_scheme)
            diagnostics.log_request(method, url, headers)
            try:
                response = await self.transport.send(
                    method,
                    url,
                    headers=headers,
                    json=body,
                    timeout_ms=settings.request_timeout_ms,
                )
            except YuiHubError as e:
                diagnostics.log_failure(method, url, e)
                raise

            following = next_header(preference, header, response.status_code, attempt)
            if following is None:
                break

            diagnostics.log_outcome(method, url, response.status_code, response.reason_phrase)
            await response.aclose()
            header = following
            attempt += 1
            diagnostics.log_retry(header)

        if not response.is_success:
            await self._fail(method, url, response, diagnostics)

        return await self._parse(method, url, response, diagnostics, parser)

    async def _fail(self, method: str, url: str, response: RawResponse, diagnostics: RedactingLogger) -> None:
        snippet = None
        if diagnostics.log_response_bodies:
            snippet = diagnostics.snippet(await response.text_or_empty())
        else:
            await response.aclose()
        diagnostics.log_outcome(method, url, response.status_code, response.reason_phrase, snippet)
        raise_for_status(response, body_snippet=snippet)

    async def _read_body(self, method: str, url: str, response: RawResponse) -> str:
        try:
            return await response.text()
        except httpx.TimeoutException as e:
            raise RequestTimeoutError(f"Reading response of {method} {url} timed out") from e
        except httpx.TransportError as e:
            raise NetworkError(f"Reading response of {method} {url} failed: {e}") from e

    async def _parse(
        self,
        method: str,
        url: str,
        response: RawResponse,
        diagnostics: RedactingLogger,
        parser: Parser[T] | None,
    ) -> T | dict[str, Any]:
        try:
            text = await self._read_body(method, url, response)
        except YuiHubError as e:
            diagnostics.log_failure(method, url, e)
            raise

        try:
            payload = decode_object(text)
            result = parser(payload) if parser is not None else payload
        except (KeyError, TypeError, ValueError) as e:
            error = MalformedResponseError(
                f"Malformed response from {method} {url}: {e}",
                status_code=response.status_code,
                body_snippet=diagnostics.snippet(text),
            )
            diagnostics.log_failure(method, url, error)
            raise error from e

        diagnostics.log_outcome(method, url, response.status_code, response.reason_phrase)
        return result

    @overload
    async def get(self, path: str, params: Mapping[str, Any] | None = ..., parser: None = ...) -> dict[str, Any]: ...

    @overload
    async def get(self, path: str, params: Mapping[str, Any] | None = ..., *, parser: Parser[T]) -> T: ...

    async def get(
        self,
        path: str,
        params: Mapping[str, Any] | None = None,
        parser: Parser[T] | None = None,
    ) -> T | dict[str, Any]:
        return await self.execute("GET", path, params=params, parser=parser)

    @overload
    async def post(self, path: str, body: Any, parser: None = ...) -> dict[str, Any]: ...

    @overload
    async def post(self, path: str, body: Any, parser: Parser[T]) -> T: ...

    async def post(self, path: str, body: Any, parser: Parser[T] | None = None) -> T | dict[str, Any]:
        return await self.execute("POST", path, body=body, parser=parser)
