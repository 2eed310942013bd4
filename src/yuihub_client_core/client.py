"""YuiHub API client.

Thin endpoint layer over :class:`~yuihub_client_core.executor.RequestExecutor`.
Editor glue (commands, prompts, text insertion) calls these coroutines and
maps the exceptions from :mod:`yuihub_client_core.errors` to user messages;
``error.requires_reauthentication`` marks the 401 case.

Example:
    ```python
    async with YuiHubClient(Settings.from_env()) as client:
        health = await client.health()
        results = await client.search("design", limit=5)
        record = await client.save("decision: use httpx")
    ```
"""

import logging

from yuihub_client_core.auth.credentials import CredentialResolver, SecretStore
from yuihub_client_core.config import Settings
from yuihub_client_core.errors.exceptions import MalformedResponseError
from yuihub_client_core.executor import RequestExecutor
from yuihub_client_core.models import Health, SaveRecord, SaveResponse, SearchResponse, ThreadResponse
from yuihub_client_core.transport.diagnostics import RedactingLogger
from yuihub_client_core.transport.timed import TimedTransport

logger = logging.getLogger(__name__)


class YuiHubClient:
    """Client for the YuiHub note/thread service.

    Args:
        settings: Client settings. Defaults to ``Settings()``.
        secret_store: Secure store holding the API token. The configured
            ``settings.api_key`` is the fallback when no token is stored.
        transport: Timed transport; created and owned by the client when
            omitted.
        diagnostics: Redacting logger shared by all calls.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        secret_store: SecretStore | None = None,
        transport: TimedTransport | None = None,
        diagnostics: RedactingLogger | None = None,
    ) -> None:
        self._settings = settings or Settings()
        self._owns_transport = transport is None
        self.transport = transport or TimedTransport()
        self.credentials = CredentialResolver(secret_store, fallback=lambda: self._settings.api_key)
        self.executor = RequestExecutor(self._settings, self.credentials, self.transport, diagnostics)
        self._issued_thread: str | None = None

        logger.info(f"baseUrl={self._settings.base_url}")
        logger.info(f"apiKey={'***' if self.credentials.resolve() else '(none)'}")
        if self._settings.is_insecure_remote:
            logger.warning(f"baseUrl {self._settings.base_url} uses plain HTTP; HTTPS is recommended")

    async def __aenter__(self) -> "YuiHubClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        self.credentials.close()
        if self._owns_transport:
            await self.transport.aclose()

    @property
    def settings(self) -> Settings:
        return self._settings

    @settings.setter
    def settings(self, settings: Settings) -> None:
        """Apply new settings to subsequent calls."""
        self._settings = settings
        self.executor.settings = settings

    @property
    def current_thread(self) -> str | None:
        """Configured default thread, else the last thread issued by this client."""
        return self._settings.default_thread_id or self._issued_thread

    def use_thread(self, thread: str) -> None:
        """Remember ``thread`` as the target of later saves."""
        self._issued_thread = thread

    def set_api_token(self, token: str) -> None:
        """Store the API token securely; an empty string deletes it."""
        self.credentials.store_token(token)

    async def health(self) -> Health:
        """``GET /health``."""
        health = await self.executor.get("/health", parser=Health.from_dict)
        logger.info(f"/health -> {health.summary()}")
        return health

    async def search(self, q: str, limit: int | None = None) -> SearchResponse:
        """``GET /search``.

        Args:
            q: Query text.
            limit: Maximum hits. Defaults to ``settings.search_limit``.
        """
        if limit is None:
            limit = self._settings.search_limit
        return await self.executor.get("/search", {"q": q, "limit": limit}, parser=SearchResponse.from_dict)

    async def issue_thread(self) -> str:
        """``POST /threads/new`` and remember the new thread.

        Raises:
            MalformedResponseError: The service did not return a thread id.
        """
        response = await self.executor.post("/threads/new", {}, parser=ThreadResponse.from_dict)
        if not response.ok or not response.thread:
            raise MalformedResponseError("No thread returned", status_code=200)
        self.use_thread(response.thread)
        logger.info(f"[IssueThread] OK {response.thread}")
        return response.thread

    async def save(
        self,
        text: str,
        *,
        thread: str | None = None,
        author: str | None = None,
        source: str | None = None,
    ) -> SaveRecord:
        """``POST /save``.

        An explicit ``thread`` is remembered via :meth:`use_thread`. When no
        thread is given or configured, a new one is issued first and any
        failure to do so is raised.

        Raises:
            ValueError: ``text`` is blank.
            MalformedResponseError: The service did not confirm the save.
        """
        if not text.strip():
            raise ValueError("No text to save")

        if thread:
            self.use_thread(thread)
        else:
            thread = self.current_thread
        if not thread:
            thread = await self.issue_thread()

        body = {
            "source": source if source is not None else self._settings.default_source,
            "thread": thread,
            "author": author if author is not None else self._settings.default_author,
            "text": text,
        }
        response = await self.executor.post("/save", body, parser=SaveResponse.from_dict)
        if not response.ok or response.data is None:
            raise MalformedResponseError("Save failed", status_code=200)
        logger.info(f"[Save] OK thread={response.data.thread} id={response.data.id}")
        return response.data
