"""Settings for the YuiHub client.

Settings are normally supplied by the host editor. Standalone use reads them
from the environment with the following resolution order (highest to lowest
priority):

1. Explicitly provided value
2. Environment variable
3. .env file (python-dotenv)
4. Default value

Environment variables:

| Variable                       | Setting               | Default                 |
|--------------------------------|-----------------------|-------------------------|
| `YUIHUB_API_BASE_URL`          | `api_base_url`        | `http://localhost:3000` |
| `YUIHUB_API_KEY`               | `api_key`             | unset                   |
| `YUIHUB_AUTH_HEADER`           | `auth_header`         | `auto`                  |
| `YUIHUB_AUTH_SCHEME`           | `auth_scheme`         | `bearer`                |
| `YUIHUB_REQUEST_TIMEOUT_MS`    | `request_timeout_ms`  | `15000`                 |
| `YUIHUB_LOG_RESPONSE_BODIES`   | `log_response_bodies` | `false`                 |
| `YUIHUB_SEARCH_LIMIT`          | `search_limit`        | `10`                    |
| `YUIHUB_DEFAULT_THREAD_ID`     | `default_thread_id`   | unset                   |
| `YUIHUB_DEFAULT_AUTHOR`        | `default_author`      | unset                   |
| `YUIHUB_DEFAULT_SOURCE`        | `default_source`      | unset                   |

Example:
    ```python
    from yuihub_client_core.config import Settings

    settings = Settings.from_env()
    print(settings.base_url)
    ```
"""

import logging
import os
import re
from dataclasses import dataclass, replace
from threading import Lock

from dotenv import load_dotenv

from yuihub_client_core.auth.headers import AuthHeader, AuthScheme

logger = logging.getLogger(__name__)

ENV_PREFIX = "YUIHUB_"
DEFAULT_BASE_URL = "http://localhost:3000"
DEFAULT_TIMEOUT_MS = 15000
DEFAULT_SEARCH_LIMIT = 10

_LOCAL_HTTP_URL = re.compile(r"^(http://)?(localhost|127\.0\.0\.1|::1|\[::1\])(:\d+)?(/|$)", re.IGNORECASE)
_TRUE_VALUES = frozenset(["1", "true", "yes", "on"])
_FALSE_VALUES = frozenset(["0", "false", "no", "off", ""])


class ConfigError(ValueError):
    """Raised when a setting has an invalid value.

    Attributes:
        setting: Name of the offending setting.
    """

    def __init__(self, message: str, setting: str | None = None):
        super().__init__(message)
        self.setting = setting


class EnvResolver:
    """Resolve setting values from the environment and an optional .env file.

    Attributes:
        _dotenv_loaded: Whether .env file has been loaded.
        _dotenv_lock: Thread lock for safe dotenv loading.
    """

    def __init__(self, dotenv_path: str | None = None, load_dotenv: bool = True):
        """Initialize the resolver.

        Args:
            dotenv_path: Path to .env file. If None, searches parent directories
                for .env file (default behavior of python-dotenv).
            load_dotenv: Whether to load .env file. Set to False to skip
                .env file loading (useful for testing).
        """
        self._dotenv_loaded = False
        self._dotenv_lock = Lock()
        self._dotenv_path = dotenv_path
        self._load_dotenv_enabled = load_dotenv

        if self._load_dotenv_enabled:
            self._ensure_dotenv_loaded()

    def _ensure_dotenv_loaded(self) -> None:
        if self._dotenv_loaded:
            return

        with self._dotenv_lock:
            # Double-check pattern for thread safety
            if self._dotenv_loaded:
                return

            try:
                load_dotenv(dotenv_path=self._dotenv_path)
                logger.debug("Loaded .env file for settings resolution")
            except OSError as e:
                logger.warning(f"Failed to load .env file: {e}")
            self._dotenv_loaded = True

    def resolve(
        self,
        *,
        value: str | None = None,
        env_var_name: str | None = None,
        default: str | None = None,
    ) -> str | None:
        """Resolve a single setting value.

        Args:
            value: Explicitly provided value (highest priority).
            env_var_name: Environment variable name to check.
            default: Default value if not found elsewhere.

        Returns:
            Resolved value, or None.
        """
        if value is not None:
            return value
        if env_var_name and env_var_name in os.environ:
            return os.environ[env_var_name]
        return default


def _parse_bool(name: str, raw: str) -> bool:
    lowered = raw.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ConfigError(f"Invalid boolean for {name}: {raw!r}", setting=name)


def _parse_positive_int(name: str, raw: str) -> int:
    try:
        parsed = int(raw)
    except ValueError:
        raise ConfigError(f"Invalid integer for {name}: {raw!r}", setting=name) from None
    if parsed <= 0:
        raise ConfigError(f"{name} must be positive, got {parsed}", setting=name)
    return parsed


@dataclass(frozen=True)
class Settings:
    """Client settings as exposed by the host configuration provider."""

    api_base_url: str = DEFAULT_BASE_URL
    api_key: str | None = None
    auth_header: AuthHeader = AuthHeader.AUTO
    auth_scheme: AuthScheme = AuthScheme.BEARER
    request_timeout_ms: int = DEFAULT_TIMEOUT_MS
    log_response_bodies: bool = False
    search_limit: int = DEFAULT_SEARCH_LIMIT
    default_thread_id: str | None = None
    default_author: str | None = None
    default_source: str | None = None

    def __post_init__(self) -> None:
        try:
            object.__setattr__(self, "auth_header", AuthHeader(self.auth_header or AuthHeader.AUTO))
        except ValueError:
            raise ConfigError(f"Invalid auth_header: {self.auth_header!r}", setting="auth_header") from None
        try:
            object.__setattr__(self, "auth_scheme", AuthScheme(self.auth_scheme or AuthScheme.BEARER))
        except ValueError:
            raise ConfigError(f"Invalid auth_scheme: {self.auth_scheme!r}", setting="auth_scheme") from None
        if self.request_timeout_ms <= 0:
            raise ConfigError("request_timeout_ms must be positive", setting="request_timeout_ms")

    @property
    def base_url(self) -> str:
        """Base URL without a trailing slash."""
        return self.api_base_url.rstrip("/")

    @property
    def is_insecure_remote(self) -> bool:
        """True for plain-HTTP base URLs that do not point at this machine."""
        url = self.base_url
        return url.lower().startswith("http://") and not _LOCAL_HTTP_URL.match(url)

    def with_updates(self, **changes) -> "Settings":
        """Copy with some settings replaced."""
        return replace(self, **changes)

    @classmethod
    def from_env(cls, resolver: EnvResolver | None = None) -> "Settings":
        """Build settings from ``YUIHUB_*`` environment variables.

        Args:
            resolver: Resolver to read values with. Defaults to one that
                loads the nearest .env file.

        Raises:
            ConfigError: If a variable holds an invalid value.
        """
        resolver = resolver or EnvResolver()

        def env(name: str, default: str | None = None) -> str | None:
            return resolver.resolve(env_var_name=f"{ENV_PREFIX}{name}", default=default)

        timeout_raw = env("REQUEST_TIMEOUT_MS")
        limit_raw = env("SEARCH_LIMIT")
        bodies_raw = env("LOG_RESPONSE_BODIES")

        settings = cls(
            api_base_url=env("API_BASE_URL", DEFAULT_BASE_URL) or DEFAULT_BASE_URL,
            api_key=env("API_KEY") or None,
            auth_header=env("AUTH_HEADER", AuthHeader.AUTO.value) or AuthHeader.AUTO,
            auth_scheme=env("AUTH_SCHEME", AuthScheme.BEARER.value) or AuthScheme.BEARER,
            request_timeout_ms=(
                _parse_positive_int("request_timeout_ms", timeout_raw) if timeout_raw else DEFAULT_TIMEOUT_MS
            ),
            log_response_bodies=_parse_bool("log_response_bodies", bodies_raw) if bodies_raw else False,
            search_limit=_parse_positive_int("search_limit", limit_raw) if limit_raw else DEFAULT_SEARCH_LIMIT,
            default_thread_id=env("DEFAULT_THREAD_ID") or None,
            default_author=env("DEFAULT_AUTHOR") or None,
            default_source=env("DEFAULT_SOURCE") or None,
        )
        logger.debug(
            f"Loaded settings: base_url={settings.base_url} apiKey={'***' if settings.api_key else '(none)'} "
            f"auth_header={settings.auth_header.value} auth_scheme={settings.auth_scheme.value}"
        )
        return settings
