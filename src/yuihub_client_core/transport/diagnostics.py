"""Request/response diagnostics with secret redaction.

All output goes to the ``yuihub_client_core.http`` logger unless another
logger is injected. Authentication header values are replaced by ``***`` and
``Bearer <token>`` sequences are masked in any free text that is logged.
"""

import json
import logging
import re
from collections.abc import Mapping

from yuihub_client_core.auth.headers import AUTHORIZATION_HEADER, TOKEN_HEADER, AuthHeader

MASK = "***"
DEFAULT_MAX_BODY_CHARS = 400
SENSITIVE_HEADERS: frozenset[str] = frozenset([AUTHORIZATION_HEADER.lower(), TOKEN_HEADER.lower()])

_BEARER_TOKEN = re.compile(r"(Bearer\s+)\S+", re.IGNORECASE)

http_logger = logging.getLogger("yuihub_client_core.http")


def mask_headers(headers: Mapping[str, str]) -> dict[str, str]:
    """Copy ``headers`` with credential-bearing values masked."""
    masked: dict[str, str] = {}
    for key, value in headers.items():
        if key.lower() in SENSITIVE_HEADERS:
            masked[key] = MASK
        else:
            masked[key] = value
    return masked


def redact_text(text: str) -> str:
    """Mask ``Bearer`` tokens inside arbitrary text."""
    return _BEARER_TOKEN.sub(rf"\g<1>{MASK}", text)


class RedactingLogger:
    """Diagnostic sink for HTTP attempts.

    Args:
        logger: Destination logger (default: ``yuihub_client_core.http``).
        log_response_bodies: Include body snippets of failed responses.
        max_body_chars: Snippet length cap.
    """

    def __init__(
        self,
        logger: logging.Logger | None = None,
        *,
        log_response_bodies: bool = False,
        max_body_chars: int = DEFAULT_MAX_BODY_CHARS,
    ) -> None:
        self.logger = logger or http_logger
        self.log_response_bodies = log_response_bodies
        self.max_body_chars = max_body_chars

    def snippet(self, body: str | None) -> str | None:
        """Truncated, redacted body text, or None when body logging is off."""
        if not self.log_response_bodies or not body:
            return None
        return redact_text(body[: self.max_body_chars])

    def log_request(self, method: str, url: str, headers: Mapping[str, str] | None = None) -> None:
        self.logger.info(f"[HTTP] {method} {url}")
        if headers:
            try:
                rendered = json.dumps(mask_headers(headers), separators=(",", ":"))
            except (TypeError, ValueError):
                rendered = "(unprintable headers)"
            self.logger.info(f"[HTTP] headers={rendered}")

    def log_retry(self, header: AuthHeader) -> None:
        self.logger.info(f"[HTTP] retry with header={header.value}")

    def log_outcome(
        self,
        method: str,
        url: str,
        status_code: int,
        reason: str = "",
        body_snippet: str | None = None,
    ) -> None:
        """Log the status of a completed attempt."""
        if 200 <= status_code < 300:
            self.logger.info(f"[HTTP] OK {method} {url} ({status_code})")
            return

        self.logger.warning(f"[HTTP] ERROR {method} {url} -> {status_code} {reason}".rstrip())
        if body_snippet:
            self.logger.warning(f"[HTTP] body: {redact_text(body_snippet)}")

    def log_failure(self, method: str, url: str, error: BaseException) -> None:
        """Log an attempt that produced no HTTP response."""
        self.logger.warning(f"[HTTP] ERROR {method} {url} -> {type(error).__name__}: {redact_text(str(error))}")
