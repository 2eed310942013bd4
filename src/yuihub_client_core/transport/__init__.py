"""Transport layer components for YuiHub requests.

Modules:
    timed: Deadline-bounded sends with cancellation
    diagnostics: Redacting request/response logger
"""

from yuihub_client_core.transport.diagnostics import RedactingLogger, mask_headers, redact_text
from yuihub_client_core.transport.timed import RawResponse, TimedTransport

__all__ = [
    "RawResponse",
    "RedactingLogger",
    "TimedTransport",
    "mask_headers",
    "redact_text",
]
