r"""Constants shared by the request builders and the client."""

from __future__ import annotations

__all__ = [
    "CONTENT_TYPE_FORM",
    "CONTENT_TYPE_HEADER_NAME",
    "CONTENT_TYPE_JSON",
    "DEFAULT_TIMEOUT",
]

CONTENT_TYPE_JSON = "application/json"
CONTENT_TYPE_FORM = "application/x-www-form-urlencoded"
CONTENT_TYPE_HEADER_NAME = "Content-Type"

# Default timeout in seconds, applied to the underlying httpx.Client
DEFAULT_TIMEOUT = 10.0
