r"""httpwrap - Convenience layer over httpx.

This package provides request payload encoders (JSON, form, query and
raw bodies), a response wrapper that buffers the body lazily, client
level default headers and cookies, a pre-request hook, and a retry
executor with a fixed delay and a retryable status code list.

Example:
    ```pycon
    >>> from httpwrap import Client, ClientConfig, JsonData, QueryParam, RetryPolicy
    >>> config = ClientConfig(
    ...     headers={"X-Api-Key": "secret"},
    ...     cookies=[("session", "abc")],
    ...     retry_policy=RetryPolicy(max_retries=3, retry_interval=0.5, retry_status_codes={503}),
    ... )
    >>> with Client(config=config) as client:  # doctest: +SKIP
    ...     with client.get("https://api.example.com/items", QueryParam({"q": "a&b"})) as resp:
    ...         items = resp.json()
    ...     created = client.post("https://api.example.com/items", JsonData({"name": "x"}))
    ...

    ```
"""

from __future__ import annotations

__all__ = [
    "BodyReadError",
    "CONTENT_TYPE_FORM",
    "CONTENT_TYPE_HEADER_NAME",
    "CONTENT_TYPE_JSON",
    "Client",
    "ClientConfig",
    "DEFAULT_TIMEOUT",
    "DecodeError",
    "EncodeError",
    "FormData",
    "HttpwrapError",
    "JsonData",
    "PreRequestCallbackError",
    "QueryParam",
    "RawData",
    "RawParam",
    "RequestData",
    "RequestOptions",
    "RequestParam",
    "Response",
    "RetryExhaustedError",
    "RetryPolicy",
    "__version__",
    "default_client_config",
    "default_request_options",
    "is_timeout",
    "send_with_retry",
]

from importlib.metadata import PackageNotFoundError, version

from httpwrap.client import Client
from httpwrap.constants import (
    CONTENT_TYPE_FORM,
    CONTENT_TYPE_HEADER_NAME,
    CONTENT_TYPE_JSON,
    DEFAULT_TIMEOUT,
)
from httpwrap.core.config import (
    ClientConfig,
    RequestOptions,
    default_client_config,
    default_request_options,
)
from httpwrap.exceptions import (
    BodyReadError,
    DecodeError,
    EncodeError,
    HttpwrapError,
    PreRequestCallbackError,
    RetryExhaustedError,
    is_timeout,
)
from httpwrap.payload import (
    FormData,
    JsonData,
    QueryParam,
    RawData,
    RawParam,
    RequestData,
    RequestParam,
)
from httpwrap.response import Response
from httpwrap.retry import RetryPolicy, send_with_retry

try:
    __version__ = version(__name__)
except PackageNotFoundError:  # pragma: no cover
    # Package is not installed, fallback if needed
    __version__ = "0.0.0"
