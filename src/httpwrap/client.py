r"""Synchronous client with per-verb convenience methods.

The ``Client`` holds a ``ClientConfig`` and an ``httpx.Client``. Every
verb method funnels into ``Client.do_request``, which merges headers,
encodes the payload, runs the pre-request callback and sends the request through the retry executor.
"""

from __future__ import annotations

__all__ = ["Client"]

import logging
from collections.abc import Mapping
from functools import partial
from typing import TYPE_CHECKING, Any

import httpx

from httpwrap.constants import CONTENT_TYPE_HEADER_NAME
from httpwrap.core.config import ClientConfig, RequestOptions, default_client_config
from httpwrap.exceptions import EncodeError, PreRequestCallbackError
from httpwrap.payload import QueryParam, RequestData, RequestParam
from httpwrap.response import Response
from httpwrap.retry import send_with_retry

if TYPE_CHECKING:
    from types import TracebackType
    from typing import Self

logger: logging.Logger = logging.getLogger(__name__)


class Client:
    r"""HTTP client applying a shared configuration to every request.

    Two usage patterns are supported:

    **Injected transport**: an ``httpx.Client`` is created and closed by
    the caller, and passed in. ``Client`` never closes it. Its timeout
    is overwritten when ``config.timeout`` is not ``None`` and the
    configured cookies are added to its cookie jar.

    .. code-block:: python

        import httpx
        from httpwrap import Client, ClientConfig

        with httpx.Client(base_url="https://api.example.com") as http_client:
            client = Client(config=ClientConfig(timeout=5.0), client=http_client)
            response = client.get("/items")

    **Owned transport**: no ``httpx.Client`` is passed, ``Client``
    creates one (redirects followed) and closes it on ``close`` or when
    leaving the ``with`` block.

    .. code-block:: python

        from httpwrap import Client, ClientConfig, JsonData, RetryPolicy

        config = ClientConfig(
            headers={"Authorization": "Bearer token"},
            retry_policy=RetryPolicy(max_retries=3, retry_interval=1.0, retry_status_codes={503}),
        )
        with Client(config=config) as client:
            with client.post("https://api.example.com/items", JsonData({"name": "x"})) as resp:
                item = resp.json()

    The configuration must not be mutated once the client is built. A
    client may then be shared between threads; the underlying
    ``httpx.Client`` handles connection reuse.

    Args:
        config: Optional client configuration. Defaults to
            ``default_client_config()``.
        client: Optional ``httpx.Client`` used as transport.
    """

    def __init__(
        self,
        *,
        config: ClientConfig | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        self._config: ClientConfig = config or default_client_config()
        self._owns_client = client is None
        self._client: httpx.Client = client or httpx.Client(follow_redirects=True)
        if self._config.timeout is not None:
            self._client.timeout = self._config.timeout
        # the transport jar also feeds the Cookie header of redirected requests
        self._client.cookies.update(self._config.build_cookies())

    @classmethod
    def from_headers(cls, headers: Mapping[str, str], **kwargs: Any) -> Client:
        r"""Create a client whose only non-default setting is its default
        headers.

        Args:
            headers: The default headers.
            **kwargs: Additional keyword arguments passed to the
                constructor, e.g. ``client``.
        """
        return cls(config=ClientConfig(headers=headers), **kwargs)

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()

    @property
    def config(self) -> ClientConfig:
        return self._config

    def close(self) -> None:
        r"""Close the underlying ``httpx.Client`` if this instance created
        it."""
        if self._owns_client:
            self._client.close()

    def do_request(
        self,
        method: str,
        url: str,
        data: RequestData | None = None,
        *,
        options: RequestOptions | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> Response:
        r"""Build and send a request.

        Headers are merged in this order, the last write winning: the
        content type of ``data``, the client default headers, then
        ``options.headers`` and ``headers``.

        Args:
            method: The HTTP method.
            url: The URL, query string included.
            data: Optional request body.
            options: Optional per-call options.
            headers: Optional per-call headers, applied after
                ``options``.

        Returns:
            The wrapped response. Its body is not read yet.

        Raises:
            EncodeError: If ``data`` cannot be serialized. No request is
                sent.
            PreRequestCallbackError: If the pre-request callback fails.
                No request is sent.
            RetryExhaustedError: If a retry policy is configured and
                every attempt failed.
            httpx.RequestError: If no retry policy is configured and
                the request fails.
        """
        method = method.upper()
        merged_headers = httpx.Headers()
        body: bytes | None = None
        if data is not None:
            try:
                body = data.marshal()
            except EncodeError as exc:
                msg = f"failed to encode {method} request body for {url}: {exc}"
                raise EncodeError(msg, payload=exc.payload) from exc
            if data.content_type is not None:
                merged_headers[CONTENT_TYPE_HEADER_NAME] = data.content_type

        merged_headers.update(self._config.default_headers())
        if options is not None:
            merged_headers.update(options.headers)
        if headers is not None:
            merged_headers.update(headers)

        request = self._client.build_request(
            method,
            url,
            content=body,
            headers=merged_headers,
        )

        if self._config.pre_request is not None:
            body_str = body.decode("utf-8", errors="replace") if body else ""
            try:
                self._config.pre_request(request, body_str)
            except Exception as exc:
                msg = f"pre-request callback failed for {method} request to {url}: {exc}"
                raise PreRequestCallbackError(msg, request=request) from exc

        logger.debug(
            f"Sending {method} request to {request.url} "
            f"(body: {len(body) if body else 0} bytes, headers: {list(request.headers.keys())})"
        )
        response = send_with_retry(
            partial(self._client.send, stream=True), request, self._config.retry_policy
        )
        return Response(response)

    def get(
        self,
        url: str,
        query: RequestParam | Mapping[str, Any] | None = None,
        **kwargs: Any,
    ) -> Response:
        r"""Send a GET request.

        Args:
            url: The URL.
            query: Optional query parameters, appended to ``url``. A
                mapping is encoded with ``QueryParam``.
            **kwargs: Per-call ``options`` or ``headers`` (see
                ``do_request``).
        """
        if query is not None:
            if isinstance(query, Mapping):
                query = QueryParam(query)
            encoded = query.marshal()
            if encoded:
                separator = "&" if "?" in url else "?"
                url = f"{url}{separator}{encoded}"
        return self.do_request("GET", url, **kwargs)

    def post(self, url: str, data: RequestData | None = None, **kwargs: Any) -> Response:
        r"""Send a POST request with an optional body."""
        return self.do_request("POST", url, data, **kwargs)

    def put(self, url: str, data: RequestData | None = None, **kwargs: Any) -> Response:
        r"""Send a PUT request with an optional body."""
        return self.do_request("PUT", url, data, **kwargs)

    def patch(self, url: str, data: RequestData | None = None, **kwargs: Any) -> Response:
        r"""Send a PATCH request with an optional body."""
        return self.do_request("PATCH", url, data, **kwargs)

    def delete(self, url: str, data: RequestData | None = None, **kwargs: Any) -> Response:
        r"""Send a DELETE request with an optional body."""
        return self.do_request("DELETE", url, data, **kwargs)

    def head(self, url: str, **kwargs: Any) -> Response:
        r"""Send a HEAD request."""
        return self.do_request("HEAD", url, **kwargs)
