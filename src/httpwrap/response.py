r"""Response wrapper with lazy body buffering.

The wrapped ``httpx.Response`` is usually a streamed response. Its body
is read at most once, on the first call to ``read``, ``text`` or
``json``; the stream is then closed and every later call is served from
the buffered bytes.

A ``Response`` is owned by a single caller and is not safe to share
between threads.
"""

from __future__ import annotations

__all__ = ["Response"]

import json
import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

import httpx

from httpwrap.exceptions import BodyReadError, DecodeError

if TYPE_CHECKING:
    from collections.abc import Callable
    from types import TracebackType
    from typing import Self

logger: logging.Logger = logging.getLogger(__name__)


class Response:
    r"""Wrap an ``httpx.Response`` and buffer its body on first access.

    Args:
        response: The response to wrap. The wrapper owns it until
            ``close`` is called.

    Example:
        ```pycon
        >>> import httpx
        >>> from httpwrap.response import Response
        >>> resp = Response(httpx.Response(200, content=b'{"id": 7}'))
        >>> resp.status
        200
        >>> resp.json()
        {'id': 7}
        >>> resp.read()
        b'{"id": 7}'
        >>> resp.is_buffered
        True

        ```
    """

    def __init__(self, response: httpx.Response) -> None:
        self._response = response
        self._content: bytes | None = None
        self._closed = False

    @classmethod
    def wrap(cls, response: httpx.Response | None) -> Response | None:
        r"""Wrap ``response``, or return ``None`` when there is no
        response."""
        if response is None:
            return None
        return cls(response)

    def __repr__(self) -> str:
        state = "buffered" if self.is_buffered else "unread"
        return f"{self.__class__.__qualname__}(status={self.status}, {state})"

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
    def raw(self) -> httpx.Response:
        r"""The underlying ``httpx.Response``."""
        return self._response

    @property
    def status(self) -> int:
        r"""The HTTP status code. Never touches the body."""
        return self._response.status_code

    @property
    def status_code(self) -> int:
        return self.status

    @property
    def headers(self) -> httpx.Headers:
        return self._response.headers

    @property
    def is_buffered(self) -> bool:
        r"""``True`` once the body has been read into memory."""
        return self._content is not None

    def read(self) -> bytes:
        r"""Return the response body, reading the stream on the first
        call only.

        Returns:
            The body bytes.

        Raises:
            BodyReadError: If the stream fails, or was closed before
                the body was buffered.
        """
        if self._content is None:
            try:
                content = self._response.read()
            except (httpx.RequestError, httpx.StreamError) as exc:
                logger.debug(f"Failed to read response body: {exc}")
                msg = f"failed to read response body (status {self.status}): {exc}"
                raise BodyReadError(msg) from exc
            finally:
                self.close()
            self._content = content
        return self._content

    def text(self, encoding: str | None = None) -> str:
        r"""Return the body decoded as text.

        Args:
            encoding: The encoding to use. Defaults to the encoding
                advertised by the response, then UTF-8.
        """
        return self.read().decode(encoding or self._response.encoding or "utf-8", errors="replace")

    def json(self, target: Callable[..., Any] | None = None) -> Any:
        r"""Decode the body as JSON.

        Args:
            target: Optional callable, typically a dataclass type, used
                to build the result. A decoded mapping is passed as
                keyword arguments, any other value positionally.

        Returns:
            The decoded value, or the object built by ``target``.

        Raises:
            BodyReadError: If the body cannot be read.
            DecodeError: If the body is not valid JSON, or does not fit
                ``target``.

        Example:
            ```pycon
            >>> from dataclasses import dataclass
            >>> import httpx
            >>> from httpwrap.response import Response
            >>> @dataclass
            ... class User:
            ...     name: str
            ...
            >>> Response(httpx.Response(200, content=b'{"name": "ann"}')).json(User)
            User(name='ann')

            ```
        """
        content = self.read()
        try:
            obj = json.loads(content)
        except ValueError as exc:
            msg = f"response body is not valid JSON: {exc}"
            raise DecodeError(msg, content=content) from exc
        if target is None:
            return obj
        try:
            if isinstance(obj, Mapping):
                return target(**obj)
            return target(obj)
        except (TypeError, ValueError) as exc:
            name = getattr(target, "__qualname__", repr(target))
            msg = f"cannot decode response body into {name}: {exc}"
            raise DecodeError(msg, content=content) from exc

    def close(self) -> None:
        r"""Release the underlying stream.

        Closing is idempotent. Closing an unread response discards its
        body: a later ``read`` raises ``BodyReadError``.
        """
        if not self._closed:
            self._closed = True
            self._response.close()
