r"""Shared test helpers for httpwrap tests."""

from __future__ import annotations

__all__ = ["RecordingTransport", "create_mock_response"]

from typing import TYPE_CHECKING
from unittest.mock import Mock

import httpx

if TYPE_CHECKING:
    from collections.abc import Callable


def create_mock_response(status_code: int = 200, content: bytes = b"") -> Mock:
    """Create a mock httpx.Response whose ``read`` returns ``content``."""
    return Mock(spec=httpx.Response, status_code=status_code, read=Mock(return_value=content))


class RecordingTransport(httpx.MockTransport):
    """MockTransport that records every request it handles.

    Args:
        handler: Optional handler returning the response. Defaults to an
            empty 200 response.
    """

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response] | None = None) -> None:
        self.requests: list[httpx.Request] = []
        self._handler = handler or (lambda request: httpx.Response(200))
        super().__init__(self._record)

    def _record(self, request: httpx.Request) -> httpx.Response:
        request.read()
        self.requests.append(request)
        return self._handler(request)
