r"""Configuration dataclasses for the Client.

A ``ClientConfig`` is built once, validated in ``__post_init__``, and
treated as read-only afterwards. Mutating a config, or the mappings it
holds, while a ``Client`` uses it from several threads is not
supported.
"""

from __future__ import annotations

__all__ = [
    "ClientConfig",
    "RequestOptions",
    "default_client_config",
    "default_request_options",
]

from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any

import httpx

from httpwrap.constants import CONTENT_TYPE_HEADER_NAME, DEFAULT_TIMEOUT
from httpwrap.core.validation import validate_timeout

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping, Sequence

    from httpwrap.retry import RetryPolicy


@dataclass
class ClientConfig:
    """Default configuration applied to every request of a ``Client``.

    Args:
        timeout: Timeout applied to the underlying ``httpx.Client``, in
            seconds or as an ``httpx.Timeout``. ``None`` leaves the
            transport timeout untouched. Must be > 0 if numeric.
        headers: Default headers sent with every request. Per-call
            headers override them.
        content_type: Shortcut for a ``Content-Type`` entry in
            ``headers``. Must not contradict ``headers``.
        cookies: Ordered ``(name, value)`` pairs attached to every
            request.
        pre_request: Optional callback invoked with the built request
            and its body decoded as text, right before sending. It may
            mutate the request, for example to sign it.
        retry_policy: Optional retry policy. ``None`` sends every
            request exactly once.

    Raises:
        ValueError: If the timeout is invalid, or ``content_type``
            contradicts the ``Content-Type`` entry of ``headers``.

    Example:
        ```pycon
        >>> from httpwrap.core.config import ClientConfig
        >>> config = ClientConfig(headers={"X-Api-Key": "k"}, content_type="application/json")
        >>> headers = config.default_headers()
        >>> headers["content-type"], headers["x-api-key"]
        ('application/json', 'k')
        >>> config.merge(timeout=3.0).timeout
        3.0
        >>> config.timeout
        10.0

        ```
    """

    timeout: float | httpx.Timeout | None = DEFAULT_TIMEOUT
    headers: Mapping[str, str] = field(default_factory=dict)
    content_type: str | None = None
    cookies: Sequence[tuple[str, str]] = field(default_factory=tuple)
    pre_request: Callable[[httpx.Request, str], None] | None = None
    retry_policy: RetryPolicy | None = None

    def __post_init__(self) -> None:
        validate_timeout(self.timeout)
        self.cookies = tuple((str(name), str(value)) for name, value in self.cookies)
        if self.content_type is not None:
            current = httpx.Headers(self.headers).get(CONTENT_TYPE_HEADER_NAME)
            if current is not None and current != self.content_type:
                msg = (
                    f"content_type={self.content_type!r} conflicts with "
                    f"the {CONTENT_TYPE_HEADER_NAME} header {current!r}"
                )
                raise ValueError(msg)

    def merge(self, **overrides: Any) -> ClientConfig:
        """Create a new config with specified parameters overridden.

        Only non-None override values are applied.

        Args:
            **overrides: Keyword arguments for parameters to override.

        Returns:
            A new validated ClientConfig instance.
        """
        filtered_overrides = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **filtered_overrides)

    def default_headers(self) -> httpx.Headers:
        r"""Return a fresh copy of the default headers, ``content_type``
        included."""
        headers = httpx.Headers(self.headers)
        if self.content_type is not None:
            headers[CONTENT_TYPE_HEADER_NAME] = self.content_type
        return headers

    def build_cookies(self) -> httpx.Cookies:
        r"""Return the configured cookies as a fresh ``httpx.Cookies``."""
        cookies = httpx.Cookies()
        for name, value in self.cookies:
            cookies.set(name, value)
        return cookies


@dataclass
class RequestOptions:
    """Per-call options.

    Args:
        headers: Headers merged over the client default headers.
    """

    headers: Mapping[str, str] = field(default_factory=dict)


def default_client_config() -> ClientConfig:
    r"""Return a new ``ClientConfig`` with default values."""
    return ClientConfig()


def default_request_options() -> RequestOptions:
    r"""Return a new ``RequestOptions`` with default values."""
    return RequestOptions()
