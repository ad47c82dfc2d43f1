r"""Exceptions raised by httpwrap.

Request failures are reported by httpx itself (``httpx.RequestError``
and its subclasses). They are only wrapped when a retry policy is
configured and every attempt has been used.
"""

from __future__ import annotations

__all__ = [
    "BodyReadError",
    "DecodeError",
    "EncodeError",
    "HttpwrapError",
    "PreRequestCallbackError",
    "RetryExhaustedError",
    "is_timeout",
]

import httpx


class HttpwrapError(Exception):
    """Base class of all the errors raised by httpwrap."""


class EncodeError(HttpwrapError):
    """Raised when a request payload cannot be serialized.

    The error is raised before any network call and is never retried.

    Args:
        message: Description of the failure.
        payload: The object that could not be serialized.
    """

    def __init__(self, message: str, *, payload: object = None) -> None:
        super().__init__(message)
        self.payload = payload


class DecodeError(HttpwrapError):
    """Raised when a response body cannot be decoded into the requested
    target.

    Args:
        message: Description of the failure.
        content: The buffered body that failed to decode.
    """

    def __init__(self, message: str, *, content: bytes = b"") -> None:
        super().__init__(message)
        self.content = content


class BodyReadError(HttpwrapError):
    """Raised when the body stream of a response cannot be read."""


class PreRequestCallbackError(HttpwrapError):
    """Raised when the pre-request callback fails.

    Args:
        message: Description of the failure.
        request: The request handed to the callback.
    """

    def __init__(self, message: str, *, request: httpx.Request) -> None:
        super().__init__(message)
        self.request = request


class RetryExhaustedError(HttpwrapError):
    """Raised when a request still fails after every allowed attempt.

    The error is raised even when no transport error occurred, i.e. when
    every attempt returned a retryable status code. In that case
    ``cause`` is ``None`` and ``status_code`` holds the last status.

    Args:
        method: The HTTP method of the request.
        url: The URL of the request.
        attempts: The number of attempts that were made.
        cause: The last transport error, if any.
        status_code: The last retryable status code, if any.

    Example:
        ```pycon
        >>> from httpwrap.exceptions import RetryExhaustedError
        >>> err = RetryExhaustedError(
        ...     method="GET", url="https://example.com", attempts=3, status_code=503
        ... )
        >>> str(err)
        'GET request to https://example.com failed after 3 attempts (last status: 503)'
        >>> err.cause is None
        True

        ```
    """

    def __init__(
        self,
        *,
        method: str,
        url: str,
        attempts: int,
        cause: Exception | None = None,
        status_code: int | None = None,
    ) -> None:
        msg = f"{method} request to {url} failed after {attempts} attempts"
        if cause is not None:
            msg = f"{msg}: {cause}"
        elif status_code is not None:
            msg = f"{msg} (last status: {status_code})"
        super().__init__(msg)
        self.method = method
        self.url = url
        self.attempts = attempts
        self.cause = cause
        self.status_code = status_code


def is_timeout(exc: BaseException | None) -> bool:
    """Indicate whether an exception is, or was caused by, a timeout.

    Args:
        exc: The exception to inspect.

    Returns:
        ``True`` if ``exc`` or one of its causes is an
            ``httpx.TimeoutException``, otherwise ``False``.

    Example:
        ```pycon
        >>> import httpx
        >>> from httpwrap.exceptions import RetryExhaustedError, is_timeout
        >>> is_timeout(httpx.ReadTimeout("slow"))
        True
        >>> is_timeout(ValueError("nope"))
        False
        >>> cause = httpx.ConnectTimeout("slow")
        >>> is_timeout(RetryExhaustedError(method="GET", url="/", attempts=2, cause=cause))
        True

        ```
    """
    seen: set[int] = set()
    while exc is not None and id(exc) not in seen:
        if isinstance(exc, httpx.TimeoutException):
            return True
        seen.add(id(exc))
        if isinstance(exc, RetryExhaustedError) and exc.cause is not None:
            exc = exc.cause
        else:
            exc = exc.__cause__
    return False
