r"""Retry policy and fixed-interval retry executor.

The executor sends a request, and re-sends it when the transport fails
or when the response status code is listed in the policy. The delay
between two attempts is constant: there is no jitter and no
exponential growth.
"""

from __future__ import annotations

__all__ = ["RetryPolicy", "send_with_retry"]

import logging
import time
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import httpx

from httpwrap.core.validation import validate_retry_params, validate_status_codes
from httpwrap.exceptions import RetryExhaustedError

if TYPE_CHECKING:
    from collections.abc import Callable

logger: logging.Logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RetryPolicy:
    """Immutable retry configuration.

    Args:
        max_retries: Total number of attempts, initial attempt included.
            Must be >= 0. ``0`` is treated as a single attempt.
        retry_interval: Fixed delay in seconds between two attempts.
            Must be >= 0.
        retry_status_codes: HTTP status codes that trigger a new
            attempt. Any iterable of integers is accepted and stored as
            a ``frozenset``.

    Example:
        ```pycon
        >>> from httpwrap.retry import RetryPolicy
        >>> policy = RetryPolicy(max_retries=3, retry_interval=0.5, retry_status_codes=[503, 429])
        >>> sorted(policy.retry_status_codes)
        [429, 503]
        >>> policy.attempts
        3
        >>> RetryPolicy(max_retries=0).attempts
        1

        ```
    """

    max_retries: int = 3
    retry_interval: float = 1.0
    retry_status_codes: frozenset[int] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        validate_retry_params(max_retries=self.max_retries, retry_interval=self.retry_interval)
        codes = frozenset(self.retry_status_codes)
        validate_status_codes(codes)
        # frozen dataclass: bypass __setattr__ to normalize the field
        object.__setattr__(self, "retry_status_codes", codes)

    @property
    def attempts(self) -> int:
        r"""The effective number of attempts."""
        return max(self.max_retries, 1)

    def is_retryable(self, status_code: int) -> bool:
        r"""Indicate whether ``status_code`` triggers a new attempt."""
        return status_code in self.retry_status_codes


def send_with_retry(
    send: Callable[[httpx.Request], httpx.Response],
    request: httpx.Request,
    policy: RetryPolicy | None,
) -> httpx.Response:
    """Send a request, retrying according to ``policy``.

    Without a policy the request is sent exactly once and the response
    or the transport error is passed through unchanged.

    With a policy, an attempt is retried when ``send`` raises an
    ``httpx.RequestError`` (transport failure, timeout, too many
    redirects, ...) or returns a status code listed in
    ``policy.retry_status_codes``. A retried response is closed before
    the next attempt. The executor sleeps ``policy.retry_interval``
    seconds between two attempts, never after the last one.

    Args:
        send: The function that performs one network exchange, for
            example ``httpx.Client.send``.
        request: The request to send. It is re-sent as is.
        policy: The retry policy, or ``None`` to disable retries.

    Returns:
        The first response whose status code is not retryable.

    Raises:
        httpx.RequestError: If ``policy`` is ``None`` and the
            request fails.
        RetryExhaustedError: If every attempt failed. ``cause`` is the
            transport error of the last attempt, or ``None`` when the
            last attempt received a retryable status code.

    Example:
        ```pycon
        >>> import httpx
        >>> from httpwrap.retry import RetryPolicy, send_with_retry
        >>> statuses = iter([503, 200])
        >>> def send(request):
        ...     return httpx.Response(next(statuses), request=request)
        ...
        >>> policy = RetryPolicy(max_retries=2, retry_interval=0, retry_status_codes={503})
        >>> send_with_retry(send, httpx.Request("GET", "https://example.com"), policy).status_code
        200

        ```
    """
    if policy is None:
        return send(request)

    method, url = request.method, str(request.url)
    attempts = policy.attempts
    last_error: httpx.RequestError | None = None
    last_status_code: int | None = None

    for attempt in range(attempts):
        try:
            response = send(request)
        except httpx.RequestError as exc:
            last_error = exc
            logger.warning(
                f"{method} request to {url} failed with {type(exc).__name__} "
                f"(attempt {attempt + 1}/{attempts}): {exc}"
            )
        else:
            last_error = None
            if not policy.is_retryable(response.status_code):
                if attempt > 0:
                    logger.debug(f"{method} request to {url} succeeded on attempt {attempt + 1}")
                return response
            last_status_code = response.status_code
            logger.warning(
                f"{method} request to {url} returned retryable status {response.status_code} "
                f"(attempt {attempt + 1}/{attempts})"
            )
            response.close()

        if attempt < attempts - 1:
            logger.debug(f"Waiting {policy.retry_interval:.2f}s before retry")
            time.sleep(policy.retry_interval)

    raise RetryExhaustedError(
        method=method,
        url=url,
        attempts=attempts,
        cause=last_error,
        status_code=last_status_code,
    ) from last_error
