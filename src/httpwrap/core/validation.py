r"""Parameter validation for the client and retry configuration.

Every function raises ``ValueError`` on the first invalid value and
returns ``None`` otherwise.
"""

from __future__ import annotations

__all__ = ["validate_retry_params", "validate_status_codes", "validate_timeout"]

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    import httpx


def validate_timeout(timeout: float | httpx.Timeout | None) -> None:
    """Validate timeout parameter.

    Args:
        timeout: Maximum seconds to wait for server responses.
            Must be > 0 if provided as a numeric value. ``None`` and
            ``httpx.Timeout`` instances are accepted as is.

    Raises:
        ValueError: If timeout is a numeric value <= 0.

    Example:
        ```pycon
        >>> from httpwrap.core.validation import validate_timeout
        >>> validate_timeout(10.0)
        >>> validate_timeout(None)
        >>> validate_timeout(0)
        Traceback (most recent call last):
        ...
        ValueError: timeout must be > 0, got 0

        ```
    """
    if isinstance(timeout, (int, float)) and timeout <= 0:
        msg = f"timeout must be > 0, got {timeout}"
        raise ValueError(msg)


def validate_retry_params(max_retries: int, retry_interval: float) -> None:
    """Validate retry parameters.

    Args:
        max_retries: Total number of attempts. Must be >= 0. Zero is
            accepted and behaves like one attempt without retry.
        retry_interval: Fixed delay in seconds between two attempts.
            Must be >= 0.

    Raises:
        ValueError: If one of the parameters is negative.

    Example:
        ```pycon
        >>> from httpwrap.core.validation import validate_retry_params
        >>> validate_retry_params(max_retries=3, retry_interval=0.5)
        >>> validate_retry_params(max_retries=-1, retry_interval=0.5)
        Traceback (most recent call last):
        ...
        ValueError: max_retries must be >= 0, got -1

        ```
    """
    if max_retries < 0:
        msg = f"max_retries must be >= 0, got {max_retries}"
        raise ValueError(msg)
    if retry_interval < 0:
        msg = f"retry_interval must be >= 0, got {retry_interval}"
        raise ValueError(msg)


def validate_status_codes(status_codes: Iterable[int]) -> None:
    """Validate that every value is an HTTP status code (100-599).

    Raises:
        ValueError: If a value is not an integer in the valid range.
    """
    for code in status_codes:
        if isinstance(code, bool) or not isinstance(code, int) or not 100 <= code <= 599:
            msg = f"invalid HTTP status code: {code!r}"
            raise ValueError(msg)
