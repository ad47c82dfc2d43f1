r"""Core configuration and validation for httpwrap clients."""

from __future__ import annotations

__all__ = [
    "ClientConfig",
    "RequestOptions",
    "default_client_config",
    "default_request_options",
    "validate_retry_params",
    "validate_status_codes",
    "validate_timeout",
]

from httpwrap.core.config import (
    ClientConfig,
    RequestOptions,
    default_client_config,
    default_request_options,
)
from httpwrap.core.validation import (
    validate_retry_params,
    validate_status_codes,
    validate_timeout,
)
