r"""Unit tests for ClientConfig and RequestOptions."""

from __future__ import annotations

from unittest.mock import Mock

import httpx
import pytest
from coola.equality import objects_are_equal

from httpwrap import CONTENT_TYPE_JSON, DEFAULT_TIMEOUT, RetryPolicy
from httpwrap.core import (
    ClientConfig,
    RequestOptions,
    default_client_config,
    default_request_options,
)

##################################
#     Tests for ClientConfig     #
##################################


def test_client_config_defaults() -> None:
    config = ClientConfig()

    assert config.timeout == DEFAULT_TIMEOUT
    assert config.headers == {}
    assert config.content_type is None
    assert config.cookies == ()
    assert config.pre_request is None
    assert config.retry_policy is None


def test_client_config_custom_values() -> None:
    callback = Mock()
    policy = RetryPolicy(max_retries=2, retry_interval=0.1, retry_status_codes={503})
    config = ClientConfig(
        timeout=httpx.Timeout(3.0),
        headers={"X-A": "1"},
        content_type=CONTENT_TYPE_JSON,
        cookies=[("session", "abc")],
        pre_request=callback,
        retry_policy=policy,
    )

    assert config.timeout == httpx.Timeout(3.0)
    assert config.headers == {"X-A": "1"}
    assert config.content_type == CONTENT_TYPE_JSON
    assert config.cookies == (("session", "abc"),)
    assert config.pre_request is callback
    assert config.retry_policy is policy


@pytest.mark.parametrize("timeout", [0, -1, -0.5])
def test_client_config_invalid_timeout(timeout: float) -> None:
    with pytest.raises(ValueError, match=r"timeout must be > 0"):
        ClientConfig(timeout=timeout)


def test_client_config_timeout_none() -> None:
    assert ClientConfig(timeout=None).timeout is None


def test_client_config_content_type_conflict() -> None:
    with pytest.raises(ValueError, match=r"conflicts with the Content-Type header"):
        ClientConfig(headers={"content-type": "text/plain"}, content_type=CONTENT_TYPE_JSON)


def test_client_config_content_type_same_as_header() -> None:
    config = ClientConfig(headers={"Content-Type": CONTENT_TYPE_JSON}, content_type=CONTENT_TYPE_JSON)
    assert config.default_headers().get_list("Content-Type") == [CONTENT_TYPE_JSON]


def test_client_config_default_headers() -> None:
    config = ClientConfig(headers={"X-A": "1"}, content_type=CONTENT_TYPE_JSON)
    assert objects_are_equal(
        dict(config.default_headers()), {"x-a": "1", "content-type": CONTENT_TYPE_JSON}
    )


def test_client_config_default_headers_is_copy() -> None:
    config = ClientConfig(headers={"X-A": "1"})
    headers = config.default_headers()
    headers["X-A"] = "2"
    assert config.default_headers()["X-A"] == "1"


def test_client_config_build_cookies() -> None:
    cookies = ClientConfig(cookies=[("a", "1"), ("b", "2")]).build_cookies()
    assert isinstance(cookies, httpx.Cookies)
    assert cookies["a"] == "1"
    assert cookies["b"] == "2"


def test_client_config_merge() -> None:
    config = ClientConfig(headers={"X-A": "1"})
    merged = config.merge(timeout=3.0, headers=None)

    assert merged.timeout == 3.0
    assert merged.headers == {"X-A": "1"}
    assert config.timeout == DEFAULT_TIMEOUT


def test_client_config_merge_validates() -> None:
    with pytest.raises(ValueError, match=r"timeout must be > 0"):
        ClientConfig().merge(timeout=-1)


def test_default_client_config_is_fresh() -> None:
    first = default_client_config()
    second = default_client_config()
    assert first == second
    assert first is not second
    assert first.headers is not second.headers


####################################
#     Tests for RequestOptions     #
####################################


def test_request_options_defaults() -> None:
    assert RequestOptions().headers == {}


def test_default_request_options_is_fresh() -> None:
    first = default_request_options()
    first.headers["X-A"] = "1"  # type: ignore[index]
    assert default_request_options().headers == {}
