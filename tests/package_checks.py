from __future__ import annotations

import logging
import sys

import httpwrap

logger: logging.Logger = logging.getLogger(__name__)

# Use httpbin.org for real HTTP testing
HTTPBIN_URL = "https://httpbin.org"


def check_get() -> None:
    logger.info("Checking get...")
    config = httpwrap.ClientConfig(cookies=[("session", "abc")])
    with httpwrap.Client(config=config) as client, client.get(
        f"{HTTPBIN_URL}/get", httpwrap.QueryParam({"q": "a&b"})
    ) as response:
        data = response.json()
    assert response.status == 200
    assert data["args"] == {"q": "a&b"}
    assert data["headers"]["Cookie"] == "session=abc"


def check_post() -> None:
    logger.info("Checking post...")
    with httpwrap.Client() as client, client.post(
        f"{HTTPBIN_URL}/post", httpwrap.JsonData({"key": "value"})
    ) as response:
        data = response.json()
    assert response.status == 200
    assert data["json"] == {"key": "value"}


def main() -> None:
    r"""Run all package checks to validate installation and
    functionality."""
    try:
        check_get()
        check_post()

        logger.info("✅ All package checks passed successfully!")
    except Exception:
        logger.exception("❌ Package check failed")
        sys.exit(1)


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    main()
