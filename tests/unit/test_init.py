from __future__ import annotations

import httpwrap


def test_version() -> None:
    assert isinstance(httpwrap.__version__, str)


def test_all_exports_exist() -> None:
    for name in httpwrap.__all__:
        assert hasattr(httpwrap, name), name


def test_content_type_constants() -> None:
    assert httpwrap.CONTENT_TYPE_JSON == "application/json"
    assert httpwrap.CONTENT_TYPE_FORM == "application/x-www-form-urlencoded"
    assert httpwrap.CONTENT_TYPE_HEADER_NAME == "Content-Type"
