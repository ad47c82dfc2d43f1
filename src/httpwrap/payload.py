r"""Request payload encoders.

A request carries at most one payload. Bodies implement
``RequestData`` and serialize to bytes, query strings implement
``RequestParam`` and serialize to an already percent-encoded string.

Form bodies and query strings share one encoder built on
``httpx.QueryParams``, so reserved characters such as ``&`` and ``=``
and non-ASCII text are always percent-encoded.
"""

from __future__ import annotations

__all__ = [
    "FormData",
    "JsonData",
    "QueryParam",
    "RawData",
    "RawParam",
    "RequestData",
    "RequestParam",
    "encode_pairs",
]

import dataclasses
import json
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

import httpx

from httpwrap.constants import CONTENT_TYPE_FORM, CONTENT_TYPE_JSON
from httpwrap.exceptions import EncodeError

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence

_PRIMITIVES = (str, int, float, bool)


class RequestData(ABC):
    """Base class of the request body encoders."""

    content_type: str | None = None

    @abstractmethod
    def marshal(self) -> bytes:
        """Serialize the payload to the request body.

        Returns:
            The encoded body.

        Raises:
            EncodeError: If the payload cannot be serialized.
        """


class RequestParam(ABC):
    """Base class of the query string encoders."""

    @abstractmethod
    def marshal(self) -> str:
        """Serialize the payload to a query string, without the leading
        ``?``."""


class JsonData(RequestData):
    """JSON request body.

    Dataclass instances found anywhere in the payload are converted with
    ``dataclasses.asdict``.

    Args:
        data: The object to serialize.

    Example:
        ```pycon
        >>> from httpwrap.payload import JsonData
        >>> JsonData({"name": "bob", "tags": ["a", "b"]}).marshal()
        b'{"name":"bob","tags":["a","b"]}'

        ```
    """

    content_type = CONTENT_TYPE_JSON

    def __init__(self, data: Any) -> None:
        self.data = data

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(data={self.data!r})"

    def marshal(self) -> bytes:
        try:
            text = json.dumps(
                self.data,
                default=_json_default,
                ensure_ascii=False,
                allow_nan=False,
                separators=(",", ":"),
            )
        except (TypeError, ValueError, RecursionError) as exc:
            msg = f"cannot encode {type(self.data).__name__} payload as JSON: {exc}"
            raise EncodeError(msg, payload=self.data) from exc
        return text.encode("utf-8")


class FormData(RequestData):
    """URL-encoded form body.

    Values are converted to strings before percent-encoding. A list or
    tuple value produces one pair per element and repeated keys
    accumulate instead of overwriting each other. ``None`` values are
    skipped.

    Args:
        data: A mapping, or a sequence of ``(key, value)`` pairs.

    Example:
        ```pycon
        >>> from httpwrap.payload import FormData
        >>> FormData({"q": "a&b", "page": 2}).marshal()
        b'q=a%26b&page=2'
        >>> FormData([("tag", "x"), ("tag", "y")]).marshal()
        b'tag=x&tag=y'

        ```
    """

    content_type = CONTENT_TYPE_FORM

    def __init__(self, data: Mapping[str, Any] | Sequence[tuple[str, Any]]) -> None:
        self.data = data

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(data={self.data!r})"

    def marshal(self) -> bytes:
        return encode_pairs(self.data).encode("ascii")


class RawData(RequestData):
    """Pre-encoded request body, sent as is.

    Args:
        data: The body. A ``str`` is encoded with UTF-8.
        content_type: Optional content type of the body.
    """

    def __init__(self, data: bytes | str, content_type: str | None = None) -> None:
        self.data = data
        self.content_type = content_type

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(data={self.data!r}, content_type={self.content_type!r})"

    def marshal(self) -> bytes:
        if isinstance(self.data, str):
            return self.data.encode("utf-8")
        return bytes(self.data)


class QueryParam(RequestParam):
    """Percent-encoded query string.

    Uses the same rules as ``FormData``.

    Args:
        data: A mapping, or a sequence of ``(key, value)`` pairs.

    Example:
        ```pycon
        >>> from httpwrap.payload import QueryParam
        >>> QueryParam({"filter": "a=1&b=2", "ids": [1, 2]}).marshal()
        'filter=a%3D1%26b%3D2&ids=1&ids=2'

        ```
    """

    def __init__(self, data: Mapping[str, Any] | Sequence[tuple[str, Any]]) -> None:
        self.data = data

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(data={self.data!r})"

    def marshal(self) -> str:
        return encode_pairs(self.data)


class RawParam(RequestParam):
    """Pre-encoded query string, appended to the URL as is."""

    def __init__(self, data: str) -> None:
        self.data = data

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(data={self.data!r})"

    def marshal(self) -> str:
        return self.data


def encode_pairs(data: Mapping[str, Any] | Sequence[tuple[str, Any]]) -> str:
    """Percent-encode key/value pairs with multi-value semantics.

    Args:
        data: A mapping, or a sequence of ``(key, value)`` pairs. List
            and tuple values are expanded to one pair per element.

    Returns:
        The ``application/x-www-form-urlencoded`` representation.
            Values sharing a key are grouped, keys keep their first-seen
            order.

    Raises:
        EncodeError: If an item of a pair sequence is not a pair.

    Example:
        ```pycon
        >>> from httpwrap.payload import encode_pairs
        >>> encode_pairs({"city": "Zürich", "skip": None})
        'city=Z%C3%BCrich'

        ```
    """
    return str(httpx.QueryParams(list(_iter_pairs(data))))


def _iter_pairs(data: Mapping[str, Any] | Sequence[tuple[str, Any]]) -> Iterator[tuple[str, Any]]:
    items = data.items() if isinstance(data, Mapping) else data
    for pair in items:
        try:
            key, value = pair
        except (TypeError, ValueError) as exc:
            msg = f"expected a (key, value) pair, got {pair!r}"
            raise EncodeError(msg, payload=data) from exc
        values = value if isinstance(value, (list, tuple)) else (value,)
        for item in values:
            if item is None:
                continue
            yield str(key), item if isinstance(item, _PRIMITIVES) else str(item)


def _json_default(obj: Any) -> Any:
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return dataclasses.asdict(obj)
    msg = f"Object of type {type(obj).__name__} is not JSON serializable"
    raise TypeError(msg)
