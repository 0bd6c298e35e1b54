from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Mapping, Union
from urllib.parse import quote, urlencode

from .constants import ACCESS_KEY_HEADER
from .errors import InvalidArgumentError

ALLOWED_METHODS = ("GET", "POST")


@dataclass(frozen=True)
class RawBody:
    content: bytes
    content_type: str = "application/octet-stream"


@dataclass(frozen=True)
class JsonBody:
    value: Any


Body = Union[RawBody, JsonBody]


def encode_query_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple, dict, set, frozenset)):
        if isinstance(value, (set, frozenset)):
            value = list(value)
        return json.dumps(value, ensure_ascii=False)
    return str(value)


@dataclass
class RequestSpec:
    """Everything needed to issue one call against the Client API.

    Lives for the duration of a single request. Query values keep insertion
    order; composite values are JSON-encoded before percent-encoding.
    """

    method: str
    path: str
    query_params: dict[str, Any] = field(default_factory=dict)
    headers: dict[str, str] = field(default_factory=dict)
    body: Body | None = None

    def __post_init__(self) -> None:
        method = (self.method or "").upper()
        if method not in ALLOWED_METHODS:
            raise InvalidArgumentError(f"unsupported HTTP method: {self.method}", "method")
        self.method = method

    def encode_query(self) -> str:
        pairs = [(k, encode_query_value(v)) for k, v in self.query_params.items() if v is not None]
        return urlencode(pairs, quote_via=quote) if pairs else ""

    def url_path(self) -> str:
        query = self.encode_query()
        return self.path + (f"?{query}" if query else "")

    def build_headers(self, access_key: str) -> dict[str, str]:
        headers = dict(self.headers)
        if access_key and not _has_header(headers, ACCESS_KEY_HEADER):
            headers[ACCESS_KEY_HEADER] = access_key
        if isinstance(self.body, RawBody) and not _has_header(headers, "Content-Type"):
            headers["Content-Type"] = self.body.content_type
        return headers


def _has_header(headers: Mapping[str, str], name: str) -> bool:
    lowered = name.lower()
    return any(k.lower() == lowered for k in headers)
