"""Request descriptors and the builder shared by every alert operation."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

import httpx

QUERY_METHODS = {"GET", "DELETE"}


@dataclass(frozen=True)
class RequestDescriptor:
    """A fully resolved request: nothing left to decide but sending it."""

    method: str
    url: str
    params: Optional[Dict[str, str]] = None
    json: Optional[Dict[str, Any]] = None
    data: Optional[Dict[str, str]] = None
    files: Optional[Dict[str, tuple]] = None

    @property
    def path(self) -> str:
        return httpx.URL(self.url).path


def _query_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple, set, frozenset)):
        return ",".join(str(item) for item in value)
    return str(value)


def _drop_empty(fields: Mapping[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in fields.items() if value not in (None, "", [], {})}


def build_request(
    method: str,
    base_url: str,
    path: str,
    api_key: str,
    fields: Mapping[str, Any] | None = None,
    *,
    files: Dict[str, tuple] | None = None,
) -> RequestDescriptor:
    """Place ``apiKey`` and ``fields`` where the remote API expects them.

    GET and DELETE carry everything in the query string and have no body.
    POST sends a JSON body, or a multipart form when ``files`` is given.
    Unset (``None``/empty) fields are dropped in every case.
    """

    method = method.upper()
    url = str(httpx.URL(base_url).join(path))
    payload = {"apiKey": api_key, **_drop_empty(fields or {})}

    if method in QUERY_METHODS:
        params = {key: _query_value(value) for key, value in payload.items()}
        return RequestDescriptor(method=method, url=url, params=params)
    if files:
        data = {key: _query_value(value) for key, value in payload.items()}
        return RequestDescriptor(method=method, url=url, data=data, files=dict(files))
    return RequestDescriptor(method=method, url=url, json=payload)


__all__ = ["RequestDescriptor", "build_request"]
