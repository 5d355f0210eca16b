"""Shared helpers for open platform endpoint modules.

Every endpoint is the same three steps: build a relative path with query
parameters, pick a body, hand both to the transport. This module holds
that plumbing. It is internal to pybytedance and may change at any time.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, TypeVar

from pydantic import BaseModel

from pybytedance._codec import JsonBody, JsonDestination, RawSink, RequestBody, SupportsWrite
from pybytedance._transport import ApiRequest, ApiResponse, Transport

T = TypeVar("T")

GET = "GET"
POST = "POST"


def json_body(model: BaseModel | None) -> JsonBody | None:
    """Wrap a request model as a JSON body (``None`` stays ``None``)."""
    if model is None:
        return None
    return JsonBody(model)


async def fetch(
    transport: Transport,
    method: str,
    path: str,
    params: Mapping[str, str],
    result_type: type[T],
    *,
    body: RequestBody | None = None,
) -> T:
    """Call an endpoint and decode its ``data`` into *result_type*."""
    response = await transport.do(ApiRequest(method, path, params, body), JsonDestination(result_type))
    result: T = response.data
    return result


async def send(
    transport: Transport,
    method: str,
    path: str,
    params: Mapping[str, str],
    *,
    body: RequestBody | None = None,
) -> ApiResponse:
    """Call an endpoint whose only outcome is success or an API error."""
    return await transport.do(ApiRequest(method, path, params, body))


async def download(
    transport: Transport,
    method: str,
    path: str,
    params: Mapping[str, str],
    sink: SupportsWrite,
    *,
    body: RequestBody | None = None,
) -> ApiResponse:
    """Call an endpoint returning a file and copy the raw body into *sink*."""
    return await transport.do(ApiRequest(method, path, params, body), RawSink(sink))


def drop_empty(params: Mapping[str, Any]) -> dict[str, str]:
    """Stringify query values, leaving out ``None`` and empty strings."""
    return {key: str(value) for key, value in params.items() if value is not None and value != ""}
