"""Request body encoding and response decoding.

Request bodies come in two explicit variants:

* :class:`JsonBody` is serialised as ``application/json``.
* :class:`MultipartBody` is serialised as ``multipart/form-data`` with
  file parts first, then scalar fields.

Response destinations come in two variants as well:

* :class:`JsonDestination` validates the envelope ``data`` field (or the
  whole body for APIs that answer with bare JSON) into a target type.
* :class:`RawSink` receives the raw response body untouched.

Bodies are encoded into memory in full; the exact bytes are both sent
and kept for error reporting.
"""

from __future__ import annotations

import dataclasses
import functools
import inspect
import json
from collections.abc import Mapping
from typing import IO, Any, Generic, Protocol, TypeVar

import aiohttp
from pydantic import BaseModel, TypeAdapter, ValidationError

from pybytedance._envelope import Envelope
from pybytedance.exceptions import ByteDanceDecodeError, ByteDanceInvalidArgumentError

T = TypeVar("T")

JSON_CONTENT_TYPE = "application/json"


@dataclasses.dataclass(frozen=True)
class FilePart:
    """A file uploaded as one multipart part."""

    filename: str
    content: bytes | IO[bytes]

    def read(self) -> bytes:
        if isinstance(self.content, (bytes, bytearray)):
            return bytes(self.content)
        data = self.content.read()
        if not isinstance(data, (bytes, bytearray)):
            raise ByteDanceInvalidArgumentError(f"file part {self.filename!r} must be opened in binary mode")
        return bytes(data)


@dataclasses.dataclass(frozen=True)
class JsonBody:
    """Request body sent as JSON.

    ``value`` may be any JSON-serialisable value or a pydantic model.
    """

    value: Any


@dataclasses.dataclass(frozen=True)
class MultipartBody:
    """Request body sent as ``multipart/form-data``."""

    fields: Mapping[str, str] = dataclasses.field(default_factory=dict)
    files: Mapping[str, FilePart] = dataclasses.field(default_factory=dict)


RequestBody = JsonBody | MultipartBody


@dataclasses.dataclass(frozen=True)
class EncodedBody:
    """Wire form of a request body."""

    content: bytes
    content_type: str | None


class SupportsWrite(Protocol):
    """Synchronous binary writer, such as a file opened in ``wb`` mode."""

    def write(self, data: bytes, /) -> Any: ...


@dataclasses.dataclass(frozen=True)
class JsonDestination(Generic[T]):
    """Decode the response into ``target`` (a type or typing form)."""

    target: Any


@dataclasses.dataclass(frozen=True)
class RawSink:
    """Copy the raw response body into ``writer`` without decoding it."""

    writer: SupportsWrite


Destination = JsonDestination[Any] | RawSink


class _BufferWriter:
    """Collects what aiohttp serialises into memory."""

    def __init__(self) -> None:
        self.buffer = bytearray()

    async def write(self, chunk: bytes) -> None:
        self.buffer.extend(chunk)


def encode_json(value: Any) -> bytes:
    """Compact JSON, with neither HTML nor non-ASCII escaping."""
    if isinstance(value, BaseModel):
        value = value.model_dump(mode="json", by_alias=True, exclude_none=True)
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False).encode("utf-8")


async def _encode_multipart(body: MultipartBody) -> EncodedBody:
    with aiohttp.MultipartWriter("form-data") as writer:
        for name, file_part in body.files.items():
            part = writer.append(file_part.read(), {"Content-Type": "application/octet-stream"})
            part.set_content_disposition("form-data", name=name, filename=file_part.filename)
        for name, value in body.fields.items():
            part = writer.append(str(value))
            part.set_content_disposition("form-data", name=name)

    buffer = _BufferWriter()
    await writer.write(buffer)
    return EncodedBody(content=bytes(buffer.buffer), content_type=writer.content_type)


async def encode_body(body: RequestBody | None) -> EncodedBody:
    """Encode *body* into the exact bytes that will be sent."""
    if body is None:
        return EncodedBody(content=b"", content_type=None)
    if isinstance(body, MultipartBody):
        return await _encode_multipart(body)
    if isinstance(body, JsonBody):
        return EncodedBody(content=encode_json(body.value), content_type=JSON_CONTENT_TYPE)
    raise ByteDanceInvalidArgumentError(f"unsupported request body type {type(body).__name__}")


@functools.lru_cache(maxsize=256)
def _adapter_for(target: Any) -> TypeAdapter[Any]:
    return TypeAdapter(target)


def decode_response(
    destination: Destination | None,
    body: bytes,
    envelope: Envelope | None,
) -> Any:
    """Hand the response to *destination* and return the decoded value.

    When the envelope carries a ``data`` key, only that value is decoded
    and an explicit ``null`` decodes to ``None``. Without one, the whole
    body is decoded. An empty body decodes to ``None``; that is not an
    error.
    """
    if destination is None:
        return None
    if isinstance(destination, RawSink):
        written = destination.writer.write(body)
        if inspect.isawaitable(written):
            if inspect.iscoroutine(written):
                written.close()
            raise ByteDanceInvalidArgumentError("RawSink writer must be synchronous")
        return None

    adapter = _adapter_for(destination.target)
    try:
        if envelope is not None and "data" in envelope.model_fields_set:
            if envelope.data is None:
                return None
            return adapter.validate_python(envelope.data)
        if not body.strip():
            return None
        return adapter.validate_json(body)
    except ValidationError as exc:
        raise ByteDanceDecodeError(f"cannot decode response as {destination.target!r}: {exc}") from exc
