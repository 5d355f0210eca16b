"""HTTP transport: request building, envelope classification and decoding."""

from __future__ import annotations

import asyncio
import dataclasses
import logging
from collections.abc import Mapping
from typing import Any, Protocol

import aiohttp
from multidict import CIMultiDictProxy
from yarl import URL

from pybytedance._codec import Destination, RequestBody, decode_response, encode_body
from pybytedance._envelope import Envelope, parse_envelope, raise_for_envelope
from pybytedance._redact import redact_url
from pybytedance.config import ByteDanceConfig
from pybytedance.exceptions import (
    ByteDanceInvalidArgumentError,
    ByteDanceTimeoutError,
    ByteDanceTransportError,
)

_logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class ApiRequest:
    """One API call: method, path relative to the base URL, query, body."""

    method: str
    path: str
    params: Mapping[str, str] = dataclasses.field(default_factory=dict)
    body: RequestBody | None = None


@dataclasses.dataclass(frozen=True)
class ApiResponse:
    """Raw response metadata plus the decoded result.

    ``body`` is the complete response body, read exactly once.
    """

    method: str
    url: str
    status: int
    headers: CIMultiDictProxy[str]
    body: bytes
    envelope: Envelope | None = None
    data: Any = None


class Transport(Protocol):
    """Structural transport interface used by endpoint modules.

    Having a protocol here makes it easy to pass test doubles/mocks while
    keeping the production implementation (`HttpTransport`) concrete.
    """

    async def do(
        self,
        request: ApiRequest,
        destination: Destination | None = None,
        *,
        timeout: float | None = None,
    ) -> ApiResponse: ...


class HttpTransport:
    """aiohttp transport for the open platform.

    Holds only immutable configuration and the shared
    :class:`aiohttp.ClientSession`, so one instance can serve any number
    of concurrent calls.
    """

    def __init__(self, config: ByteDanceConfig, http_session: aiohttp.ClientSession) -> None:
        self._config = config
        self._http = http_session

    def resolve_url(self, path: str, params: Mapping[str, str] | None = None) -> URL:
        """Join *path* onto the base URL and append *params*."""
        relative = URL(path)
        if relative.is_absolute() or path.startswith("/"):
            raise ByteDanceInvalidArgumentError(f"path must be relative without a leading '/', got {path!r}")
        url = self._config.base.join(relative)
        if params:
            url = url.update_query({k: str(v) for k, v in params.items()})
        return url

    async def do(
        self,
        request: ApiRequest,
        destination: Destination | None = None,
        *,
        timeout: float | None = None,
    ) -> ApiResponse:
        """Send *request* and decode the response into *destination*.

        The call is bounded by *timeout* seconds (``config.request_timeout``
        when omitted). Cancelling the awaiting task cancels the request.

        Raises
        ------
        ByteDanceInvalidArgumentError
            Bad path or non-positive timeout.
        ByteDanceTimeoutError
            The deadline expired first. Wins over transport errors.
        ByteDanceTransportError
            Network failure.
        ByteDanceApiError
            The envelope carried a non-zero ``errno``.
        ByteDanceDecodeError
            The body does not fit the destination type.
        """
        if timeout is None:
            timeout = self._config.request_timeout
        if timeout <= 0:
            raise ByteDanceInvalidArgumentError(f"timeout must be positive, got {timeout}")

        method = request.method.upper()
        url = self.resolve_url(request.path, request.params)
        url_str = str(url)
        encoded = await encode_body(request.body)

        headers: dict[str, str] = {"user-agent": self._config.user_agent}
        if encoded.content_type is not None:
            headers["content-type"] = encoded.content_type

        _logger.debug("%s %s (%d bytes)", method, redact_url(url), len(encoded.content))

        deadline = asyncio.timeout(timeout)
        try:
            async with deadline:
                async with self._http.request(
                    method,
                    url,
                    data=encoded.content if encoded.content else None,
                    headers=headers,
                ) as resp:
                    body = await resp.read()
                    status = resp.status
                    resp_headers = resp.headers
        except TimeoutError as exc:
            raise ByteDanceTimeoutError(
                f"{method} {redact_url(url)} timed out after {timeout}s",
                method=method,
                url=url_str,
            ) from exc
        except aiohttp.ClientError as exc:
            # The deadline is the more useful error when both happened.
            if deadline.expired():
                raise ByteDanceTimeoutError(
                    f"{method} {redact_url(url)} timed out after {timeout}s",
                    method=method,
                    url=url_str,
                ) from exc
            raise ByteDanceTransportError(
                f"{method} {redact_url(url)} failed: {exc}",
                method=method,
                url=url_str,
                status_code=getattr(exc, "status", None),
            ) from exc

        _logger.debug("%s %s -> HTTP %d (%d bytes)", method, redact_url(url), status, len(body))

        envelope = parse_envelope(body)
        response = ApiResponse(
            method=method,
            url=url_str,
            status=status,
            headers=resp_headers,
            body=body,
            envelope=envelope,
        )
        raise_for_envelope(
            envelope,
            method=method,
            url=url_str,
            request_body=encoded.content,
            response=response,
        )

        data = decode_response(destination, body, envelope)
        return dataclasses.replace(response, data=data)
