"""Custom exception hierarchy for pybytedance."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pybytedance._redact import redact_url

if TYPE_CHECKING:
    from pybytedance._transport import ApiResponse


class ByteDanceError(Exception):
    """Base exception for all pybytedance errors."""


class ByteDanceInvalidArgumentError(ByteDanceError, ValueError):
    """A caller-supplied argument is unusable (bad path, bad timeout...)."""


class ByteDanceConfigError(ByteDanceInvalidArgumentError):
    """Invalid or missing configuration."""


class ByteDanceTransportError(ByteDanceError):
    """Network-level failure while sending a request."""

    def __init__(
        self,
        message: str,
        *,
        method: str = "",
        url: str = "",
        status_code: int | None = None,
    ) -> None:
        self.method = method
        self.url = url
        self.status_code = status_code
        super().__init__(message)


class ByteDanceTimeoutError(ByteDanceError, TimeoutError):
    """The request deadline expired before a response was received.

    Takes priority over any transport error raised at the same time.
    """

    def __init__(self, message: str, *, method: str = "", url: str = "") -> None:
        self.method = method
        self.url = url
        super().__init__(message)


class ByteDanceApiError(ByteDanceError):
    """API returned a non-zero ``errno`` (application-level error).

    Carries a snapshot of the request body as it was sent, so the failing
    call can be logged without a second round trip. ``url`` keeps the raw
    URL; ``str()`` renders it with sensitive query values redacted.
    """

    def __init__(
        self,
        message: str,
        *,
        errno: int,
        method: str = "",
        url: str = "",
        request_body: bytes = b"",
        response: ApiResponse | None = None,
    ) -> None:
        self.errno = errno
        self.message = message
        self.method = method
        self.url = url
        self.request_body = request_body
        self.response = response
        super().__init__(message)

    def __str__(self) -> str:
        body = self.request_body.decode("utf-8", errors="replace")
        url = redact_url(self.url) if self.url else ""
        return f"{self.method} {url} body {body} : {self.errno} {self.message}"


class ByteDanceDecodeError(ByteDanceError):
    """Response bytes could not be decoded into the requested type."""


class ByteDanceCryptoError(ByteDanceError):
    """Encryption or decryption failure."""


class MalformedCiphertextError(ByteDanceCryptoError):
    """Ciphertext is not valid base64, too short, misaligned or badly padded."""


class TruncatedPayloadError(ByteDanceCryptoError):
    """Decrypted plaintext is shorter than its length prefix announces."""


class ByteDanceSignatureError(ByteDanceError):
    """Callback signature does not match the shared token."""
