"""pybytedance - Async Python client for the ByteDance micro-app open platform."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pybytedance")
except PackageNotFoundError:
    __version__ = "0+local"

from pybytedance._codec import FilePart, JsonBody, JsonDestination, MultipartBody, RawSink
from pybytedance._crypto import DecryptedMessage, compute_signature, decrypt_message, verify_signature
from pybytedance._transport import ApiRequest, ApiResponse, HttpTransport
from pybytedance.callback import CallbackEnvelope, open_callback
from pybytedance.client import ByteDanceClient
from pybytedance.config import ByteDanceConfig
from pybytedance.exceptions import (
    ByteDanceApiError,
    ByteDanceConfigError,
    ByteDanceCryptoError,
    ByteDanceDecodeError,
    ByteDanceError,
    ByteDanceInvalidArgumentError,
    ByteDanceSignatureError,
    ByteDanceTimeoutError,
    ByteDanceTransportError,
    MalformedCiphertextError,
    TruncatedPayloadError,
)

__all__ = [
    "__version__",
    "ApiRequest",
    "ApiResponse",
    "ByteDanceApiError",
    "ByteDanceClient",
    "ByteDanceConfig",
    "ByteDanceConfigError",
    "ByteDanceCryptoError",
    "ByteDanceDecodeError",
    "ByteDanceError",
    "ByteDanceInvalidArgumentError",
    "ByteDanceSignatureError",
    "ByteDanceTimeoutError",
    "ByteDanceTransportError",
    "CallbackEnvelope",
    "DecryptedMessage",
    "FilePart",
    "HttpTransport",
    "JsonBody",
    "JsonDestination",
    "MalformedCiphertextError",
    "MultipartBody",
    "RawSink",
    "TruncatedPayloadError",
    "compute_signature",
    "decrypt_message",
    "open_callback",
    "verify_signature",
]
