"""Verification and decryption of messages pushed by the open platform.

The platform POSTs JSON like::

    {"Nonce": "...", "TimeStamp": "...", "Encrypt": "...", "MsgSignature": "..."}

to the third-party platform's callback URL (ticket pushes, authorization
events, audit results). The signature is checked against the configured
token before anything is decrypted.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from pybytedance._crypto.aes import decrypt_message
from pybytedance._crypto.signing import verify_signature
from pybytedance._redact import redact_for_log
from pybytedance.exceptions import ByteDanceDecodeError, ByteDanceSignatureError

_logger = logging.getLogger(__name__)


class CallbackEnvelope(BaseModel):
    """Outer JSON of a pushed callback message."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    nonce: str = Field(alias="Nonce")
    timestamp: str = Field(alias="TimeStamp")
    encrypt: str = Field(alias="Encrypt")
    msg_signature: str = Field(alias="MsgSignature")


def open_callback(
    envelope: CallbackEnvelope | dict[str, Any] | str | bytes,
    *,
    token: str,
    encoding_aes_key: str,
) -> dict[str, Any]:
    """Verify and decrypt a pushed message, returning its JSON payload.

    Parameters
    ----------
    envelope : CallbackEnvelope, dict, str or bytes
        The pushed message, parsed or as the raw request body.
    token : str
        Callback token configured on the platform.
    encoding_aes_key : str
        ``EncodingAESKey`` configured on the platform.

    Raises
    ------
    ByteDanceSignatureError
        If the signature does not match.
    ByteDanceCryptoError
        If the message cannot be decrypted.
    """
    try:
        if isinstance(envelope, (str, bytes)):
            envelope = CallbackEnvelope.model_validate_json(envelope)
        elif isinstance(envelope, dict):
            envelope = CallbackEnvelope.model_validate(envelope)
    except ValidationError as exc:
        raise ByteDanceDecodeError(f"malformed callback message: {exc}") from exc

    if not verify_signature(token, envelope.timestamp, envelope.nonce, envelope.encrypt, envelope.msg_signature):
        _logger.debug("Callback signature mismatch (timestamp=%s)", envelope.timestamp)
        raise ByteDanceSignatureError("callback signature does not match")

    message = decrypt_message(encoding_aes_key, envelope.encrypt)
    _logger.debug("Callback decrypted: %s", redact_for_log(message.payload))
    return message.payload
