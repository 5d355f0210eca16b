"""AES-CBC decryption of callback messages.

Pushed messages are base64 of ``IV || AES-CBC(PKCS#7(plaintext))`` and
the plaintext is framed as::

    16 opaque bytes | uint32 big-endian length | JSON body | trailer

The key is the platform's ``EncodingAESKey`` (43 base64 characters, the
trailing ``=`` left off).
"""

from __future__ import annotations

import base64
import binascii
import dataclasses
import json
import struct
from typing import Any

from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from pybytedance._constants import AES_BLOCK_SIZE, MESSAGE_BODY_OFFSET, MESSAGE_LENGTH_OFFSET
from pybytedance.exceptions import (
    ByteDanceCryptoError,
    ByteDanceDecodeError,
    MalformedCiphertextError,
    TruncatedPayloadError,
)

_VALID_KEY_SIZES = frozenset({16, 24, 32})


@dataclasses.dataclass(frozen=True)
class DecryptedMessage:
    """A decrypted, de-framed callback message."""

    header: bytes
    length: int
    body: bytes
    payload: dict[str, Any]


def decode_aes_key(encoding_aes_key: str) -> bytes:
    """Turn the platform's ``EncodingAESKey`` into raw AES key bytes.

    Raises
    ------
    ByteDanceCryptoError
        If the key is not base64 or not a valid AES key length.
    """
    try:
        key = base64.b64decode(encoding_aes_key.strip() + "=", validate=True)
    except binascii.Error as exc:
        raise ByteDanceCryptoError("EncodingAESKey is not valid base64") from exc
    if len(key) not in _VALID_KEY_SIZES:
        raise ByteDanceCryptoError(f"AES key must be 16, 24 or 32 bytes (got {len(key)})")
    return key


def aes_cbc_decrypt(data: bytes, key: bytes) -> bytes:
    """Decrypt ``IV || ciphertext`` with AES-CBC and strip PKCS#7 padding.

    Parameters
    ----------
    data : bytes
        IV (one block) followed by the block-aligned ciphertext.
    key : bytes
        16, 24 or 32 byte AES key.

    Returns
    -------
    bytes
        Unpadded plaintext.

    Raises
    ------
    MalformedCiphertextError
        If *data* is shorter than one block, the ciphertext is empty or
        not block aligned, or the padding is invalid.
    ByteDanceCryptoError
        If the key size is invalid.
    """
    if len(key) not in _VALID_KEY_SIZES:
        raise ByteDanceCryptoError(f"AES key must be 16, 24 or 32 bytes (got {len(key)})")
    if len(data) < AES_BLOCK_SIZE:
        raise MalformedCiphertextError(f"ciphertext too short ({len(data)} bytes)")

    iv, ciphertext = data[:AES_BLOCK_SIZE], data[AES_BLOCK_SIZE:]
    if not ciphertext or len(ciphertext) % AES_BLOCK_SIZE != 0:
        raise MalformedCiphertextError(
            f"ciphertext length {len(ciphertext)} is not a positive multiple of the block size"
        )

    decryptor = Cipher(algorithms.AES(key), modes.CBC(iv)).decryptor()
    padded = decryptor.update(ciphertext) + decryptor.finalize()

    # Validates that the pad value is in [1, 16] and every pad byte matches.
    unpadder = padding.PKCS7(AES_BLOCK_SIZE * 8).unpadder()
    try:
        return unpadder.update(padded) + unpadder.finalize()
    except ValueError as exc:
        raise MalformedCiphertextError("invalid PKCS#7 padding") from exc


def decrypt(raw_data: str, key: bytes) -> bytes:
    """Base64-decode *raw_data* and decrypt it with *key*."""
    try:
        data = base64.b64decode(raw_data, validate=True)
    except binascii.Error as exc:
        raise MalformedCiphertextError("ciphertext is not valid base64") from exc
    return aes_cbc_decrypt(data, key)


def unframe_message(plaintext: bytes) -> DecryptedMessage:
    """Extract the length-prefixed JSON body from decrypted *plaintext*."""
    if len(plaintext) < MESSAGE_BODY_OFFSET:
        raise TruncatedPayloadError(f"plaintext too short for length prefix ({len(plaintext)} bytes)")
    (length,) = struct.unpack(">I", plaintext[MESSAGE_LENGTH_OFFSET:MESSAGE_BODY_OFFSET])
    end = MESSAGE_BODY_OFFSET + length
    if len(plaintext) < end:
        raise TruncatedPayloadError(
            f"length prefix announces {length} bytes but only {len(plaintext) - MESSAGE_BODY_OFFSET} remain"
        )

    body = plaintext[MESSAGE_BODY_OFFSET:end]
    try:
        payload = json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise ByteDanceDecodeError(f"decrypted message is not JSON: {body[:64]!r}") from exc
    if not isinstance(payload, dict):
        raise ByteDanceDecodeError("decrypted message is not a JSON object")

    return DecryptedMessage(
        header=plaintext[:MESSAGE_LENGTH_OFFSET],
        length=length,
        body=body,
        payload=payload,
    )


def decrypt_message(encoding_aes_key: str, encrypted: str) -> DecryptedMessage:
    """Decrypt and de-frame a pushed ``Encrypt`` value."""
    return unframe_message(decrypt(encrypted, decode_aes_key(encoding_aes_key)))
