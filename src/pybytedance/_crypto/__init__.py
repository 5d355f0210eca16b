"""Cryptographic primitives for open platform callbacks."""

from __future__ import annotations

from pybytedance._crypto.aes import (
    DecryptedMessage,
    aes_cbc_decrypt,
    decode_aes_key,
    decrypt,
    decrypt_message,
    unframe_message,
)
from pybytedance._crypto.signing import compute_signature, verify_signature

__all__ = [
    "DecryptedMessage",
    "aes_cbc_decrypt",
    "compute_signature",
    "decode_aes_key",
    "decrypt",
    "decrypt_message",
    "unframe_message",
    "verify_signature",
]
