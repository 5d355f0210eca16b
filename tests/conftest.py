from __future__ import annotations

import base64
import json
import struct
from collections.abc import Callable
from typing import Any

import pytest
from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

AES_KEY = bytes(range(32))
IV = bytes(range(100, 116))


def _encrypt_raw(plaintext: bytes, key: bytes, iv: bytes, *, pad: bool = True) -> str:
    if pad:
        padder = padding.PKCS7(128).padder()
        plaintext = padder.update(plaintext) + padder.finalize()
    encryptor = Cipher(algorithms.AES(key), modes.CBC(iv)).encryptor()
    return base64.b64encode(iv + encryptor.update(plaintext) + encryptor.finalize()).decode("ascii")


def _frame(body: bytes, *, header: bytes = b"0123456789abcdef", trailer: bytes = b"tt_component") -> bytes:
    return header + struct.pack(">I", len(body)) + body + trailer


@pytest.fixture
def aes_key() -> bytes:
    return AES_KEY


@pytest.fixture
def encoding_aes_key() -> str:
    # 43 characters: the platform strips the trailing "=".
    return base64.b64encode(AES_KEY).decode("ascii").rstrip("=")


@pytest.fixture
def encrypt_raw() -> Callable[..., str]:
    def _encrypt(plaintext: bytes, key: bytes = AES_KEY, iv: bytes = IV, *, pad: bool = True) -> str:
        return _encrypt_raw(plaintext, key, iv, pad=pad)

    return _encrypt


@pytest.fixture
def frame() -> Callable[..., bytes]:
    return _frame


@pytest.fixture
def seal() -> Callable[[dict[str, Any]], str]:
    """Encrypt a payload the way the platform frames callback messages."""

    def _seal(payload: dict[str, Any]) -> str:
        body = json.dumps(payload, separators=(",", ":")).encode("utf-8")
        return _encrypt_raw(_frame(body), AES_KEY, IV)

    return _seal
