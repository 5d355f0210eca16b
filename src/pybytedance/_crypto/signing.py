"""Callback signature computation and verification."""

from __future__ import annotations

import hashlib
import hmac


def compute_signature(token: str, timestamp: str, nonce: str, encrypted: str) -> str:
    """Compute the callback signature.

    Algorithm:
      1. Sort ``[token, timestamp, nonce, encrypted]`` as plain strings
      2. Concatenate them with no separator
      3. SHA1 of the UTF-8 bytes, rendered as lowercase hex

    Parameters
    ----------
    token : str
        Token configured on the third-party platform.
    timestamp : str
        ``TimeStamp`` field of the pushed message.
    nonce : str
        ``Nonce`` field of the pushed message.
    encrypted : str
        ``Encrypt`` field of the pushed message.

    Returns
    -------
    str
        40-character lowercase hex digest.
    """
    joined = "".join(sorted([token, timestamp, nonce, encrypted]))
    return hashlib.sha1(joined.encode("utf-8")).hexdigest()


def verify_signature(token: str, timestamp: str, nonce: str, encrypted: str, signature: str) -> bool:
    """Return ``True`` when *signature* matches the computed one.

    The comparison runs in constant time.
    """
    expected = compute_signature(token, timestamp, nonce, encrypted)
    return hmac.compare_digest(expected.encode("ascii"), signature.encode("utf-8"))
