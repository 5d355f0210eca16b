"""Helpers for safe debug logging.

Open platform calls carry app secrets and access tokens in their query
strings, and callbacks carry encrypted blobs. This module redacts those
before they reach DEBUG logs.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from yarl import URL

_SENSITIVE_VALUE_KEYS: frozenset[str] = frozenset(
    {
        "component_appsecret",
        "component_app_secret",
        "component_access_token",
        "component_ticket",
        "component_tiket",
        "authorizer_access_token",
        "authorizer_refresh_token",
        "authorize_access_token",
        "authorize_refresh_token",
        "authorization_code",
        "authorzation_code",
        "authorzation_refresh_token",
        "pre_auth_code",
        "session_key",
        "token",
        "ticket",
        "authorization",
        "cookie",
        # Encrypted/encoded payloads
        "encrypt",
        "encoding_aes_key",
        "msgsignature",
    }
)


def _is_sensitive(key: str) -> bool:
    return key.lower() in _SENSITIVE_VALUE_KEYS


def redact_for_log(value: Any, *, max_string: int = 512, _depth: int = 0) -> Any:
    """Return a redacted copy of *value* suitable for debug logs."""
    if _depth > 20:
        return "<max-depth>"

    if value is None:
        return None

    if isinstance(value, str):
        if len(value) > max_string:
            return f"{value[:max_string]}…<truncated>"
        return value

    if isinstance(value, (int, float, bool)):
        return value

    if isinstance(value, (bytes, bytearray)):
        return f"<bytes:{len(value)}b>"

    if isinstance(value, Mapping):
        redacted: dict[str, Any] = {}
        for k, v in value.items():
            key = str(k)
            if _is_sensitive(key):
                redacted[key] = "<redacted>"
            else:
                redacted[key] = redact_for_log(v, max_string=max_string, _depth=_depth + 1)
        return redacted

    if isinstance(value, Sequence):
        return [redact_for_log(v, max_string=max_string, _depth=_depth + 1) for v in value]

    # Fallback: represent unknown objects without dumping internals.
    return repr(value)


def redact_url(url: URL | str) -> str:
    """Render *url* with sensitive query parameter values replaced."""
    parsed = URL(url) if isinstance(url, str) else url
    if not parsed.query:
        return str(parsed)
    query = [(k, "<redacted>" if _is_sensitive(k) else v) for k, v in parsed.query.items()]
    return str(parsed.with_query(query))
