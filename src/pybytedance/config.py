"""Client configuration for pybytedance."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from yarl import URL

from pybytedance._constants import BASE_URL, DEFAULT_REQUEST_TIMEOUT, USER_AGENT
from pybytedance.exceptions import ByteDanceConfigError


@dataclasses.dataclass(frozen=True)
class ByteDanceConfig:
    """Client configuration.

    Parameters
    ----------
    base_url : str
        API base URL. Every endpoint path is joined onto it, so it must
        be absolute and end with ``/``.
    user_agent : str
        Value of the ``User-Agent`` header sent with every request.
    request_timeout : float
        Default per-request deadline in seconds.
    component_app_id : str or None
        Third-party platform app id.
    component_app_secret : str or None
        Third-party platform app secret.
    component_token : str or None
        Token configured on the platform for callback signatures.
    encoding_aes_key : str or None
        43-character base64 AES key (without its trailing ``=``) used
        to decrypt callback messages.
    """

    base_url: str = BASE_URL
    user_agent: str = USER_AGENT
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    component_app_id: str | None = None
    component_app_secret: str | None = None
    component_token: str | None = None
    encoding_aes_key: str | None = None

    def __post_init__(self) -> None:
        url = URL(self.base_url)
        if not url.is_absolute() or url.scheme not in {"http", "https"}:
            raise ByteDanceConfigError(f"base_url must be an absolute http(s) URL, got {self.base_url!r}")
        if not url.path.endswith("/"):
            raise ByteDanceConfigError(f"base_url must end with '/', got {self.base_url!r}")
        if self.request_timeout <= 0:
            raise ByteDanceConfigError(f"request_timeout must be positive, got {self.request_timeout}")

    @property
    def base(self) -> URL:
        """Parsed :attr:`base_url`."""
        return URL(self.base_url)

    @classmethod
    def from_env(cls, **overrides: Any) -> ByteDanceConfig:
        """Create configuration from environment variables.

        Reads the optional ``BYTEDANCE_*`` variables listed below.
        Explicit keyword arguments override environment values.

        Returns
        -------
        ByteDanceConfig
            Populated configuration.
        """
        env = os.environ

        _ENV_CONFIG_MAP = {
            "BYTEDANCE_BASE_URL": "base_url",
            "BYTEDANCE_USER_AGENT": "user_agent",
            "BYTEDANCE_COMPONENT_APP_ID": "component_app_id",
            "BYTEDANCE_COMPONENT_APP_SECRET": "component_app_secret",
            "BYTEDANCE_COMPONENT_TOKEN": "component_token",
            "BYTEDANCE_ENCODING_AES_KEY": "encoding_aes_key",
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        # request_timeout is numeric, handle separately
        timeout_env = env.get("BYTEDANCE_REQUEST_TIMEOUT")
        if timeout_env is not None and "request_timeout" not in overrides:
            try:
                config_kwargs["request_timeout"] = float(timeout_env)
            except ValueError as exc:
                raise ByteDanceConfigError(f"BYTEDANCE_REQUEST_TIMEOUT is not a number: {timeout_env!r}") from exc

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
