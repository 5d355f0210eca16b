"""Response envelope parsing and API error classification.

Every open platform endpoint answers with the same JSON wrapper::

    {"errno": 0, "message": "success", "data": {...}}

``errno`` is the only success signal: a non-zero value is a failure even
when the HTTP status is 200, and the HTTP status is never consulted.
Endpoints that return binary content (QR codes, verification files) do
not use the wrapper at all, so parsing is opportunistic.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError

from pybytedance._constants import ERRNO_OK
from pybytedance.exceptions import ByteDanceApiError

if TYPE_CHECKING:
    from pybytedance._transport import ApiResponse

_logger = logging.getLogger(__name__)


class Envelope(BaseModel):
    """Decoded response wrapper.

    ``data`` is kept as the plain JSON value; it is only validated once
    the caller's target type is known.
    """

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    errno: int = Field(default=ERRNO_OK, validation_alias=AliasChoices("errno", "err_no"))
    message: str = Field(default="", validation_alias=AliasChoices("message", "err_tips"))
    data: Any = None

    @property
    def ok(self) -> bool:
        return self.errno == ERRNO_OK


def parse_envelope(body: bytes) -> Envelope | None:
    """Parse *body* as an envelope, returning ``None`` when it is not one.

    Non-JSON bodies (file downloads) and JSON values that are not objects
    are passed through untouched rather than treated as errors.
    """
    if not body.strip():
        return None
    try:
        decoded = json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError):
        _logger.debug("Response body is not JSON (%d bytes); skipping envelope check", len(body))
        return None
    if not isinstance(decoded, dict):
        return None
    try:
        return Envelope.model_validate(decoded)
    except ValidationError:
        _logger.debug("Response JSON does not look like an envelope; skipping envelope check")
        return None


def raise_for_envelope(
    envelope: Envelope | None,
    *,
    method: str,
    url: str,
    request_body: bytes,
    response: ApiResponse | None = None,
) -> None:
    """Raise :class:`ByteDanceApiError` when *envelope* carries a non-zero errno."""
    if envelope is None or envelope.ok:
        return
    raise ByteDanceApiError(
        envelope.message,
        errno=envelope.errno,
        method=method,
        url=url,
        request_body=request_body,
        response=response,
    )
