"""Pydantic request models for endpoint calls.

JSON bodies are dumped with ``exclude_none=True`` so optional fields are
left out rather than sent as ``null``.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import Field, field_validator

from pybytedance._codec import FilePart, MultipartBody
from pybytedance.models._base import ByteDanceRequestModel

DomainAction = Literal["add", "delete", "set", "get"]
QrcodeVersion = Literal["current", "audit", "latest"]


class CreatePreAuthCodeRequest(ByteDanceRequestModel):
    share_ratio: int = 0
    share_amount: int = 0


class AddTemplateRequest(ByteDanceRequestModel):
    draft_id: int


class DeleteTemplateRequest(ByteDanceRequestModel):
    template_id: int


class UploadPicMaterialRequest(ByteDanceRequestModel):
    """Picture upload (bmp, jpeg, jpg or png), sent as multipart.

    ``content`` is either the file bytes or a file object opened in
    binary mode.
    """

    material_type: int
    filename: str
    content: Any = Field(exclude=True)

    @field_validator("content")
    @classmethod
    def _content_readable(cls, value: Any) -> Any:
        if isinstance(value, (bytes, bytearray)) or callable(getattr(value, "read", None)):
            return value
        raise ValueError("content must be bytes or a binary file object")

    def to_multipart(self) -> MultipartBody:
        return MultipartBody(
            fields={"material_type": str(self.material_type)},
            files={"material_file": FilePart(filename=self.filename, content=self.content)},
        )


class DownloadQrcodeRequest(ByteDanceRequestModel):
    version: QrcodeVersion = "current"
    path: str | None = None


class ModifyAppNameRequest(ByteDanceRequestModel):
    new_name: str
    material_file_path: str | None = None

    @field_validator("new_name")
    @classmethod
    def _name_non_empty(cls, value: str) -> str:
        if not value:
            raise ValueError("new_name must be non-empty")
        return value


class ModifyAppIntroRequest(ByteDanceRequestModel):
    new_intro: str


class ModifyAppIconRequest(ByteDanceRequestModel):
    new_icon_path: str


class ModifyServerDomainRequest(ByteDanceRequestModel):
    """Add, delete, overwrite or read the request/socket/upload/download domains."""

    action: DomainAction
    request: list[str] = Field(default_factory=list)
    socket: list[str] = Field(default_factory=list)
    upload: list[str] = Field(default_factory=list)
    download: list[str] = Field(default_factory=list)


class ModifyWebviewDomainRequest(ByteDanceRequestModel):
    action: DomainAction
    webview: list[str] = Field(default_factory=list)


class UploadPackageRequest(ByteDanceRequestModel):
    template_id: int
    user_desc: str
    user_version: str
    ext_json: str


class CommitAuditPackageRequest(ByteDanceRequestModel):
    host_names: list[str] = Field(default_factory=list, serialization_alias="hostNames")
