from __future__ import annotations

import io
from datetime import UTC, datetime

import pytest
from pydantic import ValidationError

from pybytedance.models import (
    AppInfo,
    CommitAuditPackageRequest,
    ComponentAccessToken,
    ModifyAppNameRequest,
    ModifyServerDomainRequest,
    OAuthToken,
    UploadPicMaterialRequest,
)
from pybytedance.models._base import parse_unix_timestamp


class TestParseUnixTimestamp:
    def test_seconds(self) -> None:
        assert parse_unix_timestamp(1700000000) == datetime(2023, 11, 14, 22, 13, 20, tzinfo=UTC)

    def test_milliseconds(self) -> None:
        assert parse_unix_timestamp(1700000000000) == parse_unix_timestamp(1700000000)

    def test_numeric_string(self) -> None:
        assert parse_unix_timestamp("1700000000") == parse_unix_timestamp(1700000000)

    @pytest.mark.parametrize("value", [None, "", 0, "0"])
    def test_empty_values(self, value: object) -> None:
        assert parse_unix_timestamp(value) is None

    def test_iso_string_passes_through(self) -> None:
        assert parse_unix_timestamp("2023-11-14T22:13:20Z") == "2023-11-14T22:13:20Z"


def test_response_models_keep_raw_and_ignore_unknown_keys() -> None:
    payload = {"component_access_token": "cat", "expires_in": 7200, "brand_new_field": 1}
    token = ComponentAccessToken.model_validate(payload)

    assert token.raw == payload
    assert "raw" not in token.model_dump()
    assert not hasattr(token, "brand_new_field")


def test_oauth_token_accepts_platform_and_python_names() -> None:
    by_alias = OAuthToken.model_validate({"authorize_access_token": "a", "authorize_refresh_token": "r"})
    by_name = OAuthToken.model_validate({"authorizer_access_token": "a", "authorizer_refresh_token": "r"})
    assert by_alias.authorizer_access_token == by_name.authorizer_access_token == "a"


def test_app_info_requires_app_id() -> None:
    with pytest.raises(ValidationError):
        AppInfo.model_validate({"app_name": "demo"})


def test_request_models_forbid_unknown_fields() -> None:
    with pytest.raises(ValidationError):
        ModifyServerDomainRequest.model_validate({"action": "add", "requests": ["typo"]})


def test_domain_action_is_restricted() -> None:
    with pytest.raises(ValidationError):
        ModifyServerDomainRequest(action="replace")  # type: ignore[arg-type]


def test_modify_app_name_rejects_blank_name() -> None:
    with pytest.raises(ValidationError):
        ModifyAppNameRequest(new_name="   ")


def test_commit_audit_package_dumps_camel_case() -> None:
    body = CommitAuditPackageRequest(host_names=["douyin"])
    assert body.model_dump(by_alias=True) == {"hostNames": ["douyin"]}


class TestUploadPicMaterialRequest:
    def test_accepts_bytes_and_binary_files(self) -> None:
        UploadPicMaterialRequest(material_type=1, filename="a.png", content=b"png")
        UploadPicMaterialRequest(material_type=1, filename="a.png", content=io.BytesIO(b"png"))

    def test_rejects_other_content(self) -> None:
        with pytest.raises(ValidationError):
            UploadPicMaterialRequest(material_type=1, filename="a.png", content=123)

    def test_content_is_not_serialized(self) -> None:
        body = UploadPicMaterialRequest(material_type=2, filename="a.png", content=b"png")
        assert body.model_dump() == {"material_type": 2, "filename": "a.png"}

    def test_to_multipart(self) -> None:
        multipart = UploadPicMaterialRequest(material_type=2, filename="a.png", content=b"png").to_multipart()
        assert multipart.fields == {"material_type": "2"}
        assert multipart.files["material_file"].read() == b"png"
