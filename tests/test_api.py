from __future__ import annotations

import dataclasses
import io
import json
from typing import Any

import pytest
from multidict import CIMultiDict, CIMultiDictProxy

from pybytedance._api import micro_app as micro_app_api
from pybytedance._api import third_party as third_party_api
from pybytedance._codec import Destination, JsonBody, MultipartBody, decode_response, encode_body
from pybytedance._envelope import parse_envelope, raise_for_envelope
from pybytedance._transport import ApiRequest, ApiResponse
from pybytedance.exceptions import ByteDanceApiError
from pybytedance.models.micro_app import AppInfo, CodeSession, PackageAuditHosts, PackageVersions
from pybytedance.models.requests import (
    AddTemplateRequest,
    CommitAuditPackageRequest,
    DownloadQrcodeRequest,
    ModifyAppIconRequest,
    ModifyServerDomainRequest,
    UploadPicMaterialRequest,
)
from pybytedance.models.third_party import OAuthToken, TemplateList


class _FakeTransport:
    """Records requests and answers with a canned body."""

    def __init__(self, body: bytes | dict[str, Any] = b'{"errno":0}') -> None:
        self.body = json.dumps(body).encode() if isinstance(body, dict) else body
        self.requests: list[ApiRequest] = []
        self.destinations: list[Destination | None] = []
        self.sent: list[bytes] = []

    @property
    def last(self) -> ApiRequest:
        return self.requests[-1]

    async def do(
        self,
        request: ApiRequest,
        destination: Destination | None = None,
        *,
        timeout: float | None = None,
    ) -> ApiResponse:
        self.requests.append(request)
        self.destinations.append(destination)
        encoded = await encode_body(request.body)
        self.sent.append(encoded.content)
        envelope = parse_envelope(self.body)
        response = ApiResponse(
            method=request.method,
            url=request.path,
            status=200,
            headers=CIMultiDictProxy(CIMultiDict()),
            body=self.body,
            envelope=envelope,
        )
        raise_for_envelope(envelope, method=request.method, url=request.path, request_body=encoded.content)
        return dataclasses.replace(response, data=decode_response(destination, self.body, envelope))


# ------------------------------------------------------------------
# Third-party platform
# ------------------------------------------------------------------


@pytest.mark.asyncio
async def test_get_component_access_token_query() -> None:
    transport = _FakeTransport({"errno": 0, "data": {"component_access_token": "cat", "expires_in": 7200}})
    token = await third_party_api.get_component_access_token(transport, "tt1", "secret", "ticket")

    assert token.component_access_token == "cat"
    assert transport.last.method == "GET"
    assert transport.last.path == "v1/auth/tp/token"
    assert transport.last.params == {
        "component_appid": "tt1",
        "component_appsecret": "secret",
        "component_ticket": "ticket",
    }
    assert transport.last.body is None


@pytest.mark.asyncio
async def test_create_pre_auth_code_sends_default_body() -> None:
    transport = _FakeTransport({"errno": 0, "data": {"pre_auth_code": "pac", "expires_in": 600}})
    code = await third_party_api.create_pre_auth_code(transport, "tt1", "cat")

    assert code.pre_auth_code == "pac"
    assert transport.last.method == "POST"
    assert transport.last.path == "v2/auth/pre_auth_code"
    assert transport.last.params == {"component_appid": "tt1", "component_access_token": "cat"}
    assert json.loads(transport.sent[-1]) == {"share_ratio": 0, "share_amount": 0}


@pytest.mark.asyncio
async def test_get_oauth_token_uses_authorization_code_grant() -> None:
    transport = _FakeTransport(
        {
            "errno": 0,
            "data": {
                "authorize_access_token": "aat",
                "authorize_refresh_token": "art",
                "expires_in": 7200,
                "authorizer_app_id": "tt2",
                "authorize_permission": [{"id": 1, "category": "basic", "description": "info"}],
            },
        }
    )
    token = await third_party_api.get_oauth_token(transport, "tt1", "cat", "code-1")

    assert isinstance(token, OAuthToken)
    assert token.authorizer_access_token == "aat"
    assert token.authorizer_refresh_token == "art"
    assert token.authorize_permission[0].category == "basic"
    assert transport.last.params["authorization_code"] == "code-1"
    assert transport.last.params["grant_type"] == "app_to_tp_authorization_code"


@pytest.mark.asyncio
async def test_refresh_oauth_token_uses_refresh_grant() -> None:
    transport = _FakeTransport(
        {"errno": 0, "data": {"authorize_access_token": "new", "authorize_refresh_token": "next"}}
    )
    token = await third_party_api.refresh_oauth_token(transport, "tt1", "cat", "old-refresh")

    assert token.authorizer_access_token == "new"
    assert transport.last.path == "v1/oauth/token"
    assert transport.last.params["authorizer_refresh_token"] == "old-refresh"
    assert transport.last.params["grant_type"] == "app_to_tp_refresh_token"


@pytest.mark.asyncio
async def test_retrieve_authorization_code() -> None:
    transport = _FakeTransport({"errno": 0, "data": {"authorization_code": "code-2", "expires_in": 3600}})
    result = await third_party_api.retrieve_authorization_code(transport, "tt1", "cat", "tt2")

    assert result.authorization_code == "code-2"
    assert transport.last.path == "v1/oauth/retrieve"
    assert transport.last.params["authorization_appid"] == "tt2"


@pytest.mark.asyncio
async def test_get_templates_parses_list() -> None:
    transport = _FakeTransport(
        {
            "errno": 0,
            "data": {
                "template_list": [
                    {"template_id": 1, "user_version": "1.0.0", "user_desc": "first", "create_time": 1700000000}
                ]
            },
        }
    )
    templates = await third_party_api.get_templates(transport, "tt1", "cat")

    assert isinstance(templates, TemplateList)
    assert templates.template_list[0].template_id == 1
    assert templates.template_list[0].create_time is not None
    assert templates.template_list[0].create_time.year == 2023
    assert transport.last.path == "v1/tp/template/get_tpl_list"


@pytest.mark.asyncio
async def test_get_drafts_path() -> None:
    transport = _FakeTransport({"errno": 0, "data": {"draft_list": []}})
    drafts = await third_party_api.get_drafts(transport, "tt1", "cat")

    assert drafts.draft_list == []
    assert transport.last.path == "v1/tp/template/get_draft_list"


@pytest.mark.asyncio
async def test_add_template_body_and_api_error() -> None:
    transport = _FakeTransport({"errno": 40014, "message": "template limit reached"})
    with pytest.raises(ByteDanceApiError) as exc_info:
        await third_party_api.add_template(transport, "tt1", "cat", AddTemplateRequest(draft_id=9))

    assert exc_info.value.errno == 40014
    assert exc_info.value.request_body == b'{"draft_id":9}'
    assert transport.last.path == "v1/tp/template/add_tpl"


@pytest.mark.asyncio
async def test_upload_pic_material_is_multipart() -> None:
    transport = _FakeTransport({"errno": 0, "data": "https://cdn.example.com/icon.png"})
    body = UploadPicMaterialRequest(material_type=1, filename="icon.png", content=b"\x89PNG")
    url = await third_party_api.upload_pic_material(transport, "tt1", "cat", body)

    assert url == "https://cdn.example.com/icon.png"
    assert isinstance(transport.last.body, MultipartBody)
    assert transport.last.body.fields == {"material_type": "1"}
    assert transport.last.body.files["material_file"].filename == "icon.png"


@pytest.mark.asyncio
async def test_download_webview_file_writes_sink() -> None:
    transport = _FakeTransport(b"verification-file-content")
    sink = io.BytesIO()
    await third_party_api.download_webview_file(transport, "tt1", "cat", sink)

    assert sink.getvalue() == b"verification-file-content"
    assert transport.last.method == "GET"
    assert transport.last.body is None


# ------------------------------------------------------------------
# Micro-app management
# ------------------------------------------------------------------


@pytest.mark.asyncio
async def test_get_app_info_reads_misspelled_icon_key() -> None:
    transport = _FakeTransport(
        {
            "errno": 0,
            "data": {
                "app_id": "tt2",
                "app_name": "demo",
                "new_i_con_audit_info": {"new_icon": "https://cdn/icon.png", "new_icon_audit_state": 1},
            },
        }
    )
    info = await micro_app_api.get_app_info(transport, "tt1", "aat")

    assert isinstance(info, AppInfo)
    assert info.new_icon_audit_info is not None
    assert info.new_icon_audit_info.new_icon == "https://cdn/icon.png"
    assert transport.last.params == {"component_appid": "tt1", "authorizer_access_token": "aat"}


@pytest.mark.asyncio
async def test_download_qrcode_posts_version_and_writes_png() -> None:
    png = b"\x89PNG\r\n\x1a\n" + bytes(64)
    transport = _FakeTransport(png)
    sink = io.BytesIO()
    await micro_app_api.download_qrcode(transport, "tt1", "aat", sink, DownloadQrcodeRequest(version="audit"))

    assert sink.getvalue() == png
    assert transport.last.method == "POST"
    assert transport.last.path == "v1/microapp/app/qrcode"
    assert json.loads(transport.sent[-1]) == {"version": "audit"}


@pytest.mark.asyncio
async def test_check_app_name_taken_is_api_error() -> None:
    transport = _FakeTransport({"errno": 40012, "message": "name already used"})
    with pytest.raises(ByteDanceApiError):
        await micro_app_api.check_app_name(transport, "tt1", "aat", "demo")
    assert transport.last.params["app_name"] == "demo"


@pytest.mark.asyncio
async def test_modify_app_icon_uses_icon_endpoint() -> None:
    transport = _FakeTransport()
    await micro_app_api.modify_app_icon(transport, "tt1", "aat", ModifyAppIconRequest(new_icon_path="p/icon.png"))

    assert transport.last.path == "v1/microapp/app/modify_app_icon"
    assert json.loads(transport.sent[-1]) == {"new_icon_path": "p/icon.png"}


@pytest.mark.asyncio
async def test_modify_server_domain_returns_domains() -> None:
    transport = _FakeTransport({"errno": 0, "data": {"request": ["https://api.example.com"], "socket": []}})
    body = ModifyServerDomainRequest(action="add", request=["https://api.example.com"])
    domains = await micro_app_api.modify_server_domain(transport, "tt1", "aat", body)

    assert domains.request == ["https://api.example.com"]
    assert json.loads(transport.sent[-1])["action"] == "add"


@pytest.mark.asyncio
async def test_code2session_drops_missing_codes() -> None:
    transport = _FakeTransport({"errno": 0, "data": {"session_key": "sk", "openid": "oid"}})
    session = await micro_app_api.code2session(transport, "tt1", "aat", anonymous_code="anon")

    assert isinstance(session, CodeSession)
    assert session.openid == "oid"
    assert transport.last.params == {
        "component_appid": "tt1",
        "authorizer_access_token": "aat",
        "anonymous_code": "anon",
    }


@pytest.mark.asyncio
async def test_package_audit_hosts() -> None:
    transport = _FakeTransport({"errno": 0, "data": {"hostNames": ["douyin", "toutiao"], "releasedHostNames": []}})
    hosts = await micro_app_api.get_package_audit_hosts(transport, "tt1", "aat")

    assert isinstance(hosts, PackageAuditHosts)
    assert hosts.host_names == ["douyin", "toutiao"]


@pytest.mark.asyncio
async def test_commit_audit_package_sends_host_names() -> None:
    transport = _FakeTransport()
    await micro_app_api.commit_audit_package(
        transport, "tt1", "aat", CommitAuditPackageRequest(host_names=["douyin"])
    )

    assert transport.last.path == "v2/microapp/package/audit"
    assert transport.sent[-1] == b'{"hostNames":["douyin"]}'


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("call", "path"),
    [
        (micro_app_api.release_package, "v2/microapp/package/release"),
        (micro_app_api.rollback_package, "v2/microapp/package/rollback"),
    ],
)
async def test_release_and_rollback_have_no_body(call: Any, path: str) -> None:
    transport = _FakeTransport()
    await call(transport, "tt1", "aat")

    assert transport.last.method == "POST"
    assert transport.last.path == path
    assert transport.last.body is None


@pytest.mark.asyncio
async def test_get_package_versions() -> None:
    transport = _FakeTransport(
        {
            "errno": 0,
            "data": {
                "audit": {"version": "1.0.1", "status": 1, "approvedApps": [1128], "ctime": 1700000000},
                "current": {"version": "1.0.0", "rollback": {"can_rollback": True, "last_version": "0.9.0"}},
                "latest": {"version": "1.0.2", "has_audit": 0},
            },
        }
    )
    versions = await micro_app_api.get_package_versions(transport, "tt1", "aat")

    assert isinstance(versions, PackageVersions)
    assert versions.audit is not None and versions.audit.approved_apps == [1128]
    assert versions.current is not None and versions.current.rollback is not None
    assert versions.current.rollback.can_rollback is True
    assert versions.latest is not None and versions.latest.version == "1.0.2"


@pytest.mark.asyncio
async def test_json_bodies_are_json_body_instances() -> None:
    transport = _FakeTransport()
    await third_party_api.add_template(transport, "tt1", "cat", AddTemplateRequest(draft_id=1))
    assert isinstance(transport.last.body, JsonBody)
