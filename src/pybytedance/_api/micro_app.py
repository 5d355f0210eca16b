"""Micro-app management endpoints, called on behalf of an authorizer.

Endpoints:
  - v1/microapp/app/info
  - v1/microapp/app/qrcode                 (binary download)
  - v1/microapp/app/check_app_name
  - v1/microapp/app/modify_app_name
  - v1/microapp/app/modify_app_intro
  - v1/microapp/app/modify_app_icon
  - v1/microapp/app/modify_server_domain
  - v1/microapp/app/modify_webview_domain
  - v1/microapp/code2session
  - v1/microapp/package/upload
  - v1/microapp/package/audit_hosts
  - v2/microapp/package/audit
  - v2/microapp/package/release
  - v2/microapp/package/rollback
  - v1/microapp/package/versions
"""

from __future__ import annotations

import logging

from pybytedance._api._common import GET, POST, download, drop_empty, fetch, json_body, send
from pybytedance._codec import SupportsWrite
from pybytedance._transport import ApiResponse, Transport
from pybytedance.models.micro_app import (
    AppInfo,
    CodeSession,
    PackageAuditHosts,
    PackageVersions,
    ServerDomain,
    WebviewDomain,
)
from pybytedance.models.requests import (
    CommitAuditPackageRequest,
    DownloadQrcodeRequest,
    ModifyAppIconRequest,
    ModifyAppIntroRequest,
    ModifyAppNameRequest,
    ModifyServerDomainRequest,
    ModifyWebviewDomainRequest,
    UploadPackageRequest,
)

_logger = logging.getLogger(__name__)

_APP_INFO_ENDPOINT = "v1/microapp/app/info"
_QRCODE_ENDPOINT = "v1/microapp/app/qrcode"
_CHECK_APP_NAME_ENDPOINT = "v1/microapp/app/check_app_name"
_MODIFY_APP_NAME_ENDPOINT = "v1/microapp/app/modify_app_name"
_MODIFY_APP_INTRO_ENDPOINT = "v1/microapp/app/modify_app_intro"
_MODIFY_APP_ICON_ENDPOINT = "v1/microapp/app/modify_app_icon"
_MODIFY_SERVER_DOMAIN_ENDPOINT = "v1/microapp/app/modify_server_domain"
_MODIFY_WEBVIEW_DOMAIN_ENDPOINT = "v1/microapp/app/modify_webview_domain"
_CODE2SESSION_ENDPOINT = "v1/microapp/code2session"
_UPLOAD_PACKAGE_ENDPOINT = "v1/microapp/package/upload"
_AUDIT_HOSTS_ENDPOINT = "v1/microapp/package/audit_hosts"
_AUDIT_PACKAGE_ENDPOINT = "v2/microapp/package/audit"
_RELEASE_PACKAGE_ENDPOINT = "v2/microapp/package/release"
_ROLLBACK_PACKAGE_ENDPOINT = "v2/microapp/package/rollback"
_PACKAGE_VERSIONS_ENDPOINT = "v1/microapp/package/versions"


def _authorizer_params(component_app_id: str, authorizer_access_token: str) -> dict[str, str]:
    return {
        "component_appid": component_app_id,
        "authorizer_access_token": authorizer_access_token,
    }


# ------------------------------------------------------------------
# App information
# ------------------------------------------------------------------


async def get_app_info(transport: Transport, component_app_id: str, authorizer_access_token: str) -> AppInfo:
    return await fetch(
        transport,
        GET,
        _APP_INFO_ENDPOINT,
        _authorizer_params(component_app_id, authorizer_access_token),
        AppInfo,
    )


async def download_qrcode(
    transport: Transport,
    component_app_id: str,
    authorizer_access_token: str,
    sink: SupportsWrite,
    body: DownloadQrcodeRequest | None = None,
) -> ApiResponse:
    """Write the QR code image (PNG) for the requested version into *sink*."""
    return await download(
        transport,
        POST,
        _QRCODE_ENDPOINT,
        _authorizer_params(component_app_id, authorizer_access_token),
        sink,
        body=json_body(body or DownloadQrcodeRequest()),
    )


async def check_app_name(
    transport: Transport,
    component_app_id: str,
    authorizer_access_token: str,
    app_name: str,
) -> ApiResponse:
    """Check that *app_name* is available; a taken name is an API error."""
    params = {**_authorizer_params(component_app_id, authorizer_access_token), "app_name": app_name}
    return await send(transport, GET, _CHECK_APP_NAME_ENDPOINT, params)


async def modify_app_name(
    transport: Transport,
    component_app_id: str,
    authorizer_access_token: str,
    body: ModifyAppNameRequest,
) -> ApiResponse:
    return await send(
        transport,
        POST,
        _MODIFY_APP_NAME_ENDPOINT,
        _authorizer_params(component_app_id, authorizer_access_token),
        body=json_body(body),
    )


async def modify_app_intro(
    transport: Transport,
    component_app_id: str,
    authorizer_access_token: str,
    body: ModifyAppIntroRequest,
) -> ApiResponse:
    return await send(
        transport,
        POST,
        _MODIFY_APP_INTRO_ENDPOINT,
        _authorizer_params(component_app_id, authorizer_access_token),
        body=json_body(body),
    )


async def modify_app_icon(
    transport: Transport,
    component_app_id: str,
    authorizer_access_token: str,
    body: ModifyAppIconRequest,
) -> ApiResponse:
    """Change the icon; ``new_icon_path`` comes from ``upload_pic_material``."""
    return await send(
        transport,
        POST,
        _MODIFY_APP_ICON_ENDPOINT,
        _authorizer_params(component_app_id, authorizer_access_token),
        body=json_body(body),
    )


async def modify_server_domain(
    transport: Transport,
    component_app_id: str,
    authorizer_access_token: str,
    body: ModifyServerDomainRequest,
) -> ServerDomain:
    return await fetch(
        transport,
        POST,
        _MODIFY_SERVER_DOMAIN_ENDPOINT,
        _authorizer_params(component_app_id, authorizer_access_token),
        ServerDomain,
        body=json_body(body),
    )


async def modify_webview_domain(
    transport: Transport,
    component_app_id: str,
    authorizer_access_token: str,
    body: ModifyWebviewDomainRequest,
) -> WebviewDomain:
    return await fetch(
        transport,
        POST,
        _MODIFY_WEBVIEW_DOMAIN_ENDPOINT,
        _authorizer_params(component_app_id, authorizer_access_token),
        WebviewDomain,
        body=json_body(body),
    )


async def code2session(
    transport: Transport,
    component_app_id: str,
    authorizer_access_token: str,
    code: str | None = None,
    anonymous_code: str | None = None,
) -> CodeSession:
    """Exchange a ``tt.login`` code (or anonymous code) for a session."""
    params = drop_empty(
        {
            **_authorizer_params(component_app_id, authorizer_access_token),
            "code": code,
            "anonymous_code": anonymous_code,
        }
    )
    return await fetch(transport, GET, _CODE2SESSION_ENDPOINT, params, CodeSession)


# ------------------------------------------------------------------
# Code packages
# ------------------------------------------------------------------


async def upload_package(
    transport: Transport,
    component_app_id: str,
    authorizer_access_token: str,
    body: UploadPackageRequest,
) -> ApiResponse:
    """Submit code from a template; the micro-app then has a test version."""
    _logger.debug("Uploading package template=%d version=%s", body.template_id, body.user_version)
    return await send(
        transport,
        POST,
        _UPLOAD_PACKAGE_ENDPOINT,
        _authorizer_params(component_app_id, authorizer_access_token),
        body=json_body(body),
    )


async def get_package_audit_hosts(
    transport: Transport,
    component_app_id: str,
    authorizer_access_token: str,
) -> PackageAuditHosts:
    """List host apps the package can be submitted for review on."""
    return await fetch(
        transport,
        GET,
        _AUDIT_HOSTS_ENDPOINT,
        _authorizer_params(component_app_id, authorizer_access_token),
        PackageAuditHosts,
    )


async def commit_audit_package(
    transport: Transport,
    component_app_id: str,
    authorizer_access_token: str,
    body: CommitAuditPackageRequest,
) -> ApiResponse:
    return await send(
        transport,
        POST,
        _AUDIT_PACKAGE_ENDPOINT,
        _authorizer_params(component_app_id, authorizer_access_token),
        body=json_body(body),
    )


async def release_package(
    transport: Transport,
    component_app_id: str,
    authorizer_access_token: str,
) -> ApiResponse:
    return await send(
        transport,
        POST,
        _RELEASE_PACKAGE_ENDPOINT,
        _authorizer_params(component_app_id, authorizer_access_token),
    )


async def rollback_package(
    transport: Transport,
    component_app_id: str,
    authorizer_access_token: str,
) -> ApiResponse:
    """Roll the live version back to the previous one, when allowed."""
    return await send(
        transport,
        POST,
        _ROLLBACK_PACKAGE_ENDPOINT,
        _authorizer_params(component_app_id, authorizer_access_token),
    )


async def get_package_versions(
    transport: Transport,
    component_app_id: str,
    authorizer_access_token: str,
) -> PackageVersions:
    """Test, audit and live versions of the micro-app."""
    return await fetch(
        transport,
        GET,
        _PACKAGE_VERSIONS_ENDPOINT,
        _authorizer_params(component_app_id, authorizer_access_token),
        PackageVersions,
    )
