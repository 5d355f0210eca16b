"""High-level async client for the ByteDance micro-app open platform."""

from __future__ import annotations

from typing import Any

import aiohttp

from pybytedance import callback as _callback
from pybytedance._api import micro_app as _micro_app_api
from pybytedance._api import third_party as _third_party_api
from pybytedance._codec import Destination, SupportsWrite
from pybytedance._transport import ApiRequest, ApiResponse, HttpTransport
from pybytedance.config import ByteDanceConfig
from pybytedance.exceptions import ByteDanceConfigError, ByteDanceError, ByteDanceInvalidArgumentError
from pybytedance.models.micro_app import (
    AppInfo,
    CodeSession,
    PackageAuditHosts,
    PackageVersions,
    ServerDomain,
    WebviewDomain,
)
from pybytedance.models.requests import (
    AddTemplateRequest,
    CommitAuditPackageRequest,
    CreatePreAuthCodeRequest,
    DeleteTemplateRequest,
    DownloadQrcodeRequest,
    ModifyAppIconRequest,
    ModifyAppIntroRequest,
    ModifyAppNameRequest,
    ModifyServerDomainRequest,
    ModifyWebviewDomainRequest,
    UploadPackageRequest,
    UploadPicMaterialRequest,
)
from pybytedance.models.third_party import (
    ComponentAccessToken,
    DraftList,
    OAuthToken,
    PreAuthCode,
    RefreshedOAuthToken,
    RetrievedAuthorizationCode,
    TemplateList,
)


class ByteDanceClient:
    """Async client for the ByteDance micro-app open platform.

    The component app id (and, for ``get_component_access_token``, the
    app secret) come from :class:`ByteDanceConfig`. Access tokens are
    passed per call; the client never stores them.

    Usage::

        async with ByteDanceClient(ByteDanceConfig.from_env()) as client:
            token = await client.get_component_access_token(ticket)
            info = await client.get_app_info(authorizer_access_token)
    """

    def __init__(
        self,
        config: ByteDanceConfig | None = None,
        *,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        self._config = config or ByteDanceConfig()
        self._external_session = session is not None
        self._http_session = session
        self._transport: HttpTransport | None = None

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> ByteDanceClient:
        if self._http_session is None:
            self._http_session = aiohttp.ClientSession()
        self._transport = HttpTransport(self._config, self._http_session)
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
        self._transport = None

    @property
    def config(self) -> ByteDanceConfig:
        return self._config

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _require_transport(self) -> HttpTransport:
        if self._transport is None:
            raise ByteDanceError("Client not initialized. Use 'async with ByteDanceClient(...) as client:'")
        return self._transport

    def _require_app_id(self) -> str:
        if not self._config.component_app_id:
            raise ByteDanceConfigError("component_app_id is not configured")
        return self._config.component_app_id

    # ------------------------------------------------------------------
    # Raw transport access
    # ------------------------------------------------------------------

    async def do(
        self,
        request: ApiRequest,
        destination: Destination | None = None,
        *,
        timeout: float | None = None,
    ) -> ApiResponse:
        """Send an arbitrary request (for endpoints without a wrapper)."""
        return await self._require_transport().do(request, destination, timeout=timeout)

    # ------------------------------------------------------------------
    # Callbacks
    # ------------------------------------------------------------------

    def open_callback(self, envelope: _callback.CallbackEnvelope | dict[str, Any] | str | bytes) -> dict[str, Any]:
        """Verify and decrypt a pushed message with the configured token and key."""
        token = self._config.component_token
        key = self._config.encoding_aes_key
        if not token or not key:
            raise ByteDanceConfigError("component_token and encoding_aes_key are required to open callbacks")
        return _callback.open_callback(envelope, token=token, encoding_aes_key=key)

    # ------------------------------------------------------------------
    # Third-party platform
    # ------------------------------------------------------------------

    async def get_component_access_token(self, component_ticket: str) -> ComponentAccessToken:
        secret = self._config.component_app_secret
        if not secret:
            raise ByteDanceConfigError("component_app_secret is not configured")
        return await _third_party_api.get_component_access_token(
            self._require_transport(),
            self._require_app_id(),
            secret,
            component_ticket,
        )

    async def create_pre_auth_code(
        self,
        component_access_token: str,
        body: CreatePreAuthCodeRequest | None = None,
    ) -> PreAuthCode:
        return await _third_party_api.create_pre_auth_code(
            self._require_transport(), self._require_app_id(), component_access_token, body
        )

    async def get_oauth_token(self, component_access_token: str, authorization_code: str) -> OAuthToken:
        return await _third_party_api.get_oauth_token(
            self._require_transport(), self._require_app_id(), component_access_token, authorization_code
        )

    async def refresh_oauth_token(
        self,
        component_access_token: str,
        authorizer_refresh_token: str,
    ) -> RefreshedOAuthToken:
        return await _third_party_api.refresh_oauth_token(
            self._require_transport(), self._require_app_id(), component_access_token, authorizer_refresh_token
        )

    async def retrieve_authorization_code(
        self,
        component_access_token: str,
        authorization_app_id: str,
    ) -> RetrievedAuthorizationCode:
        return await _third_party_api.retrieve_authorization_code(
            self._require_transport(), self._require_app_id(), component_access_token, authorization_app_id
        )

    async def get_templates(self, component_access_token: str) -> TemplateList:
        return await _third_party_api.get_templates(
            self._require_transport(), self._require_app_id(), component_access_token
        )

    async def get_drafts(self, component_access_token: str) -> DraftList:
        return await _third_party_api.get_drafts(
            self._require_transport(), self._require_app_id(), component_access_token
        )

    async def add_template(self, component_access_token: str, draft_id: int) -> None:
        await _third_party_api.add_template(
            self._require_transport(),
            self._require_app_id(),
            component_access_token,
            AddTemplateRequest(draft_id=draft_id),
        )

    async def delete_template(self, component_access_token: str, template_id: int) -> None:
        await _third_party_api.delete_template(
            self._require_transport(),
            self._require_app_id(),
            component_access_token,
            DeleteTemplateRequest(template_id=template_id),
        )

    async def upload_pic_material(self, component_access_token: str, body: UploadPicMaterialRequest) -> str:
        return await _third_party_api.upload_pic_material(
            self._require_transport(), self._require_app_id(), component_access_token, body
        )

    async def download_webview_file(self, component_access_token: str, sink: SupportsWrite) -> None:
        await _third_party_api.download_webview_file(
            self._require_transport(), self._require_app_id(), component_access_token, sink
        )

    # ------------------------------------------------------------------
    # Micro-app management
    # ------------------------------------------------------------------

    async def get_app_info(self, authorizer_access_token: str) -> AppInfo:
        return await _micro_app_api.get_app_info(
            self._require_transport(), self._require_app_id(), authorizer_access_token
        )

    async def download_qrcode(
        self,
        authorizer_access_token: str,
        sink: SupportsWrite,
        body: DownloadQrcodeRequest | None = None,
    ) -> None:
        await _micro_app_api.download_qrcode(
            self._require_transport(), self._require_app_id(), authorizer_access_token, sink, body
        )

    async def check_app_name(self, authorizer_access_token: str, app_name: str) -> None:
        await _micro_app_api.check_app_name(
            self._require_transport(), self._require_app_id(), authorizer_access_token, app_name
        )

    async def modify_app_name(self, authorizer_access_token: str, body: ModifyAppNameRequest) -> None:
        await _micro_app_api.modify_app_name(
            self._require_transport(), self._require_app_id(), authorizer_access_token, body
        )

    async def modify_app_intro(self, authorizer_access_token: str, new_intro: str) -> None:
        await _micro_app_api.modify_app_intro(
            self._require_transport(),
            self._require_app_id(),
            authorizer_access_token,
            ModifyAppIntroRequest(new_intro=new_intro),
        )

    async def modify_app_icon(self, authorizer_access_token: str, new_icon_path: str) -> None:
        await _micro_app_api.modify_app_icon(
            self._require_transport(),
            self._require_app_id(),
            authorizer_access_token,
            ModifyAppIconRequest(new_icon_path=new_icon_path),
        )

    async def modify_server_domain(
        self,
        authorizer_access_token: str,
        body: ModifyServerDomainRequest,
    ) -> ServerDomain:
        return await _micro_app_api.modify_server_domain(
            self._require_transport(), self._require_app_id(), authorizer_access_token, body
        )

    async def modify_webview_domain(
        self,
        authorizer_access_token: str,
        body: ModifyWebviewDomainRequest,
    ) -> WebviewDomain:
        return await _micro_app_api.modify_webview_domain(
            self._require_transport(), self._require_app_id(), authorizer_access_token, body
        )

    async def code2session(
        self,
        authorizer_access_token: str,
        *,
        code: str | None = None,
        anonymous_code: str | None = None,
    ) -> CodeSession:
        if not code and not anonymous_code:
            raise ByteDanceInvalidArgumentError("code or anonymous_code is required")
        return await _micro_app_api.code2session(
            self._require_transport(),
            self._require_app_id(),
            authorizer_access_token,
            code,
            anonymous_code,
        )

    async def upload_package(self, authorizer_access_token: str, body: UploadPackageRequest) -> None:
        await _micro_app_api.upload_package(
            self._require_transport(), self._require_app_id(), authorizer_access_token, body
        )

    async def get_package_audit_hosts(self, authorizer_access_token: str) -> PackageAuditHosts:
        return await _micro_app_api.get_package_audit_hosts(
            self._require_transport(), self._require_app_id(), authorizer_access_token
        )

    async def commit_audit_package(self, authorizer_access_token: str, host_names: list[str]) -> None:
        await _micro_app_api.commit_audit_package(
            self._require_transport(),
            self._require_app_id(),
            authorizer_access_token,
            CommitAuditPackageRequest(host_names=host_names),
        )

    async def release_package(self, authorizer_access_token: str) -> None:
        await _micro_app_api.release_package(
            self._require_transport(), self._require_app_id(), authorizer_access_token
        )

    async def rollback_package(self, authorizer_access_token: str) -> None:
        await _micro_app_api.rollback_package(
            self._require_transport(), self._require_app_id(), authorizer_access_token
        )

    async def get_package_versions(self, authorizer_access_token: str) -> PackageVersions:
        return await _micro_app_api.get_package_versions(
            self._require_transport(), self._require_app_id(), authorizer_access_token
        )
