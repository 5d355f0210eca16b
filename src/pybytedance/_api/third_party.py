"""Third-party platform authorization and template endpoints.

Endpoints:
  - v1/auth/tp/token                   (component_access_token)
  - v2/auth/pre_auth_code              (pre-authorization code)
  - v1/oauth/token                     (exchange / refresh authorizer token)
  - v1/oauth/retrieve                  (recover a lost authorization code)
  - v1/tp/template/get_tpl_list
  - v1/tp/template/get_draft_list
  - v1/tp/template/add_tpl
  - v1/tp/template/del_tpl
  - v1/tp/upload_pic_material          (multipart upload)
  - v1/tp/download/webview_file        (binary download)
"""

from __future__ import annotations

import logging

from pybytedance._api._common import GET, POST, download, fetch, json_body, send
from pybytedance._codec import SupportsWrite
from pybytedance._transport import ApiResponse, Transport
from pybytedance.models.requests import (
    AddTemplateRequest,
    CreatePreAuthCodeRequest,
    DeleteTemplateRequest,
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

_logger = logging.getLogger(__name__)

_TOKEN_ENDPOINT = "v1/auth/tp/token"
_PRE_AUTH_CODE_ENDPOINT = "v2/auth/pre_auth_code"
_OAUTH_TOKEN_ENDPOINT = "v1/oauth/token"
_OAUTH_RETRIEVE_ENDPOINT = "v1/oauth/retrieve"
_TEMPLATE_LIST_ENDPOINT = "v1/tp/template/get_tpl_list"
_DRAFT_LIST_ENDPOINT = "v1/tp/template/get_draft_list"
_ADD_TEMPLATE_ENDPOINT = "v1/tp/template/add_tpl"
_DELETE_TEMPLATE_ENDPOINT = "v1/tp/template/del_tpl"
_UPLOAD_PIC_ENDPOINT = "v1/tp/upload_pic_material"
_WEBVIEW_FILE_ENDPOINT = "v1/tp/download/webview_file"

AUTHORIZATION_CODE_GRANT = "app_to_tp_authorization_code"
REFRESH_TOKEN_GRANT = "app_to_tp_refresh_token"


def _component_params(component_app_id: str, component_access_token: str) -> dict[str, str]:
    return {
        "component_appid": component_app_id,
        "component_access_token": component_access_token,
    }


async def get_component_access_token(
    transport: Transport,
    component_app_id: str,
    component_app_secret: str,
    component_ticket: str,
) -> ComponentAccessToken:
    """Exchange the pushed ticket for a ``component_access_token``."""
    params = {
        "component_appid": component_app_id,
        "component_appsecret": component_app_secret,
        "component_ticket": component_ticket,
    }
    return await fetch(transport, GET, _TOKEN_ENDPOINT, params, ComponentAccessToken)


async def create_pre_auth_code(
    transport: Transport,
    component_app_id: str,
    component_access_token: str,
    body: CreatePreAuthCodeRequest | None = None,
) -> PreAuthCode:
    """Create the pre-authorization code shown on the authorization page."""
    return await fetch(
        transport,
        POST,
        _PRE_AUTH_CODE_ENDPOINT,
        _component_params(component_app_id, component_access_token),
        PreAuthCode,
        body=json_body(body or CreatePreAuthCodeRequest()),
    )


async def get_oauth_token(
    transport: Transport,
    component_app_id: str,
    component_access_token: str,
    authorization_code: str,
    grant_type: str = AUTHORIZATION_CODE_GRANT,
) -> OAuthToken:
    """Exchange an authorization code for authorizer credentials."""
    params = {
        **_component_params(component_app_id, component_access_token),
        "authorization_code": authorization_code,
        "grant_type": grant_type,
    }
    return await fetch(transport, GET, _OAUTH_TOKEN_ENDPOINT, params, OAuthToken)


async def refresh_oauth_token(
    transport: Transport,
    component_app_id: str,
    component_access_token: str,
    authorizer_refresh_token: str,
    grant_type: str = REFRESH_TOKEN_GRANT,
) -> RefreshedOAuthToken:
    """Refresh the authorizer access token. The refresh token is single-use."""
    params = {
        **_component_params(component_app_id, component_access_token),
        "authorizer_refresh_token": authorizer_refresh_token,
        "grant_type": grant_type,
    }
    return await fetch(transport, GET, _OAUTH_TOKEN_ENDPOINT, params, RefreshedOAuthToken)


async def retrieve_authorization_code(
    transport: Transport,
    component_app_id: str,
    component_access_token: str,
    authorization_app_id: str,
) -> RetrievedAuthorizationCode:
    """Recover the authorization code when the authorization push was missed."""
    params = {
        **_component_params(component_app_id, component_access_token),
        "authorization_appid": authorization_app_id,
    }
    return await fetch(transport, GET, _OAUTH_RETRIEVE_ENDPOINT, params, RetrievedAuthorizationCode)


async def get_templates(
    transport: Transport,
    component_app_id: str,
    component_access_token: str,
) -> TemplateList:
    return await fetch(
        transport,
        GET,
        _TEMPLATE_LIST_ENDPOINT,
        _component_params(component_app_id, component_access_token),
        TemplateList,
    )


async def get_drafts(
    transport: Transport,
    component_app_id: str,
    component_access_token: str,
) -> DraftList:
    return await fetch(
        transport,
        GET,
        _DRAFT_LIST_ENDPOINT,
        _component_params(component_app_id, component_access_token),
        DraftList,
    )


async def add_template(
    transport: Transport,
    component_app_id: str,
    component_access_token: str,
    body: AddTemplateRequest,
) -> ApiResponse:
    """Turn a draft into a persistent template (200 templates at most)."""
    return await send(
        transport,
        POST,
        _ADD_TEMPLATE_ENDPOINT,
        _component_params(component_app_id, component_access_token),
        body=json_body(body),
    )


async def delete_template(
    transport: Transport,
    component_app_id: str,
    component_access_token: str,
    body: DeleteTemplateRequest,
) -> ApiResponse:
    return await send(
        transport,
        POST,
        _DELETE_TEMPLATE_ENDPOINT,
        _component_params(component_app_id, component_access_token),
        body=json_body(body),
    )


async def upload_pic_material(
    transport: Transport,
    component_app_id: str,
    component_access_token: str,
    body: UploadPicMaterialRequest,
) -> str:
    """Upload a picture and return its address for later modify_* calls."""
    _logger.debug("Uploading picture material %s (type=%d)", body.filename, body.material_type)
    return await fetch(
        transport,
        POST,
        _UPLOAD_PIC_ENDPOINT,
        _component_params(component_app_id, component_access_token),
        str,
        body=body.to_multipart(),
    )


async def download_webview_file(
    transport: Transport,
    component_app_id: str,
    component_access_token: str,
    sink: SupportsWrite,
) -> ApiResponse:
    """Download the webview domain verification file into *sink*."""
    return await download(
        transport,
        GET,
        _WEBVIEW_FILE_ENDPOINT,
        _component_params(component_app_id, component_access_token),
        sink,
    )
