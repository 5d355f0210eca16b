"""Third-party platform authorization models."""

from __future__ import annotations

from pydantic import Field

from pybytedance.models._base import ByteDanceBaseModel, UnixTimestamp


class ComponentAccessToken(ByteDanceBaseModel):
    """Response of ``v1/auth/tp/token``. Valid for two hours."""

    component_access_token: str
    expires_in: int = 0


class PreAuthCode(ByteDanceBaseModel):
    """Response of ``v2/auth/pre_auth_code``. Valid for ten minutes."""

    pre_auth_code: str
    expires_in: int = 0


class AuthorizePermission(ByteDanceBaseModel):
    """A permission the micro-app granted on the authorization page."""

    id: int
    category: str = ""
    description: str = ""


class OAuthToken(ByteDanceBaseModel):
    """Authorizer credentials exchanged from an authorization code.

    The access token lives two hours; the refresh token one month and is
    single-use.
    """

    authorizer_access_token: str = Field(alias="authorize_access_token")
    authorizer_refresh_token: str = Field(alias="authorize_refresh_token")
    expires_in: int = 0
    authorizer_app_id: str = ""
    authorize_permission: list[AuthorizePermission] = Field(default_factory=list)


class RefreshedOAuthToken(ByteDanceBaseModel):
    """Response of the refresh-token grant."""

    authorizer_access_token: str = Field(alias="authorize_access_token")
    authorizer_refresh_token: str = Field(alias="authorize_refresh_token")
    expires_in: int = 0


class RetrievedAuthorizationCode(ByteDanceBaseModel):
    """Response of ``v1/oauth/retrieve``."""

    authorization_code: str
    expires_in: int = 0


class Template(ByteDanceBaseModel):
    template_id: int
    user_version: str = ""
    user_desc: str = ""
    create_time: UnixTimestamp = None


class Draft(ByteDanceBaseModel):
    draft_id: int
    user_version: str = ""
    user_desc: str = ""
    create_time: UnixTimestamp = None


class TemplateList(ByteDanceBaseModel):
    template_list: list[Template] = Field(default_factory=list)


class DraftList(ByteDanceBaseModel):
    draft_list: list[Draft] = Field(default_factory=list)
