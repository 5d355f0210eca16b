"""Data models for open platform requests and responses."""

from pybytedance.models._base import ByteDanceBaseModel, UnixTimestamp, parse_unix_timestamp
from pybytedance.models.micro_app import (
    AppInfo,
    AuditVersion,
    CategoriesAuditInfo,
    CodeSession,
    CurrentVersion,
    IconAuditInfo,
    IntroAuditInfo,
    LatestVersion,
    NameAuditInfo,
    PackageAuditHosts,
    PackageVersions,
    Rollback,
    ServerDomain,
    SubjectAuditInfo,
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
    AuthorizePermission,
    ComponentAccessToken,
    Draft,
    DraftList,
    OAuthToken,
    PreAuthCode,
    RefreshedOAuthToken,
    RetrievedAuthorizationCode,
    Template,
    TemplateList,
)

__all__ = [
    "AddTemplateRequest",
    "AppInfo",
    "AuditVersion",
    "AuthorizePermission",
    "ByteDanceBaseModel",
    "CategoriesAuditInfo",
    "CodeSession",
    "CommitAuditPackageRequest",
    "ComponentAccessToken",
    "CreatePreAuthCodeRequest",
    "CurrentVersion",
    "DeleteTemplateRequest",
    "DownloadQrcodeRequest",
    "Draft",
    "DraftList",
    "IconAuditInfo",
    "IntroAuditInfo",
    "LatestVersion",
    "ModifyAppIconRequest",
    "ModifyAppIntroRequest",
    "ModifyAppNameRequest",
    "ModifyServerDomainRequest",
    "ModifyWebviewDomainRequest",
    "NameAuditInfo",
    "OAuthToken",
    "PackageAuditHosts",
    "PackageVersions",
    "PreAuthCode",
    "RefreshedOAuthToken",
    "RetrievedAuthorizationCode",
    "Rollback",
    "ServerDomain",
    "SubjectAuditInfo",
    "Template",
    "TemplateList",
    "UnixTimestamp",
    "UploadPackageRequest",
    "UploadPicMaterialRequest",
    "WebviewDomain",
    "parse_unix_timestamp",
]
