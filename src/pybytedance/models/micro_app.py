"""Micro-app information and code package models."""

from __future__ import annotations

from typing import Any

from pydantic import Field

from pybytedance.models._base import ByteDanceBaseModel, UnixTimestamp


class NameAuditInfo(ByteDanceBaseModel):
    new_name: str = ""
    remaining_times: int = 0
    new_name_audit_state: int = 0
    reason: str = ""
    advice: str = ""


class IntroAuditInfo(ByteDanceBaseModel):
    new_intro: str = ""
    remaining_times: int = 0
    new_intro_audit_state: int = 0
    reason: str = ""
    advice: str = ""


class IconAuditInfo(ByteDanceBaseModel):
    new_icon: str = ""
    remaining_times: int = 0
    new_icon_audit_state: int = 0
    reason: str = ""
    advice: str = ""


class CategoriesAuditInfo(ByteDanceBaseModel):
    app_category: str = ""
    app_category_name: str = ""
    app_category_audit_state: int = 0
    reason: str = ""


class SubjectAuditInfo(ByteDanceBaseModel):
    subject_number: str = ""
    subject_name: str = ""
    subject_type: int = 0
    subject_audit_state: int = 0
    reason: str = ""


class AppInfo(ByteDanceBaseModel):
    """Basic information and pending audits of an authorized micro-app."""

    app_id: str
    app_type: int = 0
    app_state: int = 0
    app_name: str = ""
    app_intro: str = ""
    app_icon: str = ""
    new_name_audit_info: NameAuditInfo | None = None
    new_intro_audit_info: IntroAuditInfo | None = None
    new_icon_audit_info: IconAuditInfo | None = Field(default=None, alias="new_i_con_audit_info")
    app_categories_audit_info: CategoriesAuditInfo | None = None
    subject_audit_info: SubjectAuditInfo | None = None


class ServerDomain(ByteDanceBaseModel):
    request: list[str] = Field(default_factory=list)
    socket: list[str] = Field(default_factory=list)
    upload: list[str] = Field(default_factory=list)
    download: list[str] = Field(default_factory=list)


class WebviewDomain(ByteDanceBaseModel):
    webview: list[str] = Field(default_factory=list)


class CodeSession(ByteDanceBaseModel):
    """Result of ``code2session`` for a login code."""

    session_key: str = ""
    openid: str = ""
    anonymous_openid: str = ""


class PackageAuditHosts(ByteDanceBaseModel):
    host_names: list[str] = Field(default_factory=list, alias="hostNames")
    released_host_names: list[str] = Field(default_factory=list, alias="releasedHostNames")


class Rollback(ByteDanceBaseModel):
    can_rollback: bool = False
    last_version: str = ""


class _VersionCommon(ByteDanceBaseModel):
    categories: list[str] = Field(default_factory=list)
    ctime: UnixTimestamp = None
    developer_avatar: str = ""
    developer_id: str = ""
    developer_name: str = ""
    summary: str = ""
    version: str = ""


class AuditVersion(_VersionCommon):
    """Version currently under (or through) review."""

    approved_apps: list[int] = Field(default_factory=list, alias="approvedApps")
    attach_info: Any = Field(default=None, alias="attachInfo")
    has_publish: int = 0
    is_illegal_version: bool = False
    reason: str = ""
    reason_detail: Any = None
    status: int = 0


class CurrentVersion(_VersionCommon):
    """Version live in production."""

    approved_apps: list[int] = Field(default_factory=list, alias="approvedApps")
    attach_info: Any = Field(default=None, alias="attachInfo")
    has_down: int = 0
    not_approved_apps: list[str] = Field(default_factory=list, alias="notApprovedApps")
    reason: str = ""
    reason_detail: Any = None
    rollback: Rollback | None = None
    last_version: str = ""
    uid: str = ""


class LatestVersion(_VersionCommon):
    """Most recent uploaded (test) version."""

    has_audit: int = 0
    screen_shot: str = ""


class PackageVersions(ByteDanceBaseModel):
    audit: AuditVersion | None = None
    current: CurrentVersion | None = None
    latest: LatestVersion | None = None
