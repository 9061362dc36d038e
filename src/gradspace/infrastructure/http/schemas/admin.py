from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from gradspace.infrastructure.http.schemas.common import PageMeta, Pagination


class ManagedUserSchema(BaseModel):
    id: str
    full_name: str = ""
    batch: str = ""
    department: str = ""
    email: str = ""
    role: str = ""
    status: bool = True
    is_verified: bool = False
    registration_status: str = ""

    model_config = ConfigDict(coerce_numbers_to_str=True)


class ManagedUserPage(BaseModel):
    users: list[ManagedUserSchema] | None = None
    pagination: Pagination = Field(default_factory=Pagination)


class ManagedUserListResponse(BaseModel):
    data: ManagedUserPage


class RegistrationRequestSchema(BaseModel):
    id: str
    email: str = ""
    full_name: str = ""
    department: str = ""
    batch: str = ""
    phone_number: str = ""
    role: str = ""
    created_at: datetime | None = None

    model_config = ConfigDict(coerce_numbers_to_str=True)


class RegistrationRequestListResponse(BaseModel):
    success: bool = True
    data: list[RegistrationRequestSchema] | None = None
    pagination: Pagination = Field(default_factory=Pagination)


class ReportSummarySchema(BaseModel):
    """One row of a moderation queue (reported job, event or post)."""

    id: str = Field(validation_alias=AliasChoices("job_id", "event_id", "post_id", "id"))
    title: str = Field(default="", validation_alias=AliasChoices("title", "post_preview"))
    flag_count: int = 0
    top_reason: str = ""
    last_flagged: str = ""
    post_date: str = ""

    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)


class ReportListResponse(BaseModel):
    data: list[ReportSummarySchema] | None = None
    meta: PageMeta = Field(default_factory=PageMeta)


class ReportDetailsSchema(BaseModel):
    content: dict[str, Any] = Field(
        validation_alias=AliasChoices("job_data", "event_data", "post_data"),
    )
    flags: list[dict[str, Any]] = Field(default_factory=list, validation_alias="flag_data")

    @property
    def content_id(self) -> str | None:
        value = self.content.get("id")
        return None if value is None else str(value)
