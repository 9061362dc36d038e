"""Moderation queues for reported jobs, events and posts."""
from __future__ import annotations

from gradspace.application.ports.api import ApiClient
from gradspace.domain.value_objects.enums import ReportKind
from gradspace.infrastructure.http.schemas.admin import (
    ReportDetailsSchema,
    ReportListResponse,
    ReportSummarySchema,
)
from gradspace.infrastructure.http.schemas.common import PageMeta

_DELETE_PATHS: dict[ReportKind, str] = {
    ReportKind.JOB: "/admin/jobs/{id}",
    ReportKind.EVENT: "/admin/events/{id}",
    ReportKind.POST: "/admin/post-reports/posts/{id}",
}


def _reports_path(kind: ReportKind) -> str:
    return f"/admin/{kind.value}-reports"


async def list_reports(
    kind: ReportKind,
    page: int,
    limit: int,
    api: ApiClient,
) -> tuple[list[ReportSummarySchema], PageMeta]:
    body = await api.get(_reports_path(kind), params={"page": page, "limit": limit})
    response = ReportListResponse.model_validate(body)
    return response.data or [], response.meta


async def get_report_details(kind: ReportKind, content_id: str, api: ApiClient) -> ReportDetailsSchema:
    body = await api.get(f"{_reports_path(kind)}/{content_id}")
    return ReportDetailsSchema.model_validate(body)


async def dismiss_reports(kind: ReportKind, content_id: str, api: ApiClient) -> None:
    await api.delete(f"{_reports_path(kind)}/{content_id}/dismiss")


async def delete_reported_content(kind: ReportKind, content_id: str, api: ApiClient) -> None:
    await api.delete(_DELETE_PATHS[kind].format(id=content_id))
