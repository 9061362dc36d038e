from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass

from gradspace.application.exceptions import AppError
from gradspace.application.ports.api import ApiClient
from gradspace.application.state.store import Store
from gradspace.domain.value_objects.enums import ReportKind
from gradspace.infrastructure.http.schemas.admin import ReportDetailsSchema, ReportSummarySchema
from gradspace.infrastructure.http.schemas.common import PageMeta
from gradspace.services import moderation_service

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ReportsState:
    reports: tuple[ReportSummarySchema, ...] = ()
    meta: PageMeta = dataclasses.field(default_factory=PageMeta)
    page: int = 1
    limit: int = 10
    selected: ReportDetailsSchema | None = None
    is_loading: bool = False
    is_loading_details: bool = False
    error: str | None = None


class ReportsStore(Store[ReportsState]):
    """Moderation queue for one kind of reported content."""

    def __init__(self, kind: ReportKind) -> None:
        super().__init__(ReportsState())
        self.kind = kind

    async def fetch_reports(self, api: ApiClient) -> None:
        self.patch(is_loading=True, error=None)
        try:
            reports, meta = await moderation_service.list_reports(
                self.kind, self.state.page, self.state.limit, api,
            )
        except AppError as exc:
            logger.warning("Fetching %s reports failed: %s", self.kind.value, exc.detail)
            self.patch(is_loading=False, error=f"Failed to fetch reported {self.kind.value}s")
            return
        self.patch(reports=tuple(reports), meta=meta, is_loading=False)

    async def fetch_details(self, content_id: str, api: ApiClient) -> None:
        self.patch(is_loading_details=True, error=None)
        try:
            details = await moderation_service.get_report_details(self.kind, content_id, api)
        except AppError as exc:
            logger.warning("Fetching %s report %s failed: %s", self.kind.value, content_id, exc.detail)
            self.patch(is_loading_details=False, error="Failed to fetch report details")
            return
        self.patch(selected=details, is_loading_details=False)

    async def dismiss(self, content_id: str, api: ApiClient) -> None:
        try:
            await moderation_service.dismiss_reports(self.kind, content_id, api)
        except AppError as exc:
            logger.warning("Dismissing %s reports for %s failed: %s", self.kind.value, content_id, exc.detail)
            self.patch(error="Failed to dismiss reports")
            raise
        self._drop(content_id)

    async def delete_content(self, content_id: str, api: ApiClient) -> None:
        try:
            await moderation_service.delete_reported_content(self.kind, content_id, api)
        except AppError as exc:
            logger.warning("Deleting %s %s failed: %s", self.kind.value, content_id, exc.detail)
            self.patch(error=f"Failed to delete {self.kind.value}")
            raise
        self._drop(content_id)

    def set_page(self, page: int) -> None:
        self.patch(page=max(page, 1))

    def set_limit(self, limit: int) -> None:
        self.patch(limit=limit, page=1)

    def close_details(self) -> None:
        self.patch(selected=None)

    def _drop(self, content_id: str) -> None:
        def _apply(state: ReportsState) -> ReportsState:
            remaining = tuple(r for r in state.reports if r.id != content_id)
            removed = len(state.reports) - len(remaining)
            meta = state.meta.model_copy(
                update={"total_items": max(state.meta.total_items - removed, 0)},
            )
            selected = state.selected
            if selected is not None and selected.content_id == content_id:
                selected = None
            return dataclasses.replace(state, reports=remaining, meta=meta, selected=selected)

        self.set(_apply)
