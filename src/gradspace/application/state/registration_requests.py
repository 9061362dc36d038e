from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass

from gradspace.application.exceptions import AppError
from gradspace.application.ports.api import ApiClient
from gradspace.application.state.store import Store
from gradspace.domain.value_objects.enums import RequestDecision
from gradspace.infrastructure.http.schemas.admin import RegistrationRequestSchema
from gradspace.infrastructure.http.schemas.common import Pagination
from gradspace.services import admin_service

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class RegistrationRequestsState:
    requests: tuple[RegistrationRequestSchema, ...] = ()
    pagination: Pagination = dataclasses.field(default_factory=Pagination)
    is_loading: bool = False
    error: str | None = None


class RegistrationRequestsStore(Store[RegistrationRequestsState]):
    def __init__(self) -> None:
        super().__init__(RegistrationRequestsState())

    async def fetch_requests(self, api: ApiClient) -> None:
        pagination = self.state.pagination
        self.patch(is_loading=True, error=None)
        try:
            requests, pagination = await admin_service.list_registration_requests(
                pagination.page, pagination.limit, api,
            )
        except AppError as exc:
            logger.warning("Fetching registration requests failed: %s", exc.detail)
            self.patch(is_loading=False, error="Failed to fetch registration requests")
            return
        self.patch(requests=tuple(requests), pagination=pagination, is_loading=False)

    async def approve(self, request_id: str, api: ApiClient) -> None:
        await self._decide(request_id, RequestDecision.APPROVE, api)

    async def reject(self, request_id: str, api: ApiClient) -> None:
        await self._decide(request_id, RequestDecision.REJECT, api)

    def set_pagination(self, *, page: int | None = None, limit: int | None = None) -> None:
        current = self.state.pagination
        self.patch(
            pagination=current.model_copy(
                update={
                    "page": current.page if page is None else page,
                    "limit": current.limit if limit is None else limit,
                },
            ),
        )

    async def _decide(self, request_id: str, decision: RequestDecision, api: ApiClient) -> None:
        try:
            await admin_service.decide_registration_request(request_id, decision, api)
        except AppError as exc:
            logger.warning("Failed to %s request %s: %s", decision.value, request_id, exc.detail)
            self.patch(error=f"Failed to {decision.value} request")
            return

        def _drop(state: RegistrationRequestsState) -> RegistrationRequestsState:
            remaining = tuple(r for r in state.requests if r.id != request_id)
            removed = len(state.requests) - len(remaining)
            pagination = state.pagination.model_copy(
                update={"total": max(state.pagination.total - removed, 0)},
            )
            return dataclasses.replace(state, requests=remaining, pagination=pagination)

        self.set(_drop)
