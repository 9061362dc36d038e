from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass

from gradspace.application.dto.filters import UserFilterDTO
from gradspace.application.exceptions import AppError
from gradspace.application.ports.api import ApiClient
from gradspace.application.state.store import Store
from gradspace.domain.value_objects.enums import UserAction
from gradspace.infrastructure.http.schemas.admin import ManagedUserSchema
from gradspace.infrastructure.http.schemas.common import ActionResponse, Pagination
from gradspace.services import admin_service

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ManagedUsersState:
    users: tuple[ManagedUserSchema, ...] = ()
    pagination: Pagination = dataclasses.field(default_factory=Pagination)
    filters: UserFilterDTO = UserFilterDTO()
    is_loading: bool = False
    error: str | None = None


class ManagedUsersStore(Store[ManagedUsersState]):
    """Admin user table: filters, paging and per-user actions."""

    def __init__(self) -> None:
        super().__init__(ManagedUsersState())

    async def fetch_users(self, api: ApiClient) -> None:
        state = self.state
        self.patch(is_loading=True, error=None)
        try:
            users, pagination = await admin_service.list_users(
                state.filters, state.pagination.page, state.pagination.limit, api,
            )
        except AppError as exc:
            logger.warning("Fetching users failed: %s", exc.detail)
            self.patch(is_loading=False, error=exc.detail or "Failed to fetch users")
            return
        self.patch(users=tuple(users), pagination=pagination, is_loading=False)

    async def perform_action(
        self,
        user: ManagedUserSchema,
        action: UserAction,
        reason: str | None,
        api: ApiClient,
    ) -> ActionResponse:
        response = await admin_service.perform_user_action(user, action, reason, api)
        logger.info("Performed %s on user %s", action.value, user.id)
        return response

    def set_filters(self, **changes: str) -> None:
        self.patch(filters=dataclasses.replace(self.state.filters, **changes))

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

    def reset_filters(self) -> None:
        self.patch(filters=UserFilterDTO())
