from __future__ import annotations

from gradspace.application.dto.filters import UserFilterDTO
from gradspace.application.exceptions import ValidationError
from gradspace.application.ports.api import ApiClient
from gradspace.domain.value_objects.enums import RequestDecision, UserAction, UserRole
from gradspace.infrastructure.http.schemas.admin import (
    ManagedUserListResponse,
    ManagedUserSchema,
    RegistrationRequestListResponse,
    RegistrationRequestSchema,
)
from gradspace.infrastructure.http.schemas.common import ActionResponse, Pagination

# Role a user must currently hold for an action to apply.
_ACTION_REQUIRES_ROLE: dict[UserAction, UserRole] = {
    UserAction.PROMOTE: UserRole.STUDENT,
    UserAction.DEMOTE: UserRole.ALUMNI,
}


async def list_users(
    filters: UserFilterDTO,
    page: int,
    limit: int,
    api: ApiClient,
) -> tuple[list[ManagedUserSchema], Pagination]:
    params = {**filters.as_params(), "page": page, "limit": limit}
    body = await api.get("/admin/user-management/users/", params=params)
    response = ManagedUserListResponse.model_validate(body)
    return response.data.users or [], response.data.pagination


def validate_user_action(user: ManagedUserSchema, action: UserAction, reason: str | None) -> None:
    required_role = _ACTION_REQUIRES_ROLE.get(action)
    if required_role is not None and user.role != required_role:
        raise ValidationError("Invalid action for the current user role")
    if action == UserAction.REMOVE and not (reason and reason.strip()):
        raise ValidationError("Reason is required for this action")


async def perform_user_action(
    user: ManagedUserSchema,
    action: UserAction,
    reason: str | None,
    api: ApiClient,
) -> ActionResponse:
    validate_user_action(user, action, reason)
    body = await api.post(
        f"/admin/user-management/users/{user.id}/action",
        json={"action": action.value, "reason": reason},
    )
    return ActionResponse.model_validate(body)


async def list_registration_requests(
    page: int,
    limit: int,
    api: ApiClient,
) -> tuple[list[RegistrationRequestSchema], Pagination]:
    body = await api.get("/register/requests", params={"page": page, "limit": limit})
    response = RegistrationRequestListResponse.model_validate(body)
    return response.data or [], response.pagination


async def decide_registration_request(
    request_id: str,
    decision: RequestDecision,
    api: ApiClient,
) -> ActionResponse:
    body = await api.patch(f"/register/{request_id}", json={"action": decision.value})
    return ActionResponse.model_validate(body)
